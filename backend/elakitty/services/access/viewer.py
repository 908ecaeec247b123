# backend/elakitty/services/access/viewer.py
from __future__ import annotations

from dataclasses import dataclass

from elakitty.models.enums import Role


@dataclass(frozen=True)
class Viewer:
    """Identity of whoever issues the request, resolved once per request."""

    id: str | None
    role: Role
    email: str | None = None

    @classmethod
    def anonymous(cls) -> Viewer:
        return cls(id=None, role=Role.ANONYMOUS)

    @classmethod
    def from_profile(cls, profile) -> Viewer:
        return cls(id=profile.id, role=Role(profile.role), email=profile.email)

    @property
    def is_authenticated(self) -> bool:
        return self.id is not None and self.role is not Role.ANONYMOUS
