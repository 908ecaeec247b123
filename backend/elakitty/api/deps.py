# backend/elakitty/api/deps.py
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from elakitty.crud.auth import resolve_token
from elakitty.db import get_db
from elakitty.errors import AuthenticationError
from elakitty.services.access.role_gate import Action, authorize, require_authenticated
from elakitty.services.access.viewer import Viewer


def bearer_token(authorization: str | None = Header(default=None)) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Malformed Authorization header")
    return token.strip()


def get_viewer(
    token: str | None = Depends(bearer_token), db: Session = Depends(get_db)
) -> Viewer:
    if token is None:
        return Viewer.anonymous()
    profile = resolve_token(db, token)
    if profile is None:
        raise AuthenticationError("Unknown or expired session")
    return Viewer.from_profile(profile)


def get_user(viewer: Viewer = Depends(get_viewer)) -> Viewer:
    return require_authenticated(viewer)


def allow(action: Action):
    """Router-level gate; the crud layer checks again before writing."""

    def dependency(viewer: Viewer = Depends(get_viewer)) -> Viewer:
        return authorize(viewer, action)

    return dependency
