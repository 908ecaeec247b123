# backend/elakitty/services/access/role_gate.py
"""
Authorization of administrative actions by viewer role.

Checked by the routers as a fast path and again by the crud layer before any
storage write, which is the check that actually guards the data.
"""
from enum import Enum

from elakitty.errors import AuthenticationError, AuthorizationError
from elakitty.models.enums import Role
from .viewer import Viewer


class Action(str, Enum):
    SWITCH_ROLE = "switch_role"
    SAVE_SANCTUARY = "save_sanctuary"
    DELETE_SANCTUARY = "delete_sanctuary"
    SET_SANCTUARY_APPROVAL = "set_sanctuary_approval"
    UPLOAD_LOGO = "upload_logo"
    VIEW_DASHBOARD = "view_dashboard"


ADMIN_ACTIONS = frozenset(
    {
        Action.SWITCH_ROLE,
        Action.SAVE_SANCTUARY,
        Action.DELETE_SANCTUARY,
        Action.SET_SANCTUARY_APPROVAL,
        Action.UPLOAD_LOGO,
    }
)


def is_allowed(role: Role, action: Action) -> bool:
    if action in ADMIN_ACTIONS:
        return role is Role.ADMIN
    if action is Action.VIEW_DASHBOARD:
        return role is Role.ADMIN or role is Role.CAREGIVER
    raise ValueError(f"unhandled action: {action!r}")


def authorize(viewer: Viewer, action: Action) -> Viewer:
    if is_allowed(viewer.role, action):
        return viewer
    if not viewer.is_authenticated:
        raise AuthenticationError()
    raise AuthorizationError(f"{viewer.role.value} may not {action.value}")


def require_authenticated(viewer: Viewer) -> Viewer:
    if not viewer.is_authenticated:
        raise AuthenticationError()
    return viewer
