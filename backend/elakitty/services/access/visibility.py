# backend/elakitty/services/access/visibility.py
from elakitty.models.enums import Role, Visibility
from .viewer import Viewer


def _role_sees(visibility: Visibility, role: Role) -> bool:
    if role is Role.ADMIN:
        return True
    if role is Role.CAREGIVER:
        if visibility is Visibility.PUBLIC or visibility is Visibility.CAREGIVER_ONLY:
            return True
        if visibility is Visibility.ADMIN_ONLY:
            return False
    elif role is Role.USER or role is Role.ANONYMOUS:
        if visibility is Visibility.PUBLIC:
            return True
        if visibility is Visibility.CAREGIVER_ONLY or visibility is Visibility.ADMIN_ONLY:
            return False
    raise ValueError(f"unhandled visibility/role pair: {visibility!r}, {role!r}")


def is_owner(sighting, viewer: Viewer) -> bool:
    return viewer.is_authenticated and viewer.id == sighting.owner_id


def can_view(sighting, viewer: Viewer) -> bool:
    # owners always see their own submission, whatever its audience
    if is_owner(sighting, viewer):
        return True
    return _role_sees(Visibility(sighting.visibility), viewer.role)


def can_delete(sighting, viewer: Viewer) -> bool:
    # only the reporter may delete; admins get no bypass
    return is_owner(sighting, viewer)
