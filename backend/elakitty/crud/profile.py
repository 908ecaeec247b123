# backend/elakitty/crud/profile.py
import logging

from sqlalchemy.orm import Session

from elakitty.errors import NotFoundError, ValidationError
from elakitty.models.enums import ASSIGNABLE_ROLES, Role
from elakitty.models.profile import Profile
from elakitty.services.access.role_gate import Action, authorize
from elakitty.services.access.viewer import Viewer
from .common import commit_or_raise

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    email = (email or "").strip().lower()
    local, _, domain = email.partition("@")
    if not local or "." not in domain:
        raise ValidationError(f"invalid email: {email!r}")
    return email


def get_profile(db: Session, profile_id: str) -> Profile:
    profile = db.get(Profile, profile_id)
    if not profile:
        raise NotFoundError("profile not found")
    return profile


def get_or_create_profile(db: Session, email: str, role: Role = Role.USER) -> Profile:
    email = normalize_email(email)
    profile = db.query(Profile).filter(Profile.email == email).first()
    if profile:
        return profile
    if role not in ASSIGNABLE_ROLES:
        raise ValidationError(f"role cannot be stored: {role.value}")
    profile = Profile(email=email, role=role)
    db.add(profile)
    commit_or_raise(db, "profile")
    db.refresh(profile)
    logger.info("Created profile %s (%s)", profile.id, role.value)
    return profile


def list_profiles(db: Session, viewer: Viewer) -> list[Profile]:
    authorize(viewer, Action.VIEW_DASHBOARD)
    return db.query(Profile).order_by(Profile.created_at.desc()).all()


def list_caregivers(db: Session, viewer: Viewer) -> list[Profile]:
    authorize(viewer, Action.VIEW_DASHBOARD)
    return (
        db.query(Profile)
        .filter(Profile.role == Role.CAREGIVER)
        .order_by(Profile.email.asc())
        .all()
    )


def _assignable(new_role) -> Role:
    try:
        new_role = Role(new_role)
    except ValueError:
        raise ValidationError(f"unknown role: {new_role}")
    if new_role not in ASSIGNABLE_ROLES:
        raise ValidationError(f"role cannot be assigned: {new_role.value}")
    return new_role


def apply_role(db: Session, target: Profile, new_role, changed_by: str = "operator") -> Profile:
    """Store a new role on an already authorized path (admin request or operator script)."""
    new_role = _assignable(new_role)
    previous = Role(target.role)
    if previous is Role.CAREGIVER and new_role is not Role.CAREGIVER:
        # a former caregiver keeps no sanctuary assignments
        target.assignments.clear()
    target.role = new_role
    commit_or_raise(db, "role change")
    db.refresh(target)
    logger.info(
        "Role of %s switched %s -> %s by %s",
        target.id,
        previous.value,
        new_role.value,
        changed_by,
    )
    return target


def switch_role(db: Session, viewer: Viewer, target_user_id: str, new_role) -> Profile:
    authorize(viewer, Action.SWITCH_ROLE)
    new_role = _assignable(new_role)
    target = get_profile(db, target_user_id)
    return apply_role(db, target, new_role, changed_by=viewer.id)
