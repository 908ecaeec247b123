# backend/elakitty/crud/sanctuary.py
import logging

from sqlalchemy.orm import Session

from elakitty.errors import NotFoundError, ValidationError
from elakitty.models.caregiver_assignment import CaregiverAssignment
from elakitty.models.enums import AreaMode, Role
from elakitty.models.profile import Profile
from elakitty.models.sanctuary import Sanctuary
from elakitty.schemas.sanctuary import SanctuaryIn
from elakitty.services.access.role_gate import Action, authorize
from elakitty.services.access.viewer import Viewer
from elakitty.services.geofence.area import RadiusArea, classify_point, from_drawn_shape
from elakitty.services.geofence.point import GeoPoint
from elakitty.services.hours import validate_opening_hours
from .common import commit_or_raise

logger = logging.getLogger(__name__)

CONTACT_FIELDS = (
    "contact_email",
    "contact_phone",
    "donate_url",
    "website_url",
    "facebook_url",
    "instagram_url",
    "twitter_url",
    "logo_url",
)


def get_sanctuary(db: Session, sanctuary_id: str) -> Sanctuary:
    sanctuary = db.get(Sanctuary, sanctuary_id)
    if not sanctuary:
        raise NotFoundError("sanctuary not found")
    return sanctuary


def list_approved(db: Session) -> list[Sanctuary]:
    return (
        db.query(Sanctuary)
        .filter(Sanctuary.approved.is_(True))
        .order_by(Sanctuary.created_at.desc())
        .all()
    )


def list_all(db: Session, viewer: Viewer) -> list[Sanctuary]:
    authorize(viewer, Action.VIEW_DASHBOARD)
    return db.query(Sanctuary).order_by(Sanctuary.created_at.desc()).all()


def sanctuaries_containing(db: Session, point: GeoPoint) -> list[Sanctuary]:
    return classify_point(list_approved(db), point)


def _service_area(payload: SanctuaryIn):
    # the active mode decides which representation is kept
    if payload.area_mode is AreaMode.RADIUS:
        if payload.radius_km is None:
            raise ValidationError("Radius required")
        return RadiusArea(payload.radius_km)
    if payload.area_mode is AreaMode.POLYGON:
        if payload.boundary is None:
            raise ValidationError("Draw polygon first")
        return from_drawn_shape(payload.boundary)
    raise ValidationError(f"unknown area mode: {payload.area_mode}")


def _checked_caregivers(db: Session, caregiver_ids) -> list[str]:
    ids = list(dict.fromkeys(caregiver_ids or []))
    if not ids:
        return []
    found = {
        p.id
        for p in db.query(Profile).filter(Profile.id.in_(ids), Profile.role == Role.CAREGIVER)
    }
    missing = [i for i in ids if i not in found]
    if missing:
        raise ValidationError(f"not caregivers: {', '.join(missing)}")
    return ids


def _replace_assignments(sanctuary: Sanctuary, caregiver_ids: list[str]) -> None:
    wanted = set(caregiver_ids)
    current = {a.caregiver_id: a for a in sanctuary.caregiver_assignments}
    for cid, assignment in current.items():
        if cid not in wanted:
            sanctuary.caregiver_assignments.remove(assignment)
    for cid in caregiver_ids:
        if cid not in current:
            sanctuary.caregiver_assignments.append(CaregiverAssignment(caregiver_id=cid))


def save_sanctuary(
    db: Session, viewer: Viewer, payload: SanctuaryIn, caregiver_ids=None
) -> Sanctuary:
    """Insert (no id) or update a sanctuary and set its caregivers in one transaction."""
    authorize(viewer, Action.SAVE_SANCTUARY)

    name = payload.name.strip()
    if not name:
        raise ValidationError("Name required")
    location = GeoPoint(lat=payload.latitude, lng=payload.longitude)
    area = _service_area(payload)
    opening_hours = validate_opening_hours(payload.opening_hours)
    ids = _checked_caregivers(
        db, payload.caregiver_ids if caregiver_ids is None else caregiver_ids
    )

    if payload.id:
        sanctuary = get_sanctuary(db, payload.id)
    else:
        sanctuary = Sanctuary()
        db.add(sanctuary)

    sanctuary.name = name
    sanctuary.latitude = location.lat
    sanctuary.longitude = location.lng
    sanctuary.set_area(area)
    sanctuary.approved = payload.approved
    for field in CONTACT_FIELDS:
        setattr(sanctuary, field, (getattr(payload, field) or "").strip())
    sanctuary.services = list(dict.fromkeys(payload.services))
    sanctuary.opening_hours = opening_hours
    _replace_assignments(sanctuary, ids)

    commit_or_raise(db, "sanctuary")
    db.refresh(sanctuary)
    logger.info(
        "Sanctuary %s saved by %s (%s, %d caregivers)",
        sanctuary.id,
        viewer.id,
        "radius" if sanctuary.radius_km is not None else "polygon",
        len(ids),
    )
    return sanctuary


def set_approval(db: Session, viewer: Viewer, sanctuary_id: str, approved: bool) -> Sanctuary:
    authorize(viewer, Action.SET_SANCTUARY_APPROVAL)
    sanctuary = get_sanctuary(db, sanctuary_id)
    sanctuary.approved = bool(approved)
    commit_or_raise(db, "sanctuary approval")
    db.refresh(sanctuary)
    logger.info("Sanctuary %s approved=%s by %s", sanctuary.id, sanctuary.approved, viewer.id)
    return sanctuary


def delete_sanctuary(db: Session, viewer: Viewer, sanctuary_id: str) -> None:
    authorize(viewer, Action.DELETE_SANCTUARY)
    sanctuary = get_sanctuary(db, sanctuary_id)
    db.delete(sanctuary)  # assignments go with it
    commit_or_raise(db, "sanctuary deletion")
    logger.info("Sanctuary %s deleted by %s", sanctuary_id, viewer.id)
