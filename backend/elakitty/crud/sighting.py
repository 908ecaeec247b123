# backend/elakitty/crud/sighting.py
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from elakitty.errors import (
    AuthorizationError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)
from elakitty.models.deletion_log import DeletionLog
from elakitty.models.sighting import Sighting
from elakitty.schemas.sighting import SightingIn
from elakitty.services.access.role_gate import require_authenticated
from elakitty.services.access.viewer import Viewer
from elakitty.services.access.visibility import can_delete, can_view
from elakitty.services.geofence.point import GeoPoint
from .common import commit_or_raise

logger = logging.getLogger(__name__)


def list_sightings(db: Session, viewer: Viewer) -> list[Sighting]:
    rows = db.query(Sighting).order_by(Sighting.created_at.desc()).all()
    return [s for s in rows if can_view(s, viewer)]


def get_sighting(db: Session, sighting_id: str, viewer: Viewer) -> Sighting:
    sighting = db.get(Sighting, sighting_id)
    # hidden sightings are reported as missing
    if not sighting or not can_view(sighting, viewer):
        raise NotFoundError("sighting not found")
    return sighting


def create_sighting(db: Session, viewer: Viewer, payload: SightingIn) -> Sighting:
    require_authenticated(viewer)
    location = GeoPoint(lat=payload.latitude, lng=payload.longitude)
    sighting = Sighting(
        latitude=location.lat,
        longitude=location.lng,
        notes=(payload.notes or "").strip(),
        animals=payload.animals,
        behaviour=payload.behaviour,
        photo_url=payload.photo_url or None,
        visibility=payload.visibility,
        owner_id=viewer.id,
    )
    db.add(sighting)
    commit_or_raise(db, "sighting")
    db.refresh(sighting)
    logger.info("Sighting %s reported by %s (%s)", sighting.id, viewer.id, payload.visibility.value)
    return sighting


def record_deletion(db: Session, sighting: Sighting, viewer: Viewer, reason: str) -> DeletionLog:
    entry = DeletionLog(sighting_id=sighting.id, user_id=viewer.id, reason=reason)
    db.add(entry)
    db.flush()
    return entry


def delete_sighting(db: Session, sighting_id: str, viewer: Viewer, reason: str) -> DeletionLog:
    """Delete a sighting on behalf of its owner, writing the audit entry first.

    The sighting is only removed once the audit entry has been written; if that
    write fails the sighting stays untouched.
    """
    require_authenticated(viewer)
    sighting = get_sighting(db, sighting_id, viewer)
    if not can_delete(sighting, viewer):
        raise AuthorizationError("Only the reporter may delete this sighting")
    reason = (reason or "").strip()
    if not reason:
        raise ValidationError("A reason is required to delete a sighting")

    try:
        entry = record_deletion(db, sighting, viewer, reason)
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Audit entry for sighting %s failed, deletion aborted: %s", sighting_id, e)
        raise ExternalServiceError("Could not record the deletion, sighting kept")

    db.delete(sighting)
    commit_or_raise(db, "sighting deletion")
    logger.info("Sighting %s deleted by %s: %s", sighting_id, viewer.id, reason)
    return entry
