# backend/elakitty/api/routers/sightings.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from elakitty.api.deps import get_user, get_viewer
from elakitty.crud import sighting as crud
from elakitty.db import get_db
from elakitty.models.sighting import Sighting
from elakitty.schemas.commons import OkOut
from elakitty.schemas.sighting import SightingIn, SightingOut
from elakitty.services.access.viewer import Viewer
from elakitty.services.access.visibility import can_delete

router = APIRouter()


def sighting_out(s: Sighting, viewer: Viewer) -> SightingOut:
    return SightingOut(
        id=s.id,
        latitude=s.latitude,
        longitude=s.longitude,
        notes=s.notes or "",
        animals=s.animals,
        behaviour=s.behaviour,
        photo_url=s.photo_url,
        visibility=s.visibility,
        owner_id=s.owner_id,
        created_at=s.created_at,
        can_delete=can_delete(s, viewer),
    )


@router.get("")
@router.get("/")
def list_sightings(
    viewer: Viewer = Depends(get_viewer), db: Session = Depends(get_db)
) -> list[SightingOut]:
    return [sighting_out(s, viewer) for s in crud.list_sightings(db, viewer)]


@router.get("/{sighting_id}")
def get_sighting(
    sighting_id: str, viewer: Viewer = Depends(get_viewer), db: Session = Depends(get_db)
) -> SightingOut:
    return sighting_out(crud.get_sighting(db, sighting_id, viewer), viewer)


@router.post("", status_code=201)
@router.post("/", status_code=201)
def create_sighting(
    payload: SightingIn, viewer: Viewer = Depends(get_user), db: Session = Depends(get_db)
) -> SightingOut:
    return sighting_out(crud.create_sighting(db, viewer, payload), viewer)


@router.delete("/{sighting_id}")
def delete_sighting(
    sighting_id: str,
    reason: str = "",
    viewer: Viewer = Depends(get_user),
    db: Session = Depends(get_db),
) -> OkOut:
    crud.delete_sighting(db, sighting_id, viewer, reason)
    return OkOut()
