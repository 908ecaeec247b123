# backend/elakitty/api/routers/sanctuaries.py
import json

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from elakitty.api.deps import allow, get_viewer
from elakitty.crud import sanctuary as crud
from elakitty.db import get_db
from elakitty.models.enums import AreaMode
from elakitty.models.sanctuary import Sanctuary
from elakitty.schemas.commons import FeatureCollection, GeoJSONFeature, OkOut
from elakitty.schemas.sanctuary import (
    ApprovalIn,
    BoundaryIn,
    BoundaryOut,
    SanctuaryIn,
    SanctuaryOut,
)
from elakitty.services.access.role_gate import Action
from elakitty.services.access.viewer import Viewer
from elakitty.services.geofence.area import (
    area_km2,
    area_to_geojson,
    from_drawn_shape,
    service_area_geojson,
)
from elakitty.services.geofence.point import GeoPoint
from elakitty.services.hours import parse_opening_hours

router = APIRouter()


def sanctuary_out(s: Sanctuary) -> SanctuaryOut:
    return SanctuaryOut(
        id=s.id,
        name=s.name,
        latitude=s.latitude,
        longitude=s.longitude,
        area_mode=AreaMode.POLYGON if s.boundary is not None else AreaMode.RADIUS,
        radius_km=s.radius_km,
        boundary=json.loads(s.boundary) if s.boundary else None,
        approved=s.approved,
        contact_email=s.contact_email or "",
        contact_phone=s.contact_phone or "",
        donate_url=s.donate_url or "",
        website_url=s.website_url or "",
        facebook_url=s.facebook_url or "",
        instagram_url=s.instagram_url or "",
        twitter_url=s.twitter_url or "",
        logo_url=s.logo_url or "",
        services=s.services or [],
        opening_hours=s.opening_hours,
        opening_week=parse_opening_hours(s.opening_hours),
        caregiver_ids=s.caregiver_ids,
        created_at=s.created_at,
    )


@router.get("")
@router.get("/")
def list_sanctuaries(db: Session = Depends(get_db)) -> list[SanctuaryOut]:
    return [sanctuary_out(s) for s in crud.list_approved(db)]


@router.get("/zones")
def list_zones(db: Session = Depends(get_db)) -> FeatureCollection:
    """Approved service areas as GeoJSON; radius areas are sent as circle outlines."""
    feats = []
    for s in crud.list_approved(db):
        feats.append(
            GeoJSONFeature(
                geometry=service_area_geojson(s),
                properties={
                    "sanctuary_id": s.id,
                    "name": s.name,
                    "logo_url": s.logo_url or "",
                    "latitude": s.latitude,
                    "longitude": s.longitude,
                    "area_mode": (AreaMode.POLYGON if s.boundary is not None else AreaMode.RADIUS).value,
                    "radius_km": s.radius_km,
                },
            )
        )
    return FeatureCollection(features=feats)


@router.get("/containing")
def sanctuaries_containing(
    lat: float, lng: float, db: Session = Depends(get_db)
) -> list[SanctuaryOut]:
    point = GeoPoint(lat=lat, lng=lng)
    return [sanctuary_out(s) for s in crud.sanctuaries_containing(db, point)]


@router.get("/all")
def list_all_sanctuaries(
    viewer: Viewer = Depends(allow(Action.VIEW_DASHBOARD)), db: Session = Depends(get_db)
) -> list[SanctuaryOut]:
    return [sanctuary_out(s) for s in crud.list_all(db, viewer)]


@router.post("/boundary/normalize")
def normalize_boundary(
    payload: BoundaryIn, viewer: Viewer = Depends(allow(Action.SAVE_SANCTUARY))
) -> BoundaryOut:
    area = from_drawn_shape(payload.boundary)
    c = area.centroid()
    return BoundaryOut(
        boundary=area_to_geojson(area),
        vertex_count=len(area.vertices) - 1,
        area_km2=area_km2(area),
        centroid={"latitude": c.lat, "longitude": c.lng},
    )


@router.post("")
@router.post("/")
def save_sanctuary(
    payload: SanctuaryIn,
    viewer: Viewer = Depends(allow(Action.SAVE_SANCTUARY)),
    db: Session = Depends(get_db),
) -> SanctuaryOut:
    return sanctuary_out(crud.save_sanctuary(db, viewer, payload))


@router.patch("/{sanctuary_id}/approval")
def set_approval(
    sanctuary_id: str,
    payload: ApprovalIn,
    viewer: Viewer = Depends(allow(Action.SET_SANCTUARY_APPROVAL)),
    db: Session = Depends(get_db),
) -> SanctuaryOut:
    return sanctuary_out(crud.set_approval(db, viewer, sanctuary_id, payload.approved))


@router.delete("/{sanctuary_id}")
def delete_sanctuary(
    sanctuary_id: str,
    viewer: Viewer = Depends(allow(Action.DELETE_SANCTUARY)),
    db: Session = Depends(get_db),
) -> OkOut:
    crud.delete_sanctuary(db, viewer, sanctuary_id)
    return OkOut()
