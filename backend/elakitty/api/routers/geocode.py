# backend/elakitty/api/routers/geocode.py
from fastapi import APIRouter, Depends

from elakitty.schemas.commons import LocationOut
from elakitty.services.geocoding.nominatim import NominatimClient, get_address_lookup
from elakitty.services.geofence.point import GeoPoint

router = APIRouter()


@router.get("/search")
def search(q: str, lookup: NominatimClient = Depends(get_address_lookup)) -> LocationOut:
    point = lookup.geocode(q)
    return LocationOut(latitude=point.lat, longitude=point.lng)


@router.get("/reverse")
def reverse(
    lat: float, lng: float, lookup: NominatimClient = Depends(get_address_lookup)
) -> LocationOut:
    point = GeoPoint(lat=lat, lng=lng)
    return LocationOut(latitude=lat, longitude=lng, address=lookup.reverse_geocode(point))


@router.get("/locate")
def locate(
    lat: float, lng: float, lookup: NominatimClient = Depends(get_address_lookup)
) -> LocationOut:
    """Best-effort "use my location" lookup, the address is left blank on failure."""
    point = GeoPoint(lat=lat, lng=lng)
    return LocationOut(latitude=lat, longitude=lng, address=lookup.locate(point))
