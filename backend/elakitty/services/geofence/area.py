# backend/elakitty/services/geofence/area.py
"""
Sanctuary service areas.

A service area is either a circle (centre = sanctuary location, radius in km)
or a drawn polygon outline. Radius containment is measured on a sphere with
the haversine formula; polygon containment is planar in (lng, lat) via shapely.
Points on the edge of either shape count as inside.
"""
from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Iterable, Union

from pyproj import Geod
from shapely.geometry import Point, Polygon
from shapely.validation import explain_validity

from elakitty.errors import ValidationError
from .point import EARTH_RADIUS_KM, GeoPoint, haversine_km

# absorbs float round-off for points placed exactly on the circle
BOUNDARY_TOLERANCE_KM = 1e-9

# same sphere as haversine_km so drawn circles agree with containment
_SPHERE = Geod(a=EARTH_RADIUS_KM * 1000.0, f=0.0)


@dataclass(frozen=True)
class RadiusArea:
    km: float

    def __post_init__(self):
        if isinstance(self.km, bool) or not isinstance(self.km, (int, float)):
            raise ValidationError("radius must be a number of kilometres")
        if not math.isfinite(self.km) or self.km <= 0:
            raise ValidationError(f"radius must be positive, got {self.km}")


@dataclass(frozen=True)
class PolygonArea:
    """Closed outer ring, first vertex repeated last. Build it with from_drawn_shape."""

    vertices: tuple[GeoPoint, ...]

    def __post_init__(self):
        if len(self.vertices) < 4 or self.vertices[0] != self.vertices[-1]:
            raise ValidationError("polygon ring must be closed with at least 3 distinct vertices")

    @property
    def polygon(self) -> Polygon:
        return Polygon([(v.lng, v.lat) for v in self.vertices])

    def contains(self, point: GeoPoint) -> bool:
        return bool(self.polygon.covers(Point(point.lng, point.lat)))

    def centroid(self) -> GeoPoint:
        c = self.polygon.centroid
        return GeoPoint(lat=c.y, lng=c.x)


ServiceArea = Union[RadiusArea, PolygonArea]


def contains_point(sanctuary, point: GeoPoint) -> bool:
    """sanctuary: anything exposing .location (GeoPoint) and .area (ServiceArea)."""
    area = sanctuary.area
    if isinstance(area, RadiusArea):
        return haversine_km(sanctuary.location, point) <= area.km + BOUNDARY_TOLERANCE_KM
    if isinstance(area, PolygonArea):
        return area.contains(point)
    raise TypeError(f"unsupported service area: {area!r}")


def classify_point(sanctuaries: Iterable, point: GeoPoint) -> list:
    """Approved sanctuaries whose service area contains the point."""
    return [s for s in sanctuaries if s.approved and contains_point(s, point)]


def _outer_ring(raw):
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            raise ValidationError("boundary is not valid JSON")

    if isinstance(raw, dict):
        gtype = raw.get("type")
        if gtype == "Feature":
            return _outer_ring(raw.get("geometry") or {})
        if gtype == "FeatureCollection":
            features = raw.get("features") or []
            if not isinstance(features, (list, tuple)) or len(features) != 1:
                raise ValidationError("boundary must contain exactly one shape")
            return _outer_ring(features[0])
        coords = raw.get("coordinates")
        if gtype == "Polygon":
            rings = coords
        elif gtype == "MultiPolygon":
            if not isinstance(coords, (list, tuple)) or len(coords) != 1:
                raise ValidationError("boundary must be a single polygon")
            rings = coords[0]
        else:
            raise ValidationError(f"unsupported boundary geometry: {gtype}")
        if not isinstance(rings, (list, tuple)) or not rings:
            raise ValidationError("boundary has no outline")
        # holes are not supported, only the outer ring is kept
        return rings[0]

    if isinstance(raw, (list, tuple)):
        return raw
    raise ValidationError("boundary must be GeoJSON or a list of [lng, lat] pairs")


def from_drawn_shape(raw) -> PolygonArea:
    """Normalize a user drawn/edited outline into a canonical closed ring."""
    ring_in = _outer_ring(raw)
    if not isinstance(ring_in, (list, tuple)):
        raise ValidationError("boundary outline must be a list of positions")

    ring: list[GeoPoint] = []
    for pair in ring_in:
        p = GeoPoint.from_lng_lat(pair)
        if not ring or ring[-1] != p:
            ring.append(p)
    if len(ring) > 1 and ring[0] == ring[-1]:
        ring.pop()

    if len(set(ring)) < 3:
        raise ValidationError("boundary needs at least 3 distinct vertices")

    poly = Polygon([(p.lng, p.lat) for p in ring])
    if poly.area == 0:
        raise ValidationError("boundary encloses no area")
    if not poly.is_valid:
        raise ValidationError(f"boundary is not a simple polygon: {explain_validity(poly)}")

    return PolygonArea(vertices=tuple(ring) + (ring[0],))


def area_to_geojson(area: PolygonArea) -> dict:
    return {"type": "Polygon", "coordinates": [[v.to_lng_lat() for v in area.vertices]]}


def boundary_text(area: PolygonArea) -> str:
    return json.dumps(area_to_geojson(area))


def circle_outline(center: GeoPoint, km: float, segments: int = 64) -> dict:
    """GeoJSON Polygon approximating a radius area, for map display."""
    azimuths = [i * 360.0 / segments for i in range(segments)]
    lngs, lats, _ = _SPHERE.fwd(
        [center.lng] * segments, [center.lat] * segments, azimuths, [km * 1000.0] * segments
    )
    ring = [[lng, lat] for lng, lat in zip(lngs, lats)]
    ring.append(ring[0])
    return {"type": "Polygon", "coordinates": [ring]}


def service_area_geojson(sanctuary) -> dict:
    area = sanctuary.area
    if isinstance(area, RadiusArea):
        return circle_outline(sanctuary.location, area.km)
    return area_to_geojson(area)


def area_km2(area: ServiceArea) -> float:
    if isinstance(area, RadiusArea):
        # spherical cap
        return 2 * math.pi * EARTH_RADIUS_KM**2 * (1 - math.cos(area.km / EARTH_RADIUS_KM))
    lngs = [v.lng for v in area.vertices]
    lats = [v.lat for v in area.vertices]
    m2, _ = _SPHERE.polygon_area_perimeter(lngs, lats)
    return abs(m2) / 1e6
