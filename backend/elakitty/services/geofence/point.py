# backend/elakitty/services/geofence/point.py
from __future__ import annotations

import math
from dataclasses import dataclass
from math import asin, cos, radians, sin, sqrt

from elakitty.errors import ValidationError

# mean earth radius (IUGG), used for every spherical computation in the package
EARTH_RADIUS_KM = 6371.0088


@dataclass(frozen=True)
class GeoPoint:
    """A WGS84 latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float

    def __post_init__(self):
        for name, value, bound in (("latitude", self.lat, 90.0), ("longitude", self.lng, 180.0)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValidationError(f"{name} must be a number")
            if not math.isfinite(value) or abs(value) > bound:
                raise ValidationError(f"{name} out of range: {value}")

    @classmethod
    def from_lng_lat(cls, pair) -> GeoPoint:
        """Build from a GeoJSON position ([lng, lat] with an optional altitude)."""
        if not isinstance(pair, (list, tuple)):
            raise ValidationError(f"invalid position: {pair!r}")
        try:
            lng, lat = float(pair[0]), float(pair[1])
        except (TypeError, ValueError, IndexError):
            raise ValidationError(f"invalid position: {pair!r}")
        return cls(lat=lat, lng=lng)

    def to_lng_lat(self) -> list[float]:
        return [self.lng, self.lat]


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    dlat, dlng = radians(b.lat - a.lat), radians(b.lng - a.lng)
    h = sin(dlat / 2) ** 2 + cos(radians(a.lat)) * cos(radians(b.lat)) * sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_KM * asin(min(1.0, sqrt(h)))
