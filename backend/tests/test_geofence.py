"""Tests for services/geofence (distances, service areas, drawn shapes)"""

import math

import pytest

from elakitty.errors import ValidationError
from elakitty.models.sanctuary import Sanctuary
from elakitty.services.geofence.area import (
    PolygonArea,
    RadiusArea,
    area_km2,
    circle_outline,
    classify_point,
    contains_point,
    from_drawn_shape,
)
from elakitty.services.geofence.point import EARTH_RADIUS_KM, GeoPoint, haversine_km

SQUARE_RING = [[20.65, 38.85], [20.75, 38.85], [20.75, 38.95], [20.65, 38.95]]


def radius_sanctuary(lat=38.8, lng=20.7, km=5.0, approved=True):
    return Sanctuary(name="Haven", latitude=lat, longitude=lng, approved=approved).set_radius(km)


def north_of(lat, lng, km):
    return GeoPoint(lat=lat + math.degrees(km / EARTH_RADIUS_KM), lng=lng)


def test_haversine_zero_and_symmetric():
    a = GeoPoint(38.8, 20.7)
    b = GeoPoint(38.83, 20.7)
    assert haversine_km(a, a) == 0
    assert haversine_km(a, b) == pytest.approx(haversine_km(b, a))
    assert haversine_km(a, b) == pytest.approx(3.336, abs=0.01)


@pytest.mark.parametrize("lat,lng", [(91, 0), (-90.5, 0), (0, 181), (0, -180.1), (float("nan"), 0)])
def test_geopoint_rejects_out_of_range(lat, lng):
    with pytest.raises(ValidationError):
        GeoPoint(lat=lat, lng=lng)


def test_radius_contains_centre():
    s = radius_sanctuary()
    assert contains_point(s, GeoPoint(38.8, 20.7))


def test_point_on_the_circle_is_inside():
    s = radius_sanctuary(km=5.0)
    assert contains_point(s, north_of(38.8, 20.7, 5.0))


def test_point_just_past_the_circle_is_outside():
    s = radius_sanctuary(km=5.0)
    assert not contains_point(s, north_of(38.8, 20.7, 5.001))


@pytest.mark.parametrize("km", [0, -1, float("inf"), float("nan")])
def test_radius_must_be_positive(km):
    with pytest.raises(ValidationError):
        RadiusArea(km)


def test_radius_scenario():
    s = radius_sanctuary(km=5)
    assert contains_point(s, GeoPoint(38.83, 20.7))
    assert not contains_point(s, GeoPoint(39.0, 20.7))


def test_switching_to_polygon_drops_radius():
    s = radius_sanctuary(km=5)
    s.set_boundary(SQUARE_RING)

    assert s.radius_km is None
    assert isinstance(s.area, PolygonArea)
    # within 5 km of the location but outside the drawn square
    assert not contains_point(s, GeoPoint(38.81, 20.7))
    # more than 5 km from the location but inside the square
    assert contains_point(s, GeoPoint(38.9, 20.7))


def test_switching_back_to_radius_drops_boundary():
    s = Sanctuary(name="Haven", latitude=38.8, longitude=20.7).set_boundary(SQUARE_RING)
    s.set_radius(2.5)
    assert s.boundary is None
    assert s.area == RadiusArea(2.5)


def test_area_with_both_representations_is_rejected():
    s = radius_sanctuary()
    s.boundary = '{"type": "Polygon", "coordinates": []}'
    with pytest.raises(ValidationError):
        s.area


def test_area_with_no_representation_is_rejected():
    s = Sanctuary(name="Haven", latitude=38.8, longitude=20.7)
    with pytest.raises(ValidationError):
        s.area


def test_polygon_centroid_inside_and_far_point_outside():
    area = from_drawn_shape(SQUARE_RING)
    assert area.contains(area.centroid())
    assert not area.contains(GeoPoint(10.0, -40.0))


def test_polygon_edge_and_vertex_count_as_inside():
    area = from_drawn_shape(SQUARE_RING)
    assert area.contains(GeoPoint(38.85, 20.65))
    assert area.contains(GeoPoint(38.85, 20.7))


def test_drawn_shape_is_closed_and_deduplicated():
    ring = [SQUARE_RING[0], SQUARE_RING[0], *SQUARE_RING[1:], SQUARE_RING[0]]
    area = from_drawn_shape(ring)
    assert len(area.vertices) == 5
    assert area.vertices[0] == area.vertices[-1]
    assert area.vertices[0] == GeoPoint(lat=38.85, lng=20.65)


@pytest.mark.parametrize(
    "ring",
    [
        [[20.65, 38.85], [20.75, 38.85]],
        [[20.65, 38.85], [20.75, 38.85], [20.65, 38.85]],
        [[20.6, 38.8], [20.7, 38.8], [20.8, 38.8]],
        # bow tie
        [[20.6, 38.8], [20.8, 38.9], [20.8, 38.8], [20.6, 38.9]],
    ],
    ids=["two-vertices", "repeated-vertex", "collinear", "self-intersecting"],
)
def test_degenerate_shapes_are_rejected(ring):
    with pytest.raises(ValidationError):
        from_drawn_shape(ring)


def test_polygon_area_requires_closed_ring():
    with pytest.raises(ValidationError):
        PolygonArea(vertices=(GeoPoint(0, 0), GeoPoint(0, 1), GeoPoint(1, 1)))


def test_geojson_shapes_are_accepted():
    closed = [*SQUARE_RING, SQUARE_RING[0]]
    feature = {"type": "Feature", "geometry": {"type": "Polygon", "coordinates": [closed]}}
    multi = {"type": "MultiPolygon", "coordinates": [[closed]]}
    collection = {"type": "FeatureCollection", "features": [feature]}

    expected = from_drawn_shape(SQUARE_RING)
    for raw in (feature, multi, collection, '{"type": "Polygon", "coordinates": [%s]}' % closed):
        assert from_drawn_shape(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        {"type": "Point", "coordinates": [20.7, 38.8]},
        {"type": "MultiPolygon", "coordinates": []},
        {"type": "FeatureCollection", "features": []},
        {"type": "FeatureCollection", "features": 3},
        {"type": "Polygon", "coordinates": 5},
        {"type": "Polygon", "coordinates": [5]},
        {"type": "MultiPolygon", "coordinates": [7]},
        [{"lng": 20.6, "lat": 38.8}, {"lng": 20.7, "lat": 38.8}, {"lng": 20.7, "lat": 38.9}],
        [[20.6], [20.7, 38.8], [20.7, 38.9]],
        42,
    ],
)
def test_unusable_boundaries_are_rejected(raw):
    with pytest.raises(ValidationError):
        from_drawn_shape(raw)


def test_classify_point_skips_unapproved():
    approved = radius_sanctuary(approved=True)
    pending = radius_sanctuary(approved=False)
    far = radius_sanctuary(lat=40.0, approved=True)
    assert classify_point([approved, pending, far], GeoPoint(38.81, 20.7)) == [approved]


def test_circle_outline_follows_radius():
    centre = GeoPoint(38.8, 20.7)
    ring = circle_outline(centre, 5.0, segments=16)["coordinates"][0]
    assert len(ring) == 17
    assert ring[0] == ring[-1]
    for lng, lat in ring[:-1]:
        assert haversine_km(centre, GeoPoint(lat=lat, lng=lng)) == pytest.approx(5.0, abs=1e-6)


def test_area_km2():
    assert area_km2(RadiusArea(1.0)) == pytest.approx(math.pi, rel=1e-4)
    # roughly 8.7 km x 11.1 km around latitude 38.9
    assert area_km2(from_drawn_shape(SQUARE_RING)) == pytest.approx(96.3, rel=0.02)
