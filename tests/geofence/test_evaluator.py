from __future__ import annotations

import math

import pytest

from src.school_attendance.school_attendance.geofence.evaluator import evaluate, haversine_distance, is_within_radius
from src.school_attendance.school_attendance.geofence.model import Coordinate, GeoZone

SCHOOL = Coordinate(-6.2000, 106.8166)


def _zone(zone_id: int, center: Coordinate, radius_m: float) -> GeoZone:
    return GeoZone(zone_id=zone_id, name=f"Zona {zone_id}", center=center, radius_m=radius_m)


def test_distance_to_self_is_zero():
    assert haversine_distance(SCHOOL, SCHOOL) == 0


def test_distance_is_symmetric():
    other = Coordinate(-6.1754, 106.8272)
    assert haversine_distance(SCHOOL, other) == pytest.approx(haversine_distance(other, SCHOOL))


def test_one_degree_of_latitude():
    d = haversine_distance(Coordinate(0.0, 0.0), Coordinate(1.0, 0.0))
    assert d == pytest.approx(6_371_000 * math.pi / 180)


def test_jakarta_fix_inside_radius():
    result = evaluate(Coordinate(-6.2005, 106.8166), [_zone(1, SCHOOL, 100)])

    assert result.nearest_distance_m == pytest.approx(55.6, abs=0.5)
    assert result.within_any_zone is True
    assert result.distance_label == "56m"
    assert result.status_label == "Dalam Area Sekolah"


def test_jakarta_fix_outside_radius():
    result = evaluate(Coordinate(-6.2020, 106.8166), [_zone(1, SCHOOL, 100)])

    assert result.nearest_distance_m == pytest.approx(222.4, abs=0.5)
    assert result.within_any_zone is False
    assert result.status_label == "Luar Area Sekolah"


def test_boundary_is_inside():
    point = Coordinate(-6.2010, 106.8170)
    zone = _zone(1, SCHOOL, haversine_distance(point, SCHOOL))

    assert is_within_radius(point, zone)
    assert evaluate(point, [zone]).within_any_zone is True


def test_any_zone_counts_not_only_the_nearest():
    point = Coordinate(-6.2000, 106.8166)
    near_small = _zone(1, Coordinate(-6.2009, 106.8166), 50)  # ~100m away
    far_large = _zone(2, Coordinate(-6.2036, 106.8166), 500)  # ~400m away

    result = evaluate(point, [near_small, far_large])

    assert result.nearest_distance_m == pytest.approx(haversine_distance(point, near_small.center))
    assert result.within_any_zone is True


def test_no_zones_is_unknown():
    result = evaluate(SCHOOL, [])

    assert result.nearest_distance_m is None
    assert result.within_any_zone is False
    assert result.distance_label == "..."


def test_non_finite_input_does_not_raise():
    assert math.isnan(haversine_distance(Coordinate(math.nan, 0.0), SCHOOL))
    assert math.isnan(haversine_distance(Coordinate(0.0, math.inf), SCHOOL))

    result = evaluate(Coordinate(math.nan, 106.8166), [_zone(1, SCHOOL, 100)])
    assert result.within_any_zone is False
    assert result.distance_label == "..."
