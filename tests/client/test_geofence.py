from __future__ import annotations

import pytest

from src.office_gate.office_gate.client.geofence import Position, check_geofence, haversine_distance
from src.office_gate.office_gate.settings.model import OfficeLocation

OFFICE = OfficeLocation(latitude=23.7808, longitude=90.4070, radius_meters=100, enabled=True)


def test_distance_to_self_is_zero():
    assert haversine_distance(23.78, 90.40, 23.78, 90.40) == 0


def test_one_degree_of_latitude_is_about_111_km():
    assert haversine_distance(0, 0, 1, 0) == pytest.approx(111_195, rel=1e-3)


def test_distance_is_symmetric():
    a = haversine_distance(51.5074, -0.1278, 48.8566, 2.3522)
    b = haversine_distance(48.8566, 2.3522, 51.5074, -0.1278)

    assert a == pytest.approx(b)
    assert a == pytest.approx(343_500, rel=1e-2)


def test_inside_radius_is_allowed():
    result = check_geofence(Position(23.7810, 90.4071), OFFICE)

    assert result.allowed is True
    assert result.distance_meters < 100


def test_outside_radius_is_blocked():
    result = check_geofence(Position(23.8000, 90.4070), OFFICE)

    assert result.allowed is False
    assert result.distance_meters > 1000


def test_disabled_fence_always_allows():
    assert check_geofence(None, OfficeLocation()).allowed is True


def test_enabled_fence_without_position_blocks():
    assert check_geofence(None, OFFICE).allowed is False
