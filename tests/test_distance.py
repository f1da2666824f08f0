import math

import pytest

from schools.distance import EARTH_RADIUS_KM, haversine_km

POINTS = [
    (0.0, 0.0),
    (51.5074, -0.1278),
    (-33.8688, 151.2093),
    (90.0, 0.0),
    (-90.0, 180.0),
    (12.5, -179.9),
]


@pytest.mark.parametrize("lat, lon", POINTS)
def test_same_point_is_zero(lat, lon):
    assert haversine_km(lat, lon, lat, lon) == 0.0


@pytest.mark.parametrize("a", POINTS)
@pytest.mark.parametrize("b", POINTS)
def test_symmetric_and_bounded(a, b):
    forward = haversine_km(a[0], a[1], b[0], b[1])
    backward = haversine_km(b[0], b[1], a[0], a[1])

    assert forward == pytest.approx(backward, abs=1e-9)
    assert 0.0 <= forward <= math.pi * EARTH_RADIUS_KM + 1e-9


def test_one_degree_of_longitude_on_equator():
    assert haversine_km(0, 0, 0, 1) == pytest.approx(111.195, abs=1e-3)


def test_quarter_circumference():
    assert haversine_km(0, 0, 0, 90) == pytest.approx(math.pi * EARTH_RADIUS_KM / 2)


def test_antipodal_points_reach_half_circumference():
    assert haversine_km(0, 0, 0, 180) == pytest.approx(math.pi * EARTH_RADIUS_KM)
    assert haversine_km(90, 0, -90, 0) == pytest.approx(math.pi * EARTH_RADIUS_KM)
    assert haversine_km(45, 30, -45, -150) == pytest.approx(math.pi * EARTH_RADIUS_KM)
