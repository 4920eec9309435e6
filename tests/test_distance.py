"""Unit tests for the Haversine distance engine and its formatting."""

import pytest

from src.domain.distance import format_distance, haversine_km


class TestHaversine:
    def test_same_point_is_zero(self):
        assert haversine_km(40.7128, -74.0060, 40.7128, -74.0060) == 0.0

    def test_symmetric(self):
        d1 = haversine_km(40.7128, -74.0060, 34.0522, -118.2437)
        d2 = haversine_km(34.0522, -118.2437, 40.7128, -74.0060)
        assert abs(d1 - d2) < 1e-9

    def test_new_york_to_los_angeles(self):
        d = haversine_km(40.7128, -74.0060, 34.0522, -118.2437)
        assert 3935 < d < 3945

    def test_one_degree_of_latitude(self):
        # 2 * pi * 6371 / 360
        assert haversine_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(111.195, abs=1e-3)

    def test_antipodes(self):
        d = haversine_km(0.0, 0.0, 0.0, 180.0)
        assert d == pytest.approx(20015.087, abs=1e-2)

    def test_antipodes_off_the_equator(self):
        # sin/cos rounding leaves a slightly above 1 for this pair
        d = haversine_km(-82.0, -180.0, 82.0, 0.0)
        assert d == pytest.approx(20015.087, abs=1e-2)

    @pytest.mark.parametrize("lat", range(-90, 91))
    @pytest.mark.parametrize("lng", [-180, -97, 0, 45, 180])
    def test_every_antipodal_pair(self, lat, lng):
        other_lng = lng - 180 if lng > 0 else lng + 180
        d = haversine_km(float(lat), float(lng), float(-lat), float(other_lng))
        assert d == pytest.approx(20015.087, abs=1e-2)

    def test_never_negative(self):
        assert haversine_km(-33.86, 151.21, 51.50, -0.12) > 0


class TestFormatDistance:
    @pytest.mark.parametrize(
        "km, label",
        [
            (0.5, "500m"),
            (0.0, "0m"),
            (0.0124, "12m"),
            (0.9994, "999m"),
            (1.0, "1.0km"),
            (3.44, "3.4km"),
            (12.34, "12.3km"),
            (3940.6, "3940.6km"),
        ],
    )
    def test_labels(self, km, label):
        assert format_distance(km) == label

    def test_meters_round_half_up(self):
        assert format_distance(0.0005) == "1m"
