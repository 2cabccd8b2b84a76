"""Geo codec: point literal is longitude first, latitude second."""

import math

import pytest

from devicehub.core import geo


def test_encode_puts_longitude_first():
    assert geo.encode(lat=10.5, lng=-20.25) == "POINT(-20.25 10.5)"


def test_decode_reads_longitude_first():
    assert geo.decode("POINT(-20.25 10.5)") == {"lat": 10.5, "lng": -20.25}


@pytest.mark.parametrize(
    "lat, lng",
    [(0.0, 0.0), (51.5074, -0.1278), (-33.8688, 151.2093), (89.999999, -179.5), (1e-05, 2e-07)],
)
def test_round_trip(lat, lng):
    assert geo.decode(geo.encode(lat, lng)) == {"lat": lat, "lng": lng}


@pytest.mark.parametrize(
    "lat, lng",
    [(None, 1.0), (1.0, None), (math.inf, 1.0), (1.0, math.nan), ("north", 1.0)],
)
def test_encode_missing_or_non_finite_is_none(lat, lng):
    assert geo.encode(lat, lng) is None


def test_encode_point_accepts_both_key_styles():
    assert geo.encode_point({"lat": 1, "lng": 2}) == "POINT(2.0 1.0)"
    assert geo.encode_point({"latitude": 1, "longitude": 2}) == "POINT(2.0 1.0)"
    assert geo.encode_point({}) is None
    assert geo.encode_point(None) is None


@pytest.mark.parametrize(
    "text",
    [None, "", "POINT()", "POINT(1)", "LINESTRING(1 2, 3 4)", "POINT(a b)", "POINT(1 2 3)"],
)
def test_decode_structural_mismatch_is_none(text):
    assert geo.decode(text) is None
