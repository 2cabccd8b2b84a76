# devicehub/core/geo.py
"""
Point literal codec for subscribers.geo_location.

The literal is longitude first, latitude second:

    POINT(<lng> <lat>)
"""
import math
import re
from typing import Any, TypedDict

_POINT_RE = re.compile(
    r"^POINT\s*\(\s*([0-9+\-.eE]+)\s+([0-9+\-.eE]+)\s*\)$"
)


class GeoPoint(TypedDict):
    lat: float
    lng: float


def _as_finite(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def encode(lat: Any, lng: Any) -> str | None:
    """Return the point literal, or None if either coordinate is missing / non-finite."""
    nlat = _as_finite(lat)
    nlng = _as_finite(lng)
    if nlat is None or nlng is None:
        return None
    return f"POINT({nlng!r} {nlat!r})"


def encode_point(geo: Any) -> str | None:
    """
    Encode a mapping holding either {lat, lng} or {latitude, longitude}.
    Anything else encodes to None.
    """
    if not isinstance(geo, dict):
        return None
    lat = geo.get("lat", geo.get("latitude"))
    lng = geo.get("lng", geo.get("longitude"))
    return encode(lat, lng)


def decode(text: str | None) -> GeoPoint | None:
    """Parse a point literal back to {lat, lng}; None on any mismatch."""
    if not text:
        return None
    m = _POINT_RE.match(text.strip())
    if not m:
        return None
    lng = _as_finite(m.group(1))
    lat = _as_finite(m.group(2))
    if lat is None or lng is None:
        return None
    return {"lat": lat, "lng": lng}
