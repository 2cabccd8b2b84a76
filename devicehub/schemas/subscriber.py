# devicehub/schemas/subscriber.py
from datetime import datetime
from typing import Any

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel

from devicehub.core import geo


class GeoLocationIn(SQLModel):
    """
    Point input. Either {lat, lng} or {latitude, longitude}.
    Missing or non-finite coordinates store no point.
    """

    model_config = ConfigDict(extra="forbid")

    lat: float | None = None
    lng: float | None = None
    latitude: float | None = None
    longitude: float | None = None


class GeoLocationRead(SQLModel):
    lat: float
    lng: float


class SubscriberCreate(SQLModel):
    """
    Payload for creating a subscriber.

    - plan_type is optional: defaults to "basic".
    - field constraints (lengths, phone charset, plan enum) are enforced
      by the repository and reported as 400 errors.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    plan_type: str | None = None
    address: str | None = None
    phone_number: str | None = None
    geo_location: GeoLocationIn | None = None


class SubscriberUpdate(SQLModel):
    """Partial update; send geo_location: null to clear the point."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    plan_type: str | None = None
    address: str | None = None
    phone_number: str | None = None
    geo_location: GeoLocationIn | None = None


class SubscriberRead(SQLModel):
    """Response schema; geo_location is decoded from the stored point literal."""

    id: int
    name: str
    plan_type: str
    created_at: datetime
    address: str
    phone_number: str
    geo_location: GeoLocationRead | None = None

    @field_validator("geo_location", mode="before")
    @classmethod
    def decode_point(cls, v: Any) -> Any:
        if isinstance(v, str):
            return geo.decode(v)
        return v
