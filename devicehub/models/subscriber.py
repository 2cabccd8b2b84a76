# devicehub/models/subscriber.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field

from devicehub.core import geo
from devicehub.models.types import PointText


class Subscriber(SQLModel, table=True):
    """
    Account holder owning users and devices.

    geo_location holds the point literal text, longitude first:
      "POINT(<lng> <lat>)"
    On MySQL / MariaDB the column is a native POINT; elsewhere it is text.
    Use `geo_point` for the decoded {lat, lng} form.
    """

    __tablename__ = "subscribers"

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(max_length=255)

    plan_type: str = Field(
        default="basic",
        max_length=20,
        description="basic | premium | enterprise",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    address: str = Field(max_length=300)

    phone_number: str = Field(
        max_length=12,
        unique=True,
        index=True,
    )

    geo_location: str | None = Field(
        default=None,
        max_length=100,
        sa_type=PointText,
        description="Point literal, longitude first",
    )

    @property
    def geo_point(self) -> geo.GeoPoint | None:
        return geo.decode(self.geo_location)
