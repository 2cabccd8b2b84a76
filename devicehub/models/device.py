# devicehub/models/device.py
from sqlmodel import SQLModel, Field


class Device(SQLModel, table=True):
    """Hardware unit owned by a subscriber, identified by its MAC id."""

    __tablename__ = "devices"

    id: int | None = Field(default=None, primary_key=True)

    subscriber_id: int = Field(
        foreign_key="subscribers.id",
        ondelete="RESTRICT",
        index=True,
    )

    mac_id: str = Field(max_length=100, index=True)

    model_name: str | None = Field(default=None, max_length=100)
