# devicehub/models/assignment.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Assignment(SQLModel, table=True):
    """
    User <-> device link.
    The (user_id, device_id) pair is the primary key, so the same device
    cannot be assigned twice to the same user.
    """

    __tablename__ = "user_device_assignments"

    user_id: int = Field(
        foreign_key="users.id",
        ondelete="RESTRICT",
        primary_key=True,
    )

    device_id: int = Field(
        foreign_key="devices.id",
        ondelete="RESTRICT",
        primary_key=True,
    )

    assigned_at: datetime | None = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
