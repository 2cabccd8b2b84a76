# devicehub/schemas/assignment.py
from datetime import datetime

from pydantic import ConfigDict
from sqlmodel import SQLModel


class AssignmentCreate(SQLModel):
    """assigned_at is optional: the store default (now, UTC) applies."""

    model_config = ConfigDict(extra="forbid")

    user_id: int | None = None
    device_id: int | None = None
    assigned_at: datetime | None = None


class AssignmentRead(SQLModel):
    user_id: int
    device_id: int
    assigned_at: datetime | None = None


class UserDeviceRead(SQLModel):
    """One device assigned to a given user."""

    device_id: int
    assigned_at: datetime | None = None


class DeviceUserRead(SQLModel):
    """One user a given device is assigned to."""

    user_id: int
    assigned_at: datetime | None = None


class AssignmentExists(SQLModel):
    exists: bool
