# devicehub/schemas/device.py
from pydantic import ConfigDict
from sqlmodel import SQLModel


class DeviceCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    subscriber_id: int | None = None
    mac_id: str | None = None
    model_name: str | None = None


class DeviceUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    subscriber_id: int | None = None
    mac_id: str | None = None
    model_name: str | None = None


class DeviceRead(SQLModel):
    id: int
    subscriber_id: int
    mac_id: str
    model_name: str | None = None
