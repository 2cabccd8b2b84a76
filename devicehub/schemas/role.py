# devicehub/schemas/role.py
from pydantic import ConfigDict
from sqlmodel import SQLModel


class RoleCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    role_name: str | None = None


class RoleUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    role_name: str | None = None


class RoleRead(SQLModel):
    id: int
    role_name: str
