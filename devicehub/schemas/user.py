# devicehub/schemas/user.py
from pydantic import ConfigDict
from sqlmodel import SQLModel


class UserCreate(SQLModel):
    """
    Payload for creating a user.

    Either a plaintext `password` (hashed server-side) or a precomputed
    `password_hash` may be given; both are optional.
    """

    model_config = ConfigDict(extra="forbid")

    subscriber_id: int | None = None
    role_id: int | None = None
    email: str | None = None
    username: str | None = None
    password: str | None = None
    password_hash: str | None = None


class UserUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    subscriber_id: int | None = None
    role_id: int | None = None
    email: str | None = None
    username: str | None = None
    password: str | None = None
    password_hash: str | None = None


class UserRead(SQLModel):
    """Response schema returned to clients. Never exposes password_hash."""

    id: int
    subscriber_id: int
    email: str
    role_id: int
    username: str
