# devicehub/schemas/auth.py
from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class RegisterRequest(SQLModel):
    """
    Registration payload.

    A user always belongs to a subscriber and holds a role, so both ids
    and an email are required alongside the credentials.
    """

    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    email: str
    subscriber_id: int
    role_id: int


class RegisterResponse(SQLModel):
    id: int
    username: str


class LoginRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class TokenResponse(SQLModel):
    token: str
    expires_in: int
