# devicehub/models/user.py
from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Login identity belonging to one subscriber and holding one role.

    password_hash is an opaque argon2 hash and may be empty for users
    provisioned without a credential.
    """

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)

    subscriber_id: int = Field(
        foreign_key="subscribers.id",
        ondelete="RESTRICT",
        index=True,
    )

    email: str = Field(
        max_length=255,
        unique=True,
        index=True,
    )

    role_id: int = Field(
        foreign_key="roles.id",
        ondelete="RESTRICT",
        index=True,
    )

    username: str = Field(
        max_length=100,
        unique=True,
        index=True,
    )

    password_hash: str | None = Field(default=None, max_length=255)
