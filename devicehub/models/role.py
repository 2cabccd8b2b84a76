# devicehub/models/role.py
from sqlmodel import SQLModel, Field


class Role(SQLModel, table=True):
    """Application role a user is bound to (e.g. "admin", "operator")."""

    __tablename__ = "roles"

    id: int | None = Field(default=None, primary_key=True)

    role_name: str = Field(
        max_length=50,
        unique=True,
        index=True,
    )
