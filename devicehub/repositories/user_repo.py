# devicehub/repositories/user_repo.py
from typing import Any

from devicehub.core import validation
from devicehub.core.security import CredentialService
from devicehub.models.user import User
from devicehub.repositories.base import EntityLookup, EntityRepository, ensure_exists


class UserRepository(EntityRepository[User]):
    """
    Data access layer for User.

    Rules:
      - email and username are each globally unique
      - subscriber_id and role_id must reference existing rows at write time
      - a plaintext `password` is hashed before storage; a precomputed
        `password_hash` is stored as-is. `password` wins if both are given.
    """

    model = User

    def __init__(
        self,
        session,
        subscribers: EntityLookup,
        roles: EntityLookup,
        credentials: CredentialService,
    ):
        super().__init__(session)
        self.subscribers = subscribers
        self.roles = roles
        self.credentials = credentials

    def get_by_username(self, username: str) -> User | None:
        return self._get_by(User.username, username)

    def get_by_email(self, email: str) -> User | None:
        return self._get_by(User.email, email)

    def _password_hash(self, fields: dict[str, Any]) -> str | None:
        # An explicit password is always hashed; only password_hash=None clears it
        if "password" in fields:
            password = validation.required_string(fields["password"], "password", 1024)
            return self.credentials.hash_password(password)
        return validation.password_hash(fields.get("password_hash"))

    def create(self, fields: dict[str, Any]) -> User:
        subscriber_id = validation.positive_int(fields.get("subscriber_id"), "subscriber_id")
        role_id = validation.positive_int(fields.get("role_id"), "role_id")
        email = validation.email(fields.get("email"))
        username = validation.username(fields.get("username"))
        password_hash = self._password_hash(fields)

        ensure_exists(self.subscribers, subscriber_id, "subscriber_id", "subscriber")
        ensure_exists(self.roles, role_id, "role_id", "role")

        user = User(
            subscriber_id=subscriber_id,
            role_id=role_id,
            email=email,
            username=username,
            password_hash=password_hash,
        )
        return self._insert(user)

    def update_by_id(self, user_id: Any, fields: dict[str, Any]) -> int:
        values: dict[str, Any] = {}
        if "email" in fields:
            values["email"] = validation.email(fields["email"])
        if "username" in fields:
            values["username"] = validation.username(fields["username"])
        if "password" in fields or "password_hash" in fields:
            values["password_hash"] = self._password_hash(fields)
        if "subscriber_id" in fields:
            subscriber_id = validation.positive_int(fields["subscriber_id"], "subscriber_id")
            ensure_exists(self.subscribers, subscriber_id, "subscriber_id", "subscriber")
            values["subscriber_id"] = subscriber_id
        if "role_id" in fields:
            role_id = validation.positive_int(fields["role_id"], "role_id")
            ensure_exists(self.roles, role_id, "role_id", "role")
            values["role_id"] = role_id
        return self._update(user_id, values)
