# devicehub/services/auth_service.py
import logging
from typing import Any

from devicehub.core.errors import DuplicateError, InvalidCredentialsError
from devicehub.core.security import AccessToken, CredentialService
from devicehub.models.user import User
from devicehub.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """
    Registration and login.

    Responsibilities:
      - reject a taken username before doing any hashing work
      - hash the password and create the user through UserRepository
        (which still checks subscriber/role existence and uniqueness)
      - verify credentials and mint a bearer token
    """

    def __init__(
        self,
        users: UserRepository,
        credentials: CredentialService,
        reveal_unknown_user: bool = False,
    ):
        self.users = users
        self.credentials = credentials
        self.reveal_unknown_user = reveal_unknown_user

    def register(self, fields: dict[str, Any]) -> User:
        username = fields.get("username")
        if username and self.users.get_by_username(username) is not None:
            raise DuplicateError("username already taken")

        user = self.users.create(fields)
        logger.info("Registered user id=%s", user.id)
        return user

    def login(self, username: str, password: str) -> AccessToken:
        """
        Raises:
            InvalidCredentialsError: unknown username or wrong password.
            Both cases share one message unless reveal_unknown_user is set.
        """
        user = self.users.get_by_username(username)
        if user is None:
            logger.info("Login failed: unknown username")
            if self.reveal_unknown_user:
                raise InvalidCredentialsError(f"User Not Found: {username}")
            raise InvalidCredentialsError()

        if not self.credentials.verify_password(password, user.password_hash):
            logger.info("Login failed: bad password for user id=%s", user.id)
            raise InvalidCredentialsError()

        return self.credentials.issue_token({"id": user.id, "username": user.username})
