# devicehub/core/security.py
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, TypedDict

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from jose import jwt, JWTError

from devicehub.core.config import get_settings
from devicehub.core.errors import InvalidOrExpiredTokenError

logger = logging.getLogger(__name__)


class TokenSubject(TypedDict):
    id: int
    username: str


@dataclass(frozen=True)
class AccessToken:
    token: str
    expires_in: int


class CredentialService:
    """
    Password hashing and bearer-token issuance.

    Passwords:
      - hashed with argon2 (random salt per hash, encoded in the result)
      - verify never raises on mismatch or malformed hashes, it returns False

    Tokens:
      - HS256 JWT signed with the server secret
      - claims: sub (user id as string), username, iat, exp
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: int = 3600,
        hasher: PasswordHasher | None = None,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in
        self.hasher = hasher or PasswordHasher()

    # ----- Passwords -----

    def hash_password(self, plaintext: str) -> str:
        return self.hasher.hash(plaintext)

    def verify_password(self, plaintext: str, credential: str | None) -> bool:
        if not credential:
            return False
        try:
            return self.hasher.verify(credential, plaintext)
        except (VerificationError, InvalidHashError):
            return False

    # ----- Tokens -----

    def issue_token(self, subject: TokenSubject) -> AccessToken:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(subject["id"]),
            "username": subject["username"],
            "iat": now,
            "exp": now + timedelta(seconds=self.expires_in),
        }
        token = jwt.encode(payload, self.secret, algorithm=self.algorithm)
        return AccessToken(token=token, expires_in=self.expires_in)

    def verify_token(self, token: str) -> TokenSubject:
        """
        Decode and verify a bearer token (signature + exp).

        Raises:
            InvalidOrExpiredTokenError: bad signature, expired, or
            missing/malformed claims.
        """
        try:
            claims: dict[str, Any] = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
            )
        except JWTError as exc:
            logger.debug("Token rejected: %s", exc)
            raise InvalidOrExpiredTokenError()

        sub = claims.get("sub")
        username = claims.get("username")
        if not sub or not username:
            raise InvalidOrExpiredTokenError("Token missing sub/username")
        try:
            user_id = int(sub)
        except ValueError:
            raise InvalidOrExpiredTokenError("Invalid sub in token")

        return {"id": user_id, "username": username}


@lru_cache
def get_credential_service() -> CredentialService:
    """Process-wide credential service configured from settings."""
    settings = get_settings()
    return CredentialService(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALG,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_SECONDS,
    )
