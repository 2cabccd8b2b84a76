# devicehub/core/auth.py
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from devicehub.core.errors import InvalidOrExpiredTokenError
from devicehub.core.security import CredentialService, TokenSubject, get_credential_service

# HTTP Bearer scheme:
# - auto_error=False => a missing or non-Bearer Authorization header does
#   not raise FastAPI's own error, so every auth failure has the same 401 shape.
bearer_scheme = HTTPBearer(auto_error=False)


def require_auth(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    service: CredentialService = Depends(get_credential_service),
) -> TokenSubject:
    """
    Enforce a valid bearer token.

    Returns:
        The token subject {id, username}.

    Raises:
        InvalidOrExpiredTokenError (401): header missing/malformed, bad
        signature, or token expired.
    """
    if credentials is None:
        raise InvalidOrExpiredTokenError("Missing or malformed Authorization header")
    return service.verify_token(credentials.credentials)
