# devicehub/routers/auth.py
from fastapi import APIRouter, Depends, status

from devicehub.dependencies import get_auth_service
from devicehub.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from devicehub.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    """
    Register a new user.

    - 409 if the username is taken (checked before hashing)
    - 400 if subscriber_id / role_id do not exist
    """
    return service.register(payload.model_dump())


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, service: AuthService = Depends(get_auth_service)):
    """Exchange username/password for a bearer token valid for 1 hour."""
    token = service.login(payload.username, payload.password)
    return {"token": token.token, "expires_in": token.expires_in}
