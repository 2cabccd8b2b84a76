# devicehub/routers/protected.py
from fastapi import APIRouter, Depends

from devicehub.core.auth import require_auth
from devicehub.core.security import TokenSubject

router = APIRouter(tags=["Auth"])


@router.get("/protected")
def protected(subject: TokenSubject = Depends(require_auth)):
    """Token smoke test: greets the authenticated user."""
    return {"message": f"Hello {subject['username']}, you have accessed a protected route."}
