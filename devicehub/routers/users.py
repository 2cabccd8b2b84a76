# devicehub/routers/users.py
from fastapi import APIRouter, Depends, HTTPException, status

from devicehub.core.auth import require_auth
from devicehub.dependencies import get_user_repo
from devicehub.repositories.user_repo import UserRepository
from devicehub.schemas.user import UserCreate, UserRead, UserUpdate

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    dependencies=[Depends(require_auth)],
)


def _found(user):
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
    return user


@router.get("", response_model=list[UserRead])
def list_users(
    limit: int = 50,
    offset: int = 0,
    repo: UserRepository = Depends(get_user_repo),
):
    return repo.list(limit=limit, offset=offset)


@router.get("/id/{user_id}", response_model=UserRead)
def get_user(user_id: int, repo: UserRepository = Depends(get_user_repo)):
    return _found(repo.get_by_id(user_id))


@router.get("/username/{username}", response_model=UserRead)
def get_user_by_username(username: str, repo: UserRepository = Depends(get_user_repo)):
    return _found(repo.get_by_username(username))


@router.get("/email/{email}", response_model=UserRead)
def get_user_by_email(email: str, repo: UserRepository = Depends(get_user_repo)):
    return _found(repo.get_by_email(email))


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, repo: UserRepository = Depends(get_user_repo)):
    """
    Create a user.

    - 400 if subscriber_id / role_id do not exist or fields are invalid
    - 409 if email or username is already used
    """
    return repo.create(payload.model_dump(exclude_unset=True))


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    payload: UserUpdate,
    repo: UserRepository = Depends(get_user_repo),
):
    if repo.update_by_id(user_id, payload.model_dump(exclude_unset=True)) == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
    return repo.get_by_id(user_id)


@router.delete("/{user_id}")
def delete_user(user_id: int, repo: UserRepository = Depends(get_user_repo)):
    if repo.delete_by_id(user_id) == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
    return {"success": True}
