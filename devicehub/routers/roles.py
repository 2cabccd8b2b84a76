# devicehub/routers/roles.py
from fastapi import APIRouter, Depends, HTTPException, status

from devicehub.core.auth import require_auth
from devicehub.dependencies import get_role_repo
from devicehub.repositories.role_repo import RoleRepository
from devicehub.schemas.role import RoleCreate, RoleRead, RoleUpdate

router = APIRouter(
    prefix="/roles",
    tags=["Roles"],
    dependencies=[Depends(require_auth)],
)


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")


@router.get("", response_model=list[RoleRead])
def list_roles(
    limit: int = 50,
    offset: int = 0,
    repo: RoleRepository = Depends(get_role_repo),
):
    return repo.list(limit=limit, offset=offset)


@router.get("/name/{role_name}", response_model=RoleRead)
def get_role_by_name(role_name: str, repo: RoleRepository = Depends(get_role_repo)):
    role = repo.get_by_name(role_name)
    if role is None:
        raise _not_found()
    return role


@router.get("/{role_id}", response_model=RoleRead)
def get_role(role_id: int, repo: RoleRepository = Depends(get_role_repo)):
    role = repo.get_by_id(role_id)
    if role is None:
        raise _not_found()
    return role


@router.post("", response_model=RoleRead, status_code=status.HTTP_201_CREATED)
def create_role(payload: RoleCreate, repo: RoleRepository = Depends(get_role_repo)):
    return repo.create(payload.model_dump(exclude_unset=True))


@router.put("/{role_id}", response_model=RoleRead)
def update_role(
    role_id: int,
    payload: RoleUpdate,
    repo: RoleRepository = Depends(get_role_repo),
):
    if repo.update_by_id(role_id, payload.model_dump(exclude_unset=True)) == 0:
        raise _not_found()
    return repo.get_by_id(role_id)


@router.delete("/{role_id}")
def delete_role(role_id: int, repo: RoleRepository = Depends(get_role_repo)):
    if repo.delete_by_id(role_id) == 0:
        raise _not_found()
    return {"success": True}
