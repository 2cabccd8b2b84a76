# devicehub/routers/assignments.py
from fastapi import APIRouter, Depends, HTTPException, status

from devicehub.core.auth import require_auth
from devicehub.dependencies import get_assignment_repo
from devicehub.repositories.assignment_repo import AssignmentRepository
from devicehub.schemas.assignment import (
    AssignmentCreate,
    AssignmentExists,
    AssignmentRead,
    DeviceUserRead,
    UserDeviceRead,
)

router = APIRouter(
    prefix="/assignments",
    tags=["Assignments"],
    dependencies=[Depends(require_auth)],
)


@router.get("", response_model=list[AssignmentRead])
def list_assignments(
    limit: int = 50,
    offset: int = 0,
    repo: AssignmentRepository = Depends(get_assignment_repo),
):
    return repo.list(limit=limit, offset=offset)


@router.get("/user/{user_id}", response_model=list[UserDeviceRead])
def get_assignments_for_user(
    user_id: int,
    repo: AssignmentRepository = Depends(get_assignment_repo),
):
    """Devices assigned to a user (empty list if none)."""
    return repo.find_by_user(user_id)


@router.get("/device/{device_id}", response_model=list[DeviceUserRead])
def get_assignments_for_device(
    device_id: int,
    repo: AssignmentRepository = Depends(get_assignment_repo),
):
    """Users a device is assigned to (empty list if none)."""
    return repo.find_by_device(device_id)


@router.get("/exists/{user_id}/{device_id}", response_model=AssignmentExists)
def assignment_exists(
    user_id: int,
    device_id: int,
    repo: AssignmentRepository = Depends(get_assignment_repo),
):
    return {"exists": repo.exists(user_id, device_id)}


@router.post("", response_model=AssignmentRead, status_code=status.HTTP_201_CREATED)
def create_assignment(
    payload: AssignmentCreate,
    repo: AssignmentRepository = Depends(get_assignment_repo),
):
    """
    Assign a device to a user.

    - 400 if user_id or device_id does not exist (the error names the field)
    - 409 if the pair is already assigned
    """
    return repo.create(payload.model_dump(exclude_unset=True))


@router.delete("/{user_id}/{device_id}")
def delete_assignment(
    user_id: int,
    device_id: int,
    repo: AssignmentRepository = Depends(get_assignment_repo),
):
    if repo.delete(user_id, device_id) == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
    return {"success": True}
