# devicehub/routers/devices.py
from fastapi import APIRouter, Depends, HTTPException, status

from devicehub.core.auth import require_auth
from devicehub.dependencies import get_device_repo
from devicehub.repositories.device_repo import DeviceRepository
from devicehub.schemas.device import DeviceCreate, DeviceRead, DeviceUpdate

router = APIRouter(
    prefix="/devices",
    tags=["Devices"],
    dependencies=[Depends(require_auth)],
)


@router.get("", response_model=list[DeviceRead])
def list_devices(
    limit: int = 50,
    offset: int = 0,
    repo: DeviceRepository = Depends(get_device_repo),
):
    return repo.list(limit=limit, offset=offset)


@router.get("/mac/{mac_id}", response_model=DeviceRead)
def get_device_by_mac(mac_id: str, repo: DeviceRepository = Depends(get_device_repo)):
    device = repo.get_by_mac_id(mac_id)
    if device is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
    return device


@router.get("/{device_id}", response_model=DeviceRead)
def get_device(device_id: int, repo: DeviceRepository = Depends(get_device_repo)):
    device = repo.get_by_id(device_id)
    if device is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
    return device


@router.post("", response_model=DeviceRead, status_code=status.HTTP_201_CREATED)
def create_device(payload: DeviceCreate, repo: DeviceRepository = Depends(get_device_repo)):
    """400 if subscriber_id does not exist or mac_id is missing."""
    return repo.create(payload.model_dump(exclude_unset=True))


@router.put("/{device_id}", response_model=DeviceRead)
def update_device(
    device_id: int,
    payload: DeviceUpdate,
    repo: DeviceRepository = Depends(get_device_repo),
):
    if repo.update_by_id(device_id, payload.model_dump(exclude_unset=True)) == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
    return repo.get_by_id(device_id)


@router.delete("/{device_id}")
def delete_device(device_id: int, repo: DeviceRepository = Depends(get_device_repo)):
    if repo.delete_by_id(device_id) == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
    return {"success": True}
