# devicehub/routers/subscribers.py
from fastapi import APIRouter, Depends, HTTPException, status

from devicehub.core.auth import require_auth
from devicehub.dependencies import get_subscriber_repo
from devicehub.repositories.subscriber_repo import SubscriberRepository
from devicehub.schemas.subscriber import SubscriberCreate, SubscriberRead, SubscriberUpdate

router = APIRouter(
    prefix="/subscribers",
    tags=["Subscribers"],
    dependencies=[Depends(require_auth)],
)


@router.get("", response_model=list[SubscriberRead])
def list_subscribers(
    limit: int = 50,
    offset: int = 0,
    repo: SubscriberRepository = Depends(get_subscriber_repo),
):
    """List subscribers ordered by id. limit is capped at 100."""
    return repo.list(limit=limit, offset=offset)


@router.get("/phone/{phone_number}", response_model=SubscriberRead)
def get_subscriber_by_phone(
    phone_number: str,
    repo: SubscriberRepository = Depends(get_subscriber_repo),
):
    subscriber = repo.get_by_phone_number(phone_number)
    if subscriber is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
    return subscriber


@router.get("/{subscriber_id}", response_model=SubscriberRead)
def get_subscriber(
    subscriber_id: int,
    repo: SubscriberRepository = Depends(get_subscriber_repo),
):
    subscriber = repo.get_by_id(subscriber_id)
    if subscriber is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
    return subscriber


@router.post("", response_model=SubscriberRead, status_code=status.HTTP_201_CREATED)
def create_subscriber(
    payload: SubscriberCreate,
    repo: SubscriberRepository = Depends(get_subscriber_repo),
):
    """
    Create a subscriber.

    - 400 on invalid fields
    - 409 if phone_number is already used
    """
    return repo.create(payload.model_dump(exclude_unset=True))


@router.put("/{subscriber_id}", response_model=SubscriberRead)
def update_subscriber(
    subscriber_id: int,
    payload: SubscriberUpdate,
    repo: SubscriberRepository = Depends(get_subscriber_repo),
):
    """Partial update. At least one field is required (400 otherwise)."""
    if repo.update_by_id(subscriber_id, payload.model_dump(exclude_unset=True)) == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
    return repo.get_by_id(subscriber_id)


@router.delete("/{subscriber_id}")
def delete_subscriber(
    subscriber_id: int,
    repo: SubscriberRepository = Depends(get_subscriber_repo),
):
    if repo.delete_by_id(subscriber_id) == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
    return {"success": True}
