"""Health check endpoint with a storage readability check."""

from typing import Annotated

from fastapi import APIRouter, Depends

from gallery.core.config import settings
from gallery.core.errors import StorageError
from gallery.schemas.health import HealthResponse
from gallery.services.item_store import ItemStore, get_item_store
from gallery.services.user_store import UserStore, get_user_store

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(
    items: Annotated[ItemStore, Depends(get_item_store)],
    users: Annotated[UserStore, Depends(get_user_store)],
) -> HealthResponse:
    """
    Return service health status and whether the persisted collections load.
    Used by load balancers and monitoring.
    """
    try:
        items.collection.read()
        users.collection.read()
        storage = "readable"
    except StorageError:
        storage = "unreadable"

    return HealthResponse(status="ok", environment=settings.APP_ENV, storage=storage)
