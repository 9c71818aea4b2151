"""Item endpoints: anonymous reads, authenticated create, owner-or-admin update and delete."""

from typing import Annotated

from fastapi import APIRouter, Depends

from gallery.api.v1.auth import get_current_user
from gallery.core.errors import NotFoundError
from gallery.models import Item
from gallery.schemas.auth import Identity
from gallery.schemas.items import ItemCreate, ItemDeleteResponse, ItemUpdate
from gallery.services.item_store import ItemStore, get_item_store
from gallery.services.policy import ensure_can_mutate

router = APIRouter()


def _parse_item_id(raw: str) -> int:
    """Ids that are not integers match no item."""
    try:
        return int(raw)
    except ValueError:
        raise NotFoundError("Item not found") from None


@router.get("", response_model=list[Item])
def list_items(
    items: Annotated[ItemStore, Depends(get_item_store)],
) -> list[Item]:
    """All items in stored order."""
    return items.list()


@router.get("/{item_id}", response_model=Item)
def get_item(
    item_id: str,
    items: Annotated[ItemStore, Depends(get_item_store)],
) -> Item:
    return items.get(_parse_item_id(item_id))


@router.post("", response_model=Item, status_code=201)
def create_item(
    body: ItemCreate,
    identity: Annotated[Identity, Depends(get_current_user)],
    items: Annotated[ItemStore, Depends(get_item_store)],
) -> Item:
    """
    Create an item owned by the caller. Any authenticated user may create.
    name and desc are required; imgs defaults to the placeholder image.
    """
    return items.create(body.model_dump(), owner_id=identity.id)


@router.put("/{item_id}", response_model=Item)
def update_item(
    item_id: str,
    body: ItemUpdate,
    identity: Annotated[Identity, Depends(get_current_user)],
    items: Annotated[ItemStore, Depends(get_item_store)],
) -> Item:
    """Merge the fields present in the body onto the item. Owner or admin only."""
    target_id = _parse_item_id(item_id)
    ensure_can_mutate(identity, items.get(target_id))
    return items.update(target_id, body.model_dump(exclude_unset=True))


@router.delete("/{item_id}", response_model=ItemDeleteResponse)
def delete_item(
    item_id: str,
    identity: Annotated[Identity, Depends(get_current_user)],
    items: Annotated[ItemStore, Depends(get_item_store)],
) -> ItemDeleteResponse:
    """Delete the item and return it. Owner or admin only."""
    target_id = _parse_item_id(item_id)
    ensure_can_mutate(identity, items.get(target_id))
    return ItemDeleteResponse(message="Item deleted successfully", item=items.delete(target_id))
