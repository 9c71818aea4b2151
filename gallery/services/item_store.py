"""CRUD over the persisted item collection."""

import logging
from datetime import UTC, datetime
from typing import Any

import pydantic

from gallery.core.config import get_settings
from gallery.core.errors import NotFoundError, StorageError, ValidationError
from gallery.core.storage import JsonCollection
from gallery.models import Item

logger = logging.getLogger(__name__)

# Fields the store assigns itself; a merge never overwrites them.
PROTECTED_FIELDS = frozenset({"id", "owner", "created"})


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


class ItemStore:
    """
    Items stored as one JSON collection.

    No index is kept between calls: each operation loads the whole collection and
    mutations write the whole collection back.
    """

    def __init__(self, collection: JsonCollection, placeholder_image: str) -> None:
        self.collection = collection
        self.placeholder_image = placeholder_image

    def _imgs_or_placeholder(self, imgs: list[str] | None) -> list[str]:
        if not imgs:
            return [self.placeholder_image]
        return list(imgs) if isinstance(imgs, (list, tuple)) else imgs

    @staticmethod
    def _load(record: dict[str, Any]) -> Item:
        """Parse one stored record; a malformed record is a storage failure, not a crash."""
        try:
            return Item.model_validate(record)
        except pydantic.ValidationError as e:
            logger.error("Malformed item record %r: %s", record.get("id"), e)
            raise StorageError("Failed to read items") from e

    @staticmethod
    def _index_of(records: list[dict[str, Any]], item_id: int) -> int:
        for i, record in enumerate(records):
            try:
                if int(record.get("id")) == item_id:
                    return i
            except (TypeError, ValueError):
                continue
        raise NotFoundError("Item not found")

    def list(self) -> list[Item]:
        return [self._load(r) for r in self.collection.read()]

    def get(self, item_id: int) -> Item:
        records = self.collection.read()
        return self._load(records[self._index_of(records, item_id)])

    def create(self, fields: dict[str, Any], owner_id: int) -> Item:
        """
        Validate and append a new item owned by owner_id.

        id is one more than the largest existing id (1 for an empty collection),
        not the collection size.
        """
        if _is_blank(fields.get("name")) or _is_blank(fields.get("desc")):
            raise ValidationError("Name and description are required")

        with self.collection.transaction() as records:
            max_id = 0
            for record in records:
                try:
                    max_id = max(max_id, int(record.get("id")))
                except (TypeError, ValueError):
                    continue
            item = Item(
                id=max_id + 1,
                name=fields["name"],
                desc=fields["desc"],
                imgs=self._imgs_or_placeholder(fields.get("imgs")),
                owner=owner_id,
                created=datetime.now(UTC).isoformat(),
            )
            records.append(item.to_record())

        logger.info("Created item", extra={"item_id": item.id, "owner": owner_id})
        return item

    def update(self, item_id: int, fields: dict[str, Any]) -> Item:
        """Shallow merge: each provided field replaces the stored one; id/owner/created are kept."""
        changes = {k: v for k, v in fields.items() if k not in PROTECTED_FIELDS}
        for key in ("name", "desc"):
            if key in changes and _is_blank(changes[key]):
                raise ValidationError("Name and description must not be empty")
        if "imgs" in changes:
            changes["imgs"] = self._imgs_or_placeholder(changes["imgs"])

        with self.collection.transaction() as records:
            index = self._index_of(records, item_id)
            self._load(records[index])
            try:
                item = Item.model_validate({**records[index], **changes})
            except pydantic.ValidationError as e:
                raise ValidationError("Invalid item fields") from e
            records[index] = item.to_record()

        logger.info("Updated item", extra={"item_id": item_id, "fields": sorted(changes)})
        return item

    def delete(self, item_id: int) -> Item:
        with self.collection.transaction() as records:
            index = self._index_of(records, item_id)
            removed = self._load(records.pop(index))

        logger.info("Deleted item", extra={"item_id": item_id})
        return removed


def get_item_store() -> ItemStore:
    """Dependency that builds an ItemStore over the configured items file."""
    settings = get_settings()
    return ItemStore(
        JsonCollection(settings.items_path, "items"),
        placeholder_image=settings.PLACEHOLDER_IMAGE,
    )
