"""Unit tests for gallery.services.item_store: CRUD over the JSON item collection."""

import json
import tempfile
import unittest
from pathlib import Path

from gallery.core.errors import NotFoundError, StorageError, ValidationError
from gallery.core.storage import JsonCollection
from gallery.services.item_store import ItemStore

PLACEHOLDER = "images/webp/placeholder.webp"


class ItemStoreTestCase(unittest.TestCase):
    """Each test gets a fresh items.json in its own temp directory."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "items.json"
        self.store = ItemStore(JsonCollection(self.path, "items"), placeholder_image=PLACEHOLDER)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _seed(self, records: list[dict]) -> None:
        self.path.write_text(json.dumps(records), encoding="utf-8")

    def _stored(self) -> list[dict]:
        return json.loads(self.path.read_text(encoding="utf-8"))


class TestCreate(ItemStoreTestCase):
    def test_create_then_get_round_trip(self) -> None:
        created = self.store.create(
            {"name": "Vase", "desc": "Blue vase", "imgs": ["images/webp/a.webp"]}, owner_id=5
        )
        fetched = self.store.get(created.id)
        self.assertEqual(fetched, created)
        self.assertEqual(fetched.name, "Vase")
        self.assertEqual(fetched.desc, "Blue vase")
        self.assertEqual(fetched.imgs, ["images/webp/a.webp"])
        self.assertEqual(fetched.owner, 5)
        self.assertEqual(fetched.id, 1)
        self.assertIsNotNone(fetched.created)

    def test_id_is_max_plus_one_not_count_plus_one(self) -> None:
        self._seed(
            [
                {"id": 1, "name": "a", "desc": "a", "imgs": ["x"], "owner": 5},
                {"id": 3, "name": "b", "desc": "b", "imgs": ["y"], "owner": 5},
            ]
        )
        self.assertEqual(self.store.create({"name": "c", "desc": "c"}, owner_id=5).id, 4)

    def test_missing_or_empty_imgs_default_to_placeholder(self) -> None:
        self.assertEqual(self.store.create({"name": "a", "desc": "a"}, 5).imgs, [PLACEHOLDER])
        self.assertEqual(
            self.store.create({"name": "b", "desc": "b", "imgs": []}, 5).imgs, [PLACEHOLDER]
        )

    def test_empty_name_or_desc_is_rejected_and_nothing_persisted(self) -> None:
        self._seed([{"id": 1, "name": "a", "desc": "a", "imgs": ["x"], "owner": 5}])
        for fields in (
            {"name": "", "desc": "d"},
            {"name": "n", "desc": ""},
            {"name": "   ", "desc": "d"},
            {"desc": "d"},
            {"name": "n"},
            {"name": None, "desc": "d"},
        ):
            with self.subTest(fields=fields):
                with self.assertRaises(ValidationError):
                    self.store.create(fields, owner_id=5)
        self.assertEqual(len(self._stored()), 1)

    def test_client_supplied_id_and_owner_are_ignored(self) -> None:
        created = self.store.create({"name": "a", "desc": "a", "id": 99, "owner": 1}, owner_id=5)
        self.assertEqual(created.id, 1)
        self.assertEqual(created.owner, 5)


class TestUpdate(ItemStoreTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.item = self.store.create(
            {"name": "Vase", "desc": "Blue vase", "imgs": ["images/webp/a.webp"]}, owner_id=7
        )

    def test_shallow_merge_keeps_absent_fields(self) -> None:
        updated = self.store.update(self.item.id, {"desc": "Green vase"})
        self.assertEqual(updated.desc, "Green vase")
        self.assertEqual(updated.name, "Vase")
        self.assertEqual(updated.imgs, ["images/webp/a.webp"])
        self.assertEqual(self.store.get(self.item.id), updated)

    def test_imgs_are_replaced_not_appended(self) -> None:
        updated = self.store.update(self.item.id, {"imgs": ["b.webp", "c.webp"]})
        self.assertEqual(updated.imgs, ["b.webp", "c.webp"])

    def test_id_owner_created_never_change(self) -> None:
        updated = self.store.update(
            self.item.id, {"id": 42, "owner": 5, "created": "yesterday", "name": "Jug"}
        )
        self.assertEqual(updated.id, self.item.id)
        self.assertEqual(updated.owner, 7)
        self.assertEqual(updated.created, self.item.created)
        self.assertEqual(updated.name, "Jug")
        with self.assertRaises(NotFoundError):
            self.store.get(42)

    def test_blank_name_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            self.store.update(self.item.id, {"name": ""})
        self.assertEqual(self.store.get(self.item.id).name, "Vase")

    def test_missing_item(self) -> None:
        with self.assertRaises(NotFoundError):
            self.store.update(999, {"name": "x"})


class TestDeleteAndList(ItemStoreTestCase):
    def test_delete_returns_record_then_get_is_not_found(self) -> None:
        item = self.store.create({"name": "a", "desc": "a"}, owner_id=5)
        removed = self.store.delete(item.id)
        self.assertEqual(removed, item)
        with self.assertRaises(NotFoundError):
            self.store.get(item.id)
        self.assertEqual(self._stored(), [])

    def test_delete_missing(self) -> None:
        with self.assertRaises(NotFoundError):
            self.store.delete(1)

    def test_list_preserves_stored_order(self) -> None:
        self._seed(
            [
                {"id": 3, "name": "c", "desc": "c", "imgs": ["x"], "owner": 5},
                {"id": 1, "name": "a", "desc": "a", "imgs": ["x"], "owner": 5},
            ]
        )
        self.assertEqual([i.id for i in self.store.list()], [3, 1])

    def test_empty_or_missing_file_lists_nothing(self) -> None:
        self.assertEqual(self.store.list(), [])

    def test_legacy_string_ids_and_missing_owner_load(self) -> None:
        self._seed([{"id": "2", "name": "a", "desc": "a", "imgs": ["x"]}])
        item = self.store.get(2)
        self.assertIsNone(item.owner)
        self.assertEqual(self.store.create({"name": "b", "desc": "b"}, 5).id, 3)

    def test_corrupt_file_is_storage_error(self) -> None:
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertRaises(StorageError):
            self.store.list()


class TestMalformedRecords(ItemStoreTestCase):
    """A stored record that does not parse is a StorageError, not a crash."""

    def test_list_and_get(self) -> None:
        self._seed([{"id": 1, "name": "a", "imgs": ["x"], "owner": 5}])
        with self.assertRaises(StorageError) as ctx:
            self.store.list()
        self.assertEqual(ctx.exception.message, "Failed to read items")
        with self.assertRaises(StorageError):
            self.store.get(1)

    def test_update_of_malformed_record_leaves_file_untouched(self) -> None:
        records = [{"id": 1, "name": "a", "imgs": ["x"], "owner": 5}]
        self._seed(records)
        with self.assertRaises(StorageError):
            self.store.update(1, {"name": "b"})
        self.assertEqual(self._stored(), records)

    def test_invalid_update_fields_are_validation_error(self) -> None:
        item = self.store.create({"name": "a", "desc": "a"}, owner_id=5)
        with self.assertRaises(ValidationError):
            self.store.update(item.id, {"imgs": [1, 2]})
        self.assertEqual(self.store.get(item.id), item)


if __name__ == "__main__":
    unittest.main()
