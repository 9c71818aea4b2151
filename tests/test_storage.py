"""Unit tests for gallery.core.storage.JsonCollection."""

import json
import tempfile
import threading
import unittest
from pathlib import Path

from gallery.core.errors import StorageError
from gallery.core.storage import JsonCollection
from gallery.services.item_store import ItemStore


class TestJsonCollection(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "nested" / "things.json"
        self.collection = JsonCollection(self.path, "things")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_missing_file_reads_empty(self) -> None:
        self.assertEqual(self.collection.read(), [])

    def test_write_creates_parent_and_indents(self) -> None:
        self.collection.write([{"id": 1}])
        text = self.path.read_text(encoding="utf-8")
        self.assertIn('    "id": 1', text)
        self.assertEqual(self.collection.read(), [{"id": 1}])
        self.assertEqual(list(self.path.parent.glob("*.tmp")), [])

    def test_transaction_writes_on_success(self) -> None:
        with self.collection.transaction() as records:
            records.append({"id": 1})
        self.assertEqual(self.collection.read(), [{"id": 1}])

    def test_transaction_discards_on_error(self) -> None:
        self.collection.write([{"id": 1}])
        with self.assertRaises(RuntimeError):
            with self.collection.transaction() as records:
                records.append({"id": 2})
                raise RuntimeError("boom")
        self.assertEqual(self.collection.read(), [{"id": 1}])

    def test_non_list_document_is_storage_error(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text(json.dumps({"id": 1}), encoding="utf-8")
        with self.assertRaises(StorageError) as ctx:
            self.collection.read()
        self.assertEqual(ctx.exception.message, "Failed to read things")

    def test_unserializable_record_is_storage_error(self) -> None:
        with self.assertRaises(StorageError):
            self.collection.write([{"id": object()}])
        self.assertFalse(self.path.exists())


class TestSerializedCreates(unittest.TestCase):
    """Concurrent creates on one file get distinct ids because writers are serialized."""

    def test_concurrent_creates_get_unique_ids(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "items.json"
            errors: list[Exception] = []

            def worker(n: int) -> None:
                store = ItemStore(JsonCollection(path, "items"), placeholder_image="p.webp")
                try:
                    store.create({"name": f"item {n}", "desc": "d"}, owner_id=1)
                except Exception as e:  # surfaced by the assertion below
                    errors.append(e)

            threads = [threading.Thread(target=worker, args=(n,)) for n in range(20)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

            self.assertEqual(errors, [])
            ids = [r["id"] for r in json.loads(path.read_text(encoding="utf-8"))]
            self.assertEqual(sorted(ids), list(range(1, 21)))


if __name__ == "__main__":
    unittest.main()
