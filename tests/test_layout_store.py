import json
import tempfile
import unittest
from pathlib import Path

from crossword_layout import GenerationConfig, generate_layout
from crossword_layout.core.constants import Orientation
from crossword_layout.core.exceptions import LayoutError, LayoutLoadError
from crossword_layout.engine.grid import LetterGrid
from crossword_layout.engine.layout_store import LayoutStore, SpecialItem, deserialize_grid, serialize_grid


class GridSerializationTests(unittest.TestCase):
    def test_serialize_uses_pipes_and_spaces(self) -> None:
        grid = LetterGrid(3, 2)
        grid.write_word("AB", (0, 0), Orientation.HORIZONTAL)
        self.assertEqual(serialize_grid(grid), "AB |   ")

    def test_deserialize_restores_grid(self) -> None:
        grid = deserialize_grid("AB |  C", 3, 2)
        self.assertEqual(grid.to_rows(), ["AB ", "  C"])

    def test_deserialize_pads_missing_rows(self) -> None:
        grid = deserialize_grid("AB", 3, 3)
        self.assertEqual(grid.to_rows(), ["AB ", "   ", "   "])

    def test_deserialize_rejects_oversized_data(self) -> None:
        with self.assertRaises(LayoutLoadError):
            deserialize_grid("ABCD", 3, 1)
        with self.assertRaises(LayoutLoadError):
            deserialize_grid("A|B|C", 3, 2)


class LayoutStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.store = LayoutStore(Path(self._tmp.name) / "layouts")

    def test_save_and_load(self) -> None:
        result = generate_layout(["CAT", "ART", "TEA"], GenerationConfig(columns=10, rows=10, seed=8))
        items = [SpecialItem(position=result.placements[0].start, item_path="items/coin")]
        doc_id = self.store.save(result, special_items=items)

        self.assertEqual(self.store.list_ids(), [doc_id])
        stored = self.store.load(doc_id)
        self.assertEqual(stored.doc_id, doc_id)
        self.assertEqual(stored.result.grid, result.grid)
        self.assertEqual(stored.result.placements, result.placements)
        self.assertEqual(stored.result.seed, 8)
        self.assertEqual(stored.result.success, result.success)
        self.assertEqual(stored.special_items, items)

    def test_document_layout(self) -> None:
        result = generate_layout(["HELLO"], GenerationConfig(columns=7, rows=3, seed=1))
        doc_id = self.store.save(result)
        doc = json.loads((self.store.store_dir / f"{doc_id}.json").read_text(encoding="utf-8"))
        self.assertEqual(doc["grid"], "       | HELLO |       ")
        self.assertEqual(doc["min_bounds"], [1, 1])
        self.assertEqual(doc["max_bounds"], [5, 1])
        self.assertEqual(doc["status"], "success")
        self.assertEqual(doc["special_items"], [])

    def test_failed_layout_stays_failed(self) -> None:
        result = generate_layout(["ELEPHANT"], GenerationConfig(columns=5, rows=5))
        stored = self.store.load(self.store.save(result))
        self.assertFalse(stored.result.success)
        self.assertEqual(stored.result.dropped_words, ["ELEPHANT"])

    def test_tampered_document_is_rejected(self) -> None:
        result = generate_layout(["HELLO"], GenerationConfig(columns=7, rows=3, seed=1))
        doc_id = self.store.save(result)
        path = self.store.store_dir / f"{doc_id}.json"
        doc = json.loads(path.read_text(encoding="utf-8"))
        doc["grid"] = "       | HELPO |       "
        path.write_text(json.dumps(doc), encoding="utf-8")
        with self.assertRaises(LayoutLoadError):
            self.store.load(doc_id)

    def test_malformed_document_is_rejected(self) -> None:
        (self.store.store_dir / "broken.json").write_text("{not json", encoding="utf-8")
        (self.store.store_dir / "partial.json").write_text(json.dumps({"grid": ""}), encoding="utf-8")
        with self.assertRaises(LayoutLoadError):
            self.store.load("broken")
        with self.assertRaises(LayoutLoadError):
            self.store.load("partial")

    def test_special_item_outside_grid(self) -> None:
        result = generate_layout(["HELLO"], GenerationConfig(columns=7, rows=3, seed=1))
        doc_id = self.store.save(result, special_items=[SpecialItem(position=(9, 9), item_path="items/gem")])
        with self.assertRaises(LayoutLoadError):
            self.store.load(doc_id)

    def test_missing_and_invalid_ids(self) -> None:
        with self.assertRaises(LayoutLoadError):
            self.store.load("does-not-exist")
        with self.assertRaises(LayoutError):
            self.store.load("../escape")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
