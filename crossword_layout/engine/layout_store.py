"""Persistent layout document store.

Every saved layout is a JSON document under ``local_db/collections/layouts/``.
The grid travels as ``|``-separated rows with a space for empty cells, which
is the format level editors read back. Loading a document revalidates it
before handing it to callers.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..core.constants import Coord
from ..core.exceptions import LayoutError, LayoutLoadError
from ..core.models import WordPlacement
from ..utils.logger import get_logger
from .grid import LetterGrid
from .planner import GenerationResult, LayoutGenerator


LOGGER = get_logger(__name__)

DEFAULT_STORE_DIR = Path("local_db/collections/layouts")

ROW_SEPARATOR = "|"


def serialize_grid(grid: LetterGrid) -> str:
    return ROW_SEPARATOR.join(grid.to_rows())


def deserialize_grid(text: str, columns: int, rows: int) -> LetterGrid:
    """Rebuild a grid from its ``|`` form; missing rows and short rows stay empty."""

    lines = text.split(ROW_SEPARATOR) if text else []
    if len(lines) > rows:
        raise LayoutLoadError(f"Grid data has {len(lines)} rows, expected at most {rows}")
    for index, line in enumerate(lines):
        if len(line) > columns:
            raise LayoutLoadError(f"Grid row {index} has {len(line)} cells, expected at most {columns}")
    lines += [""] * (rows - len(lines))
    try:
        return LetterGrid.from_rows(lines, columns=columns)
    except ValueError as exc:
        raise LayoutLoadError(f"Invalid grid dimensions: {exc}") from exc


@dataclass
class SpecialItem:
    """A non-letter marker attached to a grid cell (bonus coin, hint icon, ...)."""

    position: Coord
    item_path: str

    def to_dict(self) -> dict:
        return {"position": list(self.position), "item_path": self.item_path}

    @classmethod
    def from_dict(cls, payload: dict) -> "SpecialItem":
        x, y = payload["position"]
        return cls(position=(int(x), int(y)), item_path=str(payload["item_path"]))


@dataclass
class StoredLayout:
    doc_id: str
    result: GenerationResult
    special_items: List[SpecialItem] = field(default_factory=list)
    created_at: Optional[str] = None


class LayoutStore:
    """Save generated layouts as JSON documents and load them back."""

    def __init__(self, store_dir: Path | str = DEFAULT_STORE_DIR) -> None:
        self.store_dir = Path(store_dir)
        self.store_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def save(
        self,
        result: GenerationResult,
        special_items: Optional[Sequence[SpecialItem]] = None,
    ) -> str:
        """Persist ``result`` and return its document ID."""
        doc_id = self._new_id()
        min_bounds, max_bounds = result.bounds

        doc: Dict[str, Any] = {
            "id": doc_id,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "status": "success" if result.success else "failed",
            "seed": result.seed,
            "used_fallback": result.used_fallback,
            "columns": result.grid.columns,
            "rows": result.grid.rows,
            "grid": serialize_grid(result.grid),
            "placements": [placement.to_dict() for placement in result.placements],
            "dropped_words": list(result.dropped_words),
            "special_items": [item.to_dict() for item in special_items or ()],
            "min_bounds": list(min_bounds),
            "max_bounds": list(max_bounds),
        }

        self._path(doc_id).write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")
        LOGGER.info("Layout saved: %s", doc_id)
        return doc_id

    def load(self, doc_id: str) -> StoredLayout:
        """Read a document back; raises :class:`LayoutLoadError` if it is missing or inconsistent."""
        path = self._path(doc_id)
        if not path.exists():
            raise LayoutLoadError(f"No stored layout with id {doc_id!r}")
        try:
            doc = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise LayoutLoadError(f"Layout {doc_id!r} is not valid JSON: {exc}") from exc

        try:
            grid = deserialize_grid(doc.get("grid", ""), int(doc["columns"]), int(doc["rows"]))
            placements = [WordPlacement.from_dict(item) for item in doc.get("placements", [])]
            special_items = [SpecialItem.from_dict(item) for item in doc.get("special_items", [])]
        except (KeyError, TypeError, ValueError) as exc:
            raise LayoutLoadError(f"Layout {doc_id!r} is malformed: {exc}") from exc

        for item in special_items:
            if not grid.bounds.contains(*item.position):
                raise LayoutLoadError(f"Special item {item.item_path!r} lies outside the grid at {item.position}")

        result = LayoutGenerator().accept_layout(grid, placements, doc.get("dropped_words", []))
        result.seed = doc.get("seed")
        result.used_fallback = bool(doc.get("used_fallback", False))
        result.success = result.success and doc.get("status", "success") == "success"
        LOGGER.info("Layout loaded: %s (%d words)", doc_id, len(result.placements))
        return StoredLayout(
            doc_id=doc_id,
            result=result,
            special_items=special_items,
            created_at=doc.get("created_at"),
        )

    def list_ids(self) -> List[str]:
        return sorted(path.stem for path in self.store_dir.glob("*.json"))

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _path(self, doc_id: str) -> Path:
        if not doc_id or "/" in doc_id or "\\" in doc_id:
            raise LayoutError(f"Invalid layout id {doc_id!r}")
        return self.store_dir / f"{doc_id}.json"

    @staticmethod
    def _new_id() -> str:
        ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S")
        short_uuid = uuid.uuid4().hex[:8]
        return f"{ts}_{short_uuid}"
