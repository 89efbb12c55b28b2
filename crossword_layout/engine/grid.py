"""Grid representation and helper utilities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from ..core.constants import EMPTY, Coord, Orientation
from ..core.exceptions import PlacementError
from ..core.models import WordPlacement, span_cells
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    columns: int
    rows: int

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.columns and 0 <= y < self.rows

    @property
    def center(self) -> Coord:
        return (self.columns // 2, self.rows // 2)


class LetterGrid:
    """Fixed-size character buffer indexed by ``(column, row)``."""

    def __init__(self, columns: int, rows: int) -> None:
        if columns <= 0 or rows <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {columns}x{rows}")
        self.bounds = Bounds(columns=columns, rows=rows)
        self._cells: List[List[str]] = [[EMPTY] * rows for _ in range(columns)]
        self._filled_count = 0

    @property
    def columns(self) -> int:
        return self.bounds.columns

    @property
    def rows(self) -> int:
        return self.bounds.rows

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    def get(self, x: int, y: int) -> str:
        return self._cells[x][y]

    def is_empty_at(self, x: int, y: int) -> bool:
        """True for empty cells and for coordinates outside the grid."""

        if not self.bounds.contains(x, y):
            return True
        return self._cells[x][y] == EMPTY

    def set(self, x: int, y: int, letter: str) -> None:
        if not self.bounds.contains(x, y):
            raise PlacementError(f"Cell outside grid: {(x, y)}")
        previous = self._cells[x][y]
        if previous == EMPTY and letter != EMPTY:
            self._filled_count += 1
        elif previous != EMPTY and letter == EMPTY:
            self._filled_count -= 1
        self._cells[x][y] = letter

    @property
    def filled_count(self) -> int:
        return self._filled_count

    def is_blank(self) -> bool:
        return self._filled_count == 0

    # ------------------------------------------------------------------
    # Word placement
    # ------------------------------------------------------------------
    def write_word(self, word: str, start: Coord, orientation: Orientation) -> None:
        """Write ``word`` onto the grid, refusing out-of-bounds cells and letter clashes."""

        cells = span_cells(start, orientation, len(word))
        for index, (x, y) in enumerate(cells):
            if not self.bounds.contains(x, y):
                raise PlacementError(f"Word '{word}' extends outside grid at {(x, y)}")
            existing = self._cells[x][y]
            if existing != EMPTY and existing != word[index]:
                raise PlacementError(
                    f"Letter conflict for '{word}' at {(x, y)}: {existing!r} vs {word[index]!r}"
                )
        for index, (x, y) in enumerate(cells):
            self.set(x, y, word[index])

    def place(
        self,
        word: str,
        start: Coord,
        orientation: Orientation,
        placements: List[WordPlacement],
    ) -> WordPlacement:
        """Write ``word`` and append its placement with the next sequence number."""

        self.write_word(word, start, orientation)
        placement = WordPlacement(
            word=word,
            start=start,
            orientation=orientation,
            sequence_number=len(placements) + 1,
        )
        placements.append(placement)
        LOGGER.debug(
            "Placed #%d '%s' at %s %s",
            placement.sequence_number,
            word,
            start,
            orientation.value,
        )
        return placement

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def iter_filled(self) -> Iterator[Tuple[int, int, str]]:
        for y in range(self.rows):
            for x in range(self.columns):
                letter = self._cells[x][y]
                if letter != EMPTY:
                    yield x, y, letter

    def iter_starts(self, length: int, orientation: Orientation) -> Iterator[Coord]:
        """Every start where a word of ``length`` fits, row-major for horizontal, column-major for vertical."""

        if orientation is Orientation.HORIZONTAL:
            for y in range(self.rows):
                for x in range(self.columns - length + 1):
                    yield (x, y)
        else:
            for x in range(self.columns):
                for y in range(self.rows - length + 1):
                    yield (x, y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LetterGrid):
            return NotImplemented
        return self.bounds == other.bounds and self._cells == other._cells

    def __repr__(self) -> str:
        return f"LetterGrid({self.columns}x{self.rows}, filled={self._filled_count})"

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def to_rows(self, blank: str = " ") -> List[str]:
        return [
            "".join(blank if self._cells[x][y] == EMPTY else self._cells[x][y] for x in range(self.columns))
            for y in range(self.rows)
        ]

    @classmethod
    def from_rows(cls, rows: Sequence[str], columns: Optional[int] = None, blank: str = " ") -> "LetterGrid":
        """Build a grid from row strings; short rows are padded with empty cells."""

        width = columns if columns is not None else max((len(row) for row in rows), default=0)
        grid = cls(width, len(rows))
        for y, row in enumerate(rows):
            for x, char in enumerate(row[:width]):
                if char != blank:
                    grid.set(x, y, char)
        return grid


def compute_bounds(grid: LetterGrid) -> Tuple[Coord, Coord]:
    """Return the tight ``(min, max)`` box of letters, or the centre twice when empty."""

    min_x, min_y = grid.columns, grid.rows
    max_x, max_y = 0, 0
    found = False
    for x, y, _ in grid.iter_filled():
        min_x = min(min_x, x)
        min_y = min(min_y, y)
        max_x = max(max_x, x)
        max_y = max(max_y, y)
        found = True
    if not found:
        center = grid.bounds.center
        return center, center
    return (min_x, min_y), (max_x, max_y)


def centered_start(word: str, orientation: Orientation, columns: int, rows: int) -> Coord:
    """Start that centres ``word`` on the grid, clamped to keep it inside."""

    if orientation is Orientation.HORIZONTAL:
        x = _clamp(columns // 2 - len(word) // 2, 0, columns - len(word))
        y = _clamp(rows // 2, 0, rows - 1)
    else:
        x = _clamp(columns // 2, 0, columns - 1)
        y = _clamp(rows // 2 - len(word) // 2, 0, rows - len(word))
    return (x, y)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))
