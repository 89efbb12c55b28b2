"""Data models supporting the layout engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .constants import Coord, Orientation


def span_cells(start: Coord, orientation: Orientation, length: int) -> List[Coord]:
    dx, dy = orientation.step
    x, y = start
    return [(x + dx * i, y + dy * i) for i in range(length)]


@dataclass(frozen=True)
class WordPlacement:
    """An accepted mapping of a word onto grid coordinates."""

    word: str
    start: Coord
    orientation: Orientation
    sequence_number: int

    @property
    def is_horizontal(self) -> bool:
        return self.orientation is Orientation.HORIZONTAL

    @property
    def cells(self) -> List[Coord]:
        return span_cells(self.start, self.orientation, len(self.word))

    @property
    def end(self) -> Coord:
        return self.cells[-1]

    def line(self) -> int:
        """Row index for horizontal words, column index for vertical ones."""

        return self.start[1] if self.is_horizontal else self.start[0]

    def axis_range(self) -> Tuple[int, int]:
        """Inclusive first/last coordinate along the word's own axis."""

        first = self.start[0] if self.is_horizontal else self.start[1]
        return first, first + len(self.word) - 1

    def to_dict(self) -> dict:
        return {
            "word": self.word,
            "sequence_number": self.sequence_number,
            "start": list(self.start),
            "orientation": self.orientation.value,
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "WordPlacement":
        x, y = payload["start"]
        return cls(
            word=str(payload["word"]),
            start=(int(x), int(y)),
            orientation=Orientation(payload["orientation"]),
            sequence_number=int(payload["sequence_number"]),
        )
