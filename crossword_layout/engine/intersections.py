"""Enumerate crossing placements for a word against the words already on the grid."""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

from ..core.constants import Coord, Orientation
from ..core.models import WordPlacement
from .grid import LetterGrid
from .validator import can_place

Candidate = Tuple[Coord, Orientation]


def alignments(word: str, placements: Sequence[WordPlacement]) -> Iterator[Tuple[Coord, int]]:
    """Yield ``(shared_cell, index_in_word)`` for every letter ``word`` shares with a placement."""

    for placed in placements:
        for cell, letter in zip(placed.cells, placed.word):
            index = word.find(letter)
            while index >= 0:
                yield cell, index
                index = word.find(letter, index + 1)


def aligned_start(cell: Coord, index: int, orientation: Orientation) -> Coord:
    dx, dy = orientation.step
    return (cell[0] - dx * index, cell[1] - dy * index)


def find_candidates(
    word: str,
    grid: LetterGrid,
    existing_placements: Sequence[WordPlacement],
    force_horizontal_only: bool = False,
) -> List[Candidate]:
    """All legal crossing placements of ``word``, in discovery order.

    Duplicates are kept: a start reachable through several shared letters is
    proportionally more likely to be picked by the planner.
    """

    candidates: List[Candidate] = []
    for cell, index in alignments(word, existing_placements):
        orientations = (Orientation.HORIZONTAL,) if force_horizontal_only else (
            Orientation.HORIZONTAL,
            Orientation.VERTICAL,
        )
        for orientation in orientations:
            start = aligned_start(cell, index, orientation)
            if can_place(word, start, orientation, grid, existing_placements):
                candidates.append((start, orientation))
    return candidates


def first_candidate(
    word: str,
    grid: LetterGrid,
    existing_placements: Sequence[WordPlacement],
    orientation: Orientation,
) -> Optional[Coord]:
    """First legal crossing start for a single orientation, or ``None``."""

    for cell, index in alignments(word, existing_placements):
        start = aligned_start(cell, index, orientation)
        if can_place(word, start, orientation, grid, existing_placements):
            return start
    return None
