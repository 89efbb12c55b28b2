"""Single-pass greedy layout.

No retries and no randomness: the longest word is centred horizontally,
longer words are then crossed in horizontally, and short words may go
vertical while enough horizontal words are on the grid to keep the layout
wide. Words that find no crossing are skipped.
"""

from __future__ import annotations

from typing import List, Sequence

from ..core.constants import VERTICAL_SURPLUS_BY_LENGTH, Orientation
from ..core.models import WordPlacement
from ..utils.logger import get_logger
from .grid import LetterGrid, centered_start
from .intersections import aligned_start, alignments
from .planner import GenerationResult
from .validator import can_place


LOGGER = get_logger(__name__)


def can_add_vertical(horizontal_words: int, vertical_words: int, length: int) -> bool:
    for min_length, surplus in VERTICAL_SURPLUS_BY_LENGTH:
        if length >= min_length:
            return horizontal_words >= vertical_words + surplus
    return False


def _try_place(
    word: str,
    grid: LetterGrid,
    placements: List[WordPlacement],
    horizontal_only: bool,
) -> bool:
    horizontal = sum(1 for placement in placements if placement.is_horizontal)
    vertical = len(placements) - horizontal
    allow_vertical = not horizontal_only and can_add_vertical(horizontal, vertical, len(word))

    for cell, index in alignments(word, list(placements)):
        start = aligned_start(cell, index, Orientation.HORIZONTAL)
        if can_place(word, start, Orientation.HORIZONTAL, grid, placements):
            grid.place(word, start, Orientation.HORIZONTAL, placements)
            return True
        if allow_vertical:
            start = aligned_start(cell, index, Orientation.VERTICAL)
            if can_place(word, start, Orientation.VERTICAL, grid, placements):
                grid.place(word, start, Orientation.VERTICAL, placements)
                return True

    if horizontal_only:
        return False
    for start in grid.iter_starts(len(word), Orientation.HORIZONTAL):
        if can_place(word, start, Orientation.HORIZONTAL, grid, placements):
            grid.place(word, start, Orientation.HORIZONTAL, placements)
            return True
    return False


def build_greedy_layout(
    words: Sequence[str],
    columns: int,
    rows: int,
    small_word_max_length: int = 6,
) -> GenerationResult:
    grid = LetterGrid(columns, rows)
    placements: List[WordPlacement] = []
    dropped: List[str] = []

    ordered = sorted((word for word in words if word), key=len, reverse=True)
    while ordered and not placements:
        first = ordered.pop(0)
        if len(first) > columns:
            LOGGER.warning("Greedy layout: '%s' does not fit horizontally; skipping", first)
            dropped.append(first)
            continue
        grid.place(first, centered_start(first, Orientation.HORIZONTAL, columns, rows), Orientation.HORIZONTAL, placements)

    long_words = [word for word in ordered if len(word) > small_word_max_length]
    short_words = [word for word in ordered if len(word) <= small_word_max_length]
    for group, horizontal_only in ((long_words, True), (short_words, False)):
        for word in group:
            if not _try_place(word, grid, placements, horizontal_only):
                LOGGER.debug("Greedy layout: no crossing for '%s'", word)
                dropped.append(word)

    LOGGER.info("Greedy layout placed %d/%d words", len(placements), len(placements) + len(dropped))
    return GenerationResult(
        success=bool(placements),
        grid=grid,
        placements=placements,
        dropped_words=dropped,
    )
