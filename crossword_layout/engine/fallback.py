"""Best-effort layout used once every planner attempt has failed.

Words go in longest first. Each word escalates through progressively looser
rules until it lands somewhere:

1. crossing placement (horizontal, vertical, then a full-grid crossing scan);
2. standalone placement that keeps clear of other words;
3. emergency placement where only conflicting letters block a cell.

A word that fits nowhere, usually because it is longer than both grid
dimensions, is dropped and reported back to the caller.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from ..core.constants import Coord, Orientation, PlacementOutcome
from ..core.models import WordPlacement
from ..utils.logger import get_logger
from .grid import LetterGrid, centered_start
from .intersections import first_candidate
from .validator import can_place, can_place_aggressively, can_place_ignoring_intersection


LOGGER = get_logger(__name__)

Rule = Callable[[str, Coord, Orientation, LetterGrid], bool]


def _seed_start(word: str, columns: int, rows: int) -> Optional[Tuple[Coord, Orientation]]:
    if len(word) <= columns:
        return centered_start(word, Orientation.HORIZONTAL, columns, rows), Orientation.HORIZONTAL
    if len(word) <= rows:
        return centered_start(word, Orientation.VERTICAL, columns, rows), Orientation.VERTICAL
    return None


def _scan(word: str, grid: LetterGrid, orientation: Orientation, rule: Rule) -> Optional[Coord]:
    for start in grid.iter_starts(len(word), orientation):
        if rule(word, start, orientation, grid):
            return start
    return None


def _place_crossing(word: str, grid: LetterGrid, placements: List[WordPlacement]) -> PlacementOutcome:
    for orientation in (Orientation.HORIZONTAL, Orientation.VERTICAL):
        start = first_candidate(word, grid, placements, orientation)
        if start is not None:
            grid.place(word, start, orientation, placements)
            return PlacementOutcome.PLACED
    for orientation in (Orientation.HORIZONTAL, Orientation.VERTICAL):
        for start in grid.iter_starts(len(word), orientation):
            if can_place(word, start, orientation, grid, placements):
                grid.place(word, start, orientation, placements)
                return PlacementOutcome.PLACED
    return PlacementOutcome.NO_CANDIDATE


def _place_with_rules(
    word: str,
    grid: LetterGrid,
    placements: List[WordPlacement],
    passes: Sequence[Tuple[Orientation, Rule]],
) -> PlacementOutcome:
    for orientation, rule in passes:
        start = _scan(word, grid, orientation, rule)
        if start is not None:
            grid.place(word, start, orientation, placements)
            return PlacementOutcome.PLACED
    return PlacementOutcome.NO_CANDIDATE


STANDALONE_PASSES: Tuple[Tuple[Orientation, Rule], ...] = (
    (Orientation.HORIZONTAL, can_place_ignoring_intersection),
    (Orientation.VERTICAL, can_place_ignoring_intersection),
)

EMERGENCY_PASSES: Tuple[Tuple[Orientation, Rule], ...] = (
    (Orientation.HORIZONTAL, can_place_aggressively),
    (Orientation.VERTICAL, can_place_aggressively),
)


def build_fallback_layout(
    words: Sequence[str],
    columns: int,
    rows: int,
) -> Tuple[LetterGrid, List[WordPlacement], List[str]]:
    """Return ``(grid, placements, dropped_words)`` for a guaranteed-progress layout."""

    grid = LetterGrid(columns, rows)
    placements: List[WordPlacement] = []
    dropped: List[str] = []

    ordered = sorted(words, key=len, reverse=True)
    remaining: List[str] = []
    for word in ordered:
        if placements:
            remaining.append(word)
            continue
        seed = _seed_start(word, columns, rows)
        if seed is None:
            LOGGER.error("CRITICAL: '%s' is longer than both grid dimensions; dropping it", word)
            dropped.append(word)
            continue
        start, orientation = seed
        grid.place(word, start, orientation, placements)

    deferred = [word for word in remaining if _place_crossing(word, grid, placements) is not PlacementOutcome.PLACED]
    if deferred:
        LOGGER.info("Fallback: %d word(s) need standalone placement", len(deferred))

    for word in deferred:
        if _place_with_rules(word, grid, placements, STANDALONE_PASSES) is PlacementOutcome.PLACED:
            continue
        if _place_with_rules(word, grid, placements, EMERGENCY_PASSES) is PlacementOutcome.PLACED:
            LOGGER.warning("Fallback: '%s' placed with emergency rules", word)
            continue
        LOGGER.error("CRITICAL: failed to place '%s' even with emergency placement", word)
        dropped.append(word)

    LOGGER.info("Fallback layout placed %d/%d words", len(placements), len(words))
    return grid, placements, dropped
