"""Placement legality rules and whole-layout validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..core.constants import Coord, Orientation
from ..core.exceptions import LayoutLoadError
from ..core.models import WordPlacement, span_cells
from ..utils.logger import get_logger
from .auditor import find_overlap_violations, would_create_problematic_overlap
from .grid import LetterGrid


LOGGER = get_logger(__name__)


def fits(word: str, start: Coord, orientation: Orientation, grid: LetterGrid) -> bool:
    x, y = start
    if not grid.bounds.contains(x, y):
        return False
    end_x, end_y = span_cells(start, orientation, len(word))[-1]
    return grid.bounds.contains(end_x, end_y)


def _perpendicular_clear(grid: LetterGrid, x: int, y: int, orientation: Orientation) -> bool:
    if orientation is Orientation.HORIZONTAL:
        return grid.is_empty_at(x, y - 1) and grid.is_empty_at(x, y + 1)
    return grid.is_empty_at(x - 1, y) and grid.is_empty_at(x + 1, y)


def _ends_clear(grid: LetterGrid, word: str, start: Coord, orientation: Orientation) -> bool:
    dx, dy = orientation.step
    x, y = start
    before = (x - dx, y - dy)
    after = (x + dx * len(word), y + dy * len(word))
    return grid.is_empty_at(*before) and grid.is_empty_at(*after)


def can_place(
    word: str,
    start: Coord,
    orientation: Orientation,
    grid: LetterGrid,
    existing_placements: Optional[Sequence[WordPlacement]] = None,
) -> bool:
    """Decide whether ``word`` may be placed at ``start`` under the crossing rules.

    A non-empty cell must hold the same letter and counts as an intersection;
    an empty cell must have empty neighbours across the word's axis. The
    cells just before and after the word must be empty. Words that would
    reuse more than half of their letters are refused, and a placement with
    no intersection is only legal on a blank grid. The parallel-overlap rule
    only runs when ``existing_placements`` is given.
    """

    if not word or not fits(word, start, orientation, grid):
        return False

    if existing_placements is not None and would_create_problematic_overlap(
        word, start, orientation, existing_placements
    ):
        return False

    intersections = 0
    for index, (x, y) in enumerate(span_cells(start, orientation, len(word))):
        existing = grid.get(x, y)
        if not grid.is_empty_at(x, y):
            if existing != word[index]:
                return False
            intersections += 1
        elif not _perpendicular_clear(grid, x, y, orientation):
            return False

    if not _ends_clear(grid, word, start, orientation):
        return False

    if intersections > len(word) // 2:
        return False

    return intersections > 0 or grid.is_blank()


def can_place_ignoring_intersection(
    word: str,
    start: Coord,
    orientation: Orientation,
    grid: LetterGrid,
) -> bool:
    """Standalone placement: no intersection needed, no letters may touch the word's sides."""

    if not word or not fits(word, start, orientation, grid):
        return False
    for index, (x, y) in enumerate(span_cells(start, orientation, len(word))):
        if not grid.is_empty_at(x, y) and grid.get(x, y) != word[index]:
            return False
        if not _perpendicular_clear(grid, x, y, orientation):
            return False
    return _ends_clear(grid, word, start, orientation)


def can_place_aggressively(
    word: str,
    start: Coord,
    orientation: Orientation,
    grid: LetterGrid,
) -> bool:
    """Emergency rule: only direct letter clashes block the placement."""

    if not word or not fits(word, start, orientation, grid):
        return False
    for index, (x, y) in enumerate(span_cells(start, orientation, len(word))):
        if not grid.is_empty_at(x, y) and grid.get(x, y) != word[index]:
            return False
    return True


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]
    warnings: List[str] = field(default_factory=list)


class LayoutValidator:
    """Runs deterministic consistency checks over a finished ``(grid, placements)`` pair.

    Letter fidelity, bounds and sequence numbering are always errors. Words
    running into each other and parallel overlaps are errors only when
    ``strict``; emergency fallback layouts legitimately contain them, so the
    lenient mode reports them as warnings.
    """

    def __init__(self, strict: bool = True) -> None:
        self.strict = strict

    def validate(self, grid: LetterGrid, placements: Sequence[WordPlacement]) -> ValidationResult:
        messages: List[str] = []
        soft: List[str] = []
        messages.extend(self._check_sequence_numbers(placements))
        for placement in placements:
            messages.extend(self._check_placement(grid, placement))
            if placement.word and fits(placement.word, placement.start, placement.orientation, grid) and not _ends_clear(
                grid, placement.word, placement.start, placement.orientation
            ):
                soft.append(f"Word '{placement.word}' at {placement.start} runs into another word")
        for a, b in find_overlap_violations(placements):
            soft.append(f"Overlapping placements '{a.word}' at {a.start} and '{b.word}' at {b.start}")

        warnings: List[str] = []
        if self.strict:
            messages.extend(soft)
        else:
            warnings = soft
            for warning in warnings:
                LOGGER.warning("Layout check: %s", warning)
        if messages:
            LOGGER.error("Layout validation failed: %s", "; ".join(messages))
        return ValidationResult(ok=not messages, messages=messages, warnings=warnings)

    def ensure_valid(self, grid: LetterGrid, placements: Sequence[WordPlacement]) -> None:
        result = self.validate(grid, placements)
        if not result.ok:
            raise LayoutLoadError("; ".join(result.messages))

    @staticmethod
    def _check_sequence_numbers(placements: Sequence[WordPlacement]) -> List[str]:
        numbers = [placement.sequence_number for placement in placements]
        if len(set(numbers)) != len(numbers):
            return [f"Duplicate sequence numbers in {numbers}"]
        return []

    @staticmethod
    def _check_placement(grid: LetterGrid, placement: WordPlacement) -> List[str]:
        if not placement.word:
            return [f"Empty word in placement #{placement.sequence_number}"]
        if not fits(placement.word, placement.start, placement.orientation, grid):
            return [f"Word '{placement.word}' at {placement.start} leaves the grid"]
        issues: List[str] = []
        for index, (x, y) in enumerate(placement.cells):
            letter = grid.get(x, y)
            if letter != placement.word[index]:
                issues.append(
                    f"Cell {(x, y)} holds {letter!r}, expected {placement.word[index]!r} from '{placement.word}'"
                )
        return issues
