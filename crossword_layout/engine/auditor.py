"""Post-hoc overlap checks over a list of placements."""

from __future__ import annotations

from collections import Counter
from itertools import combinations
from typing import Iterable, List, Sequence, Tuple

from ..core.constants import Coord, Orientation
from ..core.models import WordPlacement


def _span_overlap(first: Tuple[int, int], second: Tuple[int, int]) -> int:
    start = max(first[0], second[0])
    end = min(first[1], second[1])
    return max(0, end - start + 1)


def overlap_span(a: WordPlacement, b: WordPlacement) -> int:
    """Number of cells shared by two same-orientation words on the same line."""

    if a.orientation is not b.orientation or a.line() != b.line():
        return 0
    return _span_overlap(a.axis_range(), b.axis_range())


def would_create_problematic_overlap(
    word: str,
    start: Coord,
    orientation: Orientation,
    existing_placements: Iterable[WordPlacement],
) -> bool:
    """True when ``word`` would share more than one cell with a parallel word on its line."""

    candidate = WordPlacement(word=word, start=start, orientation=orientation, sequence_number=0)
    return any(overlap_span(candidate, existing) > 1 for existing in existing_placements)


def has_problematic_overlap(placements: Sequence[WordPlacement]) -> bool:
    """Cheap whole-layout health check: do two placements start on the same cell?"""

    starts = Counter(placement.start for placement in placements)
    return any(count > 1 for count in starts.values())


def find_overlap_violations(
    placements: Sequence[WordPlacement],
) -> List[Tuple[WordPlacement, WordPlacement]]:
    """Pairs that share a start cell or overlap by more than one parallel cell."""

    violations: List[Tuple[WordPlacement, WordPlacement]] = []
    for a, b in combinations(placements, 2):
        if a.start == b.start or overlap_span(a, b) > 1:
            violations.append((a, b))
    return violations
