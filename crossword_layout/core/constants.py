"""Shared constants and enumerations for the layout engine."""

from __future__ import annotations

from enum import Enum
from typing import Tuple


EMPTY = "\0"

Coord = Tuple[int, int]


class Orientation(str, Enum):
    """Word orientations supported by the grid."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"

    @property
    def step(self) -> Coord:
        return (1, 0) if self is Orientation.HORIZONTAL else (0, 1)

    @property
    def other(self) -> "Orientation":
        return Orientation.VERTICAL if self is Orientation.HORIZONTAL else Orientation.HORIZONTAL


class PlacementOutcome(str, Enum):
    """Result tag for single-word placement helpers."""

    PLACED = "PLACED"
    NO_CANDIDATE = "NO_CANDIDATE"
    INVALID = "INVALID"


class AttemptState(str, Enum):
    """States of one planner attempt."""

    SUCCEEDED = "SUCCEEDED"
    REGENERATING = "REGENERATING"
    ATTEMPTS_EXHAUSTED = "ATTEMPTS_EXHAUSTED"


ATTEMPT_SEED_STRIDE = 1000

# Horizontal-over-vertical surplus required before the greedy layout adds a
# vertical word, keyed by minimum word length.
VERTICAL_SURPLUS_BY_LENGTH: Tuple[Tuple[int, int], ...] = ((7, 3), (5, 2), (0, 1))
