"""Layout generation orchestration.

Each attempt shuffles the words with its own seeded generator, seeds the
first word in the centre and then places every other word on a randomly
chosen legal crossing. Attempts are independent: a failed attempt is thrown
away wholesale. When the attempt budget runs out the fallback builder takes
over, so :meth:`LayoutGenerator.generate` always returns a result.
"""

from __future__ import annotations

import dataclasses
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..core.constants import ATTEMPT_SEED_STRIDE, AttemptState, Coord, Orientation, PlacementOutcome
from ..core.exceptions import ConfigError
from ..core.models import WordPlacement
from ..core.rng import XorShiftRandom, attempt_rng
from ..utils.logger import get_logger
from .auditor import has_problematic_overlap
from .fallback import build_fallback_layout
from .grid import LetterGrid, centered_start, compute_bounds
from .intersections import find_candidates
from .validator import LayoutValidator, can_place


LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class GenerationConfig:
    columns: int = 15
    rows: int = 15
    seed: int = 0
    max_attempts: int = 20
    min_horizontal_ratio: int = 40
    vertical_word_max_length: int = 8
    small_word_max_length: int = 6
    force_unique_layout: bool = True
    max_overlap_retries: int = 5

    def __post_init__(self) -> None:
        if self.columns <= 0 or self.rows <= 0:
            raise ConfigError(f"Grid must be at least 1x1, got {self.columns}x{self.rows}")
        if not 0 <= self.min_horizontal_ratio <= 100:
            raise ConfigError(f"min_horizontal_ratio must be within 0-100, got {self.min_horizontal_ratio}")
        if self.max_attempts < 0 or self.max_overlap_retries < 0:
            raise ConfigError("Attempt budgets must be non-negative")
        if self.vertical_word_max_length < 0 or self.small_word_max_length < 0:
            raise ConfigError("Word length limits must be non-negative")

    def with_seed(self, seed: int) -> "GenerationConfig":
        return dataclasses.replace(self, seed=seed)

    def with_fresh_seed(self, rng: Optional[random.Random] = None) -> "GenerationConfig":
        """Copy with a new random seed, for callers that want a different layout on every call."""

        source = rng or random.SystemRandom()
        return self.with_seed(source.randint(1, 10_000))


@dataclass
class GenerationResult:
    success: bool
    grid: LetterGrid
    placements: List[WordPlacement]
    dropped_words: List[str] = field(default_factory=list)
    used_fallback: bool = False
    seed: Optional[int] = None

    @property
    def bounds(self) -> Tuple[Coord, Coord]:
        return compute_bounds(self.grid)

    @property
    def placed_words(self) -> List[str]:
        return [placement.word for placement in self.placements]

    def to_payload(self) -> dict:
        min_bounds, max_bounds = self.bounds
        return {
            "success": self.success,
            "columns": self.grid.columns,
            "rows": self.grid.rows,
            "seed": self.seed,
            "used_fallback": self.used_fallback,
            "grid": self.grid.to_rows(),
            "placements": [placement.to_dict() for placement in self.placements],
            "dropped_words": list(self.dropped_words),
            "min_bounds": list(min_bounds),
            "max_bounds": list(max_bounds),
        }


@dataclass
class _Attempt:
    """State owned by a single attempt; discarded on failure."""

    index: int
    rng: XorShiftRandom
    grid: LetterGrid
    placements: List[WordPlacement] = field(default_factory=list)
    horizontal_placed: int = 0

    def record(self, placement: WordPlacement) -> None:
        if placement.is_horizontal:
            self.horizontal_placed += 1

    @property
    def horizontal_ratio(self) -> int:
        return self.horizontal_placed * 100 // len(self.placements)


class LayoutGenerator:
    """Places words on a grid so that they cross on shared letters."""

    def __init__(self, config: Optional[GenerationConfig] = None) -> None:
        self.config = config or GenerationConfig()

    # ------------------------------------------------------------------
    # Public entrypoints
    # ------------------------------------------------------------------
    def generate(self, words: Sequence[str]) -> GenerationResult:
        config = self.config
        playable = [word for word in words if word]
        skipped = [word for word in words if not word]
        if skipped:
            LOGGER.warning("Ignoring %d empty word(s)", len(skipped))
        if not playable:
            LOGGER.warning("No words to place")
            return GenerationResult(
                success=False,
                grid=LetterGrid(config.columns, config.rows),
                placements=[],
                dropped_words=list(skipped),
                seed=config.seed,
            )

        overlap_retries = 0
        for attempt_index in range(config.max_attempts):
            LOGGER.debug("Layout attempt %s/%s", attempt_index + 1, config.max_attempts)
            try:
                attempt = self._run_attempt(playable, attempt_index)
            except Exception:
                LOGGER.exception("Error during layout attempt %s", attempt_index + 1)
                continue
            if attempt is None:
                continue

            state = self._score_attempt(attempt, overlap_retries)
            if state is AttemptState.REGENERATING:
                overlap_retries += 1
                LOGGER.info(
                    "Attempt %s has words sharing a start cell; regenerating (%s/%s)",
                    attempt_index + 1,
                    overlap_retries,
                    config.max_overlap_retries,
                )
                continue

            LOGGER.info(
                "Layout placed %d words on attempt %s (horizontal ratio %d%%)",
                len(attempt.placements),
                attempt_index + 1,
                attempt.horizontal_ratio,
            )
            return GenerationResult(
                success=True,
                grid=attempt.grid,
                placements=attempt.placements,
                dropped_words=list(skipped),
                seed=config.seed,
            )

        state = AttemptState.ATTEMPTS_EXHAUSTED
        LOGGER.warning("%s after %s attempts; building fallback layout", state.value, config.max_attempts)
        grid, placements, dropped = build_fallback_layout(playable, config.columns, config.rows)
        return GenerationResult(
            success=bool(placements),
            grid=grid,
            placements=placements,
            dropped_words=list(skipped) + dropped,
            used_fallback=True,
            seed=config.seed,
        )

    def accept_layout(
        self,
        grid: LetterGrid,
        placements: Sequence[WordPlacement],
        dropped_words: Sequence[str] = (),
    ) -> GenerationResult:
        """Wrap a previously generated layout without running the search.

        Raises :class:`LayoutLoadError` when the placements do not match the
        grid letters or leave the grid.
        """

        ordered = sorted(placements, key=lambda placement: placement.sequence_number)
        LayoutValidator(strict=False).ensure_valid(grid, ordered)
        return GenerationResult(
            success=bool(ordered),
            grid=grid,
            placements=list(ordered),
            dropped_words=list(dropped_words),
            seed=None,
        )

    # ------------------------------------------------------------------
    # Attempt state machine
    # ------------------------------------------------------------------
    def _score_attempt(self, attempt: _Attempt, overlap_retries: int) -> AttemptState:
        if not has_problematic_overlap(attempt.placements):
            return AttemptState.SUCCEEDED
        budget_left = overlap_retries < self.config.max_overlap_retries
        not_last = attempt.index < self.config.max_attempts - 1
        if budget_left and not_last:
            return AttemptState.REGENERATING
        return AttemptState.SUCCEEDED

    def _run_attempt(self, words: Sequence[str], attempt_index: int) -> Optional[_Attempt]:
        config = self.config
        attempt = _Attempt(
            index=attempt_index,
            rng=attempt_rng(config.seed, attempt_index, ATTEMPT_SEED_STRIDE),
            grid=LetterGrid(config.columns, config.rows),
        )
        order = list(words)
        attempt.rng.shuffle(order)

        if self._seed_first_word(attempt, order[0]) is not PlacementOutcome.PLACED:
            LOGGER.debug("First word '%s' fits neither axis; abandoning attempt", order[0])
            return None

        for word in order[1:]:
            outcome = self._place_next_word(attempt, word)
            if outcome is not PlacementOutcome.PLACED:
                LOGGER.debug("Attempt %s could not place '%s'", attempt_index + 1, word)
                return None
        return attempt

    def _seed_first_word(self, attempt: _Attempt, word: str) -> PlacementOutcome:
        columns, rows = self.config.columns, self.config.rows
        fits_horizontal = len(word) <= columns
        fits_vertical = len(word) <= rows
        if not fits_horizontal and not fits_vertical:
            return PlacementOutcome.INVALID
        if not fits_horizontal:
            orientation = Orientation.VERTICAL
        elif not fits_vertical:
            orientation = Orientation.HORIZONTAL
        else:
            orientation = Orientation.HORIZONTAL if attempt.rng.randrange(2) == 0 else Orientation.VERTICAL

        start = centered_start(word, orientation, columns, rows)
        attempt.record(attempt.grid.place(word, start, orientation, attempt.placements))
        return PlacementOutcome.PLACED

    def _place_next_word(self, attempt: _Attempt, word: str) -> PlacementOutcome:
        force_horizontal = (
            attempt.horizontal_ratio < self.config.min_horizontal_ratio
            or len(word) > self.config.vertical_word_max_length
        )
        candidates = find_candidates(word, attempt.grid, attempt.placements, force_horizontal)
        if candidates:
            start, orientation = attempt.rng.choice(candidates)
        else:
            preferred = Orientation.HORIZONTAL if attempt.rng.randrange(2) == 0 else Orientation.VERTICAL
            forced = forced_start(word, attempt.grid, attempt.placements, preferred)
            if forced is None:
                return PlacementOutcome.NO_CANDIDATE
            start, orientation = forced
        attempt.record(attempt.grid.place(word, start, orientation, attempt.placements))
        return PlacementOutcome.PLACED


def forced_start(
    word: str,
    grid: LetterGrid,
    placements: Sequence[WordPlacement],
    preferred: Orientation,
) -> Optional[Tuple[Coord, Orientation]]:
    """Scan the whole grid for any legal crossing, preferred orientation first."""

    for orientation in (preferred, preferred.other):
        for start in grid.iter_starts(len(word), orientation):
            if can_place(word, start, orientation, grid, placements):
                return start, orientation
    return None


def generate_layout(words: Sequence[str], config: Optional[GenerationConfig] = None) -> GenerationResult:
    return LayoutGenerator(config).generate(words)
