"""Pretty-print helpers for letter grids."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from ..core.constants import EMPTY

if TYPE_CHECKING:
    from ..engine.grid import LetterGrid
    from ..engine.planner import GenerationResult


EMPTY_SYMBOL = "."


def cell_symbol(letter: str) -> str:
    return EMPTY_SYMBOL if letter == EMPTY else letter


def format_grid(grid: LetterGrid) -> str:
    width = grid.columns
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for y in range(grid.rows):
        row_cells = [cell_symbol(grid.get(x, y)) for x in range(width)]
        row_render = " ".join(f"{symbol:>2}" for symbol in row_cells)
        lines.append(f"{y:>2} | {row_render}")
    return "\n".join(lines)


def print_layout_summary(result: GenerationResult, *, stream=None) -> None:
    """Print grid, placements and dropped words for a finished layout."""

    stream = stream or sys.stdout
    print(format_grid(result.grid), file=stream)
    print(file=stream)
    status = "fallback" if result.used_fallback else ("ok" if result.success else "failed")
    print(f"Status: {status}  seed={result.seed}", file=stream)
    for placement in result.placements:
        x, y = placement.start
        print(
            f"  #{placement.sequence_number:<3} {placement.word:<15} ({x:>2},{y:>2}) {placement.orientation.value}",
            file=stream,
        )
    if result.dropped_words:
        print(f"Dropped: {', '.join(result.dropped_words)}", file=stream)
    (min_x, min_y), (max_x, max_y) = result.bounds
    print(f"Bounds: ({min_x},{min_y}) .. ({max_x},{max_y})", file=stream)
