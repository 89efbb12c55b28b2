"""Word-connect crossword layout engine.

This package exposes the public API surface via:

- ``crossword_layout.engine.planner.LayoutGenerator``: seeded multi-attempt layout search.
- ``crossword_layout.engine.planner.GenerationConfig``: grid size, seed and attempt budgets.
- ``crossword_layout.engine.layout_store.LayoutStore``: JSON persistence for finished layouts.
"""

from .core.constants import Orientation
from .core.models import WordPlacement
from .engine.planner import GenerationConfig, GenerationResult, LayoutGenerator, generate_layout

__all__ = [
    "GenerationConfig",
    "GenerationResult",
    "LayoutGenerator",
    "Orientation",
    "WordPlacement",
    "generate_layout",
]

__version__ = "0.1.0"
