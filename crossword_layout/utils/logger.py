"""Logging utilities tailored for layout generation."""

from __future__ import annotations

import logging
from typing import Optional


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging with a sensible formatter.

    Generation runs many throwaway attempts, so most of the engine logs at
    DEBUG; attempt exhaustion and dropped words surface at WARNING/ERROR.
    Callers may configure logging themselves before invoking
    :class:`LayoutGenerator`.
    """

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "crossword_layout")
