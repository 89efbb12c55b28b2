"""Custom exception hierarchy for layout generation."""


class LayoutError(Exception):
    """Base exception for layout failures."""


class PlacementError(LayoutError):
    """Raised when a word cannot be written to the grid without breaking rules."""


class LayoutLoadError(LayoutError):
    """Raised when a pre-built or stored layout is inconsistent."""


class ConfigError(LayoutError, ValueError):
    """Raised when generation settings are out of range."""
