"""Exceptions shared across chordchart.

Everything a caller is expected to handle derives from ChordChartException.
Configuration problems are ConfigErrors; bad string or fret references in a
fingering are the narrower InvalidFingeringError.
"""

from __future__ import annotations

from typing import Any


class ChordChartException(Exception):
    """Base class for all errors raised deliberately by chordchart."""


class ConfigError(ChordChartException):
    """Raised when a configuration cannot be resolved into a diagram."""


class InvalidFingeringError(ConfigError):
    """Raised when a fingering references a string or fret that cannot exist.

    Covers string indices outside ``[1, strings]`` and fret values that are
    negative but not the closed-string sentinel.
    """


class InvalidPitchError(ConfigError):
    """Raised when a tuning entry is not a recognizable pitch name."""

    def __init__(self, name: Any) -> None:
        """Initialize with the offending pitch name.

        Args:
            name: The value that failed to parse as a pitch.
        """
        super().__init__(f"Invalid pitch name: {name!r}")
        self.name = name


class MatchException(Exception):
    """Exception raised when pattern matching fails."""

    def __init__(self, value: Any) -> None:
        """Initialize a MatchException with the unmatched value.

        Args:
            value: The value that failed to match any pattern.
        """
        super().__init__(f"Failed to match value: {value}")
