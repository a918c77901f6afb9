"""Chord diagram and fretboard chart rendering."""

from chordchart.base import (
    ChordChartException,
    ConfigError,
    InvalidFingeringError,
    InvalidPitchError,
)
from chordchart.config import DEFAULT_CONFIG, FretboardConfig, resolve_config
from chordchart.layout import FretboardLayout, layout_fretboard
from chordchart.parser import parse_fingering
from chordchart.svg import render_svg, save_svg
from chordchart.types import (
    CLOSED_STRING,
    OPEN_STRING,
    FingeringEntry,
    FretValue,
    StringRef,
)

__all__ = [
    "CLOSED_STRING",
    "OPEN_STRING",
    "ChordChartException",
    "ConfigError",
    "DEFAULT_CONFIG",
    "FingeringEntry",
    "FretValue",
    "FretboardConfig",
    "FretboardLayout",
    "InvalidFingeringError",
    "InvalidPitchError",
    "StringRef",
    "layout_fretboard",
    "parse_fingering",
    "render_svg",
    "resolve_config",
    "save_svg",
]
