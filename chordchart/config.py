"""Configuration for chord diagrams.

FretboardConfig holds everything one diagram needs, with documented
defaults. resolve_config merges a loosely-typed user mapping (for example a
parsed YAML or JSON document) over those defaults.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional, Sequence

from chordchart.base import ConfigError, InvalidFingeringError
from chordchart.instruments import Instrument, tuning_for
from chordchart.types import Fingering, FingeringEntry

DEFAULT_STRINGS = 6
"""Default number of strings."""

DEFAULT_FRETS = 5
"""Default number of fret rows shown."""


@dataclass(frozen=True)
class FretboardConfig:
    """Resolved configuration for one chord diagram."""

    strings: int = DEFAULT_STRINGS
    """Number of strings drawn."""
    frets: int = DEFAULT_FRETS
    """Number of fret rows in the visible window."""
    fingering: Fingering = ()
    """Ordered fingering entries."""
    tuning: Optional[tuple[str, ...]] = None
    """Open-string pitch names from string N (lowest) down to string 1."""
    show_fret_labels: bool = False
    """Label every visible fret row with its fret number."""
    show_notes: bool = False
    """Print the sounding note name under each played string."""
    starting_fret: Optional[int] = None
    """Explicit starting fret; only consulted for the nut label."""

    def with_instrument(self, instrument: Instrument) -> FretboardConfig:
        """Use an instrument preset's tuning and string count.

        Args:
            instrument: The preset to apply.

        Returns:
            A copy of this config with tuning and strings replaced.
        """
        tuning = tuning_for(instrument)
        return replace(self, strings=len(tuning), tuning=tuning)


DEFAULT_CONFIG = FretboardConfig()
"""The all-defaults configuration."""

# Accepted spellings for each field
_KEY_ALIASES: Dict[str, str] = {
    "showFretLabels": "show_fret_labels",
    "showNotes": "show_notes",
    "startingFret": "starting_fret",
}

_FIELD_NAMES = frozenset(f.name for f in fields(FretboardConfig))


def _as_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"Expected an integer for {key}: {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ConfigError(f"Expected an integer for {key}: {value!r}")
    if isinstance(value, float) and number != value:
        raise ConfigError(f"Expected an integer for {key}: {value!r}")
    return number


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    raise ConfigError(f"Expected a boolean for {key}: {value!r}")


def parse_tuning(value: Any) -> tuple[str, ...]:
    """Normalize a tuning to a tuple of pitch names.

    Args:
        value: A sequence of names, or one string separated by commas or
            whitespace ("E,A,D,G,B,E" or "E A D G B E").

    Returns:
        The tuning as a tuple, lowest string first.

    Raises:
        ConfigError: If the value is not a sequence of strings.
    """
    if isinstance(value, str):
        names = [n for n in re.split(r"[\s,]+", value) if n]
    elif isinstance(value, Sequence):
        names = list(value)
    else:
        raise ConfigError(f"Invalid tuning: {value!r}")
    if not all(isinstance(n, str) for n in names):
        raise ConfigError(f"Invalid tuning: {value!r}")
    return tuple(names)


def _entry_from_mapping(raw: Any) -> FingeringEntry:
    if isinstance(raw, FingeringEntry):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidFingeringError(f"Invalid fingering entry: {raw!r}")
    if "string" not in raw or "fret" not in raw:
        raise InvalidFingeringError(f"Fingering entry needs string and fret: {raw!r}")
    extra = set(raw) - {"string", "fret", "finger"}
    if extra:
        raise InvalidFingeringError(
            f"Unknown fingering keys {sorted(extra)} in {raw!r}"
        )
    return FingeringEntry.mk(raw["string"], raw["fret"], raw.get("finger", ""))


def parse_fingering_list(value: Any) -> Fingering:
    """Convert a list of fingering mappings into entries.

    Args:
        value: A sequence whose items are FingeringEntry values or mappings
            with "string", "fret" and optional "finger" keys.

    Returns:
        The fingering as a tuple of entries.

    Raises:
        InvalidFingeringError: If any item is malformed.
    """
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise InvalidFingeringError(f"Fingering must be a list: {value!r}")
    return tuple(_entry_from_mapping(raw) for raw in value)


def resolve_config(
    user: Optional[Mapping[str, Any]] = None,
    defaults: FretboardConfig = DEFAULT_CONFIG,
) -> FretboardConfig:
    """Merge a user configuration mapping over defaults.

    Keys may use the field names of FretboardConfig or the camelCase
    spellings showFretLabels, showNotes and startingFret.

    Args:
        user: The partial configuration. None means all defaults.
        defaults: The configuration to fill unspecified keys from.

    Returns:
        The resolved configuration.

    Raises:
        ConfigError: If a key is unknown or a value has the wrong type.
        InvalidFingeringError: If the fingering is malformed.
    """
    if user is None:
        return defaults
    if not isinstance(user, Mapping):
        raise ConfigError(f"Configuration must be a mapping: {user!r}")

    changes: Dict[str, Any] = {}
    for key, value in user.items():
        name = _KEY_ALIASES.get(key, key)
        if name not in _FIELD_NAMES:
            raise ConfigError(f"Unknown configuration key: {key!r}")
        if name in ("strings", "frets"):
            changes[name] = _as_int(key, value)
            if changes[name] < 1:
                raise ConfigError(f"{key} must be at least 1: {value!r}")
        elif name == "starting_fret":
            changes[name] = None if value is None else _as_int(key, value)
        elif name in ("show_fret_labels", "show_notes"):
            changes[name] = _as_bool(key, value)
        elif name == "tuning":
            changes[name] = None if value is None else parse_tuning(value)
        elif name == "fingering":
            changes[name] = parse_fingering_list(value)
    return replace(defaults, **changes)
