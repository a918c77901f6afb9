"""Tuning presets for common fretted instruments."""

from __future__ import annotations

from enum import Enum, auto

from chordchart.base import ConfigError


class Instrument(Enum):
    """Instrument tuning presets."""

    StandardGuitar = auto()
    DropDGuitar = auto()
    OpenGGuitar = auto()
    OpenDGuitar = auto()
    DadgadGuitar = auto()
    StandardBass = auto()
    FiveStringBass = auto()
    Ukulele = auto()
    Mandolin = auto()
    Banjo = auto()

    @property
    def slug(self) -> str:
        """Get the kebab-case name used on the command line.

        Returns:
            The name, e.g. "drop-d-guitar" for DropDGuitar.
        """
        return _SLUGS[self]


# Open-string pitch names, lowest-numbered string last (string N first)
TUNINGS: dict[Instrument, tuple[str, ...]] = {
    Instrument.StandardGuitar: ("E", "A", "D", "G", "B", "E"),
    Instrument.DropDGuitar: ("D", "A", "D", "G", "B", "E"),
    Instrument.OpenGGuitar: ("D", "G", "D", "G", "B", "D"),
    Instrument.OpenDGuitar: ("D", "A", "D", "F#", "A", "D"),
    Instrument.DadgadGuitar: ("D", "A", "D", "G", "A", "D"),
    Instrument.StandardBass: ("E", "A", "D", "G"),
    Instrument.FiveStringBass: ("B", "E", "A", "D", "G"),
    Instrument.Ukulele: ("G", "C", "E", "A"),  # reentrant
    Instrument.Mandolin: ("G", "D", "A", "E"),
    Instrument.Banjo: ("G", "D", "G", "B", "D"),  # open G, short 5th string first
}

_SLUGS: dict[Instrument, str] = {
    Instrument.StandardGuitar: "guitar",
    Instrument.DropDGuitar: "drop-d-guitar",
    Instrument.OpenGGuitar: "open-g-guitar",
    Instrument.OpenDGuitar: "open-d-guitar",
    Instrument.DadgadGuitar: "dadgad-guitar",
    Instrument.StandardBass: "bass",
    Instrument.FiveStringBass: "five-string-bass",
    Instrument.Ukulele: "ukulele",
    Instrument.Mandolin: "mandolin",
    Instrument.Banjo: "banjo",
}


def tuning_for(instrument: Instrument) -> tuple[str, ...]:
    """Get the open-string tuning of an instrument, low to high."""
    return TUNINGS[instrument]


def parse_instrument(name: str) -> Instrument:
    """Look up an instrument by its kebab-case slug or enum member name.

    Args:
        name: For example "ukulele", "drop-d-guitar" or "DropDGuitar".

    Returns:
        The matching Instrument.

    Raises:
        ConfigError: If no instrument has that name.
    """
    for inst in Instrument:
        if name == inst.name or name.lower() == inst.slug:
            return inst
    choices = ", ".join(inst.slug for inst in Instrument)
    raise ConfigError(f"Unknown instrument {name!r} (expected one of: {choices})")
