"""Pitch names and transposition for note labels.

Only pitch classes matter here: a chord diagram labels each string with the
name of the note it sounds, never with an octave.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, unique
from typing import Dict

from chordchart.base import InvalidPitchError


@unique
class NoteName(Enum):
    """Enumeration of the twelve chromatic note names.

    Values correspond to semitone offsets from C within an octave.
    Uses flat notation for accidentals (Db, Eb, Gb, Ab, Bb).
    """

    C = 0
    Db = 1
    D = 2
    Eb = 3
    E = 4
    F = 5
    Gb = 6
    G = 7
    Ab = 8
    A = 9
    Bb = 10
    B = 11

    def add_steps(self, steps: int) -> NoteName:
        """Add semitone steps to this note name.

        Args:
            steps: Number of semitones to add (can be negative).

        Returns:
            The resulting note name after adding the steps.
        """
        return NOTE_LOOKUP[(self.value + steps) % MAX_NOTES]


MAX_NOTES = 12
"""Number of distinct note names in the chromatic scale."""


def _build_note_lookup() -> Dict[int, NoteName]:
    d: Dict[int, NoteName] = {}
    for n in NoteName:
        d[n.value] = n
    assert len(d) == MAX_NOTES
    return d


NOTE_LOOKUP = _build_note_lookup()
"""Lookup table from semitone offset (0-11) to NoteName."""

_NATURALS = {"c": 0, "d": 2, "e": 4, "f": 5, "g": 7, "a": 9, "b": 11}

_PITCH_RE = re.compile(r"^\s*([a-gA-G])([#b]*)(-?\d+)?\s*$")


@dataclass(frozen=True)
class Pitch:
    """A pitch class that can be parsed, transposed and printed."""

    name: NoteName

    @staticmethod
    def parse(text: str) -> Pitch:
        """Parse a pitch name such as "E", "f#", "Bb" or "E2".

        Accidentals may repeat ("C##"). A trailing octave number is accepted
        and dropped.

        Args:
            text: The pitch name to parse.

        Returns:
            The parsed Pitch.

        Raises:
            InvalidPitchError: If the text is not a pitch name.
        """
        if not isinstance(text, str):
            raise InvalidPitchError(text)
        m = _PITCH_RE.match(text)
        if m is None:
            raise InvalidPitchError(text)
        letter, accidentals, _octave = m.groups()
        steps = _NATURALS[letter.lower()]
        steps += accidentals.count("#") - accidentals.count("b")
        return Pitch(NOTE_LOOKUP[steps % MAX_NOTES])

    def transpose(self, semitones: int) -> Pitch:
        """Transpose by a number of semitones (can be negative)."""
        return Pitch(self.name.add_steps(semitones))

    def __str__(self) -> str:
        return self.name.name


def transpose(note: str, semitones: int) -> str:
    """Name the note a number of semitones above another.

    Args:
        note: The starting pitch name.
        semitones: Number of semitones to move up (or down, if negative).

    Returns:
        The resulting pitch name, one or two characters long.
    """
    return str(Pitch.parse(note).transpose(semitones))
