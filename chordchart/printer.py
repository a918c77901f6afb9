"""Printer for fingerings back to entry-form shorthand."""

from __future__ import annotations

from typing import Iterable

from chordchart.base import MatchException
from chordchart.types import (
    Closed,
    FingeringEntry,
    Fretted,
    FretValue,
    Open,
    SingleString,
    StringRange,
    StringRef,
)


def print_string(string: StringRef) -> str:
    match string:
        case SingleString(index):
            return str(index)
        case StringRange(low, high):
            return f"{low}-{high}"
        case _:
            raise MatchException(string)


def print_fret(fret: FretValue) -> str:
    match fret:
        case Fretted(number):
            return str(number)
        case Open():
            return "o"
        case Closed():
            return "x"
        case _:
            raise MatchException(fret)


def print_entry(entry: FingeringEntry) -> str:
    text = f"{print_string(entry.string)}:{print_fret(entry.fret)}"
    if entry.finger:
        text += f"@{entry.finger}"
    return text


def print_fingering(entries: Iterable[FingeringEntry]) -> str:
    """Print fingering entries in entry-form shorthand.

    Args:
        entries: The entries to print.

    Returns:
        Space-separated entries, e.g. "1:o 2:1@1 3-5:2@2 6:x".
    """
    return " ".join(print_entry(e) for e in entries)
