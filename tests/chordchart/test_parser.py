"""Tests for fingering shorthand parsing and printing."""

import pytest

from chordchart.base import ConfigError, InvalidFingeringError
from chordchart.parser import TabData, interpret_tab_data, parse_fingering
from chordchart.printer import print_fingering
from chordchart.types import (
    Closed,
    FingeringEntry,
    Fretted,
    Open,
    SingleString,
    StringRange,
)


def test_parse_entries() -> None:
    entries = parse_fingering("1:0 2:1@1 3-5:2@2 6:x")
    assert entries == (
        FingeringEntry(SingleString(1), Open(), ""),
        FingeringEntry(SingleString(2), Fretted(1), "1"),
        FingeringEntry(StringRange(3, 5), Fretted(2), "2"),
        FingeringEntry(SingleString(6), Closed(), ""),
    )


def test_parse_entries_with_commas() -> None:
    entries = parse_fingering("1:8@1, 2:10@3,6:X")
    assert entries == (
        FingeringEntry(SingleString(1), Fretted(8), "1"),
        FingeringEntry(SingleString(2), Fretted(10), "3"),
        FingeringEntry(SingleString(6), Closed(), ""),
    )


def test_parse_open_letter() -> None:
    entries = parse_fingering("3:o 4:O")
    assert [e.fret for e in entries] == [Open(), Open()]


def test_parse_reversed_barre() -> None:
    (entry,) = parse_fingering("6-1:5@1")
    assert entry.string == StringRange(6, 1)
    assert entry.string.bounds() == (1, 6)


def test_parse_tab_c_major() -> None:
    entries = parse_fingering("#x32010")
    assert [e.string for e in entries] == [SingleString(s) for s in range(6, 0, -1)]
    assert [e.fret.number for e in entries] == [-1, 3, 2, 0, 1, 0]
    assert all(e.finger == "" for e in entries)


def test_parse_tab_explicit_string() -> None:
    entries = parse_fingering("4#221")
    assert [e.string for e in entries] == [SingleString(4), SingleString(3), SingleString(2)]
    assert [e.fret for e in entries] == [Fretted(2), Fretted(2), Fretted(1)]


def test_parse_tab_fewer_strings() -> None:
    entries = parse_fingering("#0003", strings=4)
    assert [e.string for e in entries] == [SingleString(s) for s in (4, 3, 2, 1)]
    assert entries[-1].fret == Fretted(3)


def test_parse_tab_too_long() -> None:
    with pytest.raises(InvalidFingeringError, match="only 3 strings"):
        parse_fingering("3#0000")


def test_parse_tab_bad_start() -> None:
    with pytest.raises(InvalidFingeringError, match="Invalid string number"):
        parse_fingering("7#0000")


def test_interpret_tab_data() -> None:
    entries = interpret_tab_data(TabData(None, (-1, -1, 0, 0)), strings=4)
    assert [e.fret for e in entries] == [Closed(), Closed(), Open(), Open()]


@pytest.mark.parametrize("text", ["", "#", "1", "1:", ":3", "1:-2", "a:3", "1-:3", "1:3@"])
def test_parse_invalid(text: str) -> None:
    with pytest.raises(ConfigError, match="Invalid fingering"):
        parse_fingering(text)


@pytest.mark.parametrize(
    "text",
    [
        "1:o 2:1@1 3-5:2@2 6:x",
        "1:8@1 2:10@3",
        "6-1:5@T",
        "2:12",
    ],
)
def test_print_roundtrip(text: str) -> None:
    entries = parse_fingering(text)
    assert print_fingering(entries) == text
    assert parse_fingering(print_fingering(entries)) == entries
