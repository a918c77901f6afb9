"""Tests for configuration resolution."""

from dataclasses import replace

import pytest

from chordchart.base import ConfigError, InvalidFingeringError
from chordchart.config import (
    DEFAULT_CONFIG,
    FretboardConfig,
    parse_tuning,
    resolve_config,
)
from chordchart.instruments import Instrument, parse_instrument, tuning_for
from chordchart.types import Closed, FingeringEntry, Fretted, StringRange


def test_defaults() -> None:
    config = resolve_config({})
    assert config == DEFAULT_CONFIG
    assert config.strings == 6
    assert config.frets == 5
    assert config.fingering == ()
    assert config.tuning is None
    assert not config.show_fret_labels
    assert not config.show_notes
    assert config.starting_fret is None
    assert resolve_config(None) == DEFAULT_CONFIG


def test_resolve_camel_case_keys() -> None:
    config = resolve_config(
        {
            "strings": 4,
            "frets": 7,
            "showFretLabels": True,
            "showNotes": True,
            "startingFret": 1,
            "tuning": ["G", "C", "E", "A"],
            "fingering": [
                {"string": 1, "fret": 3, "finger": 3},
                {"string": [2, 4], "fret": "2", "finger": "1"},
                {"string": 4, "fret": -1},
            ],
        }
    )
    assert config.strings == 4
    assert config.frets == 7
    assert config.show_fret_labels
    assert config.show_notes
    assert config.starting_fret == 1
    assert config.tuning == ("G", "C", "E", "A")
    assert config.fingering == (
        FingeringEntry.mk(1, 3, "3"),
        FingeringEntry(StringRange(2, 4), Fretted(2), "1"),
        FingeringEntry.mk(4, -1),
    )
    assert config.fingering[2].fret == Closed()


def test_resolve_snake_case_keys_over_custom_defaults() -> None:
    base = replace(DEFAULT_CONFIG, frets=4, show_notes=True)
    config = resolve_config({"show_fret_labels": True}, defaults=base)
    assert config.frets == 4
    assert config.show_notes
    assert config.show_fret_labels


def test_resolve_keeps_existing_entries() -> None:
    entry = FingeringEntry.mk(2, 1, "1")
    config = resolve_config({"fingering": [entry]})
    assert config.fingering == (entry,)


@pytest.mark.parametrize(
    "user, match",
    [
        ({"container": "#chart"}, "Unknown configuration key"),
        ({"strings": "six"}, "Expected an integer"),
        ({"frets": 0}, "at least 1"),
        ({"frets": 2.5}, "Expected an integer"),
        ({"startingFret": 1.5}, "Expected an integer"),
        ({"showNotes": "yes"}, "Expected a boolean"),
        ({"tuning": 5}, "Invalid tuning"),
    ],
)
def test_resolve_invalid(user: dict, match: str) -> None:
    with pytest.raises(ConfigError, match=match):
        resolve_config(user)


@pytest.mark.parametrize(
    "fingering",
    [
        "1:0",
        [{"string": 1}],
        [{"fret": 1}],
        [{"string": 1, "fret": 1, "thumb": True}],
        [[1, 2]],
        [{"string": 1, "fret": "high"}],
        [{"string": None, "fret": 1}],
        [{"string": 2.5, "fret": 1}],
        [{"string": [1.7, 3], "fret": 1}],
    ],
)
def test_resolve_invalid_fingering(fingering: object) -> None:
    with pytest.raises(InvalidFingeringError):
        resolve_config({"fingering": fingering})


def test_resolve_not_a_mapping() -> None:
    with pytest.raises(ConfigError):
        resolve_config(["strings", 6])  # type: ignore[arg-type]


def test_parse_tuning() -> None:
    assert parse_tuning("E,A,D,G,B,E") == ("E", "A", "D", "G", "B", "E")
    assert parse_tuning("D A D G B E") == ("D", "A", "D", "G", "B", "E")
    assert parse_tuning(["G", "C", "E", "A"]) == ("G", "C", "E", "A")
    with pytest.raises(ConfigError):
        parse_tuning([1, 2])


def test_with_instrument() -> None:
    config = FretboardConfig().with_instrument(Instrument.Ukulele)
    assert config.strings == 4
    assert config.tuning == ("G", "C", "E", "A")


def test_instrument_lookup() -> None:
    assert parse_instrument("ukulele") == Instrument.Ukulele
    assert parse_instrument("drop-d-guitar") == Instrument.DropDGuitar
    assert parse_instrument("DropDGuitar") == Instrument.DropDGuitar
    assert parse_instrument("Bass") == Instrument.StandardBass
    with pytest.raises(ConfigError, match="Unknown instrument"):
        parse_instrument("theremin")


def test_tunings_match_string_counts() -> None:
    assert len(tuning_for(Instrument.StandardGuitar)) == 6
    assert len(tuning_for(Instrument.FiveStringBass)) == 5
    assert len(tuning_for(Instrument.Banjo)) == 5
    assert len(tuning_for(Instrument.Mandolin)) == 4


def test_resolve_integral_floats() -> None:
    config = resolve_config(
        {"frets": 4.0, "fingering": [{"string": [1.0, 3], "fret": 2}]}
    )
    assert config.frets == 4
    assert config.fingering[0].string == StringRange(1, 3)
