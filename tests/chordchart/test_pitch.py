"""Tests for pitch parsing and transposition."""

import pytest

from chordchart.base import ConfigError, InvalidPitchError
from chordchart.pitch import NoteName, Pitch, transpose


@pytest.mark.parametrize(
    "text, expected",
    [
        ("E", NoteName.E),
        ("e", NoteName.E),
        ("F#", NoteName.Gb),
        ("Gb", NoteName.Gb),
        ("Cb", NoteName.B),
        ("B#", NoteName.C),
        ("C##", NoteName.D),
        ("E2", NoteName.E),
        ("A4", NoteName.A),
        (" D ", NoteName.D),
    ],
)
def test_parse(text: str, expected: NoteName) -> None:
    assert Pitch.parse(text).name == expected


@pytest.mark.parametrize("text", ["", "H", "#", "Ex", "E A"])
def test_parse_invalid(text: str) -> None:
    with pytest.raises(InvalidPitchError):
        Pitch.parse(text)


def test_invalid_pitch_is_config_error() -> None:
    with pytest.raises(ConfigError, match="Invalid pitch name"):
        Pitch.parse("Q")


def test_transpose() -> None:
    e = Pitch.parse("E")
    assert str(e.transpose(0)) == "E"
    assert str(e.transpose(3)) == "G"
    assert str(e.transpose(1)) == "F"
    assert str(e.transpose(12)) == "E"
    assert str(e.transpose(-4)) == "C"
    assert str(e.transpose(6)) == "Bb"


def test_name_lengths() -> None:
    names = [str(Pitch(n)) for n in NoteName]
    assert all(len(n) in (1, 2) for n in names)
    assert names == ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]


def test_transpose_function() -> None:
    assert transpose("A", 2) == "B"
    assert transpose("B", 1) == "C"
    assert transpose("G", 1) == "Ab"
