"""Property-based tests for fretboard layout using Hypothesis."""

from typing import List

from hypothesis import given
from hypothesis import strategies as st

from chordchart.config import FretboardConfig
from chordchart.layout import (
    UNIT_X,
    FretboardLayout,
    build_fret_structure,
    compute_unplayed_strings,
    resolve_visible_fret_window,
)
from chordchart.types import FingeringEntry
from tests.chordchart.hypo import configure_hypo, fingering_strategy

configure_hypo()


def _config(entries: List[FingeringEntry], strings: int = 6) -> FretboardConfig:
    return FretboardConfig(strings=strings, fingering=tuple(entries))


def _fretted(entries: List[FingeringEntry]) -> List[int]:
    return [e.fret.number for e in entries if e.fret.number > 0]


@given(fingering_strategy(max_fret=5))
def test_low_frets_start_at_nut(entries: List[FingeringEntry]) -> None:
    """Every fingering within the first five frets shows the nut."""
    assert resolve_visible_fret_window(entries) == 1


@given(fingering_strategy())
def test_high_frets_start_at_minimum(entries: List[FingeringEntry]) -> None:
    """A fretted note above five moves the window to the lowest fretted note."""
    fretted = _fretted(entries)
    first = resolve_visible_fret_window(entries)
    if fretted and max(fretted) > 5:
        assert first == min(fretted)
    else:
        assert first == 1


@given(fingering_strategy())
def test_structure_idempotent(entries: List[FingeringEntry]) -> None:
    """Folding the same fingering twice changes nothing."""
    once = build_fret_structure(_config(entries))
    twice = build_fret_structure(_config(entries + entries))
    assert once == twice


@given(fingering_strategy())
def test_unmentioned_strings_unplayed(entries: List[FingeringEntry]) -> None:
    mentioned = {s for e in entries for s in e.string.strings()}
    unplayed = compute_unplayed_strings(build_fret_structure(_config(entries)))
    for string in range(1, 7):
        if string not in mentioned:
            assert string in unplayed


@given(
    st.integers(min_value=1, max_value=6),
    st.integers(min_value=1, max_value=6),
    st.integers(min_value=-1, max_value=15),
)
def test_barre_equals_single_entries(low: int, high: int, fret: int) -> None:
    barre = [FingeringEntry.mk([low, high], fret)]
    singles = [
        FingeringEntry.mk(s, fret) for s in range(min(low, high), max(low, high) + 1)
    ]
    assert build_fret_structure(_config(barre)) == build_fret_structure(
        _config(singles)
    )


@given(st.integers(min_value=1, max_value=12))
def test_string_positions_evenly_spaced(strings: int) -> None:
    layout = FretboardLayout(FretboardConfig(strings=strings))
    positions = [layout.string_pos(s) for s in range(1, strings + 1)]
    assert positions[-1] == 0
    for a, b in zip(positions, positions[1:]):
        assert a - b == UNIT_X


@given(fingering_strategy())
def test_every_unplayed_string_has_an_x(entries: List[FingeringEntry]) -> None:
    """Each unplayed string gets an X glyph drawn at its position."""
    layout = FretboardLayout(_config(entries))
    xs = {g.dx for g in layout.markers().find("closed")}
    for string in layout.unplayed_strings():
        assert layout.string_pos(string) - 6 in xs
