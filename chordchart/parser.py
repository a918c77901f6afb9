"""Parser for fingering shorthand using Lark.

Two notations are accepted:

Entry form, one entry per played or muted position, separated by spaces or
commas. STRING is a 1-based string or a LOW-HIGH barre range, FRET a number,
"x" (closed) or "o" (open), and FINGER an optional marker label:

    1:0 2:1@1 3-5:2@2 6:x

Tab form, one fret character per string starting from string START (the
highest-numbered string by default) and counting down:

    #x32010      # C major on a six string guitar
    4#221        # strings 4, 3 and 2
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from lark import Lark, Transformer
from lark.exceptions import LarkError, VisitError

from chordchart.base import ChordChartException, ConfigError, InvalidFingeringError
from chordchart.types import (
    CLOSED_STRING,
    OPEN_STRING,
    Fingering,
    FingeringEntry,
    FretValue,
    SingleString,
    StringRange,
    StringRef,
)

# Lark grammar for fingering shorthand
FINGERING_GRAMMAR = """
%import common.WS
%ignore WS

INT: /\\d+/
CLOSED: "x"i
OPEN: "o"i
FINGER: /[^\\s,@:#]+/
TAB_FRETS: /[0-9xXoO]+/

start: tab | entry_list

// Entry form
entry_list: entry ("," entry | entry)*
entry: strings ":" fret ("@" FINGER)?
strings: INT | barre
barre: INT "-" INT
fret: INT | CLOSED | OPEN

// Tab form
tab: INT? "#" TAB_FRETS
"""


@dataclass(frozen=True)
class TabData:
    """Structured representation of parsed tab notation."""

    start_string: Optional[int]  # Starting string number (1-based), None for default
    frets: tuple[int, ...]  # Fret per string; OPEN_STRING and CLOSED_STRING allowed


def _tab_fret(ch: str) -> int:
    if ch in "xX":
        return CLOSED_STRING
    elif ch in "oO":
        return OPEN_STRING
    else:
        return int(ch)


class FingeringTransformer(Transformer):
    """Transform parsed shorthand into entries or TabData."""

    def start(self, items):
        return items[0]

    def entry_list(self, items):
        return tuple(items)

    def entry(self, items):
        string = items[0]
        fret = items[1]
        finger = str(items[2]) if len(items) > 2 else ""
        return FingeringEntry(string, fret, finger)

    def strings(self, items):
        item = items[0]
        if isinstance(item, StringRef):
            return item
        return SingleString(int(item))

    def barre(self, items):
        return StringRange(int(items[0]), int(items[1]))

    def fret(self, items):
        token = items[0]
        if token.type == "CLOSED":
            return FretValue.of(CLOSED_STRING)
        elif token.type == "OPEN":
            return FretValue.of(OPEN_STRING)
        else:
            return FretValue.of(int(token))

    def tab(self, items):
        if len(items) == 2:
            start_string: Optional[int] = int(items[0])
            frets = str(items[1])
        else:
            start_string = None
            frets = str(items[0])
        return TabData(start_string, tuple(_tab_fret(ch) for ch in frets))


_PARSER = Lark(FINGERING_GRAMMAR)


def interpret_tab_data(tab: TabData, strings: int) -> Fingering:
    """Turn tab notation into fingering entries.

    Args:
        tab: Parsed tab data.
        strings: Number of strings on the instrument.

    Returns:
        One entry per fret character, starting at the start string and
        counting down towards string 1.

    Raises:
        InvalidFingeringError: If the start string is out of range or the
            frets run past string 1.
    """
    start = strings if tab.start_string is None else tab.start_string
    if start < 1 or start > strings:
        raise InvalidFingeringError(f"Invalid string number {start} for {strings} strings")
    if len(tab.frets) > start:
        raise InvalidFingeringError(
            f"Tab has {len(tab.frets)} frets but only {start} strings from string {start}"
        )
    return tuple(
        FingeringEntry(SingleString(start - i), FretValue.of(fret))
        for i, fret in enumerate(tab.frets)
    )


def parse_fingering(text: str, strings: int = 6) -> Fingering:
    """Parse fingering shorthand into entries.

    Args:
        text: Entry-form or tab-form shorthand.
        strings: Number of strings, used by tab form to find string numbers.

    Returns:
        The fingering entries, in the order written.

    Raises:
        ConfigError: If the text is not valid shorthand.
        InvalidFingeringError: If tab notation does not fit the strings.

    Examples:
        >>> parse_fingering("1:0 2:1@1 3-5:2@2 6:x")
        # Open 1st string, 1st finger on 2nd string, barre over 3-5, muted 6th

        >>> parse_fingering("#x32010")
        # Same positions as "6:x 5:3 4:2 3:0 2:1 1:0"
    """
    try:
        tree = _PARSER.parse(text)
        result = FingeringTransformer().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, ChordChartException):
            raise e.orig_exc
        raise ConfigError(f"Invalid fingering {text!r}: {e.orig_exc}") from e
    except LarkError as e:
        raise ConfigError(f"Invalid fingering {text!r}: {e}") from e
    if isinstance(result, TabData):
        return interpret_tab_data(result, strings)
    return result
