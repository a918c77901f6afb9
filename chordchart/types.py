"""Core fingering types for chordchart.

A fingering is an ordered sequence of FingeringEntry values. Each entry
names the string(s) it applies to and the fret played there, using small
tagged variants instead of raw ints and lists:

    StringRef = SingleString(index) | StringRange(low, high)
    FretValue = Fretted(n) | Open | Closed
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generator, Sequence, TypeAlias, Union

from chordchart.base import InvalidFingeringError, MatchException

OPEN_STRING = 0
"""Numeric fret value of an open (unfretted, sounding) string."""

CLOSED_STRING = -1
"""Numeric fret value of a closed (muted, not played) string."""


# =============================================================================
# String references
# =============================================================================


# sealed
class StringRef:
    """Base class for references to one or more strings (1-based)."""

    def bounds(self) -> tuple[int, int]:
        """Get the lowest and highest string index covered.

        Returns:
            A (min, max) pair of 1-based string indices.
        """
        if isinstance(self, SingleString):
            return (self.index, self.index)
        elif isinstance(self, StringRange):
            return (min(self.low, self.high), max(self.low, self.high))
        else:
            raise MatchException(self)

    def strings(self) -> Generator[int, None, None]:
        """Iterate over every string index covered, ascending."""
        lo, hi = self.bounds()
        yield from range(lo, hi + 1)

    @staticmethod
    def of(value: Union[int, Sequence[int], StringRef]) -> StringRef:
        """Convert a raw string reference into a StringRef.

        Args:
            value: A 1-based string index, a [low, high] pair for a barre,
                or an existing StringRef.

        Returns:
            The corresponding StringRef.

        Raises:
            InvalidFingeringError: If the value is neither an integer nor a
                pair of integers.
        """
        if isinstance(value, StringRef):
            return value
        elif isinstance(value, (int, float, str, bytes)):
            return SingleString(_string_index(value, value))
        try:
            items = list(value)
        except TypeError:
            raise InvalidFingeringError(f"Invalid string reference: {value!r}")
        if len(items) != 2:
            raise InvalidFingeringError(
                f"Barre must name exactly two strings: {value!r}"
            )
        low, high = (_string_index(item, value) for item in items)
        return StringRange(low, high)


def _string_index(item: Any, value: Any) -> int:
    if isinstance(item, bool):
        raise InvalidFingeringError(f"Invalid string reference: {value!r}")
    try:
        index = int(item)
    except (TypeError, ValueError, OverflowError):
        raise InvalidFingeringError(f"Invalid string reference: {value!r}")
    if isinstance(item, float) and index != item:
        raise InvalidFingeringError(f"Invalid string reference: {value!r}")
    return index


@dataclass(frozen=True)
class SingleString(StringRef):
    """A single string."""

    index: int  # 1-based string number


@dataclass(frozen=True)
class StringRange(StringRef):
    """An inclusive range of strings covered by a barre.

    Endpoints may be given in either order.
    """

    low: int
    high: int


# =============================================================================
# Fret values
# =============================================================================


# sealed
class FretValue:
    """Base class for the fret played on a string."""

    @property
    def number(self) -> int:
        """Get the numeric fret value.

        Returns:
            The fret number for fretted positions, OPEN_STRING for open
            strings and CLOSED_STRING for closed strings.
        """
        if isinstance(self, Fretted):
            return self.fret
        elif isinstance(self, Open):
            return OPEN_STRING
        elif isinstance(self, Closed):
            return CLOSED_STRING
        else:
            raise MatchException(self)

    @staticmethod
    def of(value: Union[int, str, FretValue]) -> FretValue:
        """Convert a raw fret number into a FretValue.

        Strings holding integers are accepted, so "3" is fret 3.

        Args:
            value: A fret number, OPEN_STRING, CLOSED_STRING or a FretValue.

        Returns:
            The corresponding FretValue.

        Raises:
            InvalidFingeringError: If the value is not an integer, or is
                negative but not CLOSED_STRING.
        """
        if isinstance(value, FretValue):
            return value
        if isinstance(value, bool):
            raise InvalidFingeringError(f"Invalid fret: {value!r}")
        try:
            fret = int(value)
        except (TypeError, ValueError):
            raise InvalidFingeringError(f"Invalid fret: {value!r}")
        if isinstance(value, float) and fret != value:
            raise InvalidFingeringError(f"Invalid fret: {value!r}")
        if fret == OPEN_STRING:
            return _OPEN
        elif fret == CLOSED_STRING:
            return _CLOSED
        elif fret > 0:
            return Fretted(fret)
        else:
            raise InvalidFingeringError(f"Invalid fret: {value!r}")


@dataclass(frozen=True)
class Fretted(FretValue):
    """A string pressed down at a fret (1 or higher)."""

    fret: int


@dataclass(frozen=True)
class Open(FretValue):
    """An open string, played without fretting."""

    pass


@dataclass(frozen=True)
class Closed(FretValue):
    """A closed string, not played at all."""

    pass


_OPEN = Open()
_CLOSED = Closed()


# =============================================================================
# Fingering
# =============================================================================


@dataclass(frozen=True)
class FingeringEntry:
    """One played or muted position in a fingering."""

    string: StringRef
    fret: FretValue
    finger: str = ""  # Label drawn on the marker; unused for open/closed

    @property
    def is_barre(self) -> bool:
        return isinstance(self.string, StringRange)

    @staticmethod
    def mk(
        string: Union[int, Sequence[int], StringRef],
        fret: Union[int, str, FretValue],
        finger: object = "",
    ) -> FingeringEntry:
        """Create an entry from raw values.

        Args:
            string: A 1-based string index or a [low, high] barre pair.
            fret: A fret number, 0 for open or -1 for closed.
            finger: Marker label; converted with str().

        Returns:
            A new FingeringEntry.
        """
        return FingeringEntry(StringRef.of(string), FretValue.of(fret), str(finger))


Fingering: TypeAlias = tuple[FingeringEntry, ...]
"""An ordered, immutable sequence of fingering entries."""

FretStructure: TypeAlias = tuple[int, ...]
"""Highest fret per string, indexed by string - 1; CLOSED_STRING if unused."""
