"""Fretboard geometry for chord diagrams.

FretboardLayout turns a FretboardConfig into a Drawing. It decides which
frets are visible, where every string and fret sits on the grid, and which
marker to draw for each fingering entry, including an X on every string the
fingering never mentions.

Strings are numbered 1..N in the musical convention (string 1 is the
thinnest) but drawn mirrored, so string 1 lands in the rightmost column.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from chordchart.base import ConfigError, InvalidFingeringError, MatchException
from chordchart.config import FretboardConfig
from chordchart.draw import (
    Canvas,
    Circle,
    Drawing,
    Group,
    Polygon,
    Rect,
    Shape,
    Style,
    Text,
)
from chordchart.pitch import Pitch
from chordchart.types import (
    CLOSED_STRING,
    OPEN_STRING,
    Closed,
    Fingering,
    FingeringEntry,
    Fretted,
    FretStructure,
    FretValue,
    Open,
    SingleString,
    StringRange,
    StringRef,
)

UNIT_X = 25
"""Horizontal distance between adjacent strings."""
UNIT_Y = 30
"""Vertical distance between adjacent frets."""
HALF_UNIT_Y = UNIT_Y // 2
"""Offset from a fret bar up to the middle of the cell above it."""

GRID_X = 35
"""Left edge of the grid; leaves room for fret labels."""
GRID_Y = 20
"""Top edge of the grid; leaves room for open and closed markers."""

CANVAS_UNIT_X = 25
"""View box width per string (plus one spare column)."""
CANVAS_UNIT_Y = 40
"""View box height per fret (plus one spare row)."""
CANVAS_WIDTH = 500
"""Rendered width of the diagram."""

FRET_THICKNESS = 2
NUT_THICKNESS = 6
STRING_THICKNESS = 2

WINDOW_THRESHOLD = 5
"""Highest fret that can still be shown in a window starting at the nut."""

CLOSED_MARKER_POINTS: tuple[tuple[float, float], ...] = (
    (14, 2),
    (12, 0),
    (7, 5),
    (2, 0),
    (0, 2),
    (5, 7),
    (0, 12),
    (2, 14),
    (7, 9),
    (12, 14),
    (14, 12),
    (9, 7),
)
"""Outline of the X drawn over a closed string, in a 14x14 box."""

OPEN_MARKER_DIAMETER = 13
FRETTED_MARKER_DIAMETER = 22
BARRE_HEIGHT = 10

UNPLAYED_FINGER = "0"
"""Finger label given to synthesized closed-string markers."""

GRID_STYLE = Style(fill="black")
BARRE_STYLE = Style(fill="black")
CLOSED_STYLE = Style(fill="black")
OPEN_STYLE = Style(fill="white", stroke="black", stroke_width=2)
FRETTED_STYLE = Style(fill="black", stroke_width=0)
FINGER_STYLE = Style(
    fill="white",
    font_size=18,
    font_weight="bold",
    text_anchor="middle",
    alignment_baseline="middle",
)
FRET_LABEL_STYLE = Style(
    fill="black", font_size=18, font_weight="bold", alignment_baseline="middle"
)
NOTE_STYLE = Style(fill="black", font_size=14, font_weight="bold")


def resolve_visible_fret_window(fingering: Iterable[FingeringEntry]) -> int:
    """Determine the lowest fret shown in the diagram.

    Open and closed strings are ignored. If every fretted position fits at
    or below WINDOW_THRESHOLD (or nothing is fretted at all), the window
    starts at the nut. Otherwise it starts at the lowest fretted position.

    Args:
        fingering: The fingering entries to scan.

    Returns:
        The first visible fret number, 1 for the nut.
    """
    lo = float("inf")
    hi = float("-inf")
    for entry in fingering:
        fret = entry.fret.number
        if fret == CLOSED_STRING or fret == OPEN_STRING:
            continue
        lo = min(lo, fret)
        hi = max(hi, fret)
    if hi <= WINDOW_THRESHOLD:
        return 1
    else:
        return int(lo)


def build_fret_structure(config: FretboardConfig) -> FretStructure:
    """Fold the fingering into the highest fret used on each string.

    Barre entries update every string in their range. A value only replaces
    the current one when it is strictly higher, so a later open entry never
    downgrades a fretted one.

    Args:
        config: The configuration supplying string count and fingering.

    Returns:
        A tuple indexed by string - 1, holding CLOSED_STRING for strings
        the fingering never mentions.
    """
    frets = [CLOSED_STRING] * config.strings
    for entry in config.fingering:
        fret = entry.fret.number
        for string in entry.string.strings():
            if fret > frets[string - 1]:
                frets[string - 1] = fret
    return tuple(frets)


def compute_unplayed_strings(structure: FretStructure) -> List[int]:
    """List the 1-based strings no fingering entry mentions."""
    return [i + 1 for i, fret in enumerate(structure) if fret == CLOSED_STRING]


def validate_fingering(config: FretboardConfig) -> None:
    """Check that every entry fits on the configured fretboard.

    Raises:
        InvalidFingeringError: If a string index is outside [1, strings]
            or a fret value is negative but not CLOSED_STRING.
    """
    for entry in config.fingering:
        lo, hi = entry.string.bounds()
        if lo < 1 or hi > config.strings:
            raise InvalidFingeringError(
                f"String {_format_string(entry.string)} is outside 1..{config.strings}"
            )
        if isinstance(entry.fret, Fretted) and entry.fret.fret < 1:
            raise InvalidFingeringError(f"Invalid fret: {entry.fret.fret}")


def _format_string(string: StringRef) -> str:
    lo, hi = string.bounds()
    return str(lo) if lo == hi else f"{lo}-{hi}"


class FretboardLayout:
    """Computes the drawing commands for one chord diagram.

    The config is validated on construction; all drawing methods are pure
    functions of it.
    """

    def __init__(self, config: FretboardConfig) -> None:
        """Initialize the layout for a configuration.

        Args:
            config: The resolved diagram configuration.

        Raises:
            InvalidFingeringError: If the fingering does not fit the
                configured strings.
        """
        validate_fingering(config)
        self._config = config
        self._first_fret = resolve_visible_fret_window(config.fingering)
        self._structure = build_fret_structure(config)
        logging.debug(
            "Layout for %d strings, %d frets: first fret %d, structure %s",
            config.strings,
            config.frets,
            self._first_fret,
            self._structure,
        )

    @property
    def config(self) -> FretboardConfig:
        return self._config

    @property
    def first_fret(self) -> int:
        """The lowest fret in the visible window (1 means the nut)."""
        return self._first_fret

    @property
    def structure(self) -> FretStructure:
        """The highest fret fingered on each string."""
        return self._structure

    def unplayed_strings(self) -> List[int]:
        return compute_unplayed_strings(self._structure)

    def string_pos(self, string: int) -> float:
        """Get the X position of a string on the grid.

        Args:
            string: The 1-based string number.

        Returns:
            The X offset; string N is at 0 and string 1 is rightmost.
        """
        return (self._config.strings - string) * UNIT_X

    def relative_fret_pos(self, fret: int) -> float:
        """Get the Y position of the middle of a fret cell in the window."""
        return (fret - self._first_fret + 1) * UNIT_Y - HALF_UNIT_Y

    def absolute_fret_pos(self, fret: int) -> float:
        """Get the Y position of a fret counted from the nut."""
        return fret * UNIT_Y - HALF_UNIT_Y

    def canvas(self) -> Canvas:
        return Canvas(
            view_width=(self._config.strings + 1) * CANVAS_UNIT_X,
            view_height=(self._config.frets + 1) * CANVAS_UNIT_Y,
            width=CANVAS_WIDTH,
        )

    def grid(self) -> Group:
        """Draw the fret bars and strings.

        The top bar is drawn as a thick nut only when the window starts at
        fret 1.
        """
        strings = self._config.strings
        frets = self._config.frets
        fret_width = (strings - 1) * UNIT_X + STRING_THICKNESS
        shapes: List[Shape] = []
        for i in range(frets + 1):
            if i == 0 and self._first_fret == 1:
                height = NUT_THICKNESS
            else:
                height = FRET_THICKNESS
            shapes.append(Rect(0, i * UNIT_Y, fret_width, height, GRID_STYLE))
        string_height = frets * UNIT_Y
        for i in range(strings):
            shapes.append(
                Rect(i * UNIT_X, 0, STRING_THICKNESS, string_height, GRID_STYLE)
            )
        return Group("grid", GRID_X, GRID_Y, tuple(shapes))

    def fret_marker(self, string: StringRef, fret: FretValue, label: str) -> Group:
        """Draw the marker for one string/fret position.

        Args:
            string: A single string, or a range for a barre.
            fret: The fret played there.
            label: Text drawn inside fretted markers.

        Returns:
            A group holding the marker shapes. For a barre this is the
            connecting bar followed by one marker group per endpoint.
        """
        match string:
            case StringRange():
                lo, hi = string.bounds()
                bar = Rect(
                    self.string_pos(hi),
                    self.relative_fret_pos(fret.number) - 4,
                    self.string_pos(lo) - self.string_pos(hi),
                    BARRE_HEIGHT,
                    BARRE_STYLE,
                )
                return Group(
                    "barre",
                    children=(
                        bar,
                        self.fret_marker(SingleString(lo), fret, label),
                        self.fret_marker(SingleString(hi), fret, label),
                    ),
                )
            case SingleString(index):
                return self._single_marker(index, fret, label)
            case _:
                raise MatchException(string)

    def _single_marker(self, string: int, fret: FretValue, label: str) -> Group:
        x = self.string_pos(string)
        match fret:
            case Closed():
                return Group(
                    "closed",
                    x - 6,
                    self.absolute_fret_pos(0) + 1,
                    (Polygon(CLOSED_MARKER_POINTS, CLOSED_STYLE),),
                )
            case Open():
                r = OPEN_MARKER_DIAMETER / 2
                return Group(
                    "open",
                    x - 6,
                    self.absolute_fret_pos(0) + 2,
                    (Circle(r, r, r, OPEN_STYLE),),
                )
            case Fretted(number):
                r = FRETTED_MARKER_DIAMETER / 2
                return Group(
                    "fretted",
                    x - 10,
                    self.relative_fret_pos(number) - 10,
                    (
                        Circle(r, r, r, FRETTED_STYLE),
                        Text(r, r, label, FINGER_STYLE),
                    ),
                )
            case _:
                raise MatchException(fret)

    def marker_entries(self) -> Fingering:
        """Get the fingering plus a closed entry for every unplayed string.

        Strings that already carry a closed glyph (a closed single string or
        the end of a closed barre) are not marked again.
        """
        drawn = {
            s
            for e in self._config.fingering
            if isinstance(e.fret, Closed)
            for s in e.string.bounds()
        }
        strings = [s for s in self.unplayed_strings() if s not in drawn]
        if strings:
            logging.debug("Marking unplayed strings closed: %s", strings)
        closed = FretValue.of(CLOSED_STRING)
        return self._config.fingering + tuple(
            FingeringEntry(SingleString(s), closed, UNPLAYED_FINGER) for s in strings
        )

    def markers(self) -> Group:
        """Draw every fingering marker, in fingering order."""
        return Group(
            "markers",
            GRID_X,
            GRID_Y,
            tuple(
                self.fret_marker(e.string, e.fret, e.finger)
                for e in self.marker_entries()
            ),
        )

    def fret_labels(self) -> Group:
        """Draw fret numbers to the left of the grid.

        With labels on, every visible row is numbered. With labels off, a
        lone "1" is drawn only when the window starts above the nut and the
        config explicitly asks for starting fret 1. Otherwise nothing is
        drawn; the nut is marked by the thick top bar.
        """
        texts: List[Shape] = []
        if self._config.show_fret_labels:
            for i in range(self._config.frets):
                texts.append(
                    Text(0, i * UNIT_Y + 8, str(self._first_fret + i), FRET_LABEL_STYLE)
                )
        elif self._first_fret != 1 and self._config.starting_fret == 1:
            texts.append(Text(0, 8, "1", FRET_LABEL_STYLE))
        return Group("fret_labels", 0, GRID_Y, tuple(texts))

    def _tuning(self) -> tuple[str, ...]:
        tuning = self._config.tuning
        if tuning is None:
            raise ConfigError("A tuning is required to show notes")
        if len(tuning) < self._config.strings:
            raise ConfigError(
                f"Tuning has {len(tuning)} strings but {self._config.strings} are drawn"
            )
        return tuning

    def note_names(self) -> List[Optional[str]]:
        """Name the note sounded on each string.

        Returns:
            A list indexed by string - 1 holding the pitch name, or None for
            strings that are not played.

        Raises:
            ConfigError: If the tuning is missing or too short.
            InvalidPitchError: If a tuning entry is not a pitch name.
        """
        tuning = self._tuning()
        strings = self._config.strings
        names: List[Optional[str]] = []
        for i, fret in enumerate(self._structure):
            if fret == CLOSED_STRING:
                names.append(None)
                continue
            # Tuning is listed from string N down to string 1
            string = strings - i
            open_pitch = Pitch.parse(tuning[string - 1])
            names.append(str(open_pitch.transpose(fret)))
        return names

    def notes(self) -> Group:
        """Draw note names under the grid, or an empty group if disabled."""
        dy = self.absolute_fret_pos(self._config.frets + 1)
        if not self._config.show_notes:
            return Group("notes", GRID_X, dy)
        texts: List[Shape] = []
        for i, name in enumerate(self.note_names()):
            if name is None:
                continue
            # Fixed nudge to roughly center one- and two-letter names
            offset = 7 if len(name) == 2 else 4
            texts.append(Text(self.string_pos(i + 1) - offset, 0, name, NOTE_STYLE))
        return Group("notes", GRID_X, dy, tuple(texts))

    def draw(self) -> Drawing:
        """Compute the full diagram, layers bottom to top."""
        return Drawing(
            self.canvas(),
            (self.grid(), self.markers(), self.fret_labels(), self.notes()),
        )


def layout_fretboard(config: FretboardConfig) -> Drawing:
    """Lay out a chord diagram.

    Args:
        config: The resolved diagram configuration.

    Returns:
        The drawing commands for the diagram.
    """
    return FretboardLayout(config).draw()
