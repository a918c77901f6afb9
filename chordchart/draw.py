"""Drawing commands produced by the layout and consumed by renderers.

A Drawing is plain data: a Canvas describing the view box, plus a tuple of
top-level Groups (layers) in painter order. Every Group translates its
children by (dx, dy), so coordinates inside a group are local to it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generator, Optional, TypeVar



@dataclass(frozen=True)
class Style:
    """Presentation attributes for a shape. None means "not set"."""

    fill: Optional[str] = "black"
    stroke: Optional[str] = None
    stroke_width: Optional[float] = None
    font_size: Optional[int] = None
    font_weight: Optional[str] = None
    text_anchor: Optional[str] = None
    alignment_baseline: Optional[str] = None


DEFAULT_STYLE = Style()


# sealed
class Shape:
    """Base class for drawing primitives."""

    pass


S = TypeVar("S", bound=Shape)


@dataclass(frozen=True)
class Rect(Shape):
    x: float
    y: float
    width: float
    height: float
    style: Style = DEFAULT_STYLE


@dataclass(frozen=True)
class Circle(Shape):
    cx: float
    cy: float
    r: float
    style: Style = DEFAULT_STYLE


@dataclass(frozen=True)
class Polygon(Shape):
    points: tuple[tuple[float, float], ...]
    style: Style = DEFAULT_STYLE


@dataclass(frozen=True)
class Text(Shape):
    x: float
    y: float
    text: str
    style: Style = DEFAULT_STYLE


@dataclass(frozen=True)
class Group(Shape):
    """A named container that translates its children."""

    name: str
    dx: float = 0
    dy: float = 0
    children: tuple[Shape, ...] = ()

    def walk(
        self, x: float = 0, y: float = 0
    ) -> Generator[tuple[Shape, float, float], None, None]:
        """Iterate over all non-group shapes below this group.

        Args:
            x: Horizontal offset already applied by enclosing groups.
            y: Vertical offset already applied by enclosing groups.

        Yields:
            (shape, ox, oy) where (ox, oy) is the total translation to add
            to the shape's own coordinates.
        """
        ox = x + self.dx
        oy = y + self.dy
        for child in self.children:
            if isinstance(child, Group):
                yield from child.walk(ox, oy)
            else:
                yield child, ox, oy

    def find(self, name: str) -> list[Group]:
        """Collect all nested groups with the given name, depth first."""
        found: list[Group] = []
        for child in self.children:
            if isinstance(child, Group):
                if child.name == name:
                    found.append(child)
                found.extend(child.find(name))
        return found

    def shapes(self, kind: type[S]) -> list[S]:
        """Collect the direct children of one shape type."""
        return [c for c in self.children if isinstance(c, kind)]


@dataclass(frozen=True)
class Canvas:
    """The logical drawing area."""

    view_width: float
    view_height: float
    width: float  # Rendered width; height follows the view box aspect ratio

    @property
    def height(self) -> float:
        return self.width * self.view_height / self.view_width


@dataclass(frozen=True)
class Drawing:
    """A complete diagram: a canvas and its layers, bottom to top."""

    canvas: Canvas
    layers: tuple[Group, ...]

    def layer(self, name: str) -> Group:
        """Get a top-level layer by name.

        Raises:
            KeyError: If there is no such layer.
        """
        for group in self.layers:
            if group.name == name:
                return group
        raise KeyError(name)
