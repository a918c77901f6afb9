"""SVG rendering of chord diagrams using svgwrite."""

from __future__ import annotations

import logging
from abc import ABCMeta, abstractmethod
from pathlib import Path
from typing import Any, Dict, Generic, TypeVar, Union

import svgwrite
from svgwrite.container import Group as SvgGroup

from chordchart.base import MatchException
from chordchart.draw import Circle, Drawing, Group, Polygon, Rect, Shape, Style, Text


R = TypeVar("R")


class Renderer(Generic[R], metaclass=ABCMeta):
    """Turns drawing commands into some concrete output."""

    @abstractmethod
    def render(self, drawing: Drawing) -> R:
        """Render a complete drawing.

        Args:
            drawing: The drawing commands to render.

        Returns:
            The rendered output.
        """
        raise NotImplementedError()


def _style_attrs(style: Style) -> Dict[str, Any]:
    attrs: Dict[str, Any] = {}
    if style.fill is not None:
        attrs["fill"] = style.fill
    if style.stroke is not None:
        attrs["stroke"] = style.stroke
    if style.stroke_width is not None:
        attrs["stroke_width"] = style.stroke_width
    if style.text_anchor is not None:
        attrs["text_anchor"] = style.text_anchor
    if style.alignment_baseline is not None:
        attrs["alignment_baseline"] = style.alignment_baseline
    font = []
    if style.font_weight is not None:
        font.append(f"font-weight: {style.font_weight}")
    if style.font_size is not None:
        font.append(f"font-size: {style.font_size}px")
    if font:
        attrs["style"] = "; ".join(font)
    return attrs


def _fmt(value: float) -> str:
    return f"{value:g}"


class SvgRenderer(Renderer[svgwrite.Drawing]):
    """Renders drawings into svgwrite documents.

    The document gets a view box matching the canvas and a fixed rendered
    width; its height follows the view box aspect ratio.
    """

    def __init__(self, filename: str = "noname.svg") -> None:
        self._filename = filename

    def render(self, drawing: Drawing) -> svgwrite.Drawing:
        canvas = drawing.canvas
        # Validation off: alignment-baseline is not in svgwrite's profile
        dwg = svgwrite.Drawing(
            self._filename,
            size=(_fmt(canvas.width), _fmt(canvas.height)),
            viewBox=f"0 0 {_fmt(canvas.view_width)} {_fmt(canvas.view_height)}",
            debug=False,
        )
        for layer in drawing.layers:
            dwg.add(self._group(dwg, layer, top=True))
        logging.debug(
            "Rendered %d layers onto %sx%s view box",
            len(drawing.layers),
            _fmt(canvas.view_width),
            _fmt(canvas.view_height),
        )
        return dwg

    def _group(self, dwg: svgwrite.Drawing, group: Group, top: bool) -> SvgGroup:
        attrs: Dict[str, Any] = {}
        if top:
            attrs["id"] = group.name
        else:
            attrs["class_"] = group.name
        if group.dx or group.dy:
            attrs["transform"] = f"translate({_fmt(group.dx)},{_fmt(group.dy)})"
        g = dwg.g(**attrs)
        for child in group.children:
            g.add(self._shape(dwg, child))
        return g

    def _shape(self, dwg: svgwrite.Drawing, shape: Shape) -> Any:
        match shape:
            case Group():
                return self._group(dwg, shape, top=False)
            case Rect(x, y, width, height, style):
                return dwg.rect(
                    insert=(x, y), size=(width, height), **_style_attrs(style)
                )
            case Circle(cx, cy, r, style):
                return dwg.circle(center=(cx, cy), r=r, **_style_attrs(style))
            case Polygon(points, style):
                return dwg.polygon(points=list(points), **_style_attrs(style))
            case Text(x, y, text, style):
                return dwg.text(text, insert=(x, y), **_style_attrs(style))
            case _:
                raise MatchException(shape)


def render_svg(drawing: Drawing) -> str:
    """Render a drawing to an SVG document string."""
    return SvgRenderer().render(drawing).tostring()


def save_svg(drawing: Drawing, path: Union[str, Path]) -> None:
    """Render a drawing and write it to an SVG file.

    Args:
        drawing: The drawing to render.
        path: Destination file path.
    """
    dwg = SvgRenderer(str(path)).render(drawing)
    dwg.save(pretty=True)
    logging.info("Wrote %s", path)
