"""
Drawing surfaces - the backends the renderer paints onto.

A surface is a small stateful 2D API modelled on an immediate-mode canvas:
style setters (stroke, fill, dash, font) followed by primitive calls that use
the current style. All coordinates passed to a surface are device
coordinates; the renderer has already applied the view transform.

Backends:
- RecordingSurface: keeps the call log (tests, retained display lists)
- SvgSurface: builds an SVG document (export, PDF hand-off)
- RasterSurface: Pillow software rasterizer (PNG snapshots)
"""

from __future__ import annotations

import math
import re
from abc import ABC, abstractmethod
from pathlib import Path

from PIL import Image, ImageColor, ImageDraw, ImageFont

_RGBA_PATTERN = re.compile(r"rgba?\(\s*([^)]*)\)", re.IGNORECASE)


def parse_color(color: str | None) -> tuple[int, int, int, float] | None:
    """
    Parse a CSS-style color into (r, g, b, alpha) with alpha in 0..1.

    Accepts hex (#rgb, #rrggbb), rgb()/rgba() and named colors.
    Returns None for None, "" and "none".
    """
    if not color or color.strip().lower() == "none":
        return None
    match = _RGBA_PATTERN.fullmatch(color.strip())
    if match:
        parts = [p.strip() for p in match.group(1).split(",")]
        r, g, b = (int(float(p)) for p in parts[:3])
        alpha = float(parts[3]) if len(parts) > 3 else 1.0
        return (r, g, b, max(0.0, min(1.0, alpha)))
    rgb = ImageColor.getrgb(color)
    if len(rgb) == 4:
        return (rgb[0], rgb[1], rgb[2], rgb[3] / 255)
    return (rgb[0], rgb[1], rgb[2], 1.0)


def dash_segments(x1: float, y1: float, x2: float, y2: float,
                  pattern: tuple[float, ...]) -> list[tuple[float, float, float, float]]:
    """
    Split a segment into the "on" pieces of a dash pattern.

    The pattern alternates on/off lengths (canvas setLineDash semantics).
    An empty pattern returns the whole segment.
    """
    length = math.hypot(x2 - x1, y2 - y1)
    if not pattern or length == 0 or sum(pattern) <= 0:
        return [(x1, y1, x2, y2)]
    ux, uy = (x2 - x1) / length, (y2 - y1) / length
    pieces = []
    pos = 0.0
    index = 0
    while pos < length:
        run = pattern[index % len(pattern)]
        end = min(pos + run, length)
        if index % 2 == 0 and end > pos:
            pieces.append((x1 + ux * pos, y1 + uy * pos, x1 + ux * end, y1 + uy * end))
        pos = end
        index += 1
    return pieces


class DrawingSurface(ABC):
    """
    Minimal drawing-surface contract used by the renderer.

    Subclasses implement the primitive operations; the style state (stroke,
    fill, dash, font) is kept here so every backend sees the same semantics.
    """

    def __init__(self, width: float, height: float):
        self.width = width
        self.height = height
        self.stroke_color = "#000000"
        self.stroke_width = 1.0
        self.fill_color = "#000000"
        self.line_dash: tuple[float, ...] = ()
        self.font_size = 10.0
        self.font_family = "Arial"

    # Style state ---------------------------------------------------------

    def set_stroke_style(self, color: str, width: float) -> None:
        self.stroke_color = color
        self.stroke_width = width

    def set_fill_style(self, color: str) -> None:
        self.fill_color = color

    def set_line_dash(self, pattern: tuple[float, ...]) -> None:
        self.line_dash = tuple(pattern)

    def set_font(self, size: float, family: str) -> None:
        self.font_size = size
        self.font_family = family

    # Primitives ----------------------------------------------------------

    @abstractmethod
    def clear(self) -> None:
        """Erase everything drawn so far."""

    @abstractmethod
    def stroke_segment(self, x1: float, y1: float, x2: float, y2: float) -> None: ...

    @abstractmethod
    def fill_rect(self, x: float, y: float, width: float, height: float) -> None: ...

    @abstractmethod
    def stroke_rect(self, x: float, y: float, width: float, height: float) -> None: ...

    @abstractmethod
    def fill_circle(self, cx: float, cy: float, radius: float) -> None: ...

    @abstractmethod
    def stroke_circle(self, cx: float, cy: float, radius: float) -> None: ...

    @abstractmethod
    def draw_text(self, text: str, x: float, y: float, align: str = "left") -> None:
        """Draw text with its baseline at y, aligned horizontally at x."""


class RecordingSurface(DrawingSurface):
    """
    Surface that records every call instead of drawing.

    Each entry in ``calls`` is a tuple ``(operation, *arguments)``.
    ``clear()`` empties the log.
    """

    def __init__(self, width: float = 800, height: float = 600):
        super().__init__(width, height)
        self.calls: list[tuple] = []

    def set_stroke_style(self, color: str, width: float) -> None:
        super().set_stroke_style(color, width)
        self.calls.append(("set_stroke_style", color, width))

    def set_fill_style(self, color: str) -> None:
        super().set_fill_style(color)
        self.calls.append(("set_fill_style", color))

    def set_line_dash(self, pattern: tuple[float, ...]) -> None:
        super().set_line_dash(pattern)
        self.calls.append(("set_line_dash", self.line_dash))

    def set_font(self, size: float, family: str) -> None:
        super().set_font(size, family)
        self.calls.append(("set_font", size, family))

    def clear(self) -> None:
        self.calls = [("clear",)]

    def stroke_segment(self, x1, y1, x2, y2) -> None:
        self.calls.append(("stroke_segment", x1, y1, x2, y2))

    def fill_rect(self, x, y, width, height) -> None:
        self.calls.append(("fill_rect", x, y, width, height))

    def stroke_rect(self, x, y, width, height) -> None:
        self.calls.append(("stroke_rect", x, y, width, height))

    def fill_circle(self, cx, cy, radius) -> None:
        self.calls.append(("fill_circle", cx, cy, radius))

    def stroke_circle(self, cx, cy, radius) -> None:
        self.calls.append(("stroke_circle", cx, cy, radius))

    def draw_text(self, text, x, y, align="left") -> None:
        self.calls.append(("draw_text", text, x, y, align))

    def calls_named(self, operation: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == operation]

    @property
    def primitive_calls(self) -> list[tuple]:
        """Only the drawing calls (no style setters)."""
        return [call for call in self.calls if not call[0].startswith("set_")]


def _fmt(value: float) -> str:
    """Compact number formatting for SVG attributes."""
    return f"{value:.4f}".rstrip("0").rstrip(".")


def _escape(text: str) -> str:
    """Escape text for SVG character data and double-quoted attributes."""
    return (text.replace("&", "&amp;").replace("<", "&lt;")
            .replace(">", "&gt;").replace('"', "&quot;"))


class SvgSurface(DrawingSurface):
    """Surface that accumulates SVG elements; see to_svg()."""

    def __init__(self, width: float = 800, height: float = 600):
        super().__init__(width, height)
        self.svg_parts: list[str] = []

    def clear(self) -> None:
        self.svg_parts = []

    def _paint_attr(self, prefix: str, color: str) -> str:
        parsed = parse_color(color)
        if parsed is None:
            return f'{prefix}="none"'
        r, g, b, alpha = parsed
        attr = f'{prefix}="rgb({r},{g},{b})"'
        if alpha < 1:
            attr += f' {prefix}-opacity="{_fmt(alpha)}"'
        return attr

    def _stroke_attrs(self) -> str:
        attrs = (f'{self._paint_attr("stroke", self.stroke_color)} '
                 f'stroke-width="{_fmt(self.stroke_width)}"')
        if self.line_dash:
            attrs += f' stroke-dasharray="{",".join(_fmt(d) for d in self.line_dash)}"'
        return attrs

    def stroke_segment(self, x1, y1, x2, y2) -> None:
        self.svg_parts.append(
            f'<line x1="{_fmt(x1)}" y1="{_fmt(y1)}" x2="{_fmt(x2)}" y2="{_fmt(y2)}" '
            f'{self._stroke_attrs()}/>'
        )

    def fill_rect(self, x, y, width, height) -> None:
        self.svg_parts.append(
            f'<rect x="{_fmt(x)}" y="{_fmt(y)}" width="{_fmt(width)}" height="{_fmt(height)}" '
            f'{self._paint_attr("fill", self.fill_color)} stroke="none"/>'
        )

    def stroke_rect(self, x, y, width, height) -> None:
        self.svg_parts.append(
            f'<rect x="{_fmt(x)}" y="{_fmt(y)}" width="{_fmt(width)}" height="{_fmt(height)}" '
            f'fill="none" {self._stroke_attrs()}/>'
        )

    def fill_circle(self, cx, cy, radius) -> None:
        self.svg_parts.append(
            f'<circle cx="{_fmt(cx)}" cy="{_fmt(cy)}" r="{_fmt(radius)}" '
            f'{self._paint_attr("fill", self.fill_color)} stroke="none"/>'
        )

    def stroke_circle(self, cx, cy, radius) -> None:
        self.svg_parts.append(
            f'<circle cx="{_fmt(cx)}" cy="{_fmt(cy)}" r="{_fmt(radius)}" '
            f'fill="none" {self._stroke_attrs()}/>'
        )

    def draw_text(self, text, x, y, align="left") -> None:
        anchor = {"left": "start", "center": "middle", "right": "end"}.get(align, "start")
        escaped = _escape(text)
        self.svg_parts.append(
            f'<text x="{_fmt(x)}" y="{_fmt(y)}" text-anchor="{anchor}" '
            f'font-family="{_escape(self.font_family)}" font-size="{_fmt(self.font_size)}" '
            f'{self._paint_attr("fill", self.fill_color)}>{escaped}</text>'
        )

    def to_svg(self) -> str:
        """Return the complete SVG document."""
        header = (
            f'<svg xmlns="http://www.w3.org/2000/svg" '
            f'width="{_fmt(self.width)}" height="{_fmt(self.height)}" '
            f'viewBox="0 0 {_fmt(self.width)} {_fmt(self.height)}">'
        )
        return "\n".join([header, *self.svg_parts, "</svg>"])

    def save(self, path: str | Path) -> None:
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.to_svg())


class RasterSurface(DrawingSurface):
    """
    Pillow-backed software rasterizer.

    The image is RGB and drawing goes through an "RGBA" ImageDraw, so
    translucent colors blend over what is already there. Dash patterns are
    applied to segments and rectangle outlines; circles are always stroked solid.
    """

    def __init__(self, width: int = 800, height: int = 600, background: str = "#ffffff"):
        super().__init__(width, height)
        self.background = background
        self.image = Image.new("RGB", (int(width), int(height)), background)
        self._draw = ImageDraw.Draw(self.image, "RGBA")

    def clear(self) -> None:
        self.image = Image.new("RGB", (int(self.width), int(self.height)), self.background)
        self._draw = ImageDraw.Draw(self.image, "RGBA")

    @staticmethod
    def _rgba(color: str) -> tuple[int, int, int, int] | None:
        parsed = parse_color(color)
        if parsed is None:
            return None
        r, g, b, alpha = parsed
        return (r, g, b, round(alpha * 255))

    def _pixel_width(self) -> int:
        return max(1, round(self.stroke_width))

    def stroke_segment(self, x1, y1, x2, y2) -> None:
        color = self._rgba(self.stroke_color)
        if color is None:
            return
        for piece in dash_segments(x1, y1, x2, y2, self.line_dash):
            self._draw.line(piece, fill=color, width=self._pixel_width())

    def fill_rect(self, x, y, width, height) -> None:
        color = self._rgba(self.fill_color)
        if color is None:
            return
        left, right = sorted((x, x + width))
        top, bottom = sorted((y, y + height))
        self._draw.rectangle((left, top, right, bottom), fill=color)

    def stroke_rect(self, x, y, width, height) -> None:
        corners = [(x, y), (x + width, y), (x + width, y + height), (x, y + height)]
        for (ax, ay), (bx, by) in zip(corners, corners[1:] + corners[:1]):
            self.stroke_segment(ax, ay, bx, by)

    def fill_circle(self, cx, cy, radius) -> None:
        color = self._rgba(self.fill_color)
        if color is None or radius <= 0:
            return
        self._draw.ellipse((cx - radius, cy - radius, cx + radius, cy + radius), fill=color)

    def stroke_circle(self, cx, cy, radius) -> None:
        color = self._rgba(self.stroke_color)
        if color is None or radius <= 0:
            return
        self._draw.ellipse((cx - radius, cy - radius, cx + radius, cy + radius),
                           outline=color, width=self._pixel_width())

    def draw_text(self, text, x, y, align="left") -> None:
        color = self._rgba(self.fill_color)
        if color is None or not text:
            return
        font = ImageFont.load_default(size=max(1, round(self.font_size)))
        anchor = {"left": "ls", "center": "ms", "right": "rs"}.get(align, "ls")
        self._draw.text((x, y), text, fill=color, font=font, anchor=anchor)

    def save(self, path: str | Path) -> None:
        self.image.save(path)
