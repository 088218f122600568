"""
Sheet renderer - paints one sheet onto a drawing surface.

Frame order is fixed:

    1. clear the surface
    2. paper rectangle (fill, then border)
    3. background grid (when enabled)
    4. title block
    5. sheet elements whose layer exists and is visible, in list order

Step 5 follows the element list exactly: the list order is the z-order, so
an element painted later covers earlier ones at the same place.

All geometry is computed in sheet space and mapped to device space through
the view transform; stroke widths, radii, dash lengths and font sizes are
multiplied by the zoom. Every frame is a full redraw.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .constants import (
    ARROW_HALF_ANGLE_DEG,
    ARROW_LENGTH,
    BORDER_COLOR,
    BORDER_WIDTH,
    DASH_PATTERNS,
    DEFAULT_DIMENSION_TEXT_SIZE,
    DEFAULT_FONT_FAMILY,
    DEFAULT_TEXT_COLOR,
    DEFAULT_TEXT_SIZE,
    DIMENSION_TEXT_OFFSET,
    DISPLAY_MULTIPLIER,
    GRID_DASH,
    GRID_PITCH,
    PAPER_FILL_COLOR,
    TITLE_BLOCK_MARGIN,
)
from .elements import DrawingElement
from .layers import DrawingLayer, LayerManager
from .sheet import DrawingSheet
from .surfaces import DrawingSurface, parse_color
from .title_block import TitleBlock
from .view_state import ViewState

logger = logging.getLogger(__name__)

GRID_LAYER = "Grid"


def dash_pattern(line_style: str | None) -> tuple[float, ...]:
    """Dash pattern for a line style; unknown or missing styles are solid."""
    return DASH_PATTERNS.get(line_style or "solid", ())


def arrow_strokes(from_x: float, from_y: float, to_x: float, to_y: float,
                  length: float = ARROW_LENGTH,
                  half_angle_deg: float = ARROW_HALF_ANGLE_DEG) -> list[tuple[float, float, float, float]]:
    """
    The two short strokes of an open arrowhead at (from_x, from_y), each
    `half_angle_deg` off the segment direction towards (to_x, to_y).
    """
    angle = math.atan2(to_y - from_y, to_x - from_x)
    half = math.radians(half_angle_deg)
    return [
        (from_x, from_y,
         from_x - length * math.cos(angle - half), from_y - length * math.sin(angle - half)),
        (from_x, from_y,
         from_x - length * math.cos(angle + half), from_y - length * math.sin(angle + half)),
    ]


@dataclass
class RenderResult:
    """What a frame contained."""
    painted: int = 0
    hidden: int = 0
    skipped: int = 0
    blank: bool = False


class SheetRenderer:
    """
    Paints sheets. Holds no sheet state of its own; everything it reads
    (sheet, layers, view) is passed in per frame.
    """

    def __init__(self, display_multiplier: float = DISPLAY_MULTIPLIER,
                 grid_pitch: float = GRID_PITCH,
                 title_block_margin: float = TITLE_BLOCK_MARGIN):
        self.display_multiplier = display_multiplier
        self.grid_pitch = grid_pitch
        self.title_block_margin = title_block_margin

    def render(self, sheet: DrawingSheet | None, surface: DrawingSurface,
               layers: LayerManager, view: ViewState) -> RenderResult:
        """Render one full frame. Never raises for bad element data."""
        surface.clear()
        if sheet is None:
            return RenderResult(blank=True)

        paper = sheet.paper_area(self.display_multiplier)
        self._draw_paper(surface, view, paper.width, paper.height)
        if view.show_grid:
            self._draw_grid(surface, view, layers, paper.width, paper.height)

        paper_width, paper_height = sheet.paper_dimensions
        title_block = TitleBlock(
            info=sheet.title_block,
            display_multiplier=self.display_multiplier,
            margin=self.title_block_margin,
        )
        title_block.draw(surface, view, paper_width, paper_height)

        result = RenderResult()
        for element in sheet.elements:
            if not layers.is_paintable(element):
                result.hidden += 1
                continue
            if self.draw_element(surface, view, element, layers.get(element.layer)):
                result.painted += 1
            else:
                result.skipped += 1
        return result

    # -------------------------------------------------------------------------
    # Frame furniture
    # -------------------------------------------------------------------------

    def _draw_paper(self, surface: DrawingSurface, view: ViewState,
                    width: float, height: float) -> None:
        x, y = view.to_device(0, 0)
        w, h = view.scale_length(width), view.scale_length(height)
        surface.set_fill_style(PAPER_FILL_COLOR)
        surface.fill_rect(x, y, w, h)
        surface.set_stroke_style(BORDER_COLOR, view.scale_length(BORDER_WIDTH))
        surface.set_line_dash(())
        surface.stroke_rect(x, y, w, h)

    def _draw_grid(self, surface: DrawingSurface, view: ViewState, layers: LayerManager,
                   width: float, height: float) -> None:
        grid_layer = layers.get(GRID_LAYER)
        if grid_layer is None or self.grid_pitch <= 0:
            return

        surface.set_stroke_style(grid_layer.color, view.scale_length(grid_layer.line_weight))
        surface.set_line_dash(tuple(view.scale_length(d) for d in GRID_DASH))

        pitch = self.grid_pitch
        for i in range(int(width // pitch) + 1):
            x = i * pitch
            surface.stroke_segment(*view.to_device(x, 0), *view.to_device(x, height))
        for i in range(int(height // pitch) + 1):
            y = i * pitch
            surface.stroke_segment(*view.to_device(0, y), *view.to_device(width, y))

        surface.set_line_dash(())

    # -------------------------------------------------------------------------
    # Elements
    # -------------------------------------------------------------------------

    def draw_element(self, surface: DrawingSurface, view: ViewState,
                     element: DrawingElement, layer: DrawingLayer) -> bool:
        """
        Paint a single element with layer fallbacks.

        Returns False (and paints nothing) for kinds without a painter, for
        elements with too few coordinates and for colors that do not parse.
        """
        painter = self._painters.get(element.kind)
        if painter is None:
            logger.debug("No painter for %s element %r; skipped", element.kind, element.id)
            return False
        if not element.has_valid_coordinates:
            logger.warning("Element %r has %d coordinates, %s needs more; skipped",
                           element.id, len(element.coordinates), element.kind)
            return False

        style = element.style
        stroke_color = style.color or layer.color
        try:
            for color in (stroke_color, style.fill_color):
                parse_color(color)
        except ValueError:
            logger.warning("Element %r has an unreadable color (%r, %r); skipped",
                           element.id, stroke_color, style.fill_color)
            return False

        surface.set_stroke_style(
            stroke_color,
            view.scale_length(style.line_weight or layer.line_weight),
        )
        surface.set_line_dash(tuple(view.scale_length(d) for d in dash_pattern(style.line_style)))
        try:
            painter(self, surface, view, element)
        finally:
            # Dash state must not leak into the next draw call
            surface.set_line_dash(())
        return True

    def _paint_line(self, surface, view, element) -> None:
        x1, y1, x2, y2 = element.coordinates[:4]
        surface.stroke_segment(*view.to_device(x1, y1), *view.to_device(x2, y2))

    def _paint_rectangle(self, surface, view, element) -> None:
        x, y, width, height = element.coordinates[:4]
        dx, dy = view.to_device(x, y)
        dw, dh = view.scale_length(width), view.scale_length(height)
        if element.style.fill_color:
            surface.set_fill_style(element.style.fill_color)
            surface.fill_rect(dx, dy, dw, dh)
        surface.stroke_rect(dx, dy, dw, dh)

    def _paint_circle(self, surface, view, element) -> None:
        cx, cy, radius = element.coordinates[:3]
        dx, dy = view.to_device(cx, cy)
        dr = view.scale_length(radius)
        if element.style.fill_color:
            surface.set_fill_style(element.style.fill_color)
            surface.fill_circle(dx, dy, dr)
        surface.stroke_circle(dx, dy, dr)

    def _paint_text(self, surface, view, element) -> None:
        """Anchored at (x, y) per style.text_align rather than always left-aligned."""
        style = element.style
        x, y = element.coordinates[:2]
        surface.set_fill_style(style.color or DEFAULT_TEXT_COLOR)
        surface.set_font(view.scale_length(style.font_size or DEFAULT_TEXT_SIZE),
                         style.font_family or DEFAULT_FONT_FAMILY)
        surface.draw_text(style.text or "", *view.to_device(x, y), align=style.text_align)

    def _paint_dimension(self, surface, view, element) -> None:
        style = element.style
        x1, y1, x2, y2 = element.coordinates[:4]
        surface.stroke_segment(*view.to_device(x1, y1), *view.to_device(x2, y2))

        if style.arrow == "arrow":
            strokes = arrow_strokes(x1, y1, x2, y2) + arrow_strokes(x2, y2, x1, y1)
            for ax1, ay1, ax2, ay2 in strokes:
                surface.stroke_segment(*view.to_device(ax1, ay1), *view.to_device(ax2, ay2))

        mid_x = (x1 + x2) / 2
        mid_y = (y1 + y2) / 2 - DIMENSION_TEXT_OFFSET
        surface.set_fill_style(style.color or DEFAULT_TEXT_COLOR)
        surface.set_font(view.scale_length(style.font_size or DEFAULT_DIMENSION_TEXT_SIZE),
                         DEFAULT_FONT_FAMILY)
        surface.draw_text(style.text or "", *view.to_device(mid_x, mid_y), align="center")

    _painters = {
        "line": _paint_line,
        "rectangle": _paint_rectangle,
        "circle": _paint_circle,
        "text": _paint_text,
        "dimension": _paint_dimension,
    }
