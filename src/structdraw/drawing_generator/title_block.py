"""
Title block for structural construction drawings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

from .constants import (
    BORDER_COLOR,
    BORDER_WIDTH,
    DEFAULT_FONT_FAMILY,
    DEFAULT_TEXT_COLOR,
    DISPLAY_MULTIPLIER,
    TITLE_BLOCK_FIELD_FONT,
    TITLE_BLOCK_HEIGHT,
    TITLE_BLOCK_MARGIN,
    TITLE_BLOCK_ROW1,
    TITLE_BLOCK_ROW2,
    TITLE_BLOCK_TEXT_INSET,
    TITLE_BLOCK_TITLE_FONT,
    TITLE_BLOCK_WIDTH,
)
from .view_area import ViewArea

if TYPE_CHECKING:
    from .surfaces import DrawingSurface
    from .view_state import ViewState


@dataclass
class TitleBlockInfo:
    """Information displayed in the title block."""
    project_name: str = "Structural Analysis Project"
    drawing_title: str = ""
    drawing_number: str = ""
    revision: str = "A"
    drawn_by: str = "Engineer"
    checked_by: str = "Checker"
    approved_by: str = "Approver"
    date: str | None = None
    scale: str = ""

    def __post_init__(self):
        if self.date is None:
            self.date = date.today().strftime("%d/%m/%Y")


@dataclass
class TitleBlock:
    """
    Lays out and paints a sheet's title block.

    The block is a fixed 200 x 80 panel (times the display multiplier),
    anchored a fixed margin away from the bottom-right paper corner on every
    paper size:

        +-----------------------------------+
        |           PROJECT NAME            |
        +-----------------------------------+  row 1 (20)
        |           DRAWING TITLE           |
        +-----------------+-----------------+  row 2 (40)
        | Drawn: ...      |         Dwg: ...|
        | Date: ...       |         Rev: ...|
        | Scale: ...      |                 |
        +-----------------+-----------------+
    """
    info: TitleBlockInfo = field(default_factory=TitleBlockInfo)
    display_multiplier: float = DISPLAY_MULTIPLIER
    margin: float = TITLE_BLOCK_MARGIN

    def area_for(self, paper_width: float, paper_height: float) -> ViewArea:
        """Title block rectangle in display units for the given paper size (mm)."""
        k = self.display_multiplier
        paper = ViewArea(0, 0, paper_width, paper_height).scaled(k)
        return paper.anchor_bottom_right(TITLE_BLOCK_WIDTH * k, TITLE_BLOCK_HEIGHT * k, self.margin)

    def text_fields(self, area: ViewArea) -> list[tuple[str, float, float, float, str]]:
        """
        The seven text fields as (text, x, y, font_size, align) in display units.
        """
        k = self.display_multiplier
        info = self.info
        x, y = area.x, area.y
        inset = TITLE_BLOCK_TEXT_INSET
        title_font = TITLE_BLOCK_TITLE_FONT * k
        field_font = TITLE_BLOCK_FIELD_FONT * k
        return [
            (info.project_name, area.center_x, y + 12 * k, title_font, "center"),
            (info.drawing_title, area.center_x, y + 32 * k, title_font, "center"),
            (f"Drawn: {info.drawn_by}", x + inset, y + 50 * k, field_font, "left"),
            (f"Date: {info.date}", x + inset, y + 62 * k, field_font, "left"),
            (f"Scale: {info.scale}", x + inset, y + 74 * k, field_font, "left"),
            (f"Dwg: {info.drawing_number}", area.right - inset, y + 50 * k, field_font, "right"),
            (f"Rev: {info.revision}", area.right - inset, y + 62 * k, field_font, "right"),
        ]

    def draw(self, surface: DrawingSurface, view: ViewState,
             paper_width: float, paper_height: float) -> None:
        """Paint border, dividers and text fields through the view transform."""
        k = self.display_multiplier
        area = self.area_for(paper_width, paper_height)
        row1_y = area.y + TITLE_BLOCK_ROW1 * k
        row2_y = area.y + TITLE_BLOCK_ROW2 * k

        surface.set_stroke_style(BORDER_COLOR, view.scale_length(BORDER_WIDTH))
        surface.set_line_dash(())
        x, y = view.to_device(area.x, area.y)
        surface.stroke_rect(x, y, view.scale_length(area.width), view.scale_length(area.height))

        dividers = [
            (area.x, row1_y, area.right, row1_y),
            (area.x, row2_y, area.right, row2_y),
            (area.center_x, row1_y, area.center_x, area.bottom),
        ]
        for x1, y1, x2, y2 in dividers:
            surface.stroke_segment(*view.to_device(x1, y1), *view.to_device(x2, y2))

        surface.set_fill_style(DEFAULT_TEXT_COLOR)
        for text, tx, ty, font_size, align in self.text_fields(area):
            surface.set_font(view.scale_length(font_size), DEFAULT_FONT_FAMILY)
            surface.draw_text(text, *view.to_device(tx, ty), align=align)
