"""
Drawing sheets and multi-sheet sets.

A sheet is one page of a drawing set with its own paper size, scale,
title block and ordered element list. Sheets live in memory only; saving
them is the caller's business.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from .constants import DISPLAY_MULTIPLIER, PAPER_SIZES
from .elements import DrawingElement
from .title_block import TitleBlockInfo
from .view_area import ViewArea

if TYPE_CHECKING:
    from .layers import LayerManager

logger = logging.getLogger(__name__)

PaperSize = Literal["A0", "A1", "A2", "A3", "A4"]
Orientation = Literal["portrait", "landscape"]
SheetView = Literal["structural_plan", "foundation_plan", "beam_detail", "none"]


@dataclass
class DrawingSheet:
    """
    A single drawing sheet.

    Attributes:
        id: Sheet identifier
        name: Display name (e.g. "Foundation Plan")
        paper_size: ISO A-series size
        orientation: Recorded for the title/print hand-off; the paper box
                     always uses the size table's width x height
        scale: Ratio string such as "1:50"
        elements: Paint-ordered element list
        title_block: Title block contents
        view: Which generator feeds this sheet
    """
    id: str
    name: str
    paper_size: PaperSize = "A1"
    orientation: Orientation = "landscape"
    scale: str = "1:100"
    elements: list[DrawingElement] = field(default_factory=list)
    title_block: TitleBlockInfo = field(default_factory=TitleBlockInfo)
    view: SheetView = "none"

    def __post_init__(self):
        if self.paper_size not in PAPER_SIZES:
            raise ValueError(
                f"Unknown paper size {self.paper_size!r}; expected one of {sorted(PAPER_SIZES)}"
            )

    @property
    def paper_dimensions(self) -> tuple[float, float]:
        """Paper (width, height) in mm."""
        return PAPER_SIZES[self.paper_size]

    def paper_area(self, display_multiplier: float = DISPLAY_MULTIPLIER) -> ViewArea:
        """Paper rectangle in display units."""
        width, height = self.paper_dimensions
        return ViewArea(0, 0, width, height).scaled(display_multiplier)

    # -------------------------------------------------------------------------
    # Element editing
    # -------------------------------------------------------------------------

    def add_element(self, element: DrawingElement, layers: LayerManager | None = None) -> bool:
        """
        Append an element (on top of everything already on the sheet).

        Refused when the element's layer is locked. Unknown layers are
        accepted; the renderer skips them.
        """
        if layers is not None and not layers.is_editable(element.layer):
            logger.warning("Layer %r is locked; element %r not added", element.layer, element.id)
            return False
        self.elements.append(element)
        return True

    def remove_element(self, element_id: str, layers: LayerManager | None = None) -> bool:
        """Remove the first element with the given id unless its layer is locked."""
        for index, element in enumerate(self.elements):
            if element.id != element_id:
                continue
            if layers is not None and not layers.is_editable(element.layer):
                logger.warning("Layer %r is locked; element %r not removed", element.layer, element_id)
                return False
            del self.elements[index]
            return True
        return False

    @property
    def generated_elements(self) -> list[DrawingElement]:
        return [e for e in self.elements if e.generated]

    def replace_generated(self, elements: list[DrawingElement]) -> None:
        """
        Drop every previously generated element and append the new ones.

        Manually added elements keep their relative order and stay beneath
        the regenerated geometry.
        """
        kept = [e for e in self.elements if not e.generated]
        for element in elements:
            element.generated = True
        self.elements = kept + list(elements)


@dataclass
class SheetSet:
    """
    Ordered collection of sheets making up a drawing set.

    Only one sheet is displayed at a time; the index of that sheet lives in
    the view state, not here.
    """
    sheets: list[DrawingSheet] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.sheets)

    def __iter__(self):
        return iter(self.sheets)

    def add_sheet(self, sheet: DrawingSheet) -> None:
        self.sheets.append(sheet)

    def get(self, index: int) -> DrawingSheet | None:
        """Sheet at index, or None when the index is out of range."""
        if 0 <= index < len(self.sheets):
            return self.sheets[index]
        return None

    def by_id(self, sheet_id: str) -> DrawingSheet | None:
        for sheet in self.sheets:
            if sheet.id == sheet_id:
                return sheet
        return None

    def for_view(self, view: str) -> list[DrawingSheet]:
        return [sheet for sheet in self.sheets if sheet.view == view]
