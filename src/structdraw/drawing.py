"""
Structural drawing workspace.

Ties the pieces together the way a host UI uses them: a drawing set built
from the caller's configuration, a layer manager, view state and a drawing
surface. Every state-changing action redraws the active sheet in full.

Usage:
    from structdraw import StructuralDrawing, BeamInput

    drawing = StructuralDrawing(structural_elements=[
        BeamInput(id="1", dimensions={"width": 400, "height": 300, "length": 6000},
                  reinforcement={"main": {"diameter": 16, "count": 4}}),
    ])
    drawing.set_active_sheet(2)
    drawing.zoom_in()
    drawing.export_png("beam_details.png")
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from .config import DrawingConfig
from .drawing_generator.elements import DrawingElement
from .drawing_generator.generators import generate_structural_drawings
from .drawing_generator.renderer import RenderResult, SheetRenderer
from .drawing_generator.sheet import DrawingSheet
from .drawing_generator.surfaces import DrawingSurface, RasterSurface, SvgSurface
from .drawing_generator.view_state import ViewState, snap_to_grid
from .structural import ProjectInfo, StructuralElementInput

logger = logging.getLogger(__name__)

# Size of the drawing surface when the host does not provide one
DEFAULT_SURFACE_SIZE = (800, 600)


class StructuralDrawing:
    """
    An interactive structural drawing set.

    Attributes:
        config: Caller-owned configuration the set was built from
        layers: Layer manager shared by all sheets
        sheets: The drawing set
        view: Zoom/pan/active sheet/grid state
        surface: Surface the active sheet is drawn on
        last_frame: Result of the most recent redraw
        frame_count: Number of redraws so far
    """

    def __init__(
        self,
        config: DrawingConfig | None = None,
        surface: DrawingSurface | None = None,
        structural_elements: Iterable[StructuralElementInput] | None = None,
        project_info: ProjectInfo | None = None,
    ):
        self.config = config or DrawingConfig.default()
        self.project_info = project_info
        self.layers = self.config.build_layers()
        self.sheets = self.config.build_sheets(project_info)
        self.view: ViewState = self.config.render.create_view_state()
        self.renderer = SheetRenderer(
            display_multiplier=self.config.render.display_multiplier,
            grid_pitch=self.config.render.grid_pitch,
            title_block_margin=self.config.render.title_block_margin,
        )
        self.surface = surface or SvgSurface(*DEFAULT_SURFACE_SIZE)
        self.last_frame = RenderResult(blank=True)
        self.frame_count = 0

        if structural_elements:
            self.generate(structural_elements)
        else:
            self.redraw()

    @property
    def active_sheet(self) -> DrawingSheet | None:
        return self.sheets.get(self.view.active_sheet_index)

    def redraw(self) -> RenderResult:
        """Full redraw of the active sheet onto the surface."""
        self.last_frame = self.renderer.render(self.active_sheet, self.surface, self.layers, self.view)
        self.frame_count += 1
        return self.last_frame

    # -------------------------------------------------------------------------
    # Content
    # -------------------------------------------------------------------------

    def generate(self, structural_elements: Iterable[StructuralElementInput]) -> None:
        """Regenerate all generator-fed sheets from the given members."""
        generate_structural_drawings(structural_elements, self.sheets)
        self.redraw()

    def add_element(self, element: DrawingElement) -> bool:
        """Add an element to the active sheet (refused on locked layers)."""
        sheet = self.active_sheet
        if sheet is None:
            return False
        added = sheet.add_element(element, self.layers)
        if added:
            self.redraw()
        return added

    def remove_element(self, element_id: str) -> bool:
        sheet = self.active_sheet
        if sheet is None:
            return False
        removed = sheet.remove_element(element_id, self.layers)
        if removed:
            self.redraw()
        return removed

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def zoom_in(self) -> float:
        zoom = self.view.zoom_in()
        self.redraw()
        return zoom

    def zoom_out(self) -> float:
        zoom = self.view.zoom_out()
        self.redraw()
        return zoom

    def pan_by(self, dx: float, dy: float) -> None:
        self.view.pan_by(dx, dy)
        self.redraw()

    def reset_view(self) -> None:
        self.view.reset_view()
        self.redraw()

    def set_active_sheet(self, index: int) -> int:
        index = self.view.set_active_sheet(index, len(self.sheets))
        self.redraw()
        return index

    def toggle_grid(self) -> bool:
        shown = self.view.toggle_grid()
        self.redraw()
        return shown

    def toggle_layer(self, name: str) -> bool:
        visible = self.layers.toggle_visibility(name)
        self.redraw()
        return visible

    def toggle_layer_lock(self, name: str) -> bool:
        locked = self.layers.toggle_lock(name)
        self.redraw()
        return locked

    def snap_point(self, device_x: float, device_y: float) -> tuple[float, float]:
        """Sheet-space grid point nearest to a device (pointer) position."""
        return snap_to_grid(self.view.to_sheet(device_x, device_y), self.renderer.grid_pitch)

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def _render_copy(self, surface: DrawingSurface, sheet: DrawingSheet | None = None,
                     view: ViewState | None = None) -> RenderResult:
        return self.renderer.render(
            sheet if sheet is not None else self.active_sheet,
            surface,
            self.layers,
            view if view is not None else self.view,
        )

    def export_svg(self, filepath: str | Path) -> None:
        """Export the current view (zoom, pan, layers) as an SVG file."""
        if self.active_sheet is None:
            raise ValueError("No sheets to export")
        surface = SvgSurface(self.surface.width, self.surface.height)
        self._render_copy(surface)
        surface.save(filepath)
        logger.info("Exported SVG: %s", filepath)

    def export_png(self, filepath: str | Path) -> None:
        """Raster snapshot of the current view."""
        if self.active_sheet is None:
            raise ValueError("No sheets to export")
        surface = RasterSurface(int(self.surface.width), int(self.surface.height))
        self._render_copy(surface)
        surface.save(filepath)
        logger.info("Exported PNG: %s", filepath)

    def sheet_svg(self, sheet: DrawingSheet) -> str:
        """Whole-paper SVG of a sheet at zoom 1, as handed to print."""
        paper = sheet.paper_area(self.renderer.display_multiplier)
        surface = SvgSurface(paper.width, paper.height)
        view = ViewState(show_grid=self.view.show_grid)
        self._render_copy(surface, sheet=sheet, view=view)
        return surface.to_svg()

    def export_pdf(self, filepath: str | Path, all_sheets: bool = False) -> None:
        """
        Print hand-off: write the active sheet (or every sheet, one per page)
        to PDF.
        """
        from reportlab.graphics import renderPDF
        from reportlab.pdfgen import canvas
        from svglib.svglib import svg2rlg

        if all_sheets:
            sheets = list(self.sheets)
        else:
            sheets = [self.active_sheet] if self.active_sheet is not None else []
        if not sheets:
            raise ValueError("No sheets to export")

        pdf = None
        for sheet in sheets:
            # Write SVG to a temporary file for svglib to read
            with tempfile.NamedTemporaryFile(mode="w", suffix=".svg",
                                             encoding="utf-8", delete=False) as tmp:
                tmp.write(self.sheet_svg(sheet))
                tmp_path = tmp.name
            try:
                page = svg2rlg(tmp_path)
            finally:
                os.unlink(tmp_path)
            if page is None:
                raise ValueError(f"Failed to convert sheet {sheet.id} for printing")

            if pdf is None:
                pdf = canvas.Canvas(str(filepath), pagesize=(page.width, page.height))
            else:
                pdf.setPageSize((page.width, page.height))
            renderPDF.draw(page, pdf, 0, 0)
            pdf.showPage()

        pdf.save()
        logger.info("Exported PDF: %s (%d sheet(s))", filepath, len(sheets))
