"""
Drawing Generator Module

Turns structural members into CAD-style construction drawings and paints
them onto a 2D surface.

Features:
- Beam reinforcement details (1:25), foundation plans (1:50) and
  structural plans (1:100)
- Six standard layers with visibility and lock toggles
- Pan/zoom view transform with a background grid
- Standard title block on every sheet
- SVG, PNG (Pillow) and PDF (svglib + reportlab) output

Usage:
    from structdraw.drawing_generator import (
        LayerManager, RecordingSurface, SheetRenderer, ViewState,
    )

    renderer = SheetRenderer()
    renderer.render(sheet, RecordingSurface(), LayerManager(), ViewState())
"""

from .constants import (
    DISPLAY_MULTIPLIER,
    GRID_PITCH,
    PAPER_SIZES,
    ZOOM_MAX,
    ZOOM_MIN,
    ZOOM_STEP,
)
from .elements import DrawingElement, ElementStyle
from .generators import (
    generate_beam_detail,
    generate_elements,
    generate_foundation_plan,
    generate_structural_drawings,
    generate_structural_plan,
    parse_scale,
)
from .layers import DrawingLayer, LayerManager, standard_layers
from .renderer import RenderResult, SheetRenderer
from .sheet import DrawingSheet, SheetSet
from .surfaces import DrawingSurface, RasterSurface, RecordingSurface, SvgSurface, parse_color
from .title_block import TitleBlock, TitleBlockInfo
from .view_area import ViewArea
from .view_state import ViewState, snap_to_grid

__all__ = [
    # Data model
    'DrawingElement',
    'ElementStyle',
    'DrawingLayer',
    'DrawingSheet',
    'SheetSet',
    'TitleBlock',
    'TitleBlockInfo',
    'ViewArea',
    # Layers, view and rendering
    'LayerManager',
    'ViewState',
    'SheetRenderer',
    'RenderResult',
    'DrawingSurface',
    'RecordingSurface',
    'SvgSurface',
    'RasterSurface',
    # Functions
    'generate_beam_detail',
    'generate_foundation_plan',
    'generate_structural_plan',
    'generate_elements',
    'generate_structural_drawings',
    'parse_scale',
    'parse_color',
    'snap_to_grid',
    'standard_layers',
    # Constants
    'PAPER_SIZES',
    'DISPLAY_MULTIPLIER',
    'GRID_PITCH',
    'ZOOM_MIN',
    'ZOOM_MAX',
    'ZOOM_STEP',
]
