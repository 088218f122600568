"""
Element generators - structural members to sheet-space drawing elements.

Every generator is a pure function of one structural member: it returns a
fresh element list and never looks at what is already on a sheet. Model
dimensions are in mm and are multiplied by the generator scale, so no
model-space value ever reaches an element's coordinates (labels keep the
real-world numbers as text).

Generators and their default scales:
- generate_beam_detail       1:25   elevation + cross-section with rebar
- generate_foundation_plan   1:50   footing outline with bar grid
- generate_structural_plan   1:100  beams and columns in plan

Bad input is not rejected here: missing reinforcement just omits the bars,
non-positive sizes give degenerate geometry, and bar/stirrup counts of one
or less collapse to a single centred bar or stirrup.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

import numpy as np

from ..structural import (
    BeamInput,
    ColumnInput,
    FoundationInput,
    StructuralElementInput,
)
from .constants import (
    BEAM_DETAIL_ORIGIN,
    BEAM_DETAIL_SCALE,
    BEAM_DIMENSION_OFFSET,
    BEAM_NOTE_OFFSET,
    BEAM_SECTION_GAP,
    BEAM_TITLE_OFFSET,
    COLUMN_FILL,
    CONCRETE_COVER_MM,
    DEFAULT_FONT_FAMILY,
    DEFAULT_TEXT_COLOR,
    DIMENSION_COLOR,
    FOUNDATION_FILL,
    FOUNDATION_GRID_SPACING_MM,
    FOUNDATION_PLAN_OFFSET,
    FOUNDATION_PLAN_SCALE,
    PLAN_LABEL_OFFSET,
    REINFORCEMENT_COLOR,
    STRUCTURAL_PLAN_OFFSET,
    STRUCTURAL_PLAN_SCALE,
    STRUCTURE_COLOR,
)
from .elements import DrawingElement

if TYPE_CHECKING:
    from .sheet import SheetSet

logger = logging.getLogger(__name__)


# =============================================================================
# HELPERS
# =============================================================================

def parse_scale(scale_text: str, default: float | None = None) -> float | None:
    """
    Convert a drawing scale string to a multiplier.

    "1:25" -> 0.04, "1/50" -> 0.02. Returns `default` for anything that
    cannot be parsed or has a non-positive denominator.
    """
    for separator in (":", "/"):
        if separator in scale_text:
            left, _, right = scale_text.partition(separator)
            try:
                numerator, denominator = float(left), float(right)
            except ValueError:
                break
            if denominator > 0:
                return numerator / denominator
            break
    logger.warning("Unparseable drawing scale %r, using %s", scale_text, default)
    return default


def format_dimension(value: float) -> str:
    """Real-world dimension label: whole numbers without decimals."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def distribute(start: float, span: float, count: int) -> list[float]:
    """
    Evenly spaced positions from `start` to `start + span` inclusive.

    A count of one or less gives a single position in the middle of the span
    instead of dividing by (count - 1).
    """
    if count <= 1:
        return [start + span / 2]
    return [float(p) for p in np.linspace(start, start + span, int(count))]


def interior_divisions(start: float, span: float, divisions: int) -> list[float]:
    """
    Positions of the (divisions - 1) interior lines that cut `span` into
    `divisions` equal parts. One division or less gives a single centred line.
    """
    if divisions <= 1:
        return [start + span / 2]
    return [float(p) for p in np.linspace(start, start + span, divisions + 1)[1:-1]]


# =============================================================================
# BEAM DETAIL (elevation + section)
# =============================================================================

def generate_beam_detail(
    beam: BeamInput,
    scale: float = BEAM_DETAIL_SCALE,
    origin: tuple[float, float] = BEAM_DETAIL_ORIGIN,
) -> list[DrawingElement]:
    """
    Beam reinforcement detail: elevation, cross-section, rebar, stirrups,
    overall dimensions and labels.

    The section sits BEAM_SECTION_GAP to the right of the elevation so the
    two views never overlap.
    """
    base_x, base_y = origin
    dims = beam.dimensions
    length = dims.length * scale
    height = dims.height * scale
    width = dims.width * scale
    prefix = f"beam-{beam.id}"

    elements = [
        DrawingElement.rectangle(
            f"{prefix}-elevation", "Structure", base_x, base_y, length, height,
            line_weight=0.5, line_style="solid", color=STRUCTURE_COLOR,
        ),
    ]

    section_x = base_x + length + BEAM_SECTION_GAP
    elements.append(
        DrawingElement.rectangle(
            f"{prefix}-section", "Structure", section_x, base_y, width, height,
            line_weight=0.5, line_style="solid", color=STRUCTURE_COLOR,
        )
    )

    rebar = beam.reinforcement
    if rebar:
        # Bottom layer of main bars, inside the cover on both sides
        cover = CONCRETE_COVER_MM * scale
        bar_y = base_y + height - cover
        radius = rebar.main.diameter * scale / 2
        positions = distribute(section_x + cover, width - 2 * cover, rebar.main.count)
        for i, bar_x in enumerate(positions):
            elements.append(
                DrawingElement.circle(
                    f"{prefix}-rebar-{i}", "Reinforcement", bar_x, bar_y, radius,
                    line_weight=0.25, line_style="solid",
                    color=REINFORCEMENT_COLOR, fill_color=REINFORCEMENT_COLOR,
                )
            )

        if rebar.shear:
            elements.extend(_stirrup_lines(beam, scale, base_x, base_y))

    elements.extend([
        DrawingElement.dimension(
            f"{prefix}-length-dim", "Dimensions",
            base_x, base_y - BEAM_DIMENSION_OFFSET,
            base_x + length, base_y - BEAM_DIMENSION_OFFSET,
            format_dimension(dims.length),
            line_weight=0.18, color=DIMENSION_COLOR, font_size=2.5, arrow="arrow",
        ),
        DrawingElement.dimension(
            f"{prefix}-height-dim", "Dimensions",
            base_x - BEAM_DIMENSION_OFFSET, base_y,
            base_x - BEAM_DIMENSION_OFFSET, base_y + height,
            format_dimension(dims.height),
            line_weight=0.18, color=DIMENSION_COLOR, font_size=2.5, arrow="arrow",
        ),
        DrawingElement.text(
            f"{prefix}-title", "Text", base_x, base_y - BEAM_TITLE_OFFSET,
            f"BEAM B{beam.id} - {format_dimension(dims.width)}x{format_dimension(dims.height)}",
            font_size=4, font_family=DEFAULT_FONT_FAMILY, color=DEFAULT_TEXT_COLOR,
        ),
        DrawingElement.text(
            f"{prefix}-material", "Text", base_x, base_y - BEAM_TITLE_OFFSET + 6,
            f"{beam.materials.concrete.grade} / {beam.materials.steel.grade}",
            font_size=2.5, font_family=DEFAULT_FONT_FAMILY, color=DEFAULT_TEXT_COLOR,
        ),
    ])

    if rebar:
        note_y = base_y + height + BEAM_NOTE_OFFSET
        elements.append(
            DrawingElement.text(
                f"{prefix}-reinforcement", "Text", base_x, note_y,
                f"Main: {rebar.main.count}D{format_dimension(rebar.main.diameter)}",
                font_size=2.5, font_family=DEFAULT_FONT_FAMILY, color=DEFAULT_TEXT_COLOR,
            )
        )
        if rebar.shear:
            elements.append(
                DrawingElement.text(
                    f"{prefix}-shear-note", "Text", base_x, note_y + 5,
                    f"Stirrup: D{format_dimension(rebar.shear.diameter)}"
                    f"-{format_dimension(rebar.shear.spacing)}",
                    font_size=2.5, font_family=DEFAULT_FONT_FAMILY, color=DEFAULT_TEXT_COLOR,
                )
            )

    return elements


def _stirrup_lines(beam: BeamInput, scale: float, base_x: float, base_y: float) -> list[DrawingElement]:
    """Dashed vertical stirrups along the elevation at the shear pitch."""
    shear = beam.reinforcement.shear
    if shear.spacing <= 0:
        logger.debug("Beam %s: stirrup spacing %s, stirrups omitted", beam.id, shear.spacing)
        return []

    length = beam.dimensions.length * scale
    height = beam.dimensions.height * scale
    stirrup_count = math.floor(beam.dimensions.length / shear.spacing)

    lines = []
    for i, x in enumerate(interior_divisions(base_x, length, stirrup_count), start=1):
        lines.append(
            DrawingElement.line(
                f"beam-{beam.id}-stirrup-{i}", "Reinforcement", x, base_y, x, base_y + height,
                line_weight=0.25, line_style="dashed", color=REINFORCEMENT_COLOR,
            )
        )
    return lines


# =============================================================================
# FOUNDATION PLAN
# =============================================================================

def generate_foundation_plan(
    foundation: FoundationInput,
    scale: float = FOUNDATION_PLAN_SCALE,
    offset: float = FOUNDATION_PLAN_OFFSET,
) -> list[DrawingElement]:
    """Footing outline (translucent fill), optional bar grid and centred label."""
    dims = foundation.dimensions
    base_x = foundation.position.x * scale + offset
    base_y = foundation.position.y * scale + offset
    width = dims.width * scale
    length = dims.length * scale
    prefix = f"foundation-{foundation.id}"

    elements = [
        DrawingElement.rectangle(
            prefix, "Structure", base_x, base_y, width, length,
            line_weight=0.5, line_style="solid", color=STRUCTURE_COLOR,
            fill_color=FOUNDATION_FILL,
        ),
    ]

    if foundation.reinforcement:
        spacing = foundation.reinforcement.main.spacing or FOUNDATION_GRID_SPACING_MM
        if spacing > 0:
            v_lines = math.floor(dims.width / spacing)
            for i in range(1, v_lines):
                x = base_x + i * spacing * scale
                elements.append(
                    DrawingElement.line(
                        f"{prefix}-grid-v-{i}", "Reinforcement", x, base_y, x, base_y + length,
                        line_weight=0.18, line_style="dotted", color=REINFORCEMENT_COLOR,
                    )
                )
            h_lines = math.floor(dims.length / spacing)
            for i in range(1, h_lines):
                y = base_y + i * spacing * scale
                elements.append(
                    DrawingElement.line(
                        f"{prefix}-grid-h-{i}", "Reinforcement", base_x, y, base_x + width, y,
                        line_weight=0.18, line_style="dotted", color=REINFORCEMENT_COLOR,
                    )
                )
        else:
            logger.debug("Foundation %s: grid spacing %s, grid omitted", foundation.id, spacing)

    elements.append(
        DrawingElement.text(
            f"{prefix}-label", "Text", base_x + width / 2, base_y + length / 2,
            f"F{foundation.id}",
            font_size=3, font_family=DEFAULT_FONT_FAMILY, color=DEFAULT_TEXT_COLOR,
            text_align="center",
        )
    )
    return elements


# =============================================================================
# STRUCTURAL PLAN
# =============================================================================

def generate_structural_plan(
    element: StructuralElementInput,
    scale: float = STRUCTURAL_PLAN_SCALE,
    offset: float = STRUCTURAL_PLAN_OFFSET,
) -> list[DrawingElement]:
    """
    Plan symbol for one member: beams as thin outlines (length x width),
    columns as filled squares. Other kinds have no plan symbol.
    """
    base_x = element.position.x * scale + offset
    base_y = element.position.y * scale + offset
    dims = element.dimensions

    if isinstance(element, BeamInput):
        return [
            DrawingElement.rectangle(
                f"plan-beam-{element.id}", "Structure", base_x, base_y,
                dims.length * scale, dims.width * scale,
                line_weight=0.3, line_style="solid", color=STRUCTURE_COLOR,
            ),
            DrawingElement.text(
                f"plan-beam-{element.id}-label", "Text", base_x, base_y - PLAN_LABEL_OFFSET,
                f"B{element.id}",
                font_size=2, font_family=DEFAULT_FONT_FAMILY, color=DEFAULT_TEXT_COLOR,
            ),
        ]

    if isinstance(element, ColumnInput):
        side = dims.width * scale
        return [
            DrawingElement.rectangle(
                f"plan-column-{element.id}", "Structure", base_x, base_y, side, side,
                line_weight=0.5, line_style="solid", color=STRUCTURE_COLOR,
                fill_color=COLUMN_FILL,
            ),
            DrawingElement.text(
                f"plan-column-{element.id}-label", "Text",
                base_x + side / 2, base_y + side / 2,
                f"C{element.id}",
                font_size=1.5, font_family=DEFAULT_FONT_FAMILY, color=DEFAULT_TEXT_COLOR,
            ),
        ]

    return []


# =============================================================================
# DISPATCH
# =============================================================================

def _beam_only(element: StructuralElementInput, scale: float) -> list[DrawingElement]:
    return generate_beam_detail(element, scale) if isinstance(element, BeamInput) else []


def _foundation_only(element: StructuralElementInput, scale: float) -> list[DrawingElement]:
    return generate_foundation_plan(element, scale) if isinstance(element, FoundationInput) else []


# view -> (generator, default scale)
VIEW_GENERATORS: dict[str, tuple[Callable[[StructuralElementInput, float], list[DrawingElement]], float]] = {
    "beam_detail": (_beam_only, BEAM_DETAIL_SCALE),
    "foundation_plan": (_foundation_only, FOUNDATION_PLAN_SCALE),
    "structural_plan": (generate_structural_plan, STRUCTURAL_PLAN_SCALE),
}


def generate_elements(
    element: StructuralElementInput,
    view: str,
    scale: float | None = None,
) -> list[DrawingElement]:
    """
    Elements for one member in one sheet view.

    Members the view does not show (e.g. a column on a beam-detail sheet)
    and unknown views give an empty list.
    """
    entry = VIEW_GENERATORS.get(view)
    if entry is None:
        return []
    generator, default_scale = entry
    return generator(element, default_scale if scale is None else scale)


def generate_structural_drawings(
    elements: Iterable[StructuralElementInput],
    sheet_set: SheetSet,
) -> None:
    """
    (Re)generate every generator-fed sheet of a drawing set.

    Each sheet with a known view gets the concatenated output for all members,
    in input order, at the sheet's own scale. Previously generated elements
    on those sheets are replaced; manually added ones are kept.
    """
    members = list(elements)
    for sheet in sheet_set:
        entry = VIEW_GENERATORS.get(sheet.view)
        if entry is None:
            continue
        scale = parse_scale(sheet.scale, default=entry[1])
        generated = [
            drawing_element
            for member in members
            for drawing_element in generate_elements(member, sheet.view, scale)
        ]
        sheet.replace_generated(generated)
        logger.debug("Sheet %s (%s): %d generated elements", sheet.id, sheet.view, len(generated))
