"""
Tests for the structural element generators.

Tests cover:
- Beam reinforcement detail geometry (elevation, section, bars, stirrups)
- Foundation plan outline, bar grid and label
- Structural plan symbols for beams and columns
- Scale parsing and per-sheet routing
- Degenerate input (missing reinforcement, counts of one or less)
"""

import pytest

from structdraw.drawing_generator.elements import DrawingElement
from structdraw.drawing_generator.generators import (
    distribute,
    format_dimension,
    generate_beam_detail,
    generate_elements,
    generate_foundation_plan,
    generate_structural_drawings,
    generate_structural_plan,
    interior_divisions,
    parse_scale,
)
from structdraw.drawing_generator.sheet import DrawingSheet, SheetSet
from structdraw.structural import BeamInput, FoundationInput, SlabInput, WallInput


def by_id(elements, element_id):
    matches = [e for e in elements if e.id == element_id]
    assert len(matches) == 1, f"expected one element {element_id!r}, got {len(matches)}"
    return matches[0]


def ids_starting(elements, prefix):
    return [e for e in elements if e.id.startswith(prefix)]


# =============================================================================
# HELPERS
# =============================================================================


class TestParseScale:
    """Tests for parse_scale."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("1:25", 0.04),
            ("1:50", 0.02),
            ("1:100", 0.01),
            ("1/50", 0.02),
            ("2:1", 2.0),
        ],
    )
    def test_valid(self, text, expected):
        assert parse_scale(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["", "NTS", "1:0", "a:b", "1:-5"])
    def test_fallback(self, text):
        """Unparseable scales give the default."""
        assert parse_scale(text, default=0.5) == 0.5


class TestFormatDimension:
    @pytest.mark.parametrize(
        "value, expected",
        [(6000, "6000"), (6000.0, "6000"), (12.5, "12.5"), (0, "0")],
    )
    def test_format(self, value, expected):
        assert format_dimension(value) == expected


class TestDistribute:
    """Even spacing used for bar positions."""

    def test_endpoints_included(self):
        assert distribute(0, 12, 4) == pytest.approx([0, 4, 8, 12])

    @pytest.mark.parametrize("count", [1, 0, -3])
    def test_count_one_or_less_is_centred(self, count):
        """No division by (count - 1); a single centred position instead."""
        assert distribute(10, 20, count) == pytest.approx([20])

    def test_interior_divisions(self):
        assert interior_divisions(0, 10, 5) == pytest.approx([2, 4, 6, 8])

    @pytest.mark.parametrize("divisions", [1, 0])
    def test_interior_single(self, divisions):
        assert interior_divisions(0, 10, divisions) == pytest.approx([5])


# =============================================================================
# BEAM DETAIL
# =============================================================================


class TestBeamDetail:
    """Tests for generate_beam_detail at the default 1:25 scale."""

    def test_elevation(self, beam):
        """Elevation at the fixed origin, length x height scaled."""
        elevation = by_id(generate_beam_detail(beam), "beam-1-elevation")
        assert elevation.kind == "rectangle"
        assert elevation.layer == "Structure"
        assert elevation.coordinates == pytest.approx((100, 200, 240, 12))

    def test_section_right_of_elevation(self, beam):
        """Section sits a fixed gap to the right and never overlaps the elevation."""
        elements = generate_beam_detail(beam)
        elevation = by_id(elements, "beam-1-elevation")
        section = by_id(elements, "beam-1-section")
        assert section.coordinates == pytest.approx((440, 200, 16, 12))
        assert section.coordinates[0] > elevation.coordinates[0] + elevation.coordinates[2]

    def test_main_bars(self, beam):
        """Four bars evenly spread inside the cover, at the bottom of the section."""
        bars = ids_starting(generate_beam_detail(beam), "beam-1-rebar-")
        assert [b.id for b in bars] == [f"beam-1-rebar-{i}" for i in range(4)]
        assert all(b.kind == "circle" and b.layer == "Reinforcement" for b in bars)

        xs = [b.coordinates[0] for b in bars]
        assert xs == pytest.approx([441.6, 445.8666667, 450.1333333, 454.4])
        for bar in bars:
            assert bar.coordinates[1] == pytest.approx(210.4)
            assert bar.coordinates[2] == pytest.approx(0.32)
            assert bar.style.fill_color == bar.style.color

    def test_single_bar_is_centred(self, beam):
        beam.reinforcement.main.count = 1
        bars = ids_starting(generate_beam_detail(beam), "beam-1-rebar-")
        assert len(bars) == 1
        assert bars[0].coordinates[0] == pytest.approx(448)

    def test_float_bar_count(self):
        """A whole-number float count from a JSON host draws the same bars."""
        beam = BeamInput(id="1", dimensions={"width": 400, "height": 300, "length": 6000},
                         position={"x": 1000, "y": 2000, "z": 0},
                         reinforcement={"main": {"diameter": 16, "count": 4.0}})
        elements = generate_beam_detail(beam)
        assert len(ids_starting(elements, "beam-1-rebar-")) == 4
        assert by_id(elements, "beam-1-reinforcement").style.text == "Main: 4D16"

    def test_float_count_set_after_construction(self, beam):
        beam.reinforcement.main.count = 3.0
        assert len(ids_starting(generate_beam_detail(beam), "beam-1-rebar-")) == 3

    @pytest.mark.parametrize("count", [0, -2])
    def test_non_positive_count(self, beam, count):
        """Counts below one never raise; they give one centred bar."""
        beam.reinforcement.main.count = count
        bars = ids_starting(generate_beam_detail(beam), "beam-1-rebar-")
        assert len(bars) == 1
        assert bars[0].coordinates[0] == pytest.approx(448)

    def test_stirrups(self, beam):
        """6000 / 150 = 40 divisions, 39 interior dashed stirrups at 6 mm pitch."""
        stirrups = ids_starting(generate_beam_detail(beam), "beam-1-stirrup-")
        assert len(stirrups) == 39
        assert stirrups[0].id == "beam-1-stirrup-1"
        xs = [s.coordinates[0] for s in stirrups]
        assert xs[0] == pytest.approx(106)
        assert xs[-1] == pytest.approx(334)
        for stirrup in stirrups:
            x1, y1, x2, y2 = stirrup.coordinates
            assert x1 == pytest.approx(x2)
            assert (y1, y2) == pytest.approx((200, 212))
            assert stirrup.style.line_style == "dashed"

    def test_single_stirrup(self, beam):
        """Spacing equal to the length gives one stirrup at mid-span."""
        beam.reinforcement.shear.spacing = 6000
        stirrups = ids_starting(generate_beam_detail(beam), "beam-1-stirrup-")
        assert len(stirrups) == 1
        assert stirrups[0].coordinates[0] == pytest.approx(220)

    def test_zero_stirrup_spacing_omits_stirrups(self, beam):
        beam.reinforcement.shear.spacing = 0
        elements = generate_beam_detail(beam)
        assert ids_starting(elements, "beam-1-stirrup-") == []

    def test_dimensions_carry_real_values(self, beam):
        """Dimension labels are model mm, geometry is sheet mm."""
        elements = generate_beam_detail(beam)
        length_dim = by_id(elements, "beam-1-length-dim")
        height_dim = by_id(elements, "beam-1-height-dim")

        assert length_dim.kind == "dimension"
        assert length_dim.coordinates == pytest.approx((100, 170, 340, 170))
        assert length_dim.style.text == "6000"
        assert length_dim.style.arrow == "arrow"

        assert height_dim.coordinates == pytest.approx((70, 200, 70, 212))
        assert height_dim.style.text == "300"

    def test_labels(self, beam):
        elements = generate_beam_detail(beam)
        title = by_id(elements, "beam-1-title")
        assert title.style.text == "BEAM B1 - 400x300"
        assert title.coordinates == pytest.approx((100, 140))
        assert by_id(elements, "beam-1-material").style.text == "K-300 / BJTD-40"
        assert by_id(elements, "beam-1-reinforcement").style.text == "Main: 4D16"
        assert by_id(elements, "beam-1-shear-note").style.text == "Stirrup: D10-150"

    def test_without_reinforcement(self):
        """Missing reinforcement omits bars, stirrups and notes but keeps outlines."""
        beam = BeamInput(id="9", dimensions={"width": 300, "height": 500, "length": 4000})
        elements = generate_beam_detail(beam)
        ids = [e.id for e in elements]
        assert "beam-9-elevation" in ids
        assert "beam-9-section" in ids
        assert ids_starting(elements, "beam-9-rebar-") == []
        assert ids_starting(elements, "beam-9-stirrup") == []
        assert "beam-9-reinforcement" not in ids

    def test_no_shear_no_stirrups(self, beam):
        beam.reinforcement.shear = None
        elements = generate_beam_detail(beam)
        assert ids_starting(elements, "beam-1-stirrup") == []
        assert len(ids_starting(elements, "beam-1-rebar-")) == 4

    def test_zero_size_does_not_raise(self):
        """Degenerate geometry is drawn, not rejected."""
        beam = BeamInput(id="0", reinforcement={"main": {"diameter": 16, "count": 2},
                                                "shear": {"diameter": 8, "spacing": 100}})
        elements = generate_beam_detail(beam)
        assert by_id(elements, "beam-0-elevation").coordinates == pytest.approx((100, 200, 0, 0))

    def test_pure(self, beam):
        """Same input, same output; nothing is shared between calls."""
        first = generate_beam_detail(beam)
        second = generate_beam_detail(beam)
        assert [e.geometry_key() for e in first] == [e.geometry_key() for e in second]
        assert first[0] is not second[0]


# =============================================================================
# FOUNDATION PLAN
# =============================================================================


class TestFoundationPlan:
    """Tests for generate_foundation_plan at the default 1:50 scale."""

    def test_outline(self, foundation):
        outline = by_id(generate_foundation_plan(foundation), "foundation-3")
        assert outline.kind == "rectangle"
        assert outline.coordinates == pytest.approx((200, 200, 40, 60))
        assert outline.style.fill_color == "rgba(0,0,0,0.1)"

    def test_grid(self, foundation):
        """2000 / 200 and 3000 / 200 give 9 vertical and 14 horizontal lines."""
        elements = generate_foundation_plan(foundation)
        vertical = ids_starting(elements, "foundation-3-grid-v-")
        horizontal = ids_starting(elements, "foundation-3-grid-h-")
        assert len(vertical) == 9
        assert len(horizontal) == 14

        assert vertical[0].coordinates == pytest.approx((204, 200, 204, 260))
        assert horizontal[0].coordinates == pytest.approx((200, 204, 240, 204))
        assert all(line.style.line_style == "dotted" for line in vertical + horizontal)

    def test_grid_inside_outline(self, foundation):
        elements = generate_foundation_plan(foundation)
        for line in ids_starting(elements, "foundation-3-grid-"):
            x1, y1, x2, y2 = line.coordinates
            assert 200 <= min(x1, x2) and max(x1, x2) <= 240
            assert 200 <= min(y1, y2) and max(y1, y2) <= 260

    def test_default_spacing(self, foundation):
        """Missing main spacing falls back to 200 mm."""
        foundation.reinforcement.main.spacing = None
        elements = generate_foundation_plan(foundation)
        assert len(ids_starting(elements, "foundation-3-grid-v-")) == 9

    def test_label_centred(self, foundation):
        label = by_id(generate_foundation_plan(foundation), "foundation-3-label")
        assert label.style.text == "F3"
        assert label.coordinates == pytest.approx((220, 230))
        assert label.style.text_align == "center"

    def test_without_reinforcement(self):
        """No reinforcement: outline and label only."""
        foundation = FoundationInput(id="4", dimensions={"width": 1000, "height": 400, "length": 1000})
        elements = generate_foundation_plan(foundation)
        assert [e.id for e in elements] == ["foundation-4", "foundation-4-label"]

    def test_position_offsets(self, foundation):
        foundation.position.x = 5000
        foundation.position.y = 1000
        outline = by_id(generate_foundation_plan(foundation), "foundation-3")
        assert outline.coordinates[:2] == pytest.approx((300, 220))


# =============================================================================
# STRUCTURAL PLAN
# =============================================================================


class TestStructuralPlan:
    """Tests for generate_structural_plan at the default 1:100 scale."""

    def test_beam(self, beam):
        outline, label = generate_structural_plan(beam)
        assert outline.id == "plan-beam-1"
        assert outline.coordinates == pytest.approx((110, 120, 60, 4))
        assert outline.style.line_weight == 0.3
        assert label.style.text == "B1"
        assert label.coordinates == pytest.approx((110, 110))

    def test_column(self, column):
        square, label = generate_structural_plan(column)
        assert square.id == "plan-column-2"
        assert square.coordinates == pytest.approx((100, 100, 5, 5))
        assert square.style.fill_color == "rgba(0,0,0,0.2)"
        assert label.style.text == "C2"
        assert label.coordinates == pytest.approx((102.5, 102.5))

    @pytest.mark.parametrize("member", [
        SlabInput(id="s"),
        WallInput(id="w"),
        FoundationInput(id="f"),
    ])
    def test_other_kinds_have_no_symbol(self, member):
        assert generate_structural_plan(member) == []

    def test_idempotent(self, beam, column):
        """Generating twice gives equal output; order of members is preserved."""
        first = [e for m in (beam, column) for e in generate_structural_plan(m)]
        second = [e for m in (beam, column) for e in generate_structural_plan(m)]
        assert [e.geometry_key() for e in first] == [e.geometry_key() for e in second]
        assert [e.id for e in first] == [
            "plan-beam-1", "plan-beam-1-label", "plan-column-2", "plan-column-2-label",
        ]


# =============================================================================
# ROUTING
# =============================================================================


class TestGenerateElements:
    """Tests for per-view dispatch."""

    def test_beam_detail_ignores_columns(self, column):
        assert generate_elements(column, "beam_detail") == []

    def test_foundation_plan_ignores_beams(self, beam):
        assert generate_elements(beam, "foundation_plan") == []

    def test_unknown_view(self, beam):
        assert generate_elements(beam, "none") == []
        assert generate_elements(beam, "sections") == []

    def test_explicit_scale(self, beam):
        """An explicit scale overrides the view default."""
        elevation = generate_elements(beam, "beam_detail", scale=1 / 50)[0]
        assert elevation.coordinates == pytest.approx((100, 200, 120, 6))


class TestGenerateStructuralDrawings:
    """Tests for regenerating a whole drawing set."""

    @pytest.fixture
    def sheet_set(self):
        return SheetSet([
            DrawingSheet(id="1", name="Plan", view="structural_plan", scale="1:100"),
            DrawingSheet(id="2", name="Foundations", view="foundation_plan", scale="1:50"),
            DrawingSheet(id="3", name="Beams", view="beam_detail", paper_size="A2", scale="1:25"),
            DrawingSheet(id="4", name="Notes"),
        ])

    def test_routing(self, sheet_set, members):
        generate_structural_drawings(members, sheet_set)
        plan, foundations, beams, notes = sheet_set

        assert [e.id for e in plan.elements] == [
            "plan-beam-1", "plan-beam-1-label", "plan-column-2", "plan-column-2-label",
        ]
        assert all(e.id.startswith("foundation-3") for e in foundations.elements)
        assert all(e.id.startswith("beam-1-") for e in beams.elements)
        assert notes.elements == []

    def test_elements_marked_generated(self, sheet_set, members):
        generate_structural_drawings(members, sheet_set)
        assert all(e.generated for sheet in sheet_set for e in sheet.elements)

    def test_uses_sheet_scale(self, sheet_set, beam):
        sheet_set.get(2).scale = "1:50"
        generate_structural_drawings([beam], sheet_set)
        elevation = by_id(sheet_set.get(2).elements, "beam-1-elevation")
        assert elevation.coordinates == pytest.approx((100, 200, 120, 6))

    def test_unparseable_scale_uses_view_default(self, sheet_set, beam):
        sheet_set.get(2).scale = "NTS"
        generate_structural_drawings([beam], sheet_set)
        elevation = by_id(sheet_set.get(2).elements, "beam-1-elevation")
        assert elevation.coordinates == pytest.approx((100, 200, 240, 12))

    def test_regeneration_replaces(self, sheet_set, members):
        """Running twice does not duplicate generated elements."""
        generate_structural_drawings(members, sheet_set)
        first = [e.geometry_key() for e in sheet_set.get(0).elements]
        generate_structural_drawings(members, sheet_set)
        assert [e.geometry_key() for e in sheet_set.get(0).elements] == first

    def test_manual_elements_kept(self, sheet_set, members):
        plan = sheet_set.get(0)
        note = DrawingElement.text("note", "Text", 10, 10, "GENERAL NOTES")
        plan.add_element(note)

        generate_structural_drawings(members, sheet_set)
        generate_structural_drawings(members[:1], sheet_set)

        assert plan.elements[0] is note
        assert [e.id for e in plan.elements[1:]] == ["plan-beam-1", "plan-beam-1-label"]
