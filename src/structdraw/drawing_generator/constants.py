"""
Drawing generator constants.

Paper sizes, display scaling, generator scales and styling constants for
structural construction drawings. Sheet space is millimeters with y pointing
down.
"""

# =============================================================================
# PAPER AND DISPLAY
# =============================================================================

# ISO 216 paper sizes in mm (width, height)
PAPER_SIZES = {
    "A0": (841, 1189),
    "A1": (594, 841),
    "A2": (420, 594),
    "A3": (297, 420),
    "A4": (210, 297),
}

# Paper, grid and title block are drawn at this multiple of paper size
DISPLAY_MULTIPLIER = 2

PAPER_FILL_COLOR = "#ffffff"
BORDER_COLOR = "#000000"
BORDER_WIDTH = 1

# Background grid pitch (display units)
GRID_PITCH = 20
GRID_DASH = (2, 2)


# =============================================================================
# VIEW / NAVIGATION
# =============================================================================

ZOOM_MIN = 0.1
ZOOM_MAX = 5.0
ZOOM_STEP = 1.2


# =============================================================================
# TITLE BLOCK
# =============================================================================

# Block size in sheet units, multiplied by DISPLAY_MULTIPLIER when drawn
TITLE_BLOCK_WIDTH = 200
TITLE_BLOCK_HEIGHT = 80
# Gap between block and paper edge (display units, not multiplied)
TITLE_BLOCK_MARGIN = 20
# Divider offsets from the block top (sheet units)
TITLE_BLOCK_ROW1 = 20
TITLE_BLOCK_ROW2 = 40
TITLE_BLOCK_TITLE_FONT = 8
TITLE_BLOCK_FIELD_FONT = 6
TITLE_BLOCK_TEXT_INSET = 5


# =============================================================================
# ELEMENT STYLING
# =============================================================================

DASH_PATTERNS = {
    "solid": (),
    "dashed": (5, 5),
    "dotted": (1, 3),
    "dashdot": (5, 3, 1, 3),
}

DEFAULT_TEXT_COLOR = "#000000"
DEFAULT_FONT_FAMILY = "Arial"
DEFAULT_TEXT_SIZE = 3
DEFAULT_DIMENSION_TEXT_SIZE = 2.5

# Dimension arrowheads: stroke length and half-angle (30 degrees)
ARROW_LENGTH = 3
ARROW_HALF_ANGLE_DEG = 30
# Dimension label sits this far above the leader midpoint
DIMENSION_TEXT_OFFSET = 2

STRUCTURE_COLOR = "#000000"
REINFORCEMENT_COLOR = "#0066CC"
DIMENSION_COLOR = "#CC0000"
FOUNDATION_FILL = "rgba(0,0,0,0.1)"
COLUMN_FILL = "rgba(0,0,0,0.2)"


# =============================================================================
# ELEMENT GENERATORS
# =============================================================================

# Beam details (1:25): elevation at a fixed origin, section to its right
BEAM_DETAIL_SCALE = 1 / 25
BEAM_DETAIL_ORIGIN = (100, 200)
BEAM_SECTION_GAP = 100
BEAM_DIMENSION_OFFSET = 30
BEAM_TITLE_OFFSET = 60
BEAM_NOTE_OFFSET = 30
CONCRETE_COVER_MM = 40

# Foundation plan (1:50)
FOUNDATION_PLAN_SCALE = 1 / 50
FOUNDATION_PLAN_OFFSET = 200
FOUNDATION_GRID_SPACING_MM = 200

# Structural plan (1:100)
STRUCTURAL_PLAN_SCALE = 1 / 100
STRUCTURAL_PLAN_OFFSET = 100
PLAN_LABEL_OFFSET = 10
