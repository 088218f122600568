"""
Drawing elements - the atomic vector primitives placed on a sheet.

Coordinates are always sheet-space millimeters (already scaled from model
units by the generator that produced them). Their meaning depends on kind:

    line       (x1, y1, x2, y2)
    rectangle  (x, y, width, height)        - x/y is the top-left corner
    circle     (cx, cy, radius)
    arc        (cx, cy, radius, start_deg, end_deg)
    text       (x, y)                        - baseline anchor
    dimension  (x1, y1, x2, y2)             - leader endpoints
    hatch      (x, y, width, height)
    symbol     (x, y)

The order of elements in a sheet's list is the paint order: later elements
are painted over earlier ones.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

ElementKind = Literal["line", "rectangle", "circle", "arc", "text", "dimension", "hatch", "symbol"]
LineStyle = Literal["solid", "dashed", "dotted", "dashdot"]
ArrowStyle = Literal["none", "arrow", "circle", "triangle"]
TextAlign = Literal["left", "center", "right"]

ELEMENT_KINDS: tuple[str, ...] = (
    "line", "rectangle", "circle", "arc", "text", "dimension", "hatch", "symbol",
)

# Minimum coordinate count per kind
COORDINATE_ARITY = {
    "line": 4,
    "rectangle": 4,
    "circle": 3,
    "arc": 5,
    "text": 2,
    "dimension": 4,
    "hatch": 4,
    "symbol": 2,
}


@dataclass
class ElementStyle:
    """
    Optional per-element styling. Unset values fall back to the layer defaults
    (stroke color, line weight) or to renderer defaults (text settings).
    """
    line_weight: float | None = None
    line_style: LineStyle | None = None
    color: str | None = None
    fill_color: str | None = None
    text: str | None = None
    font_size: float | None = None
    font_family: str | None = None
    arrow: ArrowStyle | None = None
    text_align: TextAlign = "left"


@dataclass
class DrawingElement:
    """
    A single vector primitive on a sheet.

    Attributes:
        kind: Primitive type (see module docstring for coordinate layout)
        id: Identifier, unique within a sheet by convention only
        layer: Name of the DrawingLayer the element belongs to
        coordinates: Sheet-space numbers, layout depends on kind
        style: Styling overrides
        generated: True when produced by an element generator; generated
                   elements are replaced wholesale on regeneration
    """
    kind: ElementKind
    id: str
    layer: str
    coordinates: tuple[float, ...]
    style: ElementStyle = field(default_factory=ElementStyle)
    generated: bool = False

    def __post_init__(self):
        # Lists come from YAML and from callers building coordinates in place
        if not isinstance(self.coordinates, tuple):
            self.coordinates = tuple(self.coordinates)
        if isinstance(self.style, dict):
            self.style = ElementStyle(**self.style)

    @property
    def has_valid_coordinates(self) -> bool:
        """True if there are enough coordinates for the element kind."""
        return len(self.coordinates) >= COORDINATE_ARITY.get(self.kind, 0)

    def geometry_key(self) -> tuple:
        """Everything except the id, for comparing generated output."""
        return (
            self.kind,
            self.layer,
            tuple(round(c, 9) for c in self.coordinates),
            self.style,
        )

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    @classmethod
    def line(cls, id: str, layer: str, x1: float, y1: float, x2: float, y2: float,
             **style) -> DrawingElement:
        return cls("line", id, layer, (x1, y1, x2, y2), ElementStyle(**style))

    @classmethod
    def rectangle(cls, id: str, layer: str, x: float, y: float, width: float, height: float,
                  **style) -> DrawingElement:
        return cls("rectangle", id, layer, (x, y, width, height), ElementStyle(**style))

    @classmethod
    def circle(cls, id: str, layer: str, cx: float, cy: float, radius: float,
               **style) -> DrawingElement:
        return cls("circle", id, layer, (cx, cy, radius), ElementStyle(**style))

    @classmethod
    def arc(cls, id: str, layer: str, cx: float, cy: float, radius: float,
            start_deg: float, end_deg: float, **style) -> DrawingElement:
        return cls("arc", id, layer, (cx, cy, radius, start_deg, end_deg), ElementStyle(**style))

    @classmethod
    def text(cls, id: str, layer: str, x: float, y: float, text: str,
             **style) -> DrawingElement:
        return cls("text", id, layer, (x, y), ElementStyle(text=text, **style))

    @classmethod
    def dimension(cls, id: str, layer: str, x1: float, y1: float, x2: float, y2: float,
                  text: str, **style) -> DrawingElement:
        return cls("dimension", id, layer, (x1, y1, x2, y2), ElementStyle(text=text, **style))

    @classmethod
    def hatch(cls, id: str, layer: str, x: float, y: float, width: float, height: float,
              **style) -> DrawingElement:
        return cls("hatch", id, layer, (x, y, width, height), ElementStyle(**style))

    @classmethod
    def symbol(cls, id: str, layer: str, x: float, y: float, text: str = "",
               **style) -> DrawingElement:
        return cls("symbol", id, layer, (x, y), ElementStyle(text=text, **style))
