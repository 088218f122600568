"""
ViewArea class for rectangular regions of a drawing sheet.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class ViewArea:
    """
    A rectangular region in sheet space (y grows downward).

    Used for the paper box of a sheet and for anchoring the title block.

    Attributes:
        x: Left edge
        y: Top edge
        width: Width of the area
        height: Height of the area
    """
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    @property
    def center(self) -> Tuple[float, float]:
        return (self.center_x, self.center_y)

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """Bounds as (left, top, right, bottom) tuple."""
        return (self.x, self.y, self.right, self.bottom)

    def scaled(self, factor: float) -> 'ViewArea':
        """Return this area with position and size multiplied by factor."""
        return ViewArea(
            x=self.x * factor,
            y=self.y * factor,
            width=self.width * factor,
            height=self.height * factor,
        )

    def anchor_bottom_right(self, width: float, height: float, margin: float = 0) -> 'ViewArea':
        """
        Place a width x height box inside this area, `margin` away from the
        right and bottom edges.
        """
        return ViewArea(
            x=self.right - width - margin,
            y=self.bottom - height - margin,
            width=width,
            height=height,
        )

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x <= self.right and self.y <= y <= self.bottom

    def __repr__(self) -> str:
        return (f"ViewArea(x={self.x}, y={self.y}, "
                f"w={self.width}, h={self.height}, center={self.center})")
