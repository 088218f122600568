"""
View and navigation state: zoom, pan, active sheet and grid toggle.

The view transform maps sheet space to device space:

    device = pan + zoom * sheet

It is kept as a 3x3 homogeneous matrix so points can be mapped in batches
and the inverse (device -> sheet, for pointer input) is exact.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .constants import GRID_PITCH, ZOOM_MAX, ZOOM_MIN, ZOOM_STEP


@dataclass
class ViewState:
    """
    Caller-owned view state. Only explicit actions mutate it.

    Attributes:
        zoom: Uniform scale factor, clamped to [zoom_min, zoom_max]
        pan: Device-space offset (x, y)
        active_sheet_index: Index into the sheet list of the sheet on screen
        show_grid: Paint the background grid
    """
    zoom: float = 1.0
    pan: tuple[float, float] = (0.0, 0.0)
    active_sheet_index: int = 0
    show_grid: bool = True
    zoom_min: float = ZOOM_MIN
    zoom_max: float = ZOOM_MAX
    zoom_step: float = ZOOM_STEP

    def __post_init__(self):
        self.pan = (float(self.pan[0]), float(self.pan[1]))
        self.zoom = self._clamp(self.zoom)

    def _clamp(self, zoom: float) -> float:
        return min(max(zoom, self.zoom_min), self.zoom_max)

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def zoom_in(self) -> float:
        self.zoom = self._clamp(self.zoom * self.zoom_step)
        return self.zoom

    def zoom_out(self) -> float:
        self.zoom = self._clamp(self.zoom / self.zoom_step)
        return self.zoom

    def set_zoom(self, zoom: float) -> float:
        self.zoom = self._clamp(zoom)
        return self.zoom

    def pan_by(self, dx: float, dy: float) -> None:
        self.pan = (self.pan[0] + dx, self.pan[1] + dy)

    def set_pan(self, x: float, y: float) -> None:
        self.pan = (float(x), float(y))

    def reset_view(self) -> None:
        """Back to zoom 1 with no pan. Sheet selection and grid are kept."""
        self.zoom = 1.0
        self.pan = (0.0, 0.0)

    def set_active_sheet(self, index: int, sheet_count: int | None = None) -> int:
        """
        Select the sheet to display.

        When sheet_count is given the index is clamped into range.
        """
        if sheet_count is not None and sheet_count > 0:
            index = min(max(index, 0), sheet_count - 1)
        self.active_sheet_index = index
        return index

    def toggle_grid(self) -> bool:
        self.show_grid = not self.show_grid
        return self.show_grid

    # -------------------------------------------------------------------------
    # Transform
    # -------------------------------------------------------------------------

    @property
    def matrix(self) -> np.ndarray:
        """Homogeneous sheet -> device matrix."""
        return np.array([
            [self.zoom, 0.0, self.pan[0]],
            [0.0, self.zoom, self.pan[1]],
            [0.0, 0.0, 1.0],
        ])

    def to_device(self, x: float, y: float) -> tuple[float, float]:
        dx, dy, _ = self.matrix @ np.array([x, y, 1.0])
        return (float(dx), float(dy))

    def to_device_points(self, points) -> np.ndarray:
        """Map an (N, 2) array of sheet points to device space."""
        pts = np.asarray(points, dtype=float).reshape(-1, 2)
        homogeneous = np.hstack([pts, np.ones((len(pts), 1))])
        return (homogeneous @ self.matrix.T)[:, :2]

    def to_sheet(self, x: float, y: float) -> tuple[float, float]:
        """Inverse transform: device point (e.g. a pointer) to sheet space."""
        sx, sy, _ = np.linalg.inv(self.matrix) @ np.array([x, y, 1.0])
        return (float(sx), float(sy))

    def scale_length(self, length: float) -> float:
        """Sheet length to device length (widths, radii, font sizes)."""
        return length * self.zoom


def snap_to_grid(point: tuple[float, float], pitch: float = GRID_PITCH) -> tuple[float, float]:
    """Round a sheet-space point to the nearest grid intersection."""
    if pitch <= 0:
        return (float(point[0]), float(point[1]))
    snapped = np.round(np.asarray(point, dtype=float) / pitch) * pitch
    return (float(snapped[0]), float(snapped[1]))
