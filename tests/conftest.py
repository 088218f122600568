"""Shared fixtures for structdraw tests."""

import pytest

from structdraw.drawing_generator.layers import LayerManager
from structdraw.drawing_generator.sheet import DrawingSheet
from structdraw.drawing_generator.surfaces import RecordingSurface
from structdraw.drawing_generator.view_state import ViewState
from structdraw.structural import BeamInput, ColumnInput, FoundationInput


@pytest.fixture
def beam() -> BeamInput:
    """6 m x 0.3 m x 0.4 m beam with 4D16 main bars and D10-150 stirrups."""
    return BeamInput(
        id="1",
        dimensions={"width": 400, "height": 300, "length": 6000},
        position={"x": 1000, "y": 2000, "z": 0},
        reinforcement={
            "main": {"diameter": 16, "count": 4},
            "shear": {"diameter": 10, "spacing": 150, "legs": 2},
        },
        materials={
            "concrete": {"grade": "K-300", "fc": 25},
            "steel": {"grade": "BJTD-40", "fy": 400},
        },
    )


@pytest.fixture
def column() -> ColumnInput:
    return ColumnInput(
        id="2",
        dimensions={"width": 500, "height": 500, "length": 3500},
        position={"x": 0, "y": 0, "z": 0},
    )


@pytest.fixture
def foundation() -> FoundationInput:
    """2 m x 3 m footing with a 200 mm bar grid."""
    return FoundationInput(
        id="3",
        dimensions={"width": 2000, "height": 500, "length": 3000},
        position={"x": 0, "y": 0, "z": -1500},
        reinforcement={"main": {"diameter": 13, "count": 10, "spacing": 200}},
    )


@pytest.fixture
def members(beam, column, foundation):
    return [beam, column, foundation]


@pytest.fixture
def sheet() -> DrawingSheet:
    return DrawingSheet(id="T", name="Test Sheet", paper_size="A1", scale="1:100")


@pytest.fixture
def layers() -> LayerManager:
    return LayerManager()


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def view() -> ViewState:
    return ViewState()
