"""
structdraw - structural construction drawings from structural members.
"""

from .config import DrawingConfig, LayerConfig, RenderSettings, SheetTemplate
from .drawing import StructuralDrawing
from .structural import (
    BeamInput,
    ColumnInput,
    FoundationInput,
    ProjectInfo,
    SlabInput,
    WallInput,
    load_structural_elements,
    structural_element_from_dict,
)

__version__ = "0.1.0"

__all__ = [
    'StructuralDrawing',
    'DrawingConfig',
    'LayerConfig',
    'RenderSettings',
    'SheetTemplate',
    'BeamInput',
    'ColumnInput',
    'SlabInput',
    'FoundationInput',
    'WallInput',
    'ProjectInfo',
    'load_structural_elements',
    'structural_element_from_dict',
]
