"""
Drawing configuration schema.

The configuration is a plain object owned by the caller and handed to the
drawing engine: the layer set, the sheet templates a project starts with,
and render settings. It can be:
- Built in code (DrawingConfig.default())
- Loaded from / saved to YAML
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .drawing_generator.constants import (
    DISPLAY_MULTIPLIER,
    GRID_PITCH,
    PAPER_SIZES,
    TITLE_BLOCK_MARGIN,
    ZOOM_MAX,
    ZOOM_MIN,
    ZOOM_STEP,
)
from .drawing_generator.generators import VIEW_GENERATORS
from .drawing_generator.layers import DrawingLayer, LayerManager, standard_layers
from .drawing_generator.sheet import DrawingSheet, SheetSet
from .drawing_generator.title_block import TitleBlockInfo
from .drawing_generator.view_state import ViewState
from .structural import ProjectInfo

logger = logging.getLogger(__name__)


@dataclass
class LayerConfig:
    """
    Configuration for one drawing layer.

    Attributes:
        name: Unique layer name
        color: Default stroke color
        line_weight: Default stroke width
        visible: Initial visibility
        locked: Initial lock state
    """

    name: str
    color: str = "#000000"
    line_weight: float = 0.25
    visible: bool = True
    locked: bool = False

    def to_layer(self) -> DrawingLayer:
        return DrawingLayer(
            name=self.name,
            visible=self.visible,
            locked=self.locked,
            color=self.color,
            line_weight=self.line_weight,
        )


@dataclass
class SheetTemplate:
    """
    A sheet every new drawing set starts with.

    Attributes:
        id: Sheet identifier
        name: Sheet name shown in sheet lists
        view: Generator feeding the sheet ("structural_plan",
              "foundation_plan", "beam_detail" or "none")
        paper_size: A0..A4
        orientation: "portrait" or "landscape"
        scale: Ratio string, e.g. "1:50"
        drawing_title: Title block drawing title (defaults to name)
        drawing_number: Title block drawing number
        revision: Title block revision letter
        approved_by: Title block approver
    """

    id: str
    name: str
    view: str = "none"
    paper_size: str = "A1"
    orientation: str = "landscape"
    scale: str = "1:100"
    drawing_title: str = ""
    drawing_number: str = ""
    revision: str = "A"
    approved_by: str = "Approver"

    def __post_init__(self):
        self.id = str(self.id)
        if self.paper_size not in PAPER_SIZES:
            raise ValueError(f"Sheet {self.id}: unknown paper size {self.paper_size!r}")
        if self.view != "none" and self.view not in VIEW_GENERATORS:
            raise ValueError(f"Sheet {self.id}: unknown view {self.view!r}")
        if self.orientation not in ("portrait", "landscape"):
            raise ValueError(f"Sheet {self.id}: unknown orientation {self.orientation!r}")

    def create_sheet(self, project: ProjectInfo | None = None) -> DrawingSheet:
        """Instantiate an empty sheet with its title block filled in."""
        project = project or ProjectInfo()
        return DrawingSheet(
            id=self.id,
            name=self.name,
            paper_size=self.paper_size,
            orientation=self.orientation,
            scale=self.scale,
            view=self.view,
            title_block=TitleBlockInfo(
                project_name=project.name,
                drawing_title=self.drawing_title or self.name,
                drawing_number=self.drawing_number,
                revision=self.revision,
                drawn_by=project.engineer,
                checked_by=project.checker,
                approved_by=self.approved_by,
                date=project.date,
                scale=self.scale,
            ),
        )


@dataclass
class RenderSettings:
    """Render and navigation settings."""

    display_multiplier: float = DISPLAY_MULTIPLIER
    grid_pitch: float = GRID_PITCH
    title_block_margin: float = TITLE_BLOCK_MARGIN
    zoom_min: float = ZOOM_MIN
    zoom_max: float = ZOOM_MAX
    zoom_step: float = ZOOM_STEP
    show_grid: bool = True

    def create_view_state(self) -> ViewState:
        return ViewState(
            show_grid=self.show_grid,
            zoom_min=self.zoom_min,
            zoom_max=self.zoom_max,
            zoom_step=self.zoom_step,
        )


def default_sheet_templates() -> list[SheetTemplate]:
    """The three sheets a structural project starts with."""
    return [
        SheetTemplate(
            id="1", name="Structural Plan", view="structural_plan",
            paper_size="A1", scale="1:100", drawing_number="S-001",
        ),
        SheetTemplate(
            id="2", name="Foundation Plan", view="foundation_plan",
            paper_size="A1", scale="1:50", drawing_number="S-002",
        ),
        SheetTemplate(
            id="3", name="Beam Details", view="beam_detail",
            paper_size="A2", scale="1:25", drawing_number="S-003",
            drawing_title="Beam Reinforcement Details",
        ),
    ]


@dataclass
class DrawingConfig:
    """
    Root drawing configuration.

    Attributes:
        version: Config file version (currently "1.0")
        layers: Layer set, in display order
        sheets: Sheet templates, in sheet order
        render: Render/navigation settings
    """

    version: str = "1.0"
    layers: list[LayerConfig] = field(default_factory=list)
    sheets: list[SheetTemplate] = field(default_factory=list)
    render: RenderSettings = field(default_factory=RenderSettings)

    def __post_init__(self):
        # Handle nested dicts from YAML
        self.layers = [
            LayerConfig(**layer) if isinstance(layer, dict) else layer for layer in self.layers
        ]
        self.sheets = [
            SheetTemplate(**sheet) if isinstance(sheet, dict) else sheet for sheet in self.sheets
        ]
        if isinstance(self.render, dict):
            self.render = RenderSettings(**self.render)

    @classmethod
    def default(cls) -> DrawingConfig:
        """Standard six layers and the three default sheets."""
        layers = [
            LayerConfig(
                name=layer.name,
                color=layer.color,
                line_weight=layer.line_weight,
                visible=layer.visible,
                locked=layer.locked,
            )
            for layer in standard_layers()
        ]
        return cls(layers=layers, sheets=default_sheet_templates())

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> DrawingConfig:
        """Load a drawing configuration from a YAML file."""
        with open(yaml_path) as f:
            data = yaml.safe_load(f) or {}
        logger.info("Loaded drawing config %s", yaml_path)
        return cls(**data)

    def to_yaml(self, yaml_path: str | Path) -> None:
        """Save the drawing configuration to a YAML file."""
        with open(yaml_path, "w") as f:
            yaml.dump(self._to_dict(), f, default_flow_style=False, sort_keys=False)

    def _to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary suitable for YAML serialization."""
        render = self.render
        return {
            "version": self.version,
            "layers": [
                {
                    "name": layer.name,
                    "color": layer.color,
                    "line_weight": layer.line_weight,
                    "visible": layer.visible,
                    "locked": layer.locked,
                }
                for layer in self.layers
            ],
            "sheets": [self._sheet_to_dict(sheet) for sheet in self.sheets],
            "render": {
                "display_multiplier": render.display_multiplier,
                "grid_pitch": render.grid_pitch,
                "title_block_margin": render.title_block_margin,
                "zoom_min": render.zoom_min,
                "zoom_max": render.zoom_max,
                "zoom_step": render.zoom_step,
                "show_grid": render.show_grid,
            },
        }

    def _sheet_to_dict(self, sheet: SheetTemplate) -> dict[str, Any]:
        """Convert a SheetTemplate to a dictionary."""
        result = {
            "id": sheet.id,
            "name": sheet.name,
            "view": sheet.view,
            "paper_size": sheet.paper_size,
            "orientation": sheet.orientation,
            "scale": sheet.scale,
        }
        if sheet.drawing_title:
            result["drawing_title"] = sheet.drawing_title
        if sheet.drawing_number:
            result["drawing_number"] = sheet.drawing_number
        if sheet.revision != "A":
            result["revision"] = sheet.revision
        if sheet.approved_by != "Approver":
            result["approved_by"] = sheet.approved_by
        return result

    # -------------------------------------------------------------------------
    # Builders
    # -------------------------------------------------------------------------

    def build_layers(self) -> LayerManager:
        """Fresh layer manager; the standard set when no layers are configured."""
        if not self.layers:
            return LayerManager()
        return LayerManager([layer.to_layer() for layer in self.layers])

    def build_sheets(self, project: ProjectInfo | None = None) -> SheetSet:
        """Fresh, empty sheets for every template."""
        return SheetSet([template.create_sheet(project) for template in self.sheets])
