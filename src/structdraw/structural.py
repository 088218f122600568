"""
Structural element input records.

These records describe the structural members a drawing is generated from.
They are produced by the caller (forms, analysis results, YAML files) and
consumed read-only by the drawing generators.

Each structural kind is its own dataclass so generators can check the kind
with isinstance() instead of probing a loose property dictionary:

    BeamInput | ColumnInput | SlabInput | FoundationInput | WallInput

All lengths are in millimeters (model units).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, ClassVar, Union

import yaml


@dataclass
class Dimensions:
    """Overall member size in mm."""
    width: float = 0.0
    height: float = 0.0
    length: float = 0.0


@dataclass
class Position:
    """Member insertion point in model space (mm)."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class MainReinforcement:
    """Longitudinal bars: diameter (mm), bar count and optional spacing (mm)."""
    diameter: float
    count: int
    spacing: float | None = None

    def __post_init__(self):
        # JSON and YAML hosts may send whole numbers as floats
        self.count = int(self.count)


@dataclass
class SecondaryReinforcement:
    """Distribution bars."""
    diameter: float
    spacing: float


@dataclass
class ShearReinforcement:
    """Stirrups/links: diameter, pitch along the member and number of legs."""
    diameter: float
    spacing: float
    legs: int | None = None

    def __post_init__(self):
        if self.legs is not None:
            self.legs = int(self.legs)


@dataclass
class Reinforcement:
    """
    Reinforcement layout of a member.

    Attributes:
        main: Longitudinal bars (always present when reinforcement is given)
        secondary: Optional distribution bars
        shear: Optional stirrups
    """
    main: MainReinforcement
    secondary: SecondaryReinforcement | None = None
    shear: ShearReinforcement | None = None

    def __post_init__(self):
        # Handle nested dicts from YAML
        if isinstance(self.main, dict):
            self.main = MainReinforcement(**self.main)
        if isinstance(self.secondary, dict):
            self.secondary = SecondaryReinforcement(**self.secondary)
        if isinstance(self.shear, dict):
            self.shear = ShearReinforcement(**self.shear)


@dataclass
class ConcreteSpec:
    grade: str = "K-300"
    fc: float = 25.0


@dataclass
class SteelSpec:
    grade: str = "BJTD-40"
    fy: float = 400.0


@dataclass
class Materials:
    concrete: ConcreteSpec = field(default_factory=ConcreteSpec)
    steel: SteelSpec = field(default_factory=SteelSpec)

    def __post_init__(self):
        if isinstance(self.concrete, dict):
            self.concrete = ConcreteSpec(**self.concrete)
        if isinstance(self.steel, dict):
            self.steel = SteelSpec(**self.steel)


@dataclass
class StructuralElementInput:
    """
    Common fields of every structural member.

    Subclasses fix ``kind``; instances are never created from this base
    directly (use one of the concrete member classes).
    """
    kind: ClassVar[str] = ""

    id: str
    dimensions: Dimensions = field(default_factory=Dimensions)
    position: Position = field(default_factory=Position)
    reinforcement: Reinforcement | None = None
    materials: Materials = field(default_factory=Materials)

    def __post_init__(self):
        self.id = str(self.id)
        if isinstance(self.dimensions, dict):
            self.dimensions = Dimensions(**self.dimensions)
        if isinstance(self.position, dict):
            self.position = Position(**self.position)
        if isinstance(self.reinforcement, dict):
            self.reinforcement = Reinforcement(**self.reinforcement)
        if isinstance(self.materials, dict):
            self.materials = Materials(**self.materials)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary suitable for YAML serialization."""
        dims = self.dimensions
        pos = self.position
        result: dict[str, Any] = {
            "type": self.kind,
            "id": self.id,
            "dimensions": {"width": dims.width, "height": dims.height, "length": dims.length},
            "position": {"x": pos.x, "y": pos.y, "z": pos.z},
            "materials": {
                "concrete": {
                    "grade": self.materials.concrete.grade,
                    "fc": self.materials.concrete.fc,
                },
                "steel": {
                    "grade": self.materials.steel.grade,
                    "fy": self.materials.steel.fy,
                },
            },
        }
        if self.reinforcement:
            rebar = self.reinforcement
            reinforcement: dict[str, Any] = {
                "main": {"diameter": rebar.main.diameter, "count": rebar.main.count},
            }
            if rebar.main.spacing is not None:
                reinforcement["main"]["spacing"] = rebar.main.spacing
            if rebar.secondary:
                reinforcement["secondary"] = {
                    "diameter": rebar.secondary.diameter,
                    "spacing": rebar.secondary.spacing,
                }
            if rebar.shear:
                reinforcement["shear"] = {
                    "diameter": rebar.shear.diameter,
                    "spacing": rebar.shear.spacing,
                }
                if rebar.shear.legs is not None:
                    reinforcement["shear"]["legs"] = rebar.shear.legs
            result["reinforcement"] = reinforcement
        return result


@dataclass
class BeamInput(StructuralElementInput):
    kind: ClassVar[str] = "beam"


@dataclass
class ColumnInput(StructuralElementInput):
    kind: ClassVar[str] = "column"


@dataclass
class SlabInput(StructuralElementInput):
    kind: ClassVar[str] = "slab"


@dataclass
class FoundationInput(StructuralElementInput):
    kind: ClassVar[str] = "foundation"


@dataclass
class WallInput(StructuralElementInput):
    kind: ClassVar[str] = "wall"


StructuralInput = Union[BeamInput, ColumnInput, SlabInput, FoundationInput, WallInput]

STRUCTURAL_KINDS: dict[str, type[StructuralElementInput]] = {
    cls.kind: cls
    for cls in (BeamInput, ColumnInput, SlabInput, FoundationInput, WallInput)
}


def structural_element_from_dict(data: dict[str, Any]) -> StructuralInput:
    """
    Build a structural member from a dictionary (YAML/JSON record).

    The member kind is read from ``type`` (or ``kind``).

    Raises:
        ValueError: If the kind is missing or unknown.
    """
    values = dict(data)
    kind = values.pop("type", None) or values.pop("kind", None)
    if kind not in STRUCTURAL_KINDS:
        raise ValueError(
            f"Unknown structural element type {kind!r}; "
            f"expected one of {sorted(STRUCTURAL_KINDS)}"
        )
    return STRUCTURAL_KINDS[kind](**values)


@dataclass
class ProjectInfo:
    """Project metadata used to pre-fill title blocks."""
    name: str = "Structural Analysis Project"
    engineer: str = "Engineer"
    checker: str = "Checker"
    date: str | None = None

    def __post_init__(self):
        if self.date is None:
            self.date = date.today().strftime("%d/%m/%Y")


def load_structural_elements(yaml_path: str | Path) -> tuple[list[StructuralInput], ProjectInfo | None]:
    """
    Load structural members (and optional project info) from a YAML file.

    Expected layout::

        project:
          name: Warehouse
          engineer: A. Engineer
        elements:
          - type: beam
            id: "1"
            dimensions: {width: 400, height: 300, length: 6000}

    Returns:
        (elements, project_info) - project_info is None when absent.
    """
    with open(yaml_path) as f:
        data = yaml.safe_load(f) or {}

    project = data.get("project")
    project_info = ProjectInfo(**project) if project else None
    elements = [structural_element_from_dict(item) for item in data.get("elements", [])]
    return elements, project_info
