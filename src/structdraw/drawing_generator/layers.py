"""
Drawing layers and the layer manager.

Layers group elements for styling and visibility. Visibility controls what
the renderer paints; the lock flag only guards edits (adding or removing
elements) and never affects rendering.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from .elements import DrawingElement

logger = logging.getLogger(__name__)


@dataclass
class DrawingLayer:
    """
    A named element group with default styling.

    Attributes:
        name: Unique layer key referenced by DrawingElement.layer
        visible: Painted by the renderer when True
        locked: Elements cannot be added/removed when True
        color: Default stroke color
        line_weight: Default stroke width
    """
    name: str
    visible: bool = True
    locked: bool = False
    color: str = "#000000"
    line_weight: float = 0.25


def standard_layers() -> list[DrawingLayer]:
    """Return a fresh copy of the six standard structural drawing layers."""
    return [
        DrawingLayer("Structure", visible=True, locked=False, color="#000000", line_weight=0.5),
        DrawingLayer("Reinforcement", visible=True, locked=False, color="#0066CC", line_weight=0.25),
        DrawingLayer("Dimensions", visible=True, locked=False, color="#CC0000", line_weight=0.18),
        DrawingLayer("Text", visible=True, locked=False, color="#000000", line_weight=0.18),
        DrawingLayer("Hatching", visible=True, locked=False, color="#666666", line_weight=0.18),
        DrawingLayer("Grid", visible=False, locked=True, color="#CCCCCC", line_weight=0.1),
    ]


class LayerManager:
    """
    Owns an ordered layer set and answers the render-time paint question.

    The manager copies the layers it is given, so toggling never mutates a
    caller's configuration.
    """

    def __init__(self, layers: list[DrawingLayer] | None = None):
        source = standard_layers() if layers is None else layers
        self._layers: dict[str, DrawingLayer] = {}
        for layer in source:
            if layer.name in self._layers:
                logger.warning("Duplicate layer %r ignored", layer.name)
                continue
            self._layers[layer.name] = replace(layer)

    def __iter__(self):
        return iter(self._layers.values())

    def __len__(self) -> int:
        return len(self._layers)

    def __contains__(self, name: str) -> bool:
        return name in self._layers

    @property
    def names(self) -> list[str]:
        return list(self._layers)

    def get(self, name: str) -> DrawingLayer | None:
        return self._layers.get(name)

    def toggle_visibility(self, name: str) -> bool:
        """
        Flip a layer's visibility.

        Returns:
            The new visibility, or False if the layer does not exist.
        """
        layer = self._layers.get(name)
        if layer is None:
            logger.debug("toggle_visibility: unknown layer %r", name)
            return False
        layer.visible = not layer.visible
        return layer.visible

    def set_visibility(self, name: str, visible: bool) -> None:
        layer = self._layers.get(name)
        if layer is not None:
            layer.visible = visible

    def toggle_lock(self, name: str) -> bool:
        """Flip a layer's lock flag. Returns the new state (False if unknown)."""
        layer = self._layers.get(name)
        if layer is None:
            logger.debug("toggle_lock: unknown layer %r", name)
            return False
        layer.locked = not layer.locked
        return layer.locked

    def is_paintable(self, element: DrawingElement) -> bool:
        """True if the element's layer exists and is visible. Locks are ignored."""
        layer = self._layers.get(element.layer)
        return layer is not None and layer.visible

    def is_editable(self, layer_name: str) -> bool:
        """
        True if elements may be added to or removed from the layer.

        Unknown layers are editable; their elements are simply never painted.
        """
        layer = self._layers.get(layer_name)
        return layer is None or not layer.locked
