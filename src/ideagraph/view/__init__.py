"""Viewport, interaction, rendering and view lifecycle."""

from ideagraph.view.interaction import InteractionLayer, NodeState, has_tooltip, is_selectable
from ideagraph.view.pointer import PointerEvent, PointerEventType, PointerRouter
from ideagraph.view.render import RenderLoop
from ideagraph.view.style import NodeStyle, node_radius, node_style, palette_for
from ideagraph.view.surface import DrawCommand, Frame, RecordingSurface, Surface, SvgSurface
from ideagraph.view.tooltip import HIDDEN_POSITION, Tooltip
from ideagraph.view.view import GraphView, SurfaceHost
from ideagraph.view.viewport import IDENTITY, Viewport, ViewTransform

__all__ = [
    # Viewport
    "Viewport",
    "ViewTransform",
    "IDENTITY",
    # Interaction
    "InteractionLayer",
    "NodeState",
    "has_tooltip",
    "is_selectable",
    "Tooltip",
    "HIDDEN_POSITION",
    "PointerEvent",
    "PointerEventType",
    "PointerRouter",
    # Rendering
    "RenderLoop",
    "Surface",
    "RecordingSurface",
    "SvgSurface",
    "DrawCommand",
    "Frame",
    "NodeStyle",
    "node_style",
    "node_radius",
    "palette_for",
    # Lifecycle
    "GraphView",
    "SurfaceHost",
]
