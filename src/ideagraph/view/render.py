"""Render loop: projects node and link positions into draw calls."""

import logging
import math

from ideagraph.config import Settings, settings
from ideagraph.models import GraphNode, IdeaGraph
from ideagraph.view.style import LINK_STROKE, LINK_WIDTH, node_style
from ideagraph.view.surface import Surface
from ideagraph.view.viewport import Viewport

logger = logging.getLogger(__name__)


class RenderLoop:
    """
    Draws the graph onto a surface.

    ``redraw`` is hooked to simulation ticks and viewport changes; each call
    emits exactly one frame from the live node objects. Only idea-tag links
    are drawn. Non-finite coordinates are drawn at 0.
    """

    def __init__(
        self,
        graph: IdeaGraph,
        viewport: Viewport,
        surface: Surface,
        config: Settings | None = None,
    ) -> None:
        self.graph = graph
        self.viewport = viewport
        self.surface = surface
        self.config = config or settings
        self.links = graph.visible_links
        self.styles = {node.id: node_style(node, self.config) for node in graph.nodes}
        self.frames = 0
        self._warned: set[str] = set()

    def _coord(self, node: GraphNode, axis: str) -> float:
        value = getattr(node, axis)
        if value is None or not math.isfinite(value):
            if node.id not in self._warned:
                self._warned.add(node.id)
                logger.warning(f"Node {node.id!r} has non-finite {axis}={value}; drawing at 0")
            return 0.0
        return value

    def redraw(self) -> None:
        surface = self.surface
        surface.begin_frame(self.viewport.width, self.viewport.height, self.viewport.transform)

        for link in self.links:
            source = link.source_node or self.graph.node_by_id(link.source)
            target = link.target_node or self.graph.node_by_id(link.target)
            if source is None or target is None:
                continue
            surface.draw_link(
                link.id,
                self._coord(source, "x"),
                self._coord(source, "y"),
                self._coord(target, "x"),
                self._coord(target, "y"),
                LINK_STROKE,
                LINK_WIDTH,
            )

        for node in self.graph.nodes:
            surface.draw_node(
                node.id,
                self._coord(node, "x"),
                self._coord(node, "y"),
                self.styles[node.id],
                node.label,
            )

        surface.end_frame()
        self.frames += 1
