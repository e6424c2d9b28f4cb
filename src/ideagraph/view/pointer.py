"""Raw pointer events to interaction gestures.

The router hit-tests pointer positions against the drawn nodes and decides
whether a press becomes a click, a node drag or a background pan.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from ideagraph.config import Settings, settings
from ideagraph.models import GraphNode, IdeaGraph
from ideagraph.view.interaction import InteractionLayer
from ideagraph.view.style import node_radius
from ideagraph.view.viewport import Viewport

logger = logging.getLogger(__name__)


class PointerEventType(str, Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    LEAVE = "leave"
    CANCEL = "cancel"
    WHEEL = "wheel"


@dataclass(frozen=True)
class PointerEvent:
    """A pointer event in container pixel coordinates."""

    type: PointerEventType
    x: float
    y: float
    delta_y: float = 0.0  # wheel only
    pointer_id: int = 0

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass
class _Press:
    node: GraphNode | None
    last: tuple[float, float]
    dragging: bool = False


class PointerRouter:
    """Translates pointer events into InteractionLayer / Viewport calls."""

    def __init__(
        self,
        graph: IdeaGraph,
        viewport: Viewport,
        interaction: InteractionLayer,
        config: Settings | None = None,
    ) -> None:
        self.graph = graph
        self.viewport = viewport
        self.interaction = interaction
        self.config = config or settings
        self._presses: dict[int, _Press] = {}

    def hit_test(self, screen: tuple[float, float]) -> GraphNode | None:
        """Topmost node whose drawn circle contains the screen point."""
        x, y = self.viewport.to_simulation(screen)
        for node in reversed(self.graph.nodes):
            r = node_radius(node, self.config)
            dx = x - node.x
            dy = y - node.y
            if dx * dx + dy * dy <= r * r:
                return node
        return None

    def dispatch(self, event: PointerEvent) -> None:
        match event.type:
            case PointerEventType.DOWN:
                self._on_down(event)
            case PointerEventType.MOVE:
                self._on_move(event)
            case PointerEventType.UP:
                self._on_up(event)
            case PointerEventType.LEAVE:
                self.interaction.pointer_leave()
            case PointerEventType.CANCEL:
                self._on_cancel(event)
            case PointerEventType.WHEEL:
                self.viewport.wheel(event.delta_y, event.position)

    def __call__(self, event: PointerEvent) -> None:
        self.dispatch(event)

    def _on_down(self, event: PointerEvent) -> None:
        self._presses[event.pointer_id] = _Press(self.hit_test(event.position), event.position)

    def _on_move(self, event: PointerEvent) -> None:
        press = self._presses.get(event.pointer_id)
        if press is None:
            self._update_hover(event)
            return

        if press.node is None:
            dx = event.x - press.last[0]
            dy = event.y - press.last[1]
            press.last = event.position
            self.viewport.pan_by(dx, dy)
            return

        if event.position == press.last and not press.dragging:
            return
        press.last = event.position
        position = self.viewport.to_simulation(event.position)
        if press.dragging:
            self.interaction.drag_move(press.node, position)
        else:
            press.dragging = True
            self.interaction.drag_start(press.node, position)

    def _on_up(self, event: PointerEvent) -> None:
        press = self._presses.pop(event.pointer_id, None)
        if press is None or press.node is None:
            return
        if press.dragging:
            self.interaction.drag_end(press.node)
        else:
            self.interaction.click(press.node)

    def _on_cancel(self, event: PointerEvent) -> None:
        press = self._presses.pop(event.pointer_id, None)
        if press is not None and press.node is not None and press.dragging:
            self.interaction.drag_end(press.node)
        self.interaction.pointer_leave()

    def _update_hover(self, event: PointerEvent) -> None:
        hit = self.hit_test(event.position)
        hovered = self.interaction.hovered
        if hit is hovered:
            if hit is not None:
                self.interaction.pointer_move(hit, event.position)
            return
        if hovered is not None:
            self.interaction.pointer_leave()
        if hit is not None:
            self.interaction.pointer_enter(hit, event.position)

    def reset(self) -> None:
        self._presses.clear()
