"""Interaction layer: hover tooltips, selection and drag-to-pin.

States per node are not exclusive (a node can be hovered and selected at
once). Selection is a single node for the whole view.

    idle --enter--> hovering --leave--> idle
    any --drag_start--> dragging --drag_end--> idle (node stays pinned)
    idea --click--> selected (replaces previous selection)
"""

import logging
from collections.abc import Callable
from enum import Enum

from ideagraph.config import settings
from ideagraph.layout import Simulation
from ideagraph.models import DetailPanel, GraphNode, NodeKind
from ideagraph.view.tooltip import Tooltip

logger = logging.getLogger(__name__)

Point = tuple[float, float]


class NodeState(str, Enum):
    IDLE = "idle"
    HOVERING = "hovering"
    DRAGGING = "dragging"
    SELECTED = "selected"


def has_tooltip(node: GraphNode) -> bool:
    """Only idea nodes carry a description worth previewing."""
    match node.kind:
        case NodeKind.IDEA:
            return True
        case NodeKind.TAG:
            return False
    raise ValueError(f"Unknown node kind: {node.kind!r}")


def is_selectable(node: GraphNode) -> bool:
    """Tags have no detail to show."""
    match node.kind:
        case NodeKind.IDEA:
            return node.record is not None
        case NodeKind.TAG:
            return False
    raise ValueError(f"Unknown node kind: {node.kind!r}")


class InteractionLayer:
    """
    Applies pointer gestures to the simulation and selection state.

    Pointer positions for hover are container pixels; drag positions are
    simulation coordinates (already inverted through the viewport).
    """

    def __init__(
        self,
        simulation: Simulation,
        tooltip: Tooltip | None = None,
        on_select: Callable[[DetailPanel], None] | None = None,
        drag_alpha_target: float | None = None,
    ) -> None:
        self.simulation = simulation
        self.tooltip = tooltip or Tooltip()
        self.on_select = on_select
        self.drag_alpha_target = (
            drag_alpha_target if drag_alpha_target is not None else settings.drag_alpha_target
        )

        self.hovered: GraphNode | None = None
        self.selected: GraphNode | None = None
        self._dragging: list[GraphNode] = []

    # -- hover ----------------------------------------------------------

    def pointer_enter(self, node: GraphNode, pointer: Point) -> None:
        self.hovered = node
        if has_tooltip(node) and node.record is not None:
            self.tooltip.show(node.label, node.record.description, pointer)

    def pointer_move(self, node: GraphNode, pointer: Point) -> None:
        if node is not self.hovered or not has_tooltip(node):
            return
        if self.tooltip.visible:
            self.tooltip.place(pointer)

    def pointer_leave(self) -> None:
        """Hide the tooltip whatever was hovered or dragged before."""
        self.hovered = None
        self.tooltip.hide()

    # -- selection ------------------------------------------------------

    def click(self, node: GraphNode) -> bool:
        """Select an idea node. Returns False for nodes that cannot be selected."""
        if not is_selectable(node):
            return False
        self.selected = node
        logger.debug(f"Selected {node.id!r}")
        if self.on_select is not None:
            self.on_select(DetailPanel.from_record(node.record))
        return True

    def clear_selection(self) -> None:
        self.selected = None

    @property
    def selected_detail(self) -> DetailPanel | None:
        if self.selected is None or self.selected.record is None:
            return None
        return DetailPanel.from_record(self.selected.record)

    # -- drag -----------------------------------------------------------

    @property
    def dragging(self) -> tuple[GraphNode, ...]:
        return tuple(self._dragging)

    def drag_start(self, node: GraphNode, position: Point) -> None:
        self.tooltip.hide()
        if not self._dragging:
            self.simulation.alpha_target = self.drag_alpha_target
            self.simulation.restart()
        if node not in self._dragging:
            self._dragging.append(node)
        self.simulation.pin(node, *position)
        logger.debug(f"Drag start {node.id!r} at {position}")

    def drag_move(self, node: GraphNode, position: Point) -> None:
        if node not in self._dragging:
            return
        self.simulation.pin(node, *position)

    def drag_end(self, node: GraphNode) -> None:
        """Finish a drag; the node keeps its pinned position."""
        if node not in self._dragging:
            return
        self._dragging.remove(node)
        if not self._dragging:
            self.simulation.alpha_target = 0.0
        logger.debug(f"Drag end {node.id!r} pinned at ({node.fx}, {node.fy})")

    # -- state ----------------------------------------------------------

    def node_state(self, node: GraphNode) -> frozenset[NodeState]:
        states = set()
        if node is self.hovered:
            states.add(NodeState.HOVERING)
        if node in self._dragging:
            states.add(NodeState.DRAGGING)
        if node is self.selected:
            states.add(NodeState.SELECTED)
        return frozenset(states or {NodeState.IDLE})

    def reset(self) -> None:
        """Drop transient gesture state (used on view disposal)."""
        self.tooltip.hide()
        self.hovered = None
        if self._dragging:
            self._dragging.clear()
            self.simulation.alpha_target = 0.0
