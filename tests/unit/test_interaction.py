"""Unit tests for the interaction layer."""

from unittest.mock import MagicMock

import pytest

from ideagraph.layout import ManualFrameScheduler, Simulation
from ideagraph.models import DetailPanel, IdeaGraph
from ideagraph.view import HIDDEN_POSITION, InteractionLayer, NodeState, Tooltip


@pytest.fixture
def simulation(sample_graph: IdeaGraph, scheduler: ManualFrameScheduler) -> Simulation:
    sim = Simulation(sample_graph.nodes, scheduler=scheduler, seed=3)
    sim.alpha = 0.0
    return sim


@pytest.fixture
def on_select() -> MagicMock:
    return MagicMock()


@pytest.fixture
def layer(simulation: Simulation, on_select: MagicMock) -> InteractionLayer:
    return InteractionLayer(simulation, tooltip=Tooltip(offset=14), on_select=on_select)


@pytest.fixture
def idea(sample_graph: IdeaGraph):
    return sample_graph.node_by_id("king-tubby")


@pytest.fixture
def tag(sample_graph: IdeaGraph):
    return sample_graph.node_by_id("tag:jamaica")


class TestTooltip:
    def test_enter_idea_shows_tooltip(self, layer, idea) -> None:
        """Test hovering an idea shows its tooltip."""
        layer.pointer_enter(idea, (100, 50))

        assert layer.tooltip.visible
        assert layer.tooltip.title == "King Tubby"
        assert layer.tooltip.body == idea.record.description
        assert layer.tooltip.position == (114, 64)
        assert layer.node_state(idea) == {NodeState.HOVERING}

    def test_enter_tag_shows_nothing(self, layer, tag) -> None:
        """Test hovering a tag shows no tooltip."""
        layer.pointer_enter(tag, (100, 50))
        assert not layer.tooltip.visible
        assert layer.tooltip.position == HIDDEN_POSITION

    def test_move_tracks_pointer(self, layer, idea) -> None:
        """Test the tooltip follows the pointer."""
        layer.pointer_enter(idea, (100, 50))
        layer.pointer_move(idea, (120, 80))
        assert layer.tooltip.position == (134, 94)

    def test_leave_hides(self, layer, idea) -> None:
        """Test leaving a node hides the tooltip."""
        layer.pointer_enter(idea, (100, 50))
        layer.pointer_leave()
        assert not layer.tooltip.visible
        assert layer.tooltip.position == HIDDEN_POSITION
        assert layer.node_state(idea) == {NodeState.IDLE}

    def test_leave_while_dragging_hides(self, layer, idea) -> None:
        """Test leaving during a drag hides the tooltip."""
        layer.pointer_enter(idea, (100, 50))
        layer.drag_start(idea, (0, 0))
        layer.pointer_move(idea, (10, 10))
        layer.pointer_leave()
        assert not layer.tooltip.visible
        assert layer.tooltip.position == HIDDEN_POSITION

    def test_leave_without_hover_is_safe(self, layer) -> None:
        """Test leaving with nothing hovered."""
        layer.pointer_leave()
        assert layer.tooltip.position == HIDDEN_POSITION


class TestSelection:
    def test_click_idea_selects(self, layer, idea, on_select) -> None:
        """Test clicking an idea selects it."""
        assert layer.click(idea) is True
        assert layer.selected is idea
        on_select.assert_called_once_with(DetailPanel.from_record(idea.record))
        assert layer.selected_detail.title == "King Tubby"
        assert NodeState.SELECTED in layer.node_state(idea)

    def test_click_tag_is_noop(self, layer, tag, on_select) -> None:
        """Test clicking a tag selects nothing."""
        assert layer.click(tag) is False
        assert layer.selected is None
        assert layer.selected_detail is None
        on_select.assert_not_called()

    def test_single_selection(self, layer, sample_graph) -> None:
        """Test a new click replaces the selection."""
        first = sample_graph.node_by_id("daws")
        second = sample_graph.node_by_id("kingston")
        layer.click(first)
        layer.click(second)
        assert layer.selected is second
        assert layer.node_state(first) == {NodeState.IDLE}

    def test_clear_selection(self, layer, idea) -> None:
        """Test clearing the selection."""
        layer.click(idea)
        layer.clear_selection()
        assert layer.selected is None


class TestDrag:
    def test_drag_contract(self, layer, simulation, scheduler, idea) -> None:
        """Test dragging reheats, pins and leaves the node pinned."""
        layer.drag_start(idea, (10.0, 10.0))
        assert simulation.alpha_target == pytest.approx(0.2)
        assert simulation.running

        layer.drag_move(idea, (55.5, -20.25))
        scheduler.advance(5)
        layer.drag_move(idea, (60.0, 30.0))
        layer.drag_end(idea)
        assert simulation.alpha_target == 0

        scheduler.advance(50)
        assert idea.position == (60.0, 30.0)
        assert idea.is_pinned

    def test_drag_start_hides_tooltip(self, layer, idea) -> None:
        """Test starting a drag hides the tooltip."""
        layer.pointer_enter(idea, (5, 5))
        layer.drag_start(idea, (0, 0))
        assert not layer.tooltip.visible
        assert layer.node_state(idea) == {NodeState.HOVERING, NodeState.DRAGGING}

        # Tooltip does not come back while moving over the dragged node
        layer.pointer_move(idea, (9, 9))
        assert layer.tooltip.position == HIDDEN_POSITION

    def test_tag_nodes_can_be_dragged(self, layer, tag) -> None:
        """Test dragging a tag node."""
        layer.drag_start(tag, (1, 2))
        layer.drag_end(tag)
        assert tag.position == (1, 2)

    def test_zero_drag_alpha_target_is_kept(self, simulation, idea) -> None:
        """Test an explicit zero drag target is not replaced."""
        layer = InteractionLayer(simulation, drag_alpha_target=0.0)
        layer.drag_start(idea, (0, 0))
        assert simulation.alpha_target == 0.0
        assert idea.is_pinned

    def test_overlapping_drags(self, layer, simulation, idea, tag) -> None:
        """Test alpha target resets only after the last drag."""
        layer.drag_start(idea, (0, 0))
        layer.drag_start(tag, (5, 5))
        layer.drag_end(idea)
        assert simulation.alpha_target == pytest.approx(0.2)
        layer.drag_end(tag)
        assert simulation.alpha_target == 0
        assert layer.dragging == ()

    def test_move_without_start_ignored(self, layer, idea) -> None:
        """Test moving without a drag does nothing."""
        layer.drag_move(idea, (1, 1))
        assert not idea.is_pinned

    def test_reset_drops_gestures(self, layer, simulation, idea) -> None:
        """Test reset clears hover, selection and drags."""
        layer.pointer_enter(idea, (0, 0))
        layer.drag_start(idea, (0, 0))
        layer.reset()
        assert layer.dragging == ()
        assert layer.hovered is None
        assert simulation.alpha_target == 0
