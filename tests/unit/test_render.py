"""Unit tests for the render loop and drawing surfaces."""

import math

import pytest

from ideagraph.layout import create_simulation
from ideagraph.models import IdeaGraph
from ideagraph.view import RecordingSurface, RenderLoop, SvgSurface, Viewport, node_style, palette_for
from ideagraph.view.style import IDEA_PALETTE


@pytest.fixture
def viewport() -> Viewport:
    return Viewport(800, 600)


class TestRenderLoop:
    def test_draws_visible_links_and_all_nodes(self, sample_graph: IdeaGraph, viewport) -> None:
        """Test a frame draws visible links and every node."""
        create_simulation(sample_graph)
        surface = RecordingSurface()
        loop = RenderLoop(sample_graph, viewport, surface)

        loop.redraw()

        frame = surface.last_frame
        assert set(frame.links()) == {link.id for link in sample_graph.visible_links}
        assert len(frame.links()) == 12
        assert list(frame.nodes()) == [node.id for node in sample_graph.nodes]
        assert frame.nodes()["king-tubby"] == sample_graph.node_by_id("king-tubby").position
        assert surface.frames_drawn == 1

    def test_link_endpoints_follow_nodes(self, sample_graph, viewport) -> None:
        """Test link endpoints match node positions."""
        sim = create_simulation(sample_graph)
        surface = RecordingSurface()
        loop = RenderLoop(sample_graph, viewport, surface)
        sim.on_tick(loop.redraw)

        sim.settle(10)

        link = sample_graph.visible_links[0]
        x1, y1, x2, y2 = surface.last_frame.links()[link.id]
        assert (x1, y1) == link.source_node.position
        assert (x2, y2) == link.target_node.position
        assert surface.frames_drawn == 10

    def test_non_finite_positions_drawn_at_zero(self, sample_graph, viewport) -> None:
        """Test non-finite positions are drawn at zero."""
        surface = RecordingSurface()
        loop = RenderLoop(sample_graph, viewport, surface)
        node = sample_graph.nodes[0]
        node.x = math.nan
        node.y = math.inf

        loop.redraw()

        assert surface.last_frame.nodes()[node.id] == (0.0, 0.0)

    def test_frame_carries_viewport_transform(self, sample_graph, viewport) -> None:
        """Test frames record the viewport transform."""
        create_simulation(sample_graph)
        surface = RecordingSurface()
        loop = RenderLoop(sample_graph, viewport, surface)
        viewport.zoom_to(2)
        loop.redraw()
        assert surface.last_frame.transform.k == 2
        assert (surface.last_frame.width, surface.last_frame.height) == (800, 600)


class TestStyle:
    def test_palette_fallback(self) -> None:
        """Test unknown idea types use the default palette."""
        assert palette_for(None) == IDEA_PALETTE["person"]
        assert palette_for("unknown") == IDEA_PALETTE["person"]
        assert palette_for("fact") == IDEA_PALETTE["fact"]

    def test_node_styles_by_kind(self, sample_graph) -> None:
        """Test node styles per kind."""
        tag = node_style(sample_graph.node_by_id("tag:dub"))
        idea = node_style(sample_graph.node_by_id("dub-music"))
        assert tag.radius < idea.radius
        assert idea.fill == IDEA_PALETTE["concept"].fill


class TestSvgSurface:
    def test_renders_document(self, sample_graph, viewport) -> None:
        """Test rendering an SVG document."""
        create_simulation(sample_graph)
        surface = SvgSurface()
        loop = RenderLoop(sample_graph, viewport, surface)
        viewport.pan_by(10, 20)

        loop.redraw()

        doc = surface.document
        assert doc.startswith('<svg xmlns="http://www.w3.org/2000/svg" width="800" height="600">')
        assert doc.endswith("</svg>")
        assert 'transform="translate(10,20) scale(1)"' in doc
        assert doc.count("<line ") == len(sample_graph.visible_links)
        assert doc.count("<circle ") == len(sample_graph.nodes)
        assert ">King Tubby</text>" in doc

    def test_escapes_labels(self, viewport) -> None:
        """Test labels are escaped in SVG."""
        from ideagraph.graph import build_graph
        from ideagraph.models import IdeaRecord

        graph = build_graph([IdeaRecord(id="a", label="<R&B>", tags=("x",))])
        create_simulation(graph)
        surface = SvgSurface()
        RenderLoop(graph, viewport, surface).redraw()
        assert "&lt;R&amp;B&gt;" in surface.document
