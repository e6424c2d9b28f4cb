"""Drawing surfaces that receive render-loop frames."""

from dataclasses import dataclass, field
from html import escape
from typing import Protocol

from ideagraph.view.style import LABEL_OUTLINE, NodeStyle
from ideagraph.view.viewport import ViewTransform


class Surface(Protocol):
    """A 2D drawing target of a given pixel size."""

    def begin_frame(self, width: float, height: float, transform: ViewTransform) -> None: ...

    def draw_link(
        self, link_id: str, x1: float, y1: float, x2: float, y2: float, stroke: str, width: float
    ) -> None: ...

    def draw_node(self, node_id: str, x: float, y: float, style: NodeStyle, label: str) -> None: ...

    def end_frame(self) -> None: ...


@dataclass(frozen=True)
class DrawCommand:
    """One recorded draw call."""

    op: str  # "link" or "node"
    id: str
    coords: tuple[float, ...]
    label: str = ""
    style: NodeStyle | None = None


@dataclass
class Frame:
    width: float
    height: float
    transform: ViewTransform
    commands: list[DrawCommand] = field(default_factory=list)

    def nodes(self) -> dict[str, tuple[float, float]]:
        return {c.id: (c.coords[0], c.coords[1]) for c in self.commands if c.op == "node"}

    def links(self) -> dict[str, tuple[float, ...]]:
        return {c.id: c.coords for c in self.commands if c.op == "link"}


class RecordingSurface:
    """Keeps the most recent frame as a display list."""

    def __init__(self) -> None:
        self.frames_drawn = 0
        self.last_frame: Frame | None = None
        self._current: Frame | None = None

    def begin_frame(self, width: float, height: float, transform: ViewTransform) -> None:
        self._current = Frame(width, height, transform)

    def draw_link(
        self, link_id: str, x1: float, y1: float, x2: float, y2: float, stroke: str, width: float
    ) -> None:
        self._current.commands.append(DrawCommand("link", link_id, (x1, y1, x2, y2)))

    def draw_node(self, node_id: str, x: float, y: float, style: NodeStyle, label: str) -> None:
        self._current.commands.append(DrawCommand("node", node_id, (x, y), label, style))

    def end_frame(self) -> None:
        self.last_frame = self._current
        self._current = None
        self.frames_drawn += 1


class SvgSurface:
    """Renders each frame to a standalone SVG document."""

    def __init__(self, font_family: str = "ui-sans-serif, system-ui, sans-serif") -> None:
        self.font_family = font_family
        self.document = ""
        self._parts: list[str] = []
        self._links: list[str] = []
        self._nodes: list[str] = []

    def begin_frame(self, width: float, height: float, transform: ViewTransform) -> None:
        self._links = []
        self._nodes = []
        self._parts = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{width:g}" height="{height:g}">',
            f'<g transform="{transform.to_svg()}">',
        ]

    def draw_link(
        self, link_id: str, x1: float, y1: float, x2: float, y2: float, stroke: str, width: float
    ) -> None:
        self._links.append(
            f'<line class="link" data-id="{escape(link_id)}" x1="{x1:.2f}" y1="{y1:.2f}" '
            f'x2="{x2:.2f}" y2="{y2:.2f}" stroke="{stroke}" stroke-width="{width:g}" '
            f'stroke-linecap="round"/>'
        )

    def draw_node(self, node_id: str, x: float, y: float, style: NodeStyle, label: str) -> None:
        self._nodes.append(
            f'<g class="node" data-id="{escape(node_id)}" transform="translate({x:.2f},{y:.2f})">'
            f'<circle r="{style.radius:g}" fill="{style.fill}" stroke="{style.stroke}" '
            f'stroke-width="{style.stroke_width:g}"/>'
            f'<text x="{style.label_dx:g}" y="4" fill="{style.label_color}" '
            f'font-size="{style.font_size:g}" font-family="{escape(self.font_family)}" '
            f'paint-order="stroke" stroke="{LABEL_OUTLINE}" stroke-width="3">{escape(label)}</text>'
            f"</g>"
        )

    def end_frame(self) -> None:
        self.document = "".join([
            *self._parts,
            '<g class="links">', *self._links, "</g>",
            '<g class="nodes">', *self._nodes, "</g>",
            "</g></svg>",
        ])
