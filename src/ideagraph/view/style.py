"""Node and link styling."""

from dataclasses import dataclass

from ideagraph.config import Settings, settings
from ideagraph.models import GraphNode, IdeaType, NodeKind

DEFAULT_IDEA_TYPE: IdeaType = "person"


@dataclass(frozen=True)
class NodeStyle:
    radius: float
    fill: str
    stroke: str
    stroke_width: float
    label_dx: float
    label_color: str
    font_size: float


@dataclass(frozen=True)
class Palette:
    fill: str
    stroke: str


IDEA_PALETTE: dict[str, Palette] = {
    "concept": Palette("rgba(70, 210, 255, 0.85)", "rgba(70, 210, 255, 0.95)"),
    "resource": Palette("rgba(255, 210, 70, 0.85)", "rgba(255, 210, 70, 0.95)"),
    "fact": Palette("rgba(120, 255, 120, 0.85)", "rgba(120, 255, 120, 0.95)"),
    "location": Palette("rgba(255, 140, 80, 0.85)", "rgba(255, 140, 80, 0.95)"),
    "year": Palette("rgba(160, 120, 255, 0.85)", "rgba(160, 120, 255, 0.95)"),
    "person": Palette("rgba(220, 120, 255, 0.85)", "rgba(220, 120, 255, 0.95)"),
}

LINK_STROKE = "rgba(255,255,255,0.10)"
LINK_WIDTH = 1.0
LABEL_OUTLINE = "rgba(0,0,0,0.65)"


def palette_for(idea_type: str | None) -> Palette:
    """Palette for an idea type; unknown or missing types use the default."""
    return IDEA_PALETTE.get(idea_type or DEFAULT_IDEA_TYPE, IDEA_PALETTE[DEFAULT_IDEA_TYPE])


def node_radius(node: GraphNode, config: Settings | None = None) -> float:
    """Drawn radius, also used for hit testing."""
    cfg = config or settings
    match node.kind:
        case NodeKind.TAG:
            return cfg.tag_node_radius
        case NodeKind.IDEA:
            return cfg.idea_node_radius
    raise ValueError(f"Unknown node kind: {node.kind!r}")


def node_style(node: GraphNode, config: Settings | None = None) -> NodeStyle:
    radius = node_radius(node, config)
    match node.kind:
        case NodeKind.TAG:
            return NodeStyle(
                radius=radius,
                fill="rgba(255,255,255,0.12)",
                stroke="rgba(255,255,255,0.35)",
                stroke_width=1.2,
                label_dx=radius + 2,
                label_color="rgba(255,255,255,0.78)",
                font_size=9,
            )
        case NodeKind.IDEA:
            palette = palette_for(node.record.type if node.record else None)
            return NodeStyle(
                radius=radius,
                fill=palette.fill,
                stroke=palette.stroke,
                stroke_width=2,
                label_dx=radius - 2,
                label_color="rgba(255,255,255,0.92)",
                font_size=16,
            )
    raise ValueError(f"Unknown node kind: {node.kind!r}")
