"""Graph node model - idea and tag vertices with simulation state."""

import math
from dataclasses import dataclass
from enum import Enum

from ideagraph.models.idea import IdeaRecord

TAG_ID_PREFIX = "tag:"


class NodeKind(str, Enum):
    """Discriminator for the two node variants."""

    IDEA = "idea"  # wraps one IdeaRecord
    TAG = "tag"  # synthesized, one per distinct tag


def tag_node_id(tag: str) -> str:
    """Namespaced node id for a tag, never equal to a plain idea id."""
    return f"{TAG_ID_PREFIX}{tag}"


@dataclass(eq=False)
class GraphNode:
    """
    A vertex of the idea graph.

    Position and velocity fields are mutated in place by the simulation;
    ``fx``/``fy`` pin the node when set. Nodes compare by identity so they
    can be used as dict keys while their coordinates change.
    """

    id: str
    label: str
    kind: NodeKind
    record: IdeaRecord | None = None  # idea nodes only
    tag: str | None = None  # tag nodes only

    # Simulation state
    index: int = -1
    x: float = math.nan
    y: float = math.nan
    vx: float = 0.0
    vy: float = 0.0
    fx: float | None = None
    fy: float | None = None

    @classmethod
    def for_idea(cls, record: IdeaRecord) -> "GraphNode":
        return cls(id=record.id, label=record.label, kind=NodeKind.IDEA, record=record)

    @classmethod
    def for_tag(cls, tag: str) -> "GraphNode":
        return cls(id=tag_node_id(tag), label=tag, kind=NodeKind.TAG, tag=tag)

    @property
    def is_idea(self) -> bool:
        return self.kind is NodeKind.IDEA

    @property
    def is_pinned(self) -> bool:
        return self.fx is not None or self.fy is not None

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    def pin(self, x: float, y: float) -> None:
        """Fix the node at (x, y); forces no longer move it."""
        self.fx = x
        self.fy = y
        self.x = x
        self.y = y
        self.vx = 0.0
        self.vy = 0.0

    def unpin(self) -> None:
        self.fx = None
        self.fy = None

    def __repr__(self) -> str:
        return f"GraphNode(id={self.id!r}, kind={self.kind.value}, x={self.x:.1f}, y={self.y:.1f})"
