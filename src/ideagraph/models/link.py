"""Graph link model - weighted idea-tag and tag-tag edges."""

from dataclasses import dataclass
from enum import Enum

from ideagraph.models.node import GraphNode


class LinkKind(str, Enum):
    """Type of a link."""

    IDEA_TAG = "idea-tag"  # idea is tagged with tag, weight 1
    TAG_TAG = "tag-tag"  # tags co-occur on at least one idea


@dataclass(eq=False)
class GraphLink:
    """
    An undirected, weighted edge between two nodes.

    ``source``/``target`` are node ids as built; the link force resolves
    them to live nodes in ``source_node``/``target_node``.
    """

    id: str
    source: str
    target: str
    kind: LinkKind
    weight: int = 1

    source_node: GraphNode | None = None
    target_node: GraphNode | None = None

    @property
    def is_resolved(self) -> bool:
        return self.source_node is not None and self.target_node is not None

    @property
    def is_visible(self) -> bool:
        """Only idea-tag links are drawn; tag-tag links only shape the layout."""
        return self.kind is LinkKind.IDEA_TAG

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "kind": self.kind.value,
            "weight": self.weight,
        }
