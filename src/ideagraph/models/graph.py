"""Container for a built node/link set."""

from dataclasses import dataclass, field

from ideagraph.models.link import GraphLink
from ideagraph.models.node import GraphNode, NodeKind


@dataclass
class IdeaGraph:
    """Nodes (ideas first, then tags) and links derived from idea records."""

    nodes: list[GraphNode] = field(default_factory=list)
    links: list[GraphLink] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._by_id = {node.id: node for node in self.nodes}

    def node_by_id(self, node_id: str) -> GraphNode | None:
        return self._by_id.get(node_id)

    @property
    def idea_nodes(self) -> list[GraphNode]:
        return [n for n in self.nodes if n.kind is NodeKind.IDEA]

    @property
    def tag_nodes(self) -> list[GraphNode]:
        return [n for n in self.nodes if n.kind is NodeKind.TAG]

    @property
    def visible_links(self) -> list[GraphLink]:
        return [link for link in self.links if link.is_visible]

    def __len__(self) -> int:
        return len(self.nodes)
