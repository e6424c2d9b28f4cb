"""ideagraph data models."""

from ideagraph.models.graph import IdeaGraph
from ideagraph.models.idea import IDEA_TYPES, DetailPanel, IdeaRecord, IdeaType
from ideagraph.models.link import GraphLink, LinkKind
from ideagraph.models.node import TAG_ID_PREFIX, GraphNode, NodeKind, tag_node_id

__all__ = [
    "IdeaRecord",
    "IdeaType",
    "IDEA_TYPES",
    "DetailPanel",
    "GraphNode",
    "NodeKind",
    "TAG_ID_PREFIX",
    "tag_node_id",
    "GraphLink",
    "LinkKind",
    "IdeaGraph",
]
