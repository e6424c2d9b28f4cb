"""ideagraph - force-directed layout and interaction engine for tagged ideas."""

from ideagraph.config import Settings, settings
from ideagraph.errors import IdeaGraphError, RecordError, ViewStateError
from ideagraph.graph import build_graph
from ideagraph.layout import Simulation, create_simulation
from ideagraph.models import DetailPanel, GraphLink, GraphNode, IdeaGraph, IdeaRecord
from ideagraph.view import GraphView, Viewport

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "settings",
    "IdeaGraphError",
    "RecordError",
    "ViewStateError",
    "IdeaRecord",
    "DetailPanel",
    "GraphNode",
    "GraphLink",
    "IdeaGraph",
    "build_graph",
    "Simulation",
    "create_simulation",
    "Viewport",
    "GraphView",
]
