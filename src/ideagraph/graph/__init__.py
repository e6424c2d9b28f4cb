"""Graph construction from idea records."""

from ideagraph.graph.builder import build_graph, count_tag_pairs, drop_dangling_links, pair_key

__all__ = [
    "build_graph",
    "count_tag_pairs",
    "drop_dangling_links",
    "pair_key",
]
