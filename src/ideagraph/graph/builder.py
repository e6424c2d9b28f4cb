"""Derive the idea/tag graph from tagged idea records.

Algorithm:
1. One idea node per record, input order preserved
2. One tag node per distinct tag, sorted for a stable order
3. One idea-tag link per (record, tag) occurrence, weight 1
4. Count co-occurring tag pairs over each record's deduplicated tags
5. One tag-tag link per pair whose count meets the threshold
"""

import logging
from collections import Counter
from collections.abc import Iterable, Sequence

from ideagraph.config import settings
from ideagraph.models import GraphLink, GraphNode, IdeaGraph, IdeaRecord, LinkKind, tag_node_id

logger = logging.getLogger(__name__)

TagPair = tuple[str, str]


def pair_key(a: str, b: str) -> TagPair:
    """Order-independent key for a tag pair."""
    return (a, b) if a < b else (b, a)


def unique_tags(tags: Iterable[str]) -> list[str]:
    """Deduplicate tags keeping first-seen order."""
    return list(dict.fromkeys(tags))


def count_tag_pairs(records: Iterable[IdeaRecord]) -> Counter[TagPair]:
    """Count, per unordered tag pair, how many records carry both tags."""
    counts: Counter[TagPair] = Counter()
    for record in records:
        tags = unique_tags(record.tags)
        for i, a in enumerate(tags):
            for b in tags[i + 1:]:
                counts[pair_key(a, b)] += 1
    return counts


def build_graph(
    records: Sequence[IdeaRecord],
    co_occurrence_threshold: int | None = None,
) -> IdeaGraph:
    """
    Build nodes and links from idea records.

    Pure and deterministic for a given input order. Links whose endpoints
    cannot be found are skipped rather than raising.

    Args:
        records: Idea records in display order
        co_occurrence_threshold: Minimum shared-idea count for a tag-tag link
            (defaults to settings.co_occurrence_threshold)

    Returns:
        IdeaGraph with idea nodes first, then tag nodes
    """
    threshold = (
        co_occurrence_threshold
        if co_occurrence_threshold is not None
        else settings.co_occurrence_threshold
    )

    idea_nodes: list[GraphNode] = []
    seen_ids: set[str] = set()
    kept_records: list[IdeaRecord] = []
    for record in records:
        if record.id in seen_ids:
            logger.warning(f"Dropping idea record with duplicate id {record.id!r}")
            continue
        seen_ids.add(record.id)
        kept_records.append(record)
        idea_nodes.append(GraphNode.for_idea(record))

    # Namespacing makes this impossible for ordinary ids; an idea literally
    # named "tag:x" alongside tag "x" would still break uniqueness.
    all_tags = {tag for record in kept_records for tag in record.tags}
    colliding = {tag_node_id(tag) for tag in all_tags} & seen_ids
    if colliding:
        logger.warning(f"Dropping idea records whose ids collide with tag ids: {sorted(colliding)}")
        idea_nodes = [n for n in idea_nodes if n.id not in colliding]
        kept_records = [r for r in kept_records if r.id not in colliding]
        # Tags carried only by dropped records get no node
        all_tags = {tag for record in kept_records for tag in record.tags}

    tag_nodes = [GraphNode.for_tag(tag) for tag in sorted(all_tags)]
    tag_index = {n.tag: n.id for n in tag_nodes}
    links: list[GraphLink] = []

    for record in kept_records:
        occurrences: Counter[str] = Counter()
        for tag in record.tags:
            tag_id = tag_index.get(tag)
            if tag_id is None:
                logger.debug(f"Skipping idea-tag link {record.id!r} -> unknown tag {tag!r}")
                continue
            occurrences[tag] += 1
            link_id = f"L:idea-tag:{record.id}->{tag_id}"
            if occurrences[tag] > 1:
                link_id = f"{link_id}#{occurrences[tag]}"
            links.append(GraphLink(
                id=link_id,
                source=record.id,
                target=tag_id,
                kind=LinkKind.IDEA_TAG,
                weight=1,
            ))

    for (a, b), count in count_tag_pairs(kept_records).items():
        if count < threshold:
            continue
        a_id = tag_index.get(a)
        b_id = tag_index.get(b)
        if a_id is None or b_id is None:
            continue
        links.append(GraphLink(
            id=f"L:tag-tag:{a_id}<->{b_id}",
            source=a_id,
            target=b_id,
            kind=LinkKind.TAG_TAG,
            weight=count,
        ))

    graph = IdeaGraph(nodes=[*idea_nodes, *tag_nodes], links=links)
    for i, node in enumerate(graph.nodes):
        node.index = i

    logger.debug(
        f"Built graph: {len(idea_nodes)} ideas, {len(tag_nodes)} tags, {len(links)} links"
    )
    return graph


def drop_dangling_links(graph: IdeaGraph) -> list[GraphLink]:
    """Remove links that reference ids missing from the node set.

    Returns the dropped links.
    """
    kept: list[GraphLink] = []
    dropped: list[GraphLink] = []
    for link in graph.links:
        if graph.node_by_id(link.source) and graph.node_by_id(link.target):
            kept.append(link)
        else:
            dropped.append(link)
    if dropped:
        logger.warning(f"Dropped {len(dropped)} links with missing endpoints")
    graph.links = kept
    return dropped
