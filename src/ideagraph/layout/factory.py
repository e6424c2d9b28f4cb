"""Default force configuration for idea graphs."""

import logging

from ideagraph.config import Settings, settings
from ideagraph.layout.forces import (
    CenterForce,
    CollideForce,
    LinkForce,
    ManyBodyForce,
    PositionForce,
)
from ideagraph.layout.scheduler import FrameScheduler
from ideagraph.layout.simulation import Simulation
from ideagraph.models import GraphLink, GraphNode, IdeaGraph, LinkKind, NodeKind

logger = logging.getLogger(__name__)


def link_distance(link: GraphLink, config: Settings | None = None) -> float:
    cfg = config or settings
    match link.kind:
        case LinkKind.TAG_TAG:
            return cfg.tag_tag_link_distance
        case LinkKind.IDEA_TAG:
            return cfg.idea_tag_link_distance
    raise ValueError(f"Unknown link kind: {link.kind!r}")


def link_strength(link: GraphLink, config: Settings | None = None) -> float:
    """Tag-tag strength grows with co-occurrence weight up to a cap."""
    cfg = config or settings
    match link.kind:
        case LinkKind.TAG_TAG:
            return min(cfg.tag_tag_strength_cap, cfg.tag_tag_strength_per_weight * link.weight)
        case LinkKind.IDEA_TAG:
            return cfg.idea_tag_link_strength
    raise ValueError(f"Unknown link kind: {link.kind!r}")


def collide_radius(node: GraphNode, config: Settings | None = None) -> float:
    cfg = config or settings
    match node.kind:
        case NodeKind.TAG:
            return cfg.tag_collide_radius
        case NodeKind.IDEA:
            return cfg.idea_collide_radius
    raise ValueError(f"Unknown node kind: {node.kind!r}")


def create_simulation(
    graph: IdeaGraph,
    scheduler: FrameScheduler | None = None,
    center: tuple[float, float] = (0.0, 0.0),
    config: Settings | None = None,
) -> Simulation:
    """
    Build a simulation with the standard force set.

    Forces: "link", "charge", "collide", "x", "y" and "center". The x/y
    and center forces target ``center`` and are retargeted on resize via
    ``set_center``.
    """
    cfg = config or settings
    cx, cy = center

    sim = Simulation(
        graph.nodes,
        scheduler=scheduler,
        alpha=cfg.alpha_start,
        alpha_min=cfg.alpha_min,
        alpha_decay=cfg.alpha_decay,
        velocity_decay=cfg.velocity_decay,
        seed=cfg.random_seed,
    )
    sim.add_force("link", LinkForce(
        graph.links,
        distance=lambda link: link_distance(link, cfg),
        strength=lambda link: link_strength(link, cfg),
    ))
    sim.add_force("charge", ManyBodyForce(
        strength=cfg.charge_strength,
        distance_min=cfg.charge_distance_min,
    ))
    sim.add_force("collide", CollideForce(radius=lambda node: collide_radius(node, cfg)))
    sim.add_force("x", PositionForce("x", target=cx, strength=cfg.center_strength))
    sim.add_force("y", PositionForce("y", target=cy, strength=cfg.center_strength))
    sim.add_force("center", CenterForce(cx, cy))

    logger.debug(f"Created simulation for {len(graph.nodes)} nodes, {len(graph.links)} links")
    return sim


def set_center(sim: Simulation, x: float, y: float) -> None:
    """Retarget the centering forces to (x, y)."""
    for name in ("x", "y"):
        force = sim.force(name)
        if isinstance(force, PositionForce):
            force.target = x if force.axis == "x" else y
    center = sim.force("center")
    if isinstance(center, CenterForce):
        center.x = x
        center.y = y
