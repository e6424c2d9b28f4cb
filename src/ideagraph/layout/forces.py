"""Velocity-based forces for the layout simulation.

Each force follows the d3-force model: ``initialize`` receives the node list
and the simulation's random source, and calling the force with the current
alpha adds to node velocities (or, for the centering force, shifts
positions). Forces never write to pinned coordinates ``fx``/``fy``.
"""

import logging
import math
import random
from collections.abc import Callable, Sequence

import numpy as np

from ideagraph.models import GraphLink, GraphNode

logger = logging.getLogger(__name__)

NodeParam = float | Callable[[GraphNode], float]
LinkParam = float | Callable[[GraphLink], float]


def jiggle(rng: random.Random) -> float:
    """Tiny random offset used to separate coincident nodes."""
    return (rng.random() - 0.5) * 1e-6


class Force:
    """Base class for simulation forces."""

    def __init__(self) -> None:
        self.nodes: list[GraphNode] = []
        self.rng = random.Random()

    def initialize(self, nodes: Sequence[GraphNode], rng: random.Random) -> None:
        self.nodes = list(nodes)
        self.rng = rng

    def __call__(self, alpha: float) -> None:
        raise NotImplementedError


class LinkForce(Force):
    """
    Spring force pulling linked nodes toward a target distance.

    Each link is corrected proportionally to ``strength * alpha``; the
    correction is split between the endpoints by degree so that hub nodes
    move less than leaves.
    """

    def __init__(
        self,
        links: Sequence[GraphLink],
        distance: LinkParam = 30.0,
        strength: LinkParam | None = None,
        iterations: int = 1,
    ) -> None:
        super().__init__()
        self.links = list(links)
        self.distance = distance
        self.strength = strength
        self.iterations = iterations
        self._distances: list[float] = []
        self._strengths: list[float] = []
        self._bias: list[float] = []

    def initialize(self, nodes: Sequence[GraphNode], rng: random.Random) -> None:
        super().initialize(nodes, rng)
        by_id = {node.id: node for node in self.nodes}

        resolved: list[GraphLink] = []
        for link in self.links:
            source = by_id.get(link.source)
            target = by_id.get(link.target)
            if source is None or target is None:
                logger.warning(f"Dropping link {link.id!r}: endpoint not in node set")
                continue
            link.source_node = source
            link.target_node = target
            resolved.append(link)
        self.links = resolved

        degree: dict[int, int] = {}
        for link in self.links:
            degree[id(link.source_node)] = degree.get(id(link.source_node), 0) + 1
            degree[id(link.target_node)] = degree.get(id(link.target_node), 0) + 1

        self._bias = []
        self._strengths = []
        self._distances = []
        for link in self.links:
            ds = degree[id(link.source_node)]
            dt = degree[id(link.target_node)]
            self._bias.append(ds / (ds + dt))
            if self.strength is None:
                self._strengths.append(1 / min(ds, dt))
            elif callable(self.strength):
                self._strengths.append(self.strength(link))
            else:
                self._strengths.append(float(self.strength))
            if callable(self.distance):
                self._distances.append(self.distance(link))
            else:
                self._distances.append(float(self.distance))

    def __call__(self, alpha: float) -> None:
        for _ in range(self.iterations):
            for i, link in enumerate(self.links):
                source = link.source_node
                target = link.target_node
                x = target.x + target.vx - source.x - source.vx or jiggle(self.rng)
                y = target.y + target.vy - source.y - source.vy or jiggle(self.rng)
                length = math.sqrt(x * x + y * y)
                length = (length - self._distances[i]) / length * alpha * self._strengths[i]
                x *= length
                y *= length
                b = self._bias[i]
                target.vx -= x * b
                target.vy -= y * b
                b = 1 - b
                source.vx += x * b
                source.vy += y * b


class ManyBodyForce(Force):
    """
    Pairwise charge between all nodes; negative strength repels.

    Computed exactly over all pairs with numpy; node counts are small
    enough that no Barnes-Hut approximation is needed.
    """

    def __init__(self, strength: float = -30.0, distance_min: float = 1.0) -> None:
        super().__init__()
        self.strength = strength
        self.distance_min = distance_min

    def __call__(self, alpha: float) -> None:
        n = len(self.nodes)
        if n < 2:
            return

        xs = np.fromiter((node.x for node in self.nodes), dtype=float, count=n)
        ys = np.fromiter((node.y for node in self.nodes), dtype=float, count=n)

        # dx[i, j] points from node i to node j
        dx = xs[np.newaxis, :] - xs[:, np.newaxis]
        dy = ys[np.newaxis, :] - ys[:, np.newaxis]
        off_diagonal = ~np.eye(n, dtype=bool)

        for i, j in zip(*np.nonzero((dx == 0) & off_diagonal)):
            dx[i, j] = jiggle(self.rng)
        for i, j in zip(*np.nonzero((dy == 0) & off_diagonal)):
            dy[i, j] = jiggle(self.rng)

        dist2 = dx * dx + dy * dy
        min2 = self.distance_min * self.distance_min
        dist2 = np.where(dist2 < min2, np.sqrt(min2 * dist2), dist2)
        dist2[~off_diagonal] = 1.0

        weight = np.where(off_diagonal, self.strength * alpha / dist2, 0.0)
        dvx = (dx * weight).sum(axis=1)
        dvy = (dy * weight).sum(axis=1)

        for node, ax, ay in zip(self.nodes, dvx, dvy):
            node.vx += float(ax)
            node.vy += float(ay)


class CollideForce(Force):
    """Keeps nodes at least ``radius(a) + radius(b)`` apart.

    Uses positions predicted one step ahead (x + vx) and splits the
    correction by squared radius so larger nodes yield less.
    """

    def __init__(self, radius: NodeParam = 1.0, strength: float = 1.0, iterations: int = 1) -> None:
        super().__init__()
        self.radius = radius
        self.strength = strength
        self.iterations = iterations
        self._radii: list[float] = []

    def initialize(self, nodes: Sequence[GraphNode], rng: random.Random) -> None:
        super().initialize(nodes, rng)
        if callable(self.radius):
            self._radii = [float(self.radius(node)) for node in self.nodes]
        else:
            self._radii = [float(self.radius)] * len(self.nodes)

    def __call__(self, alpha: float) -> None:
        nodes = self.nodes
        radii = self._radii
        for _ in range(self.iterations):
            for i, node in enumerate(nodes):
                ri = radii[i]
                ri2 = ri * ri
                xi = node.x + node.vx
                yi = node.y + node.vy
                for j in range(i + 1, len(nodes)):
                    other = nodes[j]
                    rj = radii[j]
                    r = ri + rj
                    x = xi - other.x - other.vx
                    y = yi - other.y - other.vy
                    if abs(x) >= r or abs(y) >= r:
                        continue
                    dist2 = x * x + y * y
                    if dist2 >= r * r:
                        continue
                    if x == 0:
                        x = jiggle(self.rng)
                        dist2 += x * x
                    if y == 0:
                        y = jiggle(self.rng)
                        dist2 += y * y
                    dist = math.sqrt(dist2)
                    push = (r - dist) / dist * self.strength
                    x *= push
                    y *= push
                    rj2 = rj * rj
                    share = rj2 / (ri2 + rj2)
                    node.vx += x * share
                    node.vy += y * share
                    share = 1 - share
                    other.vx -= x * share
                    other.vy -= y * share


class PositionForce(Force):
    """Weak spring toward a target coordinate on one axis."""

    def __init__(self, axis: str, target: float = 0.0, strength: float = 0.1) -> None:
        super().__init__()
        if axis not in ("x", "y"):
            raise ValueError(f"axis must be 'x' or 'y', got {axis!r}")
        self.axis = axis
        self.target = target
        self.strength = strength

    def __call__(self, alpha: float) -> None:
        k = self.strength * alpha
        if self.axis == "x":
            for node in self.nodes:
                node.vx += (self.target - node.x) * k
        else:
            for node in self.nodes:
                node.vy += (self.target - node.y) * k


class CenterForce(Force):
    """Translates all nodes so their mean position sits on (x, y)."""

    def __init__(self, x: float = 0.0, y: float = 0.0, strength: float = 1.0) -> None:
        super().__init__()
        self.x = x
        self.y = y
        self.strength = strength

    def __call__(self, alpha: float) -> None:
        n = len(self.nodes)
        if not n:
            return
        sx = sum(node.x for node in self.nodes) / n - self.x
        sy = sum(node.y for node in self.nodes) / n - self.y
        sx *= self.strength
        sy *= self.strength
        for node in self.nodes:
            node.x -= sx
            node.y -= sy
