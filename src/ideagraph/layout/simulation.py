"""Force simulation: iterative layout driven by a frame scheduler.

Algorithm (per tick):
1. alpha += (alpha_target - alpha) * alpha_decay
2. Every registered force adds to node velocities
3. Free axes integrate: v *= 1 - velocity_decay, x += v
   Pinned axes snap to fx/fy with zero velocity

While alpha >= alpha_min the simulation keeps requesting frames; the first
tick that leaves it below alpha_min stops scheduling and fires ``end``.
"""

import logging
import math
import random
from collections.abc import Callable, Sequence

from ideagraph.config import settings
from ideagraph.layout.forces import Force
from ideagraph.layout.scheduler import FrameHandle, FrameScheduler
from ideagraph.models import GraphNode

logger = logging.getLogger(__name__)

INITIAL_RADIUS = 10.0
INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))

Listener = Callable[[], None]


def _finite(value: float | None) -> bool:
    return value is not None and math.isfinite(value)


class Simulation:
    """
    Layout simulation over a fixed set of nodes.

    Nodes are mutated in place. All mutation (ticks, pins, restarts) is
    expected on the scheduler's thread; pins requested from inside a tick
    callback are deferred until the tick has finished integrating.
    """

    def __init__(
        self,
        nodes: Sequence[GraphNode],
        scheduler: FrameScheduler | None = None,
        alpha: float | None = None,
        alpha_min: float | None = None,
        alpha_decay: float | None = None,
        velocity_decay: float | None = None,
        seed: int | None = None,
    ) -> None:
        self.nodes = list(nodes)
        self.scheduler = scheduler
        self.alpha = alpha if alpha is not None else settings.alpha_start
        self.alpha_target = 0.0
        self.alpha_min = alpha_min if alpha_min is not None else settings.alpha_min
        self.alpha_decay = alpha_decay if alpha_decay is not None else settings.alpha_decay
        self.velocity_decay = (
            velocity_decay if velocity_decay is not None else settings.velocity_decay
        )
        self.rng = random.Random(seed if seed is not None else settings.random_seed)

        self._forces: dict[str, Force] = {}
        self._tick_listeners: list[Listener] = []
        self._end_listeners: list[Listener] = []
        self._handle: FrameHandle | None = None
        self._running = False
        self._in_tick = False
        self._pending_pins: list[tuple[GraphNode, float | None, float | None]] = []
        self.tick_count = 0

        self._initialize_nodes()

    def _initialize_nodes(self) -> None:
        """Place nodes without a finite position on a phyllotaxis spiral."""
        for i, node in enumerate(self.nodes):
            node.index = i
            if _finite(node.fx):
                node.x = node.fx
            if _finite(node.fy):
                node.y = node.fy
            if not (math.isfinite(node.x) and math.isfinite(node.y)):
                radius = INITIAL_RADIUS * math.sqrt(0.5 + i)
                angle = i * INITIAL_ANGLE
                node.x = radius * math.cos(angle)
                node.y = radius * math.sin(angle)
            if not (math.isfinite(node.vx) and math.isfinite(node.vy)):
                node.vx = 0.0
                node.vy = 0.0

    # -- forces ---------------------------------------------------------

    def add_force(self, name: str, force: Force) -> "Simulation":
        force.initialize(self.nodes, self.rng)
        self._forces[name] = force
        return self

    def remove_force(self, name: str) -> Force | None:
        return self._forces.pop(name, None)

    def force(self, name: str) -> Force | None:
        return self._forces.get(name)

    @property
    def forces(self) -> dict[str, Force]:
        return dict(self._forces)

    # -- listeners ------------------------------------------------------

    def on_tick(self, listener: Listener) -> Callable[[], None]:
        """Register a per-tick callback. Returns an unsubscribe function."""
        self._tick_listeners.append(listener)
        return lambda: self._discard(self._tick_listeners, listener)

    def on_end(self, listener: Listener) -> Callable[[], None]:
        """Register a callback fired when the simulation settles."""
        self._end_listeners.append(listener)
        return lambda: self._discard(self._end_listeners, listener)

    @staticmethod
    def _discard(listeners: list[Listener], listener: Listener) -> None:
        if listener in listeners:
            listeners.remove(listener)

    # -- scheduling -----------------------------------------------------

    @property
    def active(self) -> bool:
        """True while alpha is above the activation threshold."""
        return self.alpha >= self.alpha_min

    @property
    def running(self) -> bool:
        """True while frames are being requested."""
        return self._running

    def restart(self) -> "Simulation":
        """Resume requesting frames (alpha is left untouched)."""
        self._running = True
        self._request_frame()
        return self

    def stop(self) -> "Simulation":
        """Stop requesting frames."""
        self._running = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        return self

    def reheat(self, alpha: float) -> "Simulation":
        """Set alpha and restart; repeated calls do not compound."""
        self.alpha = alpha
        return self.restart()

    def _request_frame(self) -> None:
        if not self._running or self.scheduler is None or self._handle is not None:
            return
        self._handle = self.scheduler.request_frame(self._on_frame)

    def _on_frame(self) -> None:
        self._handle = None
        if not self._running:
            return
        self.tick()
        self._emit(self._tick_listeners)
        if not self._running:
            return
        if self.alpha < self.alpha_min:
            self._running = False
            logger.info(f"Simulation settled after {self.tick_count} ticks")
            self._emit(self._end_listeners)
        else:
            self._request_frame()

    @staticmethod
    def _emit(listeners: list[Listener]) -> None:
        for listener in list(listeners):
            listener()

    # -- integration ----------------------------------------------------

    def tick(self, iterations: int = 1) -> "Simulation":
        """Advance the layout by ``iterations`` steps without notifying listeners."""
        self._in_tick = True
        try:
            for _ in range(iterations):
                self.alpha += (self.alpha_target - self.alpha) * self.alpha_decay

                for force in self._forces.values():
                    force(self.alpha)

                keep = 1 - self.velocity_decay
                for node in self.nodes:
                    if node.fx is None:
                        node.vx *= keep
                        node.x += node.vx
                    else:
                        node.x = node.fx
                        node.vx = 0.0
                    if node.fy is None:
                        node.vy *= keep
                        node.y += node.vy
                    else:
                        node.y = node.fy
                        node.vy = 0.0
                self.tick_count += 1
        finally:
            self._in_tick = False
            self._flush_pins()
        return self

    def settle(self, max_ticks: int | None = None) -> int:
        """Tick synchronously until alpha drops below alpha_min.

        Listeners are notified as for scheduled ticks. Returns ticks run.
        """
        if max_ticks is None:
            max_ticks = self.ticks_to_settle()
        ran = 0
        while ran < max_ticks and self.active:
            self.tick()
            self._emit(self._tick_listeners)
            ran += 1
        if ran and not self.active:
            self._emit(self._end_listeners)
        return ran

    def ticks_to_settle(self, limit: int = 10_000) -> int:
        """Ticks until alpha decays below alpha_min with the current target."""
        if self.alpha_target >= self.alpha_min:
            return limit
        if not self.active:
            return 0
        # alpha_n - target = (alpha - target) * (1 - decay) ** n
        n = math.log((self.alpha_min - self.alpha_target) / (self.alpha - self.alpha_target))
        n /= math.log(1 - self.alpha_decay)
        return min(limit, math.ceil(n) + 1)

    # -- pinning --------------------------------------------------------

    def pin(self, node: GraphNode, x: float | None, y: float | None) -> None:
        """Fix a node's position. Deferred if called during a tick."""
        if self._in_tick:
            self._pending_pins.append((node, x, y))
            return
        self._apply_pin(node, x, y)

    def unpin(self, node: GraphNode) -> None:
        self.pin(node, None, None)

    @staticmethod
    def _apply_pin(node: GraphNode, x: float | None, y: float | None) -> None:
        if x is None or y is None:
            node.unpin()
        else:
            node.pin(x, y)

    def _flush_pins(self) -> None:
        pending, self._pending_pins = self._pending_pins, []
        for node, x, y in pending:
            self._apply_pin(node, x, y)
