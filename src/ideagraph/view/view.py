"""Graph view: wires graph, simulation, viewport, interaction and rendering.

Mounting acquires the simulation tick subscription, the viewport change
subscription, the host's resize observer and its pointer listener.
Disposal releases all of them and stops the simulation. Mount failures
release whatever was acquired before the failure.
"""

import logging
from collections.abc import Callable, Sequence
from contextlib import ExitStack
from typing import Protocol

from ideagraph.config import Settings, settings
from ideagraph.errors import ViewStateError
from ideagraph.graph import build_graph
from ideagraph.layout import (
    FrameScheduler,
    ManualFrameScheduler,
    Simulation,
    create_simulation,
    set_center,
)
from ideagraph.models import DetailPanel, IdeaGraph, IdeaRecord
from ideagraph.view.interaction import InteractionLayer
from ideagraph.view.pointer import PointerEvent, PointerRouter
from ideagraph.view.render import RenderLoop
from ideagraph.view.surface import RecordingSurface, Surface
from ideagraph.view.tooltip import Tooltip
from ideagraph.view.viewport import Viewport

logger = logging.getLogger(__name__)

Unsubscribe = Callable[[], None]


class SurfaceHost(Protocol):
    """The environment embedding the view (window, widget, canvas...)."""

    def size(self) -> tuple[float, float]: ...

    def observe_resize(self, callback: Callable[[float, float], None]) -> Unsubscribe: ...

    def add_pointer_listener(self, callback: Callable[[PointerEvent], None]) -> Unsubscribe: ...


class GraphView:
    """
    Interactive view over an idea graph.

    Use as a context manager, or call ``mount()`` / ``dispose()``
    explicitly. Everything runs on the scheduler's thread.
    """

    def __init__(
        self,
        source: IdeaGraph | Sequence[IdeaRecord],
        host: SurfaceHost,
        surface: Surface | None = None,
        scheduler: FrameScheduler | None = None,
        on_select: Callable[[DetailPanel], None] | None = None,
        config: Settings | None = None,
    ) -> None:
        self.config = config or settings
        if isinstance(source, IdeaGraph):
            self.graph = source
        else:
            self.graph = build_graph(source, self.config.co_occurrence_threshold)

        self.host = host
        self.surface = surface or RecordingSurface()
        self.scheduler = scheduler or ManualFrameScheduler()

        self.viewport = Viewport(
            scale_extent=(self.config.min_scale, self.config.max_scale),
            min_size=self.config.min_viewport_size,
            wheel_delta_factor=self.config.wheel_delta_factor,
        )
        self.simulation: Simulation = create_simulation(
            self.graph,
            scheduler=self.scheduler,
            center=self.viewport.center,
            config=self.config,
        )
        self.tooltip = Tooltip(offset=self.config.tooltip_offset)
        self.interaction = InteractionLayer(
            self.simulation,
            tooltip=self.tooltip,
            on_select=on_select,
            drag_alpha_target=self.config.drag_alpha_target,
        )
        self.router = PointerRouter(self.graph, self.viewport, self.interaction, self.config)
        self.render = RenderLoop(self.graph, self.viewport, self.surface, self.config)

        self._resources: ExitStack | None = None
        self._disposed = False

    @property
    def mounted(self) -> bool:
        return self._resources is not None

    @property
    def disposed(self) -> bool:
        return self._disposed

    def mount(self) -> "GraphView":
        if self._disposed:
            raise ViewStateError("Cannot mount a disposed view")
        if self.mounted:
            return self

        with ExitStack() as stack:
            stack.callback(self.simulation.stop)
            stack.callback(self.simulation.on_tick(self.render.redraw))
            stack.callback(self.viewport.on_change(lambda _transform: self.render.redraw()))
            stack.callback(self.host.observe_resize(self.resize))
            stack.callback(self.host.add_pointer_listener(self.dispatch))
            self._resources = stack.pop_all()

        try:
            self.resize(*self.host.size())
        except BaseException:
            self.dispose()
            raise

        logger.info(
            f"Mounted graph view: {len(self.graph.nodes)} nodes, {len(self.graph.links)} links"
        )
        return self

    def dispose(self) -> None:
        """Release every subscription and stop ticking. Safe to call twice."""
        if self._disposed:
            return
        self._disposed = True
        resources, self._resources = self._resources, None
        try:
            if resources is not None:
                resources.close()
        finally:
            self.interaction.reset()
            self.router.reset()
            logger.info("Disposed graph view")

    def __enter__(self) -> "GraphView":
        return self.mount()

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()

    def _require_mounted(self) -> None:
        if not self.mounted:
            state = "disposed" if self._disposed else "not mounted"
            raise ViewStateError(f"Graph view is {state}")

    def resize(self, width: float, height: float) -> None:
        """Recentre the layout on the new surface size and re-energise it.

        Calling this repeatedly before the next tick only retargets the
        centre and resets alpha; it never stacks energy. Late notifications
        after disposal are ignored.
        """
        if self._disposed:
            return
        cx, cy = self.viewport.resize(width, height)
        set_center(self.simulation, cx, cy)
        if self.mounted:
            self.simulation.reheat(self.config.resize_alpha)
        logger.debug(f"Resized to {self.viewport.width}x{self.viewport.height}")

    def dispatch(self, event: PointerEvent) -> None:
        self._require_mounted()
        self.router.dispatch(event)

    def redraw(self) -> None:
        self._require_mounted()
        self.render.redraw()

    def settle(self, max_ticks: int | None = None) -> int:
        """Run the layout to rest synchronously, redrawing on every tick."""
        self._require_mounted()
        return self.simulation.settle(max_ticks)

    @property
    def detail(self) -> DetailPanel | None:
        return self.interaction.selected_detail

    def positions(self) -> dict[str, tuple[float, float]]:
        return {node.id: (node.x, node.y) for node in self.graph.nodes}
