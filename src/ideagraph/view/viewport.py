"""Viewport controller: pan/zoom transform over the drawn scene.

The transform maps simulation coordinates to screen pixels as
``screen = point * k + (x, y)``. It never touches node positions, so
panning and zooming are independent of the layout simulation.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ideagraph.config import settings

logger = logging.getLogger(__name__)

Point = tuple[float, float]


@dataclass(frozen=True)
class ViewTransform:
    """Uniform scale ``k`` followed by translation ``(x, y)``."""

    k: float = 1.0
    x: float = 0.0
    y: float = 0.0

    def apply(self, point: Point) -> Point:
        return (point[0] * self.k + self.x, point[1] * self.k + self.y)

    def invert(self, point: Point) -> Point:
        return ((point[0] - self.x) / self.k, (point[1] - self.y) / self.k)

    def translate(self, dx: float, dy: float) -> "ViewTransform":
        """Translate by (dx, dy) in simulation units."""
        return ViewTransform(self.k, self.x + self.k * dx, self.y + self.k * dy)

    def to_svg(self) -> str:
        return f"translate({self.x:g},{self.y:g}) scale({self.k:g})"


IDENTITY = ViewTransform()


class Viewport:
    """
    Visible area of the drawing surface plus its view transform.

    Every zoom operation clamps the scale to ``scale_extent``.
    """

    def __init__(
        self,
        width: float = 0.0,
        height: float = 0.0,
        scale_extent: tuple[float, float] | None = None,
        min_size: float | None = None,
        wheel_delta_factor: float | None = None,
    ) -> None:
        self.scale_extent = scale_extent or (settings.min_scale, settings.max_scale)
        self.min_size = min_size if min_size is not None else settings.min_viewport_size
        self.wheel_delta_factor = (
            wheel_delta_factor if wheel_delta_factor is not None else settings.wheel_delta_factor
        )
        self.transform = IDENTITY
        self.width = self.min_size
        self.height = self.min_size
        self._listeners: list[Callable[[ViewTransform], None]] = []
        if width or height:
            self.resize(width, height)

    @property
    def center(self) -> Point:
        return (self.width / 2, self.height / 2)

    def clamp_scale(self, k: float) -> float:
        lo, hi = self.scale_extent
        return max(lo, min(hi, k))

    def on_change(self, listener: Callable[[ViewTransform], None]) -> Callable[[], None]:
        """Register a transform listener. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_transform(self, transform: ViewTransform) -> ViewTransform:
        k = self.clamp_scale(transform.k)
        if k != transform.k:
            transform = ViewTransform(k, transform.x, transform.y)
        if transform != self.transform:
            self.transform = transform
            for listener in list(self._listeners):
                listener(transform)
        return self.transform

    def zoom_to(self, k: float, anchor: Point | None = None) -> ViewTransform:
        """Set the scale, keeping the screen point ``anchor`` fixed."""
        anchor = anchor or self.center
        k = self.clamp_scale(k)
        sx, sy = anchor
        px, py = self.transform.invert(anchor)
        return self.set_transform(ViewTransform(k, sx - px * k, sy - py * k))

    def zoom_by(self, factor: float, anchor: Point | None = None) -> ViewTransform:
        return self.zoom_to(self.transform.k * factor, anchor)

    def wheel(self, delta_y: float, anchor: Point | None = None) -> ViewTransform:
        """Zoom for a wheel event; positive delta zooms out."""
        return self.zoom_by(2 ** (-delta_y * self.wheel_delta_factor), anchor)

    def pan_by(self, dx: float, dy: float) -> ViewTransform:
        """Pan by (dx, dy) screen pixels."""
        t = self.transform
        return self.set_transform(ViewTransform(t.k, t.x + dx, t.y + dy))

    def reset(self) -> ViewTransform:
        return self.set_transform(IDENTITY)

    def resize(self, width: float, height: float) -> Point:
        """Update the surface size (floored at ``min_size``). Returns the new centre."""
        self.width = max(self.min_size, width)
        self.height = max(self.min_size, height)
        return self.center

    def to_screen(self, point: Point) -> Point:
        return self.transform.apply(point)

    def to_simulation(self, point: Point) -> Point:
        return self.transform.invert(point)
