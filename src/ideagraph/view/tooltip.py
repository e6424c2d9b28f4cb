"""Hover tooltip state."""

from dataclasses import dataclass

from ideagraph.config import settings

HIDDEN_POSITION = (-9999.0, -9999.0)


@dataclass
class Tooltip:
    """
    Tooltip anchored near the pointer.

    Hidden means moved off-screen and fully transparent, so a renderer
    that ignores ``visible`` still shows nothing.
    """

    title: str = ""
    body: str = ""
    x: float = HIDDEN_POSITION[0]
    y: float = HIDDEN_POSITION[1]
    opacity: float = 0.0
    offset: float = settings.tooltip_offset

    @property
    def visible(self) -> bool:
        return self.opacity > 0

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    def show(self, title: str, body: str, pointer: tuple[float, float]) -> None:
        self.title = title
        self.body = body
        self.place(pointer)
        self.opacity = 1.0

    def place(self, pointer: tuple[float, float]) -> None:
        """Move next to the pointer, offset so it never sits under the cursor."""
        self.x = pointer[0] + self.offset
        self.y = pointer[1] + self.offset

    def hide(self) -> None:
        self.opacity = 0.0
        self.x, self.y = HIDDEN_POSITION
