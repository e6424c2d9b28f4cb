"""Pytest configuration and fixtures."""

from collections.abc import Callable

import pytest

from ideagraph.config import Settings, get_test_settings
from ideagraph.graph import build_graph
from ideagraph.layout import ManualFrameScheduler
from ideagraph.models import IdeaGraph, IdeaRecord
from ideagraph.view import PointerEvent


class FakeHost:
    """Surface host double that records subscriptions."""

    def __init__(self, width: float = 800, height: float = 600) -> None:
        self.width = width
        self.height = height
        self.resize_callbacks: list[Callable[[float, float], None]] = []
        self.pointer_callbacks: list[Callable[[PointerEvent], None]] = []

    def size(self) -> tuple[float, float]:
        return (self.width, self.height)

    def observe_resize(self, callback: Callable[[float, float], None]) -> Callable[[], None]:
        self.resize_callbacks.append(callback)
        return lambda: self.resize_callbacks.remove(callback)

    def add_pointer_listener(self, callback: Callable[[PointerEvent], None]) -> Callable[[], None]:
        self.pointer_callbacks.append(callback)
        return lambda: self.pointer_callbacks.remove(callback)

    def fire_resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        for callback in list(self.resize_callbacks):
            callback(width, height)

    def fire_pointer(self, event: PointerEvent) -> None:
        for callback in list(self.pointer_callbacks):
            callback(event)


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with a fixed jitter seed."""
    return get_test_settings()


@pytest.fixture
def two_records() -> list[IdeaRecord]:
    """Minimal pair sharing the tag "y"."""
    return [
        IdeaRecord(id="r1", label="R1", description="first", tags=("x", "y")),
        IdeaRecord(id="r2", label="R2", description="second", tags=("y", "z")),
    ]


@pytest.fixture
def sample_records() -> list[IdeaRecord]:
    """A handful of music-history ideas with overlapping tags."""
    return [
        IdeaRecord(
            id="dub-music",
            label="Dub Music",
            description="A remixing technique that originated in Jamaica.",
            tags=("jamaica",),
            type="concept",
        ),
        IdeaRecord(
            id="king-tubby",
            label="King Tubby",
            description="Sound system operator, the father of dub.",
            tags=("jamaica", "dub", "remixing", "sound-system"),
            type="person",
        ),
        IdeaRecord(
            id="daws",
            label="Digital Audio Workstations",
            description="Software for recording, arranging and mixing.",
            url="https://example.org/daw",
            tags=("software", "mixing", "remixing", "mixing"),
            type="concept",
        ),
        IdeaRecord(
            id="sound-clash",
            label="Sound Clash",
            description="Competing sound systems.",
            tags=("jamaica", "sound-system"),
            type="fact",
        ),
        IdeaRecord(
            id="kingston",
            label="Kingston",
            description="Capital city.",
            tags=("jamaica",),
        ),
    ]


@pytest.fixture
def sample_graph(sample_records: list[IdeaRecord]) -> IdeaGraph:
    return build_graph(sample_records)


@pytest.fixture
def scheduler() -> ManualFrameScheduler:
    return ManualFrameScheduler()


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()
