"""
Shared test fixtures for pcb-backdrop tests.

Provides reusable viewports, a recording drawing surface, a manually
advanced scheduler and an in-memory host for testing the planner,
painter and redraw orchestrator.
"""

import pytest
from typing import Any, Callable, List, Tuple

from pcb_backdrop.config import DEFAULT_CONFIG
from pcb_backdrop.layout.geometry import Viewport
from pcb_backdrop.layout.planner import PlacementPlanner
from pcb_backdrop.palette import Palette
from pcb_backdrop.render.surface import DrawingSurface, LinearGradient


class RecordingSurface(DrawingSurface):
    """Surface that records every call; has no native round_rect."""

    def __init__(self, width: float = 100, height: float = 100, density: float = 1.0):
        super().__init__()
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self.width = width
        self.height = height
        self.density = density

    def _record(self, name: str, *args):
        self.calls.append((name, args))

    def names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def resize(self, width, height, density=1.0):
        self.width, self.height, self.density = width, height, density
        self._record("resize", width, height, density)

    def clear_rect(self, x, y, w, h):
        self._record("clear_rect", x, y, w, h)

    def fill_rect(self, x, y, w, h):
        self._record("fill_rect", x, y, w, h)

    def stroke_rect(self, x, y, w, h):
        self._record("stroke_rect", x, y, w, h)

    def begin_path(self):
        self._record("begin_path")

    def move_to(self, x, y):
        self._record("move_to", x, y)

    def line_to(self, x, y):
        self._record("line_to", x, y)

    def arc(self, x, y, radius, start_angle, end_angle, anticlockwise=False):
        self._record("arc", x, y, radius, start_angle, end_angle)

    def close_path(self):
        self._record("close_path")

    def fill(self):
        self._record("fill", self.fill_style)

    def stroke(self):
        self._record("stroke", self.stroke_style, self.line_width, self.line_cap)

    def fill_text(self, text, x, y):
        self._record("fill_text", text, x, y, self.font, self.text_align, self.text_baseline)

    def create_linear_gradient(self, x0, y0, x1, y1):
        self._record("create_linear_gradient", x0, y0, x1, y1)
        return LinearGradient(x0, y0, x1, y1, gradient_id="rec")


class _ManualTask:
    def __init__(self, due_ms: int, callback: Callable[[], None]):
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Scheduler driven by an explicit millisecond clock."""

    def __init__(self):
        self.now_ms = 0
        self.tasks: List[_ManualTask] = []

    def schedule(self, delay: float, callback: Callable[[], None]) -> _ManualTask:
        task = _ManualTask(self.now_ms + int(round(delay * 1000)), callback)
        self.tasks.append(task)
        return task

    @property
    def pending(self) -> List[_ManualTask]:
        return [t for t in self.tasks if not t.cancelled]

    def advance(self, ms: int):
        target = self.now_ms + ms
        while True:
            due = [t for t in self.pending if t.due_ms <= target]
            if not due:
                break
            task = min(due, key=lambda t: t.due_ms)
            self.tasks.remove(task)
            self.now_ms = task.due_ms
            task.callback()
        self.now_ms = target


class MemoryHost:
    """Host that keeps published surfaces in memory."""

    def __init__(self):
        self.active = False
        self.attach_count = 0
        self.published: List[Tuple[int, float, float]] = []

    def attach(self, surface):
        self.active = True
        self.attach_count += 1

    def detach(self):
        self.active = False

    def publish(self, surface):
        self.published.append((len(self.published), surface.width, surface.height))


class RecordingProvider:
    """Surface provider handing out RecordingSurfaces."""

    def allocate(self, viewport: Viewport) -> RecordingSurface:
        return RecordingSurface(viewport.width, viewport.height, viewport.pixel_density)

    def resize(self, surface: RecordingSurface, viewport: Viewport) -> RecordingSurface:
        surface.resize(viewport.width, viewport.height, viewport.pixel_density)
        return surface


@pytest.fixture
def wide_viewport() -> Viewport:
    """Desktop viewport with 120px gutters."""
    return Viewport(1440, 900)


@pytest.fixture
def narrow_viewport() -> Viewport:
    """Phone-sized viewport below the narrow breakpoint."""
    return Viewport(600, 800)


@pytest.fixture
def thin_gutter_viewport() -> Viewport:
    """Wide layout whose gutters are too thin for any gutter content."""
    return Viewport(820, 600)


@pytest.fixture
def planner() -> PlacementPlanner:
    return PlacementPlanner(DEFAULT_CONFIG)


@pytest.fixture
def palette() -> Palette:
    return Palette()


@pytest.fixture
def recording_surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def memory_host() -> MemoryHost:
    return MemoryHost()


@pytest.fixture
def recording_provider() -> RecordingProvider:
    return RecordingProvider()
