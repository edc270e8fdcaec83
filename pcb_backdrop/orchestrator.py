"""
Redraw Orchestrator

Owns the drawing surface and coordinates full redraws:

    viewport -> zone geometry -> placement plan -> paint -> publish

Viewport change notifications are debounced: each notification (re)arms a
single cancellable task, and only when the delay elapses without another
notification is the background recomputed and repainted from scratch.
"""

from dataclasses import replace
from enum import Enum
from typing import Callable, List, Optional
import logging
import threading

from .config import LayoutConfig, DEFAULT_CONFIG
from .layout.geometry import Viewport, compute_zone_geometry
from .layout.planner import PlacementPlanner
from .palette import Palette
from .render.painter import RenderContext, paint_plan

logger = logging.getLogger(__name__)

ViewportListener = Callable[[Viewport], None]


class RedrawState(Enum):
    IDLE = "idle"
    PENDING_REDRAW = "pending_redraw"


# =============================================================================
# Scheduling
# =============================================================================

class ScheduledTask:
    """Handle for a delayed callback."""

    def cancel(self):
        raise NotImplementedError


class _TimerTask(ScheduledTask):
    def __init__(self, timer: threading.Timer):
        self._timer = timer

    def cancel(self):
        self._timer.cancel()


class TimerScheduler:
    """Runs callbacks after a delay on a background timer thread."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return _TimerTask(timer)


# =============================================================================
# Viewport sources
# =============================================================================

class ViewportSource:
    """Reports the current viewport and notifies listeners on change."""

    def current(self) -> Viewport:
        raise NotImplementedError

    def subscribe(self, listener: ViewportListener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        raise NotImplementedError


class StaticViewportSource(ViewportSource):
    """A viewport that never changes."""

    def __init__(self, viewport: Viewport):
        self._viewport = viewport

    def current(self) -> Viewport:
        return self._viewport

    def subscribe(self, listener: ViewportListener) -> Callable[[], None]:
        return lambda: None


class ManualViewportSource(ViewportSource):
    """A viewport changed programmatically, e.g. from scripted resizes."""

    def __init__(self, viewport: Viewport):
        self._viewport = viewport
        self._listeners: List[ViewportListener] = []

    def current(self) -> Viewport:
        return self._viewport

    def subscribe(self, listener: ViewportListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def resize(self, width: float, height: float, pixel_density: Optional[float] = None):
        """Change the viewport and notify every listener."""
        if pixel_density is None:
            pixel_density = self._viewport.pixel_density
        self._viewport = Viewport(width, height, pixel_density)
        for listener in list(self._listeners):
            listener(self._viewport)


# =============================================================================
# Orchestrator
# =============================================================================

class RedrawOrchestrator:
    """Debounced, full-surface redraw loop for the background.

    Args:
        source: Viewport oracle
        provider: Surface provider (allocate/resize)
        host: Host attachment (attach/publish/detach)
        config: Layout constants, including the debounce delay
        palette: Board palette (defaults to the packaged palette)
        scheduler: Delay scheduler (defaults to threading timers)
    """

    def __init__(
        self,
        source: ViewportSource,
        provider,
        host,
        config: LayoutConfig = DEFAULT_CONFIG,
        palette: Optional[Palette] = None,
        scheduler=None,
    ):
        self.source = source
        self.provider = provider
        self.host = host
        self.config = config
        self.palette = palette
        self.scheduler = scheduler or TimerScheduler()
        self.planner = PlacementPlanner(config)

        self.state = RedrawState.IDLE
        self.context: Optional[RenderContext] = None
        self.redraw_count = 0
        self.failure_count = 0

        self._lock = threading.RLock()
        self._task: Optional[ScheduledTask] = None
        self._generation = 0
        self._pending_viewport: Optional[Viewport] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def is_initialized(self) -> bool:
        return self.context is not None

    def initialize(self):
        """Create the surface, paint once and start listening for changes.

        Idempotent: calls after the first are ignored. Setup failures are
        logged and contained; the background is then simply not shown and
        a later call may retry.
        """
        with self._lock:
            if self.context is not None:
                return

            try:
                viewport = self.source.current()
                surface = self.provider.allocate(viewport)
                context = RenderContext.for_surface(surface, self.palette)
                self.host.attach(surface)
            except Exception:
                self.failure_count += 1
                logger.exception("Background setup failed")
                return

            self.context = context
            self._redraw(viewport)

            try:
                self._unsubscribe = self.source.subscribe(self.notify)
            except Exception:
                self.failure_count += 1
                logger.exception("Could not subscribe to viewport changes")
                return
            logger.info(f"Background initialized at {viewport.width:g}x{viewport.height:g}")

    def stop(self):
        """Cancel any pending redraw, stop listening and detach from the host."""
        with self._lock:
            if self._task is not None:
                self._task.cancel()
                self._task = None
            self._generation += 1
            if self._unsubscribe is not None:
                self._unsubscribe()
                self._unsubscribe = None
            if self.context is not None:
                self.host.detach()
            self.context = None
            self.state = RedrawState.IDLE
            self._pending_viewport = None

    def notify(self, viewport: Optional[Viewport] = None):
        """Handle a viewport change notification.

        Arms the debounce delay, replacing any redraw still pending.
        """
        with self._lock:
            if self.context is None:
                return
            self._pending_viewport = viewport or self.source.current()
            if self._task is not None:
                self._task.cancel()
            self._generation += 1
            generation = self._generation
            self.state = RedrawState.PENDING_REDRAW
            self._task = self.scheduler.schedule(
                self.config.debounce_seconds,
                lambda: self._on_delay_elapsed(generation),
            )

    def _on_delay_elapsed(self, generation: int):
        with self._lock:
            # A newer notification or stop() superseded this task
            if generation != self._generation or self.context is None:
                return
            viewport = self._pending_viewport or self.source.current()
            self._task = None
            self._pending_viewport = None
            self._redraw(viewport)
            self.state = RedrawState.IDLE

    def _redraw(self, viewport: Viewport) -> bool:
        """Resize, recompute and repaint the whole surface.

        Failures are logged and contained; the background simply stays as
        it was.
        """
        try:
            context = repaint(self.context, viewport, self.provider, self.planner)
            self.host.publish(context.surface)
        except Exception:
            self.failure_count += 1
            logger.exception(
                f"Background redraw failed at {viewport.width:g}x{viewport.height:g}"
            )
            return False

        self.context = context
        self.redraw_count += 1
        logger.info(
            f"Redrew background at {viewport.width:g}x{viewport.height:g} "
            f"({len(self.context.plan)} primitives)"
        )
        return True


def repaint(ctx: RenderContext, viewport: Viewport, provider,
            planner: PlacementPlanner) -> RenderContext:
    """One full redraw pass; returns the context for the new viewport."""
    surface = provider.resize(ctx.surface, viewport)
    zones = compute_zone_geometry(viewport, planner.config)
    plan = planner.plan_zones(zones)
    ctx = replace(ctx, surface=surface, viewport=viewport, zones=zones, plan=plan)
    paint_plan(ctx, plan, viewport.width, viewport.height)
    return ctx
