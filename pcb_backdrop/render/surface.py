"""
Drawing Surfaces

A small canvas-style 2D drawing contract and its SVG implementation.

The contract mirrors the immediate-mode canvas model: style attributes are
set on the surface, then shape operations consume them. Paths are built
with move_to/line_to/arc and finished with fill() or stroke().

Rounded rectangle paths are an optional capability. Call
select_round_rect() once per surface to get either the surface's native
implementation or trace_round_rect(), which builds the same path from the
basic path operations.
"""

from functools import partial
from typing import Callable, Dict, List, Optional, Tuple, Union
from xml.sax.saxutils import escape, quoteattr
import logging
import math

logger = logging.getLogger(__name__)

TAU = 2 * math.pi


def _fmt(value: float) -> str:
    """Compact number formatting for SVG attributes."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _same_point(a: Tuple[float, float], b: Tuple[float, float], eps: float = 1e-9) -> bool:
    return abs(a[0] - b[0]) <= eps and abs(a[1] - b[1]) <= eps


class LinearGradient:
    """Linear gradient paint between two points."""

    def __init__(self, x0: float, y0: float, x1: float, y1: float, gradient_id: str = ""):
        self.x0 = x0
        self.y0 = y0
        self.x1 = x1
        self.y1 = y1
        self.gradient_id = gradient_id
        self.stops: List[Tuple[float, str]] = []

    def add_color_stop(self, offset: float, color: str):
        self.stops.append((offset, color))


Paint = Union[str, LinearGradient]


class DrawingSurface:
    """Canvas-style drawing contract used by the painter.

    Subclasses implement the shape operations. Style attributes are plain
    instance attributes read at the time each shape is emitted.
    """

    def __init__(self):
        self.fill_style: Paint = "#000000"
        self.stroke_style: Paint = "#000000"
        self.line_width: float = 1.0
        self.line_cap: str = "butt"  # "butt", "round", "square"
        self.font: str = "10px sans-serif"
        self.text_align: str = "start"  # "start", "left", "center", "right", "end"
        self.text_baseline: str = "alphabetic"  # "alphabetic", "middle", "top", "bottom"

    def resize(self, width: float, height: float, density: float = 1.0):
        raise NotImplementedError

    def clear_rect(self, x: float, y: float, w: float, h: float):
        raise NotImplementedError

    def fill_rect(self, x: float, y: float, w: float, h: float):
        raise NotImplementedError

    def stroke_rect(self, x: float, y: float, w: float, h: float):
        raise NotImplementedError

    def begin_path(self):
        raise NotImplementedError

    def move_to(self, x: float, y: float):
        raise NotImplementedError

    def line_to(self, x: float, y: float):
        raise NotImplementedError

    def arc(self, x: float, y: float, radius: float, start_angle: float,
            end_angle: float, anticlockwise: bool = False):
        raise NotImplementedError

    def close_path(self):
        raise NotImplementedError

    def fill(self):
        raise NotImplementedError

    def stroke(self):
        raise NotImplementedError

    def fill_text(self, text: str, x: float, y: float):
        raise NotImplementedError

    def create_linear_gradient(self, x0: float, y0: float, x1: float, y1: float) -> LinearGradient:
        raise NotImplementedError


RoundRectFn = Callable[[float, float, float, float, float], None]


def trace_round_rect(surface: DrawingSurface, x: float, y: float, w: float, h: float, r: float):
    """Append a closed rounded-rectangle subpath using basic path operations."""
    r = max(0.0, min(r, w / 2, h / 2))
    surface.move_to(x + r, y)
    surface.line_to(x + w - r, y)
    surface.arc(x + w - r, y + r, r, -math.pi / 2, 0)
    surface.line_to(x + w, y + h - r)
    surface.arc(x + w - r, y + h - r, r, 0, math.pi / 2)
    surface.line_to(x + r, y + h)
    surface.arc(x + r, y + h - r, r, math.pi / 2, math.pi)
    surface.line_to(x, y + r)
    surface.arc(x + r, y + r, r, math.pi, 1.5 * math.pi)
    surface.close_path()


def select_round_rect(surface: DrawingSurface) -> RoundRectFn:
    """Pick the rounded-rectangle path routine for a surface.

    Returns the surface's own ``round_rect`` if it has one, otherwise
    trace_round_rect bound to the surface.
    """
    native = getattr(surface, "round_rect", None)
    if callable(native):
        logger.debug(f"Using native round_rect of {type(surface).__name__}")
        return native
    logger.debug(f"{type(surface).__name__} has no round_rect, using path fallback")
    return partial(trace_round_rect, surface)


_TEXT_ANCHORS = {
    "start": "start",
    "left": "start",
    "center": "middle",
    "right": "end",
    "end": "end",
}

_BASELINES = {
    "alphabetic": "alphabetic",
    "middle": "middle",
    "top": "hanging",
    "hanging": "hanging",
    "bottom": "text-after-edge",
    "ideographic": "ideographic",
}


class SvgSurface(DrawingSurface):
    """Drawing surface that records shapes as SVG elements.

    Logical coordinates map to the SVG viewBox, so drawing code works in
    CSS pixels while the document's pixel size is scaled by the density.
    """

    def __init__(self, width: float, height: float, density: float = 1.0,
                 background: str = "#ffffff"):
        super().__init__()
        self.background = background
        self.resize(width, height, density)

    def resize(self, width: float, height: float, density: float = 1.0):
        """Resize and reset the surface; all content and styles are dropped."""
        DrawingSurface.__init__(self)
        self.width = width
        self.height = height
        self.density = density
        self._elements: List[str] = []
        self._gradients: List[LinearGradient] = []
        self._path: List[str] = []
        self._current: Optional[Tuple[float, float]] = None
        self._subpath_start: Optional[Tuple[float, float]] = None

    @property
    def pixel_width(self) -> float:
        return self.width * self.density

    @property
    def pixel_height(self) -> float:
        return self.height * self.density

    @property
    def elements(self) -> List[str]:
        return list(self._elements)

    # -------------------------------------------------------------------------
    # Paint helpers
    # -------------------------------------------------------------------------

    def _paint(self, style: Paint) -> str:
        if isinstance(style, LinearGradient):
            return f"url(#{style.gradient_id})"
        return style

    def _stroke_attrs(self) -> str:
        return (
            f'stroke={quoteattr(self._paint(self.stroke_style))} '
            f'stroke-width="{_fmt(self.line_width)}"'
        )

    # -------------------------------------------------------------------------
    # Rectangles
    # -------------------------------------------------------------------------

    def clear_rect(self, x: float, y: float, w: float, h: float):
        """Clear a region.

        Clearing the whole surface drops every recorded element. SVG has
        no erase operation, so a partial clear paints the region in the
        background color instead.
        """
        if x <= 0 and y <= 0 and x + w >= self.width and y + h >= self.height:
            self._elements = []
            self._gradients = []
            return
        self._elements.append(
            f'<rect x="{_fmt(x)}" y="{_fmt(y)}" width="{_fmt(w)}" height="{_fmt(h)}" '
            f'fill={quoteattr(self.background)}/>'
        )

    def fill_rect(self, x: float, y: float, w: float, h: float):
        self._elements.append(
            f'<rect x="{_fmt(x)}" y="{_fmt(y)}" width="{_fmt(w)}" height="{_fmt(h)}" '
            f'fill={quoteattr(self._paint(self.fill_style))}/>'
        )

    def stroke_rect(self, x: float, y: float, w: float, h: float):
        self._elements.append(
            f'<rect x="{_fmt(x)}" y="{_fmt(y)}" width="{_fmt(w)}" height="{_fmt(h)}" '
            f'fill="none" {self._stroke_attrs()}/>'
        )

    # -------------------------------------------------------------------------
    # Paths
    # -------------------------------------------------------------------------

    def begin_path(self):
        self._path = []
        self._current = None
        self._subpath_start = None

    def move_to(self, x: float, y: float):
        self._path.append(f"M{_fmt(x)} {_fmt(y)}")
        self._current = (x, y)
        self._subpath_start = (x, y)

    def line_to(self, x: float, y: float):
        if self._current is None:
            self.move_to(x, y)
            return
        self._path.append(f"L{_fmt(x)} {_fmt(y)}")
        self._current = (x, y)

    def arc(self, x: float, y: float, radius: float, start_angle: float,
            end_angle: float, anticlockwise: bool = False):
        """Circular arc with canvas semantics (angles in radians, y down)."""
        if anticlockwise:
            delta = start_angle - end_angle
        else:
            delta = end_angle - start_angle
        if delta >= TAU:
            delta = TAU
        else:
            delta %= TAU

        sx = x + radius * math.cos(start_angle)
        sy = y + radius * math.sin(start_angle)
        if self._current is None:
            self.move_to(sx, sy)
        elif not _same_point(self._current, (sx, sy)):
            self.line_to(sx, sy)

        if radius <= 0 or delta == 0:
            return

        sweep = 0 if anticlockwise else 1
        sign = -1 if anticlockwise else 1
        r = _fmt(radius)

        if delta >= TAU - 1e-9:
            # Full circle: two half arcs
            mid = start_angle + sign * math.pi
            mx = x + radius * math.cos(mid)
            my = y + radius * math.sin(mid)
            self._path.append(f"A{r} {r} 0 0 {sweep} {_fmt(mx)} {_fmt(my)}")
            self._path.append(f"A{r} {r} 0 0 {sweep} {_fmt(sx)} {_fmt(sy)}")
            self._current = (sx, sy)
            return

        end = start_angle + sign * delta
        ex = x + radius * math.cos(end)
        ey = y + radius * math.sin(end)
        large = 1 if delta > math.pi else 0
        self._path.append(f"A{r} {r} 0 {large} {sweep} {_fmt(ex)} {_fmt(ey)}")
        self._current = (ex, ey)

    def round_rect(self, x: float, y: float, w: float, h: float, r: float):
        """Append a closed rounded-rectangle subpath (native SVG arcs)."""
        r = max(0.0, min(r, w / 2, h / 2))
        rr = _fmt(r)
        self._path.append(
            f"M{_fmt(x + r)} {_fmt(y)}"
            f"H{_fmt(x + w - r)}A{rr} {rr} 0 0 1 {_fmt(x + w)} {_fmt(y + r)}"
            f"V{_fmt(y + h - r)}A{rr} {rr} 0 0 1 {_fmt(x + w - r)} {_fmt(y + h)}"
            f"H{_fmt(x + r)}A{rr} {rr} 0 0 1 {_fmt(x)} {_fmt(y + h - r)}"
            f"V{_fmt(y + r)}A{rr} {rr} 0 0 1 {_fmt(x + r)} {_fmt(y)}Z"
        )
        self._current = (x, y)
        self._subpath_start = (x, y)

    def close_path(self):
        if not self._path:
            return
        self._path.append("Z")
        self._current = self._subpath_start

    def fill(self):
        if not self._path:
            return
        self._elements.append(
            f'<path d="{"".join(self._path)}" fill={quoteattr(self._paint(self.fill_style))}/>'
        )

    def stroke(self):
        if not self._path:
            return
        self._elements.append(
            f'<path d="{"".join(self._path)}" fill="none" {self._stroke_attrs()} '
            f'stroke-linecap="{self.line_cap}"/>'
        )

    # -------------------------------------------------------------------------
    # Text and gradients
    # -------------------------------------------------------------------------

    def fill_text(self, text: str, x: float, y: float):
        anchor = _TEXT_ANCHORS.get(self.text_align, "start")
        baseline = _BASELINES.get(self.text_baseline, "alphabetic")
        self._elements.append(
            f'<text x="{_fmt(x)}" y="{_fmt(y)}" style={quoteattr("font: " + self.font)} '
            f'text-anchor="{anchor}" dominant-baseline="{baseline}" '
            f'fill={quoteattr(self._paint(self.fill_style))}>{escape(text)}</text>'
        )

    def create_linear_gradient(self, x0: float, y0: float, x1: float, y1: float) -> LinearGradient:
        gradient = LinearGradient(x0, y0, x1, y1, gradient_id=f"grad{len(self._gradients)}")
        self._gradients.append(gradient)
        return gradient

    def _render_gradient(self, gradient: LinearGradient) -> str:
        stops = "".join(
            f'<stop offset="{_fmt(offset)}" stop-color={quoteattr(color)}/>'
            for offset, color in gradient.stops
        )
        return (
            f'<linearGradient id="{gradient.gradient_id}" gradientUnits="userSpaceOnUse" '
            f'x1="{_fmt(gradient.x0)}" y1="{_fmt(gradient.y0)}" '
            f'x2="{_fmt(gradient.x1)}" y2="{_fmt(gradient.y1)}">{stops}</linearGradient>'
        )

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def to_svg(self, attributes: Optional[Dict[str, str]] = None) -> str:
        """Serialize the surface as a standalone SVG document.

        Args:
            attributes: Extra attributes for the root <svg> element
        """
        extra = "".join(
            f" {name}={quoteattr(value)}" for name, value in (attributes or {}).items()
        )
        lines = [
            f'<svg xmlns="http://www.w3.org/2000/svg" '
            f'width="{_fmt(self.pixel_width)}" height="{_fmt(self.pixel_height)}" '
            f'viewBox="0 0 {_fmt(self.width)} {_fmt(self.height)}"{extra}>'
        ]
        if self._gradients:
            lines.append("<defs>")
            lines.extend(self._render_gradient(g) for g in self._gradients)
            lines.append("</defs>")
        lines.extend(self._elements)
        lines.append("</svg>")
        return "\n".join(lines)
