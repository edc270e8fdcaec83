"""
Primitive Painter

Paints placement plans onto a drawing surface. Each primitive type has a
fixed recipe of shape operations against the board palette; the recipes
hold no state between calls.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Type
import logging
import math

from ..layout.geometry import Viewport, ZoneGeometry
from ..layout.primitives import (
    FadeMask,
    ICPackage,
    Label,
    Line,
    Orientation,
    PackageShape,
    PassiveComponent,
    PassiveKind,
    PlacementPlan,
    Primitive,
    Via,
)
from ..palette import Palette, get_palette
from .surface import DrawingSurface, RoundRectFn, select_round_rect

logger = logging.getLogger(__name__)

TAU = 2 * math.pi


@dataclass(frozen=True)
class RenderContext:
    """Everything one redraw needs, passed explicitly between phases.

    The round-rect routine is selected once per surface (see
    select_round_rect) and carried here instead of patching the surface.
    """
    surface: DrawingSurface
    palette: Palette
    round_rect: RoundRectFn
    viewport: Optional[Viewport] = None
    zones: Optional[ZoneGeometry] = None
    plan: Optional[PlacementPlan] = None

    @classmethod
    def for_surface(cls, surface: DrawingSurface, palette: Optional[Palette] = None) -> "RenderContext":
        return cls(
            surface=surface,
            palette=palette or get_palette(),
            round_rect=select_round_rect(surface),
        )


# =============================================================================
# Primitive recipes
# =============================================================================

def paint_via(ctx: RenderContext, via: Via):
    """Copper ring with a white drill hole."""
    s, pal = ctx.surface, ctx.palette

    s.begin_path()
    s.arc(via.x, via.y, via.radius, 0, TAU)
    s.fill_style = pal.via_fill
    s.fill()
    s.stroke_style = pal.via_ring
    s.line_width = 1.4
    s.stroke()

    s.begin_path()
    s.arc(via.x, via.y, via.radius * 0.35, 0, TAU)
    s.fill_style = pal.via_hole
    s.fill()
    s.stroke_style = pal.via_ring
    s.line_width = 0.7
    s.stroke()


def paint_line(ctx: RenderContext, line: Line):
    s = ctx.surface
    s.begin_path()
    s.move_to(line.x1, line.y1)
    s.line_to(line.x2, line.y2)
    s.stroke_style = ctx.palette.trace_color(line.color)
    s.line_width = line.width
    s.line_cap = "round"
    s.stroke()


def _package_label(ctx: RenderContext, text: str, cx: float, cy: float, size: float):
    s = ctx.surface
    s.fill_style = ctx.palette.silkscreen
    s.font = ctx.palette.font(size, 600)
    s.text_align = "center"
    s.text_baseline = "middle"
    s.fill_text(text, cx, cy)


def _paint_dual_row(ctx: RenderContext, ic: ICPackage):
    """SOIC style body: pins along the left and right edges."""
    s, pal = ctx.surface, ctx.palette
    cx, cy = ic.center
    w, h = ic.size
    x = cx - w / 2
    y = cy - h / 2

    s.fill_style = pal.ic_fill
    s.stroke_style = pal.ic_stroke
    s.line_width = 1.2
    s.begin_path()
    ctx.round_rect(x, y, w, h, 4)
    s.fill()
    s.stroke()

    # Orientation dot
    s.begin_path()
    s.arc(x + 6, y + 6, 2, 0, TAU)
    s.fill_style = pal.ic_stroke
    s.fill()

    # Pin 1 notch
    s.begin_path()
    s.arc(x, cy, 3, -math.pi / 2, math.pi / 2)
    s.stroke_style = pal.ic_stroke
    s.line_width = 0.8
    s.stroke()

    pin_spacing = h / (ic.pin_count + 1)
    for i in range(1, ic.pin_count + 1):
        py = y + i * pin_spacing
        s.fill_style = pal.pad_fill
        s.stroke_style = pal.copper
        s.line_width = 0.6
        s.fill_rect(x - 10, py - 2, 10, 4)
        s.stroke_rect(x - 10, py - 2, 10, 4)
        s.fill_rect(x + w, py - 2, 10, 4)
        s.stroke_rect(x + w, py - 2, 10, 4)

    if ic.label:
        _package_label(ctx, ic.label, cx, cy, 9)


def _paint_quad_flat(ctx: RenderContext, ic: ICPackage):
    """QFP style body: inner die outline and pins on all four sides."""
    s, pal = ctx.surface, ctx.palette
    cx, cy = ic.center
    size = ic.size[0]
    x = cx - size / 2
    y = cy - size / 2
    pin_len = 8
    pin_w = 3

    s.fill_style = pal.ic_fill
    s.stroke_style = pal.ic_stroke
    s.line_width = 1.2
    s.begin_path()
    ctx.round_rect(x, y, size, size, 5)
    s.fill()
    s.stroke()

    inset = size * 0.22
    s.stroke_style = pal.die_outline
    s.line_width = 0.6
    s.stroke_rect(x + inset, y + inset, size - inset * 2, size - inset * 2)

    s.begin_path()
    s.arc(x + 8, y + 8, 2.5, 0, TAU)
    s.fill_style = pal.ic_stroke
    s.fill()

    spacing = size / (ic.pin_count + 1)
    for i in range(1, ic.pin_count + 1):
        offset = i * spacing
        s.fill_style = pal.pad_fill
        s.stroke_style = pal.copper
        s.line_width = 0.5
        pads = (
            (x + offset - pin_w / 2, y - pin_len, pin_w, pin_len),     # top
            (x + offset - pin_w / 2, y + size, pin_w, pin_len),        # bottom
            (x - pin_len, y + offset - pin_w / 2, pin_len, pin_w),     # left
            (x + size, y + offset - pin_w / 2, pin_len, pin_w),        # right
        )
        for rect in pads:
            s.fill_rect(*rect)
            s.stroke_rect(*rect)

    if ic.label:
        _package_label(ctx, ic.label, cx, cy, 10)


def paint_ic_package(ctx: RenderContext, ic: ICPackage):
    if ic.shape is PackageShape.QUAD_FLAT:
        _paint_quad_flat(ctx, ic)
    else:
        _paint_dual_row(ctx, ic)


def _paint_two_pad(ctx: RenderContext, cx: float, cy: float, vertical: bool):
    s, pal = ctx.surface, ctx.palette
    s.fill_style = pal.pad_fill
    s.stroke_style = pal.copper
    s.line_width = 0.5
    if vertical:
        pads = ((cx - 3, cy - 7, 6, 4), (cx - 3, cy + 3, 6, 4))
        body = (cx - 2.5, cy - 3, 5, 6)
    else:
        pads = ((cx - 7, cy - 3, 4, 6), (cx + 3, cy - 3, 4, 6))
        body = (cx - 3, cy - 2.5, 6, 5)
    for rect in pads:
        s.fill_rect(*rect)
        s.stroke_rect(*rect)

    s.stroke_style = pal.silkscreen
    s.line_width = 0.8
    s.stroke_rect(*body)


def _paint_capacitor(ctx: RenderContext, cx: float, cy: float):
    s, pal = ctx.surface, ctx.palette
    s.fill_style = pal.pad_fill
    s.stroke_style = pal.copper
    s.line_width = 0.5
    for px in (cx - 5, cx + 5):
        s.begin_path()
        s.arc(px, cy, 3, 0, TAU)
        s.fill()
        s.stroke()
    s.stroke_style = pal.silkscreen
    s.line_width = 0.6
    s.stroke_rect(cx - 4, cy - 3, 8, 6)


def paint_passive(ctx: RenderContext, part: PassiveComponent):
    cx, cy = part.center
    if part.kind is PassiveKind.CAPACITOR:
        _paint_capacitor(ctx, cx, cy)
    else:
        _paint_two_pad(ctx, cx, cy, part.orientation is Orientation.VERTICAL)


def paint_label(ctx: RenderContext, label: Label):
    s = ctx.surface
    s.fill_style = ctx.palette.silkscreen
    s.font = ctx.palette.font(label.size, 500)
    s.text_align = "center"
    s.text_baseline = "middle"
    s.fill_text(label.text, *label.position)


def _white(alpha: float) -> str:
    return f"rgba(255,255,255,{alpha:g})"


def paint_fade_mask(ctx: RenderContext, mask: FadeMask):
    """Vertical white fade over the hero zone."""
    s = ctx.surface
    rect = mask.rect
    gradient = s.create_linear_gradient(rect.center_x, rect.y, rect.center_x, rect.bottom)
    for offset, alpha in mask.gradient_stops:
        gradient.add_color_stop(offset, _white(alpha))
    s.fill_style = gradient
    s.fill_rect(rect.x, rect.y, rect.width, rect.height)


PAINTERS: Dict[Type, Callable[[RenderContext, Primitive], None]] = {
    Via: paint_via,
    Line: paint_line,
    ICPackage: paint_ic_package,
    PassiveComponent: paint_passive,
    Label: paint_label,
    FadeMask: paint_fade_mask,
}


def paint_primitive(ctx: RenderContext, primitive: Primitive):
    painter = PAINTERS.get(type(primitive))
    if painter is None:
        raise TypeError(f"No painter for primitive type {type(primitive).__name__}")
    painter(ctx, primitive)


def paint_plan(ctx: RenderContext, plan: PlacementPlan, width: float, height: float):
    """Clear the surface to the board background and paint the plan in order."""
    s = ctx.surface
    s.clear_rect(0, 0, width, height)
    s.fill_style = ctx.palette.background
    s.fill_rect(0, 0, width, height)

    for primitive in plan:
        paint_primitive(ctx, primitive)

    logger.debug(f"Painted {len(plan)} primitives on {width:g}x{height:g} surface")
