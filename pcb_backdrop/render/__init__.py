"""Drawing surfaces, primitive painting and host output."""

from .surface import (
    DrawingSurface,
    SvgSurface,
    LinearGradient,
    select_round_rect,
    trace_round_rect,
)
from .painter import RenderContext, paint_plan, paint_primitive
from .host import SvgSurfaceProvider, FileHost

__all__ = [
    "DrawingSurface",
    "SvgSurface",
    "LinearGradient",
    "select_round_rect",
    "trace_round_rect",
    "RenderContext",
    "paint_plan",
    "paint_primitive",
    "SvgSurfaceProvider",
    "FileHost",
]
