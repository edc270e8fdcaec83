"""Zone geometry and placement planning."""

from .geometry import Viewport, Rect, ZoneGeometry, compute_zone_geometry
from .primitives import (
    Via,
    Line,
    ICPackage,
    PassiveComponent,
    Label,
    FadeMask,
    PlacementPlan,
    TraceColor,
    PackageShape,
    PassiveKind,
    Orientation,
)
from .planner import PlacementPlanner, plan_background

__all__ = [
    "Viewport",
    "Rect",
    "ZoneGeometry",
    "compute_zone_geometry",
    "Via",
    "Line",
    "ICPackage",
    "PassiveComponent",
    "Label",
    "FadeMask",
    "PlacementPlan",
    "TraceColor",
    "PackageShape",
    "PassiveKind",
    "Orientation",
    "PlacementPlanner",
    "plan_background",
]
