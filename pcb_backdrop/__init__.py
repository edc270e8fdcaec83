"""
pcb-backdrop - Procedural circuit board backgrounds

Generates a decorative, schematic-style circuit board background sized to
a viewport. Traces, vias and IC packages are routed into the side margins
and the top and bottom edges so the central content column stays clear.
"""

__version__ = "0.1.0"
__author__ = "pcb-backdrop Team"

from .config import LayoutConfig, DEFAULT_CONFIG, load_config
from .layout.geometry import Viewport, ZoneGeometry, compute_zone_geometry
from .layout.planner import PlacementPlanner, plan_background
from .layout.primitives import PlacementPlan
from .orchestrator import RedrawOrchestrator, RedrawState
from .palette import Palette, get_palette

__all__ = [
    "LayoutConfig",
    "DEFAULT_CONFIG",
    "load_config",
    "Viewport",
    "ZoneGeometry",
    "compute_zone_geometry",
    "PlacementPlanner",
    "plan_background",
    "PlacementPlan",
    "RedrawOrchestrator",
    "RedrawState",
    "Palette",
    "get_palette",
]
