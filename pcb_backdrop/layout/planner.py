"""
Placement Planner

Turns zone geometry into an ordered list of drawing primitives. The board
motif is routed into the side gutters and the top and bottom edges so the
content column stays clear.

Two layouts are supported:

- Narrow: everything is pinned to two vertical lanes just inside the
  left and right viewport borders.
- Wide: each gutter gets a bus, stub traces and, as the gutter grows past
  fixed density thresholds, a secondary trace, IC packages, passives and
  silkscreen labels.

Edge buses, cross connections, border stitching and the hero fade mask are
added on top in a fixed pass order. The planner is stateless; the same
viewport always yields an equal plan.
"""

from dataclasses import dataclass
from typing import List, Tuple
import logging

from ..config import LayoutConfig, DEFAULT_CONFIG
from .geometry import Viewport, ZoneGeometry, compute_zone_geometry, round_half_up
from .primitives import (
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
    TraceColor,
    Via,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Side recipes
# =============================================================================

@dataclass(frozen=True)
class LaneRecipe:
    """Component positions for one narrow-layout edge lane.

    Vertical positions are fractions of the viewport height.
    """
    ics: Tuple[Tuple[float, str], ...]           # (y, label)
    passives: Tuple[float, ...]                  # y of vertical two-pad parts
    capacitor_ics: Tuple[int, ...]               # ICs that get a cap below
    vias: Tuple[float, ...]
    bends: Tuple[Tuple[float, float, float], ...]  # (y, reach, drop)


@dataclass(frozen=True)
class GutterRecipe:
    """Component positions for one wide-layout gutter.

    Horizontal offsets are relative to the gutter bus, vertical positions
    are fractions of the viewport height plus fixed pixel offsets.
    """
    ics: Tuple[Tuple[float, PackageShape, str], ...]   # (y, shape, label)
    passives: Tuple[float, ...]
    capacitors: Tuple[Tuple[float, float, float], ...]  # (dx, y, dy)
    bends: Tuple[Tuple[float, float], ...]              # (y, drop)
    labels: Tuple[Tuple[str, float, float, float], ...]  # (text, dx, y, dy)
    secondary_vias: Tuple[float, ...]


LEFT_LANE = LaneRecipe(
    ics=((0.18, "DAC"), (0.48, "CLK"), (0.78, "MEM")),
    passives=(0.33, 0.63),
    capacitor_ics=(0, 1),
    vias=(0.1, 0.38, 0.58, 0.88),
    bends=((0.18, 35.0, 20.0), (0.48, 30.0, -15.0)),
)

RIGHT_LANE = LaneRecipe(
    ics=((0.25, "ADC"), (0.55, "MUX"), (0.85, "QPU")),
    passives=(0.4, 0.7),
    capacitor_ics=(0, 1),
    vias=(0.15, 0.45, 0.65, 0.92),
    bends=((0.25, 35.0, 20.0), (0.55, 30.0, -15.0)),
)

LEFT_GUTTER = GutterRecipe(
    ics=(
        (0.2, PackageShape.DUAL_ROW, "DAC"),
        (0.5, PackageShape.DUAL_ROW, "CLK"),
        (0.8, PackageShape.DUAL_ROW, "MEM"),
    ),
    passives=(0.35, 0.65),
    capacitors=((20.0, 0.2, 24.0), (20.0, 0.5, 24.0), (-20.0, 0.8, -24.0)),
    bends=((0.2, 30.0), (0.5, -25.0)),
    labels=(("R1", 0.0, 0.35, 16.0), ("R2", 0.0, 0.65, 16.0), ("C1", 20.0, 0.2, 36.0)),
    secondary_vias=(0.15, 0.45, 0.75),
)

RIGHT_GUTTER = GutterRecipe(
    ics=(
        (0.25, PackageShape.DUAL_ROW, "ADC"),
        (0.55, PackageShape.DUAL_ROW, "MUX"),
        (0.82, PackageShape.QUAD_FLAT, "QPU"),
    ),
    passives=(0.4, 0.68),
    capacitors=((-20.0, 0.25, 24.0), (-20.0, 0.55, 24.0)),
    bends=((0.25, -20.0), (0.55, 30.0)),
    labels=(("R3", 0.0, 0.4, 16.0), ("C2", -20.0, 0.25, 36.0)),
    secondary_vias=(0.2, 0.5, 0.85),
)

# Package footprints (body size, pins per row/side)
LANE_IC_SIZE = (34.0, 24.0)
LANE_IC_PINS = 3
GUTTER_IC_SIZE = (50.0, 34.0)
GUTTER_IC_PINS = 4
QFP_SIZE = 55.0
QFP_PINS = 4

FADE_STOPS = ((0.0, 1.0), (0.85, 0.95), (1.0, 0.0))


class PlacementPlanner:
    """Computes placement plans for viewports.

    Holds only its configuration, so one instance can plan any number of
    viewports without carrying state between them.
    """

    def __init__(self, config: LayoutConfig = DEFAULT_CONFIG):
        self.config = config

    def plan(self, viewport: Viewport) -> PlacementPlan:
        """Plan the background for a viewport."""
        return self.plan_zones(compute_zone_geometry(viewport, self.config))

    def plan_zones(self, zones: ZoneGeometry) -> PlacementPlan:
        """Plan the background for precomputed zone geometry.

        Pass order: gutter content (left, right), top edge, bottom edge,
        cross connections, border stitching, fade mask.
        """
        out: List[Primitive] = []

        if zones.is_narrow_layout:
            self._narrow_lane(out, zones, self.config.lane_inset, 1.0, LEFT_LANE)
            self._narrow_lane(out, zones, zones.width - self.config.lane_inset, -1.0, RIGHT_LANE)
        else:
            self._wide_gutter(out, zones, is_left=True)
            self._wide_gutter(out, zones, is_left=False)

        self._top_edge(out, zones)
        self._bottom_edge(out, zones)
        self._cross_connections(out, zones)
        self._border_stitching(out, zones)

        if not zones.is_narrow_layout:
            out.append(FadeMask(rect=zones.hero_exclusion_rect, gradient_stops=FADE_STOPS))

        plan = PlacementPlan(out)
        logger.debug(
            f"Planned {len(plan)} primitives for "
            f"{zones.width:g}x{zones.height:g} "
            f"({'narrow' if zones.is_narrow_layout else 'wide'}): {plan.summary()}"
        )
        return plan

    # -------------------------------------------------------------------------
    # Narrow layout
    # -------------------------------------------------------------------------

    def _narrow_lane(self, out: List[Primitive], zones: ZoneGeometry,
                     x: float, direction: float, recipe: LaneRecipe):
        """Edge lane: bus, ICs, passives, caps, vias and L-bend stubs.

        ``direction`` is +1 when the content column lies to the right of
        the lane, -1 when it lies to the left.
        """
        h = zones.height

        out.append(Line(x, 0.0, x, h, TraceColor.COPPER, 1.2))

        for fy, label in recipe.ics:
            out.append(ICPackage(PackageShape.DUAL_ROW, (x, h * fy),
                                 LANE_IC_SIZE, LANE_IC_PINS, label))

        for fy in recipe.passives:
            out.append(PassiveComponent(PassiveKind.TWO_PAD, (x, h * fy), Orientation.VERTICAL))

        for index in recipe.capacitor_ics:
            fy = recipe.ics[index][0]
            out.append(PassiveComponent(PassiveKind.CAPACITOR, (x, h * fy + 20)))

        for fy in recipe.vias:
            out.append(Via(x, h * fy, 3.0))

        # Stubs leave the IC body edge and stop short of the content column
        start_x = x + direction * 17
        for fy, reach, drop in recipe.bends:
            y = h * fy
            end_x = x + direction * reach
            out.append(Line(start_x, y, end_x, y, TraceColor.ACCENT_MUTED, 0.8))
            out.append(Line(end_x, y, end_x, y + drop, TraceColor.ACCENT_MUTED, 0.8))
            out.append(Via(end_x, y + drop, 2.5))

    # -------------------------------------------------------------------------
    # Wide layout
    # -------------------------------------------------------------------------

    def _wide_gutter(self, out: List[Primitive], zones: ZoneGeometry, is_left: bool):
        cfg = self.config
        content = zones.content_rect
        h = zones.height

        if is_left:
            gutter = zones.left_gutter_width
            bus_x = zones.left_bus_x
            direction = 1.0
            recipe = LEFT_GUTTER
        else:
            gutter = zones.right_gutter_width
            bus_x = zones.right_bus_x
            direction = -1.0
            recipe = RIGHT_GUTTER

        if gutter <= cfg.gutter_min_width:
            return

        if is_left:
            stub_end = min(bus_x + gutter * 0.4, content.x - 10)
        else:
            stub_end = max(bus_x - gutter * 0.4, content.right + 10)

        # Main vertical bus
        out.append(Line(bus_x, 0.0, bus_x, h, TraceColor.COPPER_BOLD, 2.5))

        # Stubs reaching toward the content edge
        spacing = h / 5
        for i in range(1, 5):
            sy = round_half_up(spacing * i)
            out.append(Line(bus_x, sy, stub_end, sy, TraceColor.COPPER, 1.5))
            out.append(Via(bus_x, sy, 5.0))
            out.append(Via(stub_end, sy, 4.0))

        if gutter > cfg.component_min_width:
            self._gutter_components(out, h, bus_x, stub_end, direction, recipe)

        if gutter > cfg.secondary_trace_min_width:
            x2 = bus_x + direction * gutter * 0.3
            out.append(Line(x2, h * 0.1, x2, h * 0.9, TraceColor.COPPER, 1.0))
            for fy in recipe.secondary_vias:
                out.append(Via(x2, h * fy, 3.5))

    def _gutter_components(self, out: List[Primitive], h: float, bus_x: float,
                           stub_end: float, direction: float, recipe: GutterRecipe):
        for fy, shape, label in recipe.ics:
            if shape is PackageShape.QUAD_FLAT:
                out.append(ICPackage(shape, (bus_x, h * fy), (QFP_SIZE, QFP_SIZE), QFP_PINS, label))
            else:
                out.append(ICPackage(shape, (bus_x, h * fy), GUTTER_IC_SIZE, GUTTER_IC_PINS, label))

        for fy in recipe.passives:
            out.append(PassiveComponent(PassiveKind.TWO_PAD, (bus_x, h * fy), Orientation.VERTICAL))

        for dx, fy, dy in recipe.capacitors:
            out.append(PassiveComponent(PassiveKind.CAPACITOR, (bus_x + dx, h * fy + dy)))

        # Signal L-bends: out from the IC, bend along the stub column, via
        start_x = bus_x + direction * 35
        for fy, drop in recipe.bends:
            y = h * fy
            out.append(Line(start_x, y, stub_end, y, TraceColor.ACCENT, 1.0))
            out.append(Line(stub_end, y, stub_end, y + drop, TraceColor.ACCENT, 1.0))
            out.append(Via(stub_end, y + drop, 3.0))

        for text, dx, fy, dy in recipe.labels:
            out.append(Label(text, (bus_x + dx, h * fy + dy), 7.0))

    # -------------------------------------------------------------------------
    # Edges
    # -------------------------------------------------------------------------

    def _stitch_spacing(self, extent: float) -> float:
        return max(self.config.stitch_min_spacing, extent * self.config.stitch_fraction)

    def _top_edge(self, out: List[Primitive], zones: ZoneGeometry):
        w = zones.width
        y = zones.top_edge_y
        out.append(Line(0.0, y, w, y, TraceColor.COPPER_BOLD, 2.0))
        spacing = self._stitch_spacing(w)
        x = spacing
        while x < w:
            out.append(Via(x, y, 3.0))
            x += spacing

    def _bottom_edge(self, out: List[Primitive], zones: ZoneGeometry):
        w = zones.width
        y = zones.bottom_edge_y
        out.append(Line(0.0, y, w, y, TraceColor.COPPER_BOLD, 2.0))
        # Half-phase shift against the top row
        spacing = self._stitch_spacing(w)
        x = spacing * 0.5
        while x < w:
            out.append(Via(x, y, 3.0))
            x += spacing

    def _cross_connections(self, out: List[Primitive], zones: ZoneGeometry):
        threshold = self.config.gutter_min_width
        if zones.is_narrow_layout:
            return
        if zones.left_gutter_width <= threshold or zones.right_gutter_width <= threshold:
            return

        w = zones.width
        offset = self.config.cross_offset
        for y, fractions in ((offset, (0.35, 0.65)), (zones.height - offset, (0.4, 0.6))):
            out.append(Line(0.0, y, w, y, TraceColor.COPPER, 1.0))
            out.append(Via(zones.left_bus_x, y, 3.5))
            out.append(Via(zones.right_bus_x, y, 3.5))
            for f in fractions:
                out.append(Via(w * f, y, 3.0))

    def _border_stitching(self, out: List[Primitive], zones: ZoneGeometry):
        inset = self.config.border_inset
        h = zones.height
        spacing = self._stitch_spacing(h)
        y = spacing
        while y < h:
            out.append(Via(inset, y, 3.0))
            out.append(Via(zones.width - inset, y, 3.0))
            y += spacing


def plan_background(viewport: Viewport, config: LayoutConfig = DEFAULT_CONFIG) -> PlacementPlan:
    """Convenience wrapper: plan a viewport with a one-off planner."""
    return PlacementPlanner(config).plan(viewport)
