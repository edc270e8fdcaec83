"""
Tests for the primitive painter.

Tests cover:
- Render context construction and round-rect selection
- Per-primitive paint recipes
- Plan painting order and surface clearing
- Unknown primitive handling
"""

import math

import pytest

from pcb_backdrop.layout.geometry import Rect, Viewport
from pcb_backdrop.layout.planner import FADE_STOPS, PlacementPlanner
from pcb_backdrop.layout.primitives import (
    FadeMask,
    ICPackage,
    Label,
    Line,
    Orientation,
    PackageShape,
    PassiveComponent,
    PassiveKind,
    PlacementPlan,
    TraceColor,
    Via,
)
from pcb_backdrop.render.painter import (
    PAINTERS,
    RenderContext,
    paint_plan,
    paint_primitive,
)
from pcb_backdrop.render.surface import SvgSurface


@pytest.fixture
def ctx(recording_surface, palette):
    return RenderContext.for_surface(recording_surface, palette)


def _calls(surface, name):
    return [args for call, args in surface.calls if call == name]


# =============================================================================
# Render context
# =============================================================================

class TestRenderContext:
    """Tests for RenderContext."""

    def test_native_round_rect_for_svg(self, palette):
        surface = SvgSurface(100, 100)
        ctx = RenderContext.for_surface(surface, palette)
        assert ctx.round_rect == surface.round_rect
        assert ctx.plan is None

    def test_fallback_round_rect_bound_to_surface(self, ctx, recording_surface):
        ctx.round_rect(0, 0, 10, 10, 2)
        assert recording_surface.names()[0] == "move_to"

    def test_default_palette(self, recording_surface):
        ctx = RenderContext.for_surface(recording_surface)
        assert ctx.palette.background == "#ffffff"

    def test_every_primitive_type_has_painter(self):
        assert set(PAINTERS) == {Via, Line, ICPackage, PassiveComponent, Label, FadeMask}


# =============================================================================
# Recipes
# =============================================================================

class TestVia:
    """Tests for via painting."""

    def test_ring_and_hole(self, ctx, recording_surface, palette):
        paint_primitive(ctx, Via(10, 20, 5))
        arcs = _calls(recording_surface, "arc")
        assert [(a[0], a[1], a[2]) for a in arcs] == [(10, 20, 5), (10, 20, pytest.approx(1.75))]
        assert all(a[4] == pytest.approx(2 * math.pi) for a in arcs)

        fills = [a[0] for a in _calls(recording_surface, "fill")]
        assert fills == [palette.via_fill, palette.via_hole]

        strokes = _calls(recording_surface, "stroke")
        assert [(s[0], s[1]) for s in strokes] == [(palette.via_ring, 1.4), (palette.via_ring, 0.7)]


class TestLine:
    """Tests for trace painting."""

    def test_round_cap_and_role_color(self, ctx, recording_surface, palette):
        paint_primitive(ctx, Line(0, 20, 100, 20, TraceColor.COPPER_BOLD, 2.0))
        assert recording_surface.names() == ["begin_path", "move_to", "line_to", "stroke"]
        assert _calls(recording_surface, "stroke") == [(palette.copper_bold, 2.0, "round")]

    @pytest.mark.parametrize("role", list(TraceColor))
    def test_each_role_resolves(self, ctx, recording_surface, palette, role):
        paint_primitive(ctx, Line(0, 0, 0, 10, role))
        (stroke,) = _calls(recording_surface, "stroke")
        assert stroke[0] == palette.trace_color(role.value)
        assert stroke[0].startswith("rgba(")


class TestICPackage:
    """Tests for IC package painting."""

    def test_dual_row_uses_fallback_path(self, ctx, recording_surface, palette):
        ic = ICPackage(PackageShape.DUAL_ROW, (60, 180), (50, 34), 4, "DAC")
        paint_primitive(ctx, ic)

        names = recording_surface.names()
        assert "round_rect" not in names
        # Body outline traced from four corner arcs, then orientation dot and notch
        body_arcs = _calls(recording_surface, "arc")[:4]
        assert [(a[0], a[1]) for a in body_arcs] == [(81, 167), (81, 193), (39, 193), (39, 167)]

        # Four pins on each side
        fills = _calls(recording_surface, "fill_rect")
        assert len(fills) == 8
        assert fills[0] == (25, 163 + 34 / 5 - 2, 10, 4)
        assert fills[1] == (85, 163 + 34 / 5 - 2, 10, 4)

        (text,) = _calls(recording_surface, "fill_text")
        assert text[:3] == ("DAC", 60, 180)
        assert text[3] == palette.font(9, 600)
        assert text[4:] == ("center", "middle")

    def test_dual_row_without_label(self, ctx, recording_surface):
        paint_primitive(ctx, ICPackage(PackageShape.DUAL_ROW, (30, 30), (34, 24), 3))
        assert _calls(recording_surface, "fill_text") == []
        assert len(_calls(recording_surface, "fill_rect")) == 6

    def test_quad_flat(self, ctx, recording_surface, palette):
        ic = ICPackage(PackageShape.QUAD_FLAT, (1380, 738), (55, 55), 4, "QPU")
        paint_primitive(ctx, ic)

        # Die outline is the first stroke_rect
        die = _calls(recording_surface, "stroke_rect")[0]
        inset = 55 * 0.22
        assert die == pytest.approx((1352.5 + inset, 710.5 + inset, 55 - 2 * inset, 55 - 2 * inset))

        # Four pins per side, plus the die outline
        assert len(_calls(recording_surface, "fill_rect")) == 16
        assert len(_calls(recording_surface, "stroke_rect")) == 17

        (text,) = _calls(recording_surface, "fill_text")
        assert text[0] == "QPU"
        assert text[3] == palette.font(10, 600)

    def test_quad_flat_on_svg(self, palette):
        surface = SvgSurface(200, 200)
        ctx = RenderContext.for_surface(surface, palette)
        paint_primitive(ctx, ICPackage(PackageShape.QUAD_FLAT, (100, 100), (55, 55), 4, "QPU"))
        svg = surface.to_svg()
        assert "QPU</text>" in svg
        assert svg.count("<rect") == 33


class TestPassive:
    """Tests for passive component painting."""

    def test_horizontal_two_pad(self, ctx, recording_surface, palette):
        paint_primitive(ctx, PassiveComponent(PassiveKind.TWO_PAD, (50, 100)))
        assert _calls(recording_surface, "fill_rect") == [(43, 97, 4, 6), (53, 97, 4, 6)]
        assert _calls(recording_surface, "stroke_rect")[-1] == (47, 97.5, 6, 5)

    def test_vertical_two_pad(self, ctx, recording_surface):
        part = PassiveComponent(PassiveKind.TWO_PAD, (50, 100), Orientation.VERTICAL)
        paint_primitive(ctx, part)
        assert _calls(recording_surface, "fill_rect") == [(47, 93, 6, 4), (47, 103, 6, 4)]

    def test_capacitor(self, ctx, recording_surface, palette):
        paint_primitive(ctx, PassiveComponent(PassiveKind.CAPACITOR, (50, 100)))
        arcs = _calls(recording_surface, "arc")
        assert [(a[0], a[1], a[2]) for a in arcs] == [(45, 100, 3), (55, 100, 3)]
        assert _calls(recording_surface, "stroke_rect") == [(46, 97, 8, 6)]


class TestLabelAndFade:
    """Tests for labels and the hero fade."""

    def test_label(self, ctx, recording_surface, palette):
        paint_primitive(ctx, Label("R1", (60, 331), 7))
        (text,) = _calls(recording_surface, "fill_text")
        assert text == ("R1", 60, 331, palette.font(7, 500), "center", "middle")
        assert text[3] == '500 7px "JetBrains Mono", monospace'

    def test_fade_mask_gradient(self, palette):
        surface = SvgSurface(1440, 900)
        ctx = RenderContext.for_surface(surface, palette)
        paint_primitive(ctx, FadeMask(Rect(100, 0, 1240, 500), FADE_STOPS))
        svg = surface.to_svg()
        assert 'x1="720" y1="0" x2="720" y2="500"' in svg
        assert 'stop-color="rgba(255,255,255,1)"' in svg
        assert '<stop offset="0.85" stop-color="rgba(255,255,255,0.95)"/>' in svg
        assert '<stop offset="1" stop-color="rgba(255,255,255,0)"/>' in svg
        assert surface.elements == [
            '<rect x="100" y="0" width="1240" height="500" fill="url(#grad0)"/>'
        ]


class TestUnknownPrimitive:

    def test_raises_type_error(self, ctx):
        with pytest.raises(TypeError, match="str"):
            paint_primitive(ctx, "not a primitive")


# =============================================================================
# Whole plans
# =============================================================================

class TestPaintPlan:
    """Tests for painting a complete plan."""

    def test_clears_then_fills_background(self, ctx, recording_surface, palette):
        paint_plan(ctx, PlacementPlan([Via(1, 2)]), 300, 200)
        assert recording_surface.calls[0] == ("clear_rect", (0, 0, 300, 200))
        assert recording_surface.calls[1] == ("fill_rect", (0, 0, 300, 200))
        assert recording_surface.names()[2] == "begin_path"

    def test_empty_plan_paints_background_only(self, palette):
        surface = SvgSurface(300, 200)
        ctx = RenderContext.for_surface(surface, palette)
        paint_plan(ctx, PlacementPlan([]), 300, 200)
        assert surface.elements == ['<rect x="0" y="0" width="300" height="200" fill="#ffffff"/>']

    def test_repaint_replaces_previous_content(self, palette):
        surface = SvgSurface(300, 200)
        ctx = RenderContext.for_surface(surface, palette)
        paint_plan(ctx, PlacementPlan([Via(1, 2)]), 300, 200)
        paint_plan(ctx, PlacementPlan([]), 300, 200)
        assert len(surface.elements) == 1

    def test_wide_plan_paints_in_order(self, palette):
        viewport = Viewport(1440, 900)
        plan = PlacementPlanner().plan(viewport)
        surface = SvgSurface(1440, 900)
        paint_plan(RenderContext.for_surface(surface, palette), plan, 1440, 900)

        svg = surface.to_svg()
        for text in ("DAC", "CLK", "MEM", "ADC", "MUX", "QPU", "R1", "R2", "C1", "R3", "C2"):
            assert f">{text}</text>" in svg
        # Fade mask is painted last
        assert surface.elements[-1].startswith('<rect x="100" y="0" width="1240" height="500"')

    def test_narrow_plan_has_no_fade(self, palette):
        plan = PlacementPlanner().plan(Viewport(600, 800))
        surface = SvgSurface(600, 800)
        paint_plan(RenderContext.for_surface(surface, palette), plan, 600, 800)
        assert "<defs>" not in surface.to_svg()
