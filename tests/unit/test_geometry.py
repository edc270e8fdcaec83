"""
Tests for zone geometry.

Tests cover:
- Content column width and centring
- Gutter widths
- Narrow layout breakpoint
- Hero exclusion zone and edge bands
- Degenerate viewports
"""

import pytest

from pcb_backdrop.config import LayoutConfig
from pcb_backdrop.layout.geometry import Rect, Viewport, compute_zone_geometry, round_half_up


class TestContentColumn:
    """Tests for content column placement."""

    def test_capped_at_max_width(self):
        zones = compute_zone_geometry(Viewport(1440, 900))
        assert zones.content_rect.width == 1200
        assert zones.content_rect.x == 120

    def test_padding_applied_below_cap(self):
        zones = compute_zone_geometry(Viewport(820, 600))
        assert zones.content_rect.width == 772
        assert zones.content_rect.x == 24

    @pytest.mark.parametrize("width", [320, 767, 768, 1000, 1248, 1249, 1920, 2560])
    def test_centred(self, width):
        zones = compute_zone_geometry(Viewport(width, 700))
        content = zones.content_rect
        assert content.width == min(1200, width - 48)
        assert content.x == pytest.approx((width - content.width) / 2)
        assert zones.left_gutter_width == pytest.approx(zones.right_gutter_width)

    def test_column_span(self):
        content = compute_zone_geometry(Viewport(1440, 900)).content_rect
        assert content.contains_x(120)
        assert content.contains_x(1320)
        assert not content.contains_x(119.5)
        assert not content.contains_x(1320.5)

    def test_gutters_fill_remaining_width(self):
        zones = compute_zone_geometry(Viewport(1600, 900))
        total = zones.left_gutter_width + zones.content_rect.width + zones.right_gutter_width
        assert total == pytest.approx(1600)
        assert zones.left_gutter_width == 200
        assert zones.content_rect.right == 1400


class TestBreakpoint:
    """Tests for narrow layout switching."""

    @pytest.mark.parametrize("width,narrow", [
        (320, True),
        (767, True),
        (767.9, True),
        (768, False),
        (1440, False),
    ])
    def test_narrow_below_768(self, width, narrow):
        assert compute_zone_geometry(Viewport(width, 800)).is_narrow_layout is narrow

    def test_custom_breakpoint(self):
        config = LayoutConfig(narrow_breakpoint=1024)
        assert compute_zone_geometry(Viewport(900, 800), config).is_narrow_layout


class TestBands:
    """Tests for the hero zone and edge bands."""

    def test_hero_exclusion_rect(self):
        zones = compute_zone_geometry(Viewport(1440, 900))
        hero = zones.hero_exclusion_rect
        assert hero == Rect(100, 0, 1240, 500)

    def test_hero_height_independent_of_viewport(self):
        short = compute_zone_geometry(Viewport(1440, 300))
        assert short.hero_exclusion_rect.height == 500

    def test_edge_bands(self):
        zones = compute_zone_geometry(Viewport(1024, 700))
        assert zones.top_edge_y == 20
        assert zones.bottom_edge_y == 680

    def test_bus_centres(self):
        zones = compute_zone_geometry(Viewport(1440, 900))
        assert zones.left_bus_x == 60
        assert zones.right_bus_x == 1380


class TestDegenerate:
    """Zero-sized viewports degrade instead of raising."""

    def test_zero_viewport(self):
        zones = compute_zone_geometry(Viewport(0, 0))
        assert zones.is_narrow_layout
        assert zones.content_rect.width == -48
        assert zones.bottom_edge_y == -20


def test_round_half_up():
    assert round_half_up(180.0) == 180
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(-0.5) == 0
