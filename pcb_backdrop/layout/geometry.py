"""
Zone Geometry

Derives the layout zones of the background from the viewport: the centred
content column, the side gutters, the top and bottom edge bands and the
hero exclusion zone that is faded out on top of everything else.
"""

from dataclasses import dataclass
import math

from ..config import LayoutConfig, DEFAULT_CONFIG


@dataclass(frozen=True)
class Viewport:
    """Display area in CSS pixels."""
    width: float
    height: float
    pixel_density: float = 1.0


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle (top-left origin, y down)."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    def contains_x(self, x: float) -> bool:
        """True if x lies inside the horizontal span (edges inclusive)."""
        return self.x <= x <= self.right

    def as_tuple(self):
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class ZoneGeometry:
    """Zones derived from a viewport."""
    viewport: Viewport
    content_rect: Rect
    left_gutter_width: float
    right_gutter_width: float
    hero_exclusion_rect: Rect
    is_narrow_layout: bool
    top_edge_y: float
    bottom_edge_y: float

    @property
    def width(self) -> float:
        return self.viewport.width

    @property
    def height(self) -> float:
        return self.viewport.height

    @property
    def left_bus_x(self) -> float:
        """Centre of the left gutter."""
        return self.left_gutter_width * 0.5

    @property
    def right_bus_x(self) -> float:
        """Centre of the right gutter."""
        return self.content_rect.right + self.right_gutter_width * 0.5


def compute_zone_geometry(viewport: Viewport,
                          config: LayoutConfig = DEFAULT_CONFIG) -> ZoneGeometry:
    """Compute zone geometry for a viewport.

    Total function: degenerate viewports produce degenerate (zero or
    negative area) rectangles rather than errors.
    """
    width = viewport.width
    height = viewport.height

    content_width = min(config.max_content_width, width - config.page_padding)
    content_x = (width - content_width) / 2
    content_rect = Rect(content_x, 0.0, content_width, height)

    left_gutter = content_x
    right_gutter = width - content_rect.right

    hero = Rect(
        content_x - config.hero_side_bleed,
        0.0,
        content_width + 2 * config.hero_side_bleed,
        config.hero_height + config.hero_bleed,
    )

    return ZoneGeometry(
        viewport=viewport,
        content_rect=content_rect,
        left_gutter_width=left_gutter,
        right_gutter_width=right_gutter,
        hero_exclusion_rect=hero,
        is_narrow_layout=width < config.narrow_breakpoint,
        top_edge_y=config.edge_offset,
        bottom_edge_y=height - config.edge_offset,
    )


def round_half_up(value: float) -> float:
    """Round to the nearest integer, halves away from negative infinity."""
    return float(math.floor(value + 0.5))
