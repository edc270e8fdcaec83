"""
Surface provisioning and host attachment.

SvgSurfaceProvider allocates and resizes SVG surfaces for a viewport.
FileHost publishes a painted surface as a standalone SVG file or as an
HTML page where the board sits behind all content as a fixed,
non-interactive, decorative layer.
"""

from html import escape
from pathlib import Path
from typing import Union
import logging

from ..config import LayoutConfig, DEFAULT_CONFIG
from ..layout.geometry import Viewport
from .surface import SvgSurface

logger = logging.getLogger(__name__)

ACTIVE_CLASS = "pcb-backdrop-active"
LAYER_STYLE = (
    "position:fixed;top:0;left:0;width:100%;height:100%;"
    "z-index:0;pointer-events:none;"
)


class SvgSurfaceProvider:
    """Allocates SVG surfaces sized for a viewport."""

    def __init__(self, config: LayoutConfig = DEFAULT_CONFIG, background: str = "#ffffff"):
        self.config = config
        self.background = background

    def density_for(self, viewport: Viewport) -> float:
        """Pixel density clamped to the configured maximum (missing means 1)."""
        density = viewport.pixel_density or 1.0
        return min(density, self.config.max_pixel_density)

    def allocate(self, viewport: Viewport) -> SvgSurface:
        return SvgSurface(
            viewport.width,
            viewport.height,
            self.density_for(viewport),
            background=self.background,
        )

    def resize(self, surface: SvgSurface, viewport: Viewport) -> SvgSurface:
        surface.resize(viewport.width, viewport.height, self.density_for(viewport))
        return surface


class FileHost:
    """Publishes the background to a file.

    The output format follows the file suffix: ``.html``/``.htm`` writes a
    page with the board as a fixed background layer, anything else writes
    the bare SVG document.
    """

    def __init__(self, path: Union[str, Path], title: str = "PCB backdrop"):
        self.path = Path(path)
        self.title = title
        self.active = False
        self.publish_count = 0

    @property
    def is_html(self) -> bool:
        return self.path.suffix.lower() in (".html", ".htm")

    def attach(self, surface: SvgSurface):
        """Mark the background layer as active."""
        self.active = True
        logger.debug(f"Attached background layer to {self.path}")

    def detach(self):
        self.active = False
        logger.debug(f"Detached background layer from {self.path}")

    def render_document(self, surface: SvgSurface) -> str:
        svg = surface.to_svg({
            "aria-hidden": "true",
            "focusable": "false",
            "style": LAYER_STYLE,
            "preserveAspectRatio": "none",
        })
        if not self.is_html:
            return svg + "\n"

        body_class = f' class="{ACTIVE_CLASS}"' if self.active else ""
        return f'''<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{escape(self.title)}</title>
    <style>
        body {{ margin: 0; }}
        .{ACTIVE_CLASS} main {{ position: relative; z-index: 1; }}
    </style>
</head>
<body{body_class}>
{svg}
<main></main>
</body>
</html>
'''

    def publish(self, surface: SvgSurface) -> Path:
        """Write the current surface content to the host file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(self.render_document(surface))
        self.publish_count += 1
        logger.debug(f"Published background to {self.path}")
        return self.path
