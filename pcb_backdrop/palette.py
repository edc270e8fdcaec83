"""Board palette management.

Provides centralized access to the board colors from palette.yaml, with
fallback to built-in defaults if the packaged file is missing or broken.
There is exactly one palette; colors are looked up by role name.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union
import yaml

logger = logging.getLogger(__name__)

PALETTE_PATH = Path(__file__).parent / "palette.yaml"


class Palette:
    """The fixed board palette.

    Loads colors from palette.yaml and exposes them by role. Trace colors
    are addressed by the role names used on Line primitives.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = Path(config_path) if config_path else PALETTE_PATH
        self._config: Dict = {}
        self._load_config()

    def _load_config(self):
        """Load palette from YAML file."""
        try:
            if not self.config_path.exists():
                logger.warning(
                    f"Palette file not found at {self.config_path}, using defaults"
                )
                self._config = self._get_default_config()
                return

            with open(self.config_path, "r") as f:
                self._config = yaml.safe_load(f) or {}

            logger.debug(f"Loaded palette from {self.config_path}")

        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load palette: {e}")
            self._config = self._get_default_config()

    def _get_default_config(self) -> Dict:
        """Get default palette as fallback."""
        return {
            "trace_colors": {
                "copper": "rgba(184,115,51,0.25)",
                "copper_bold": "rgba(184,115,51,0.35)",
                "accent": "rgba(234,88,12,0.20)",
                "accent_muted": "rgba(234,88,12,0.10)",
            },
            "pad_colors": {
                "pad_fill": "rgba(184,115,51,0.16)",
                "via_ring": "rgba(184,115,51,0.32)",
                "via_fill": "rgba(184,115,51,0.12)",
                "via_hole": "#ffffff",
            },
            "package_colors": {
                "ic_fill": "rgba(22,22,58,0.07)",
                "ic_stroke": "rgba(184,115,51,0.35)",
                "die_outline": "rgba(184,115,51,0.22)",
            },
            "silkscreen": "rgba(100,116,139,0.28)",
            "background": "#ffffff",
            "font_family": '"JetBrains Mono", monospace',
        }

    def trace_color(self, role: Union[str, "object"]) -> str:
        """Get color for a trace role.

        Args:
            role: Role name ("copper", "copper_bold", "accent",
                  "accent_muted") or an enum whose value is one

        Returns:
            CSS color string
        """
        name = getattr(role, "value", role)
        trace_colors = self._config.get("trace_colors", {})
        if name in trace_colors:
            return trace_colors[name]
        return self._get_default_config()["trace_colors"].get(name, "#999999")

    def _section(self, section: str, key: str) -> str:
        colors = self._config.get(section, {})
        if key in colors:
            return colors[key]
        return self._get_default_config()[section][key]

    def _value(self, key: str) -> str:
        return self._config.get(key) or self._get_default_config()[key]

    @property
    def copper(self) -> str:
        return self.trace_color("copper")

    @property
    def copper_bold(self) -> str:
        return self.trace_color("copper_bold")

    @property
    def accent(self) -> str:
        return self.trace_color("accent")

    @property
    def pad_fill(self) -> str:
        return self._section("pad_colors", "pad_fill")

    @property
    def via_ring(self) -> str:
        return self._section("pad_colors", "via_ring")

    @property
    def via_fill(self) -> str:
        return self._section("pad_colors", "via_fill")

    @property
    def via_hole(self) -> str:
        return self._section("pad_colors", "via_hole")

    @property
    def ic_fill(self) -> str:
        return self._section("package_colors", "ic_fill")

    @property
    def ic_stroke(self) -> str:
        return self._section("package_colors", "ic_stroke")

    @property
    def die_outline(self) -> str:
        return self._section("package_colors", "die_outline")

    @property
    def silkscreen(self) -> str:
        return self._value("silkscreen")

    @property
    def background(self) -> str:
        return self._value("background")

    @property
    def font_family(self) -> str:
        return self._value("font_family")

    def font(self, size: float, weight: int = 500) -> str:
        """CSS font shorthand in the silkscreen face."""
        return f"{weight} {size:g}px {self.font_family}"


# Global instance
_palette = None


def get_palette() -> Palette:
    """Get the global Palette instance.

    Returns:
        Palette singleton
    """
    global _palette
    if _palette is None:
        _palette = Palette()
    return _palette
