"""
Layout Configuration

Defines the fixed constants that drive zone geometry, placement density
and redraw timing. A single default profile covers the stock layout;
alternative profiles can be loaded from YAML for experimentation.
"""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutConfig:
    """Layout constants for the background generator (CSS pixels)."""

    # Content column
    max_content_width: float = 1200.0
    page_padding: float = 48.0  # Total horizontal padding around content
    narrow_breakpoint: float = 768.0

    # Gutter density thresholds
    gutter_min_width: float = 40.0  # Any gutter content
    secondary_trace_min_width: float = 60.0
    component_min_width: float = 80.0  # ICs, passives, labels

    # Edge bands
    edge_offset: float = 20.0
    cross_offset: float = 50.0
    border_inset: float = 12.0
    lane_inset: float = 18.0  # Narrow layout edge lanes

    # Ground stitching
    stitch_min_spacing: float = 70.0
    stitch_fraction: float = 0.07

    # Hero exclusion zone
    hero_height: float = 460.0
    hero_bleed: float = 40.0
    hero_side_bleed: float = 20.0

    # Redraw
    debounce_ms: float = 250.0
    max_pixel_density: float = 2.0

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0

    def to_dict(self) -> Dict[str, float]:
        """Export as a plain dict (YAML friendly)."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_CONFIG = LayoutConfig()


def config_from_dict(data: Dict[str, Any], base: LayoutConfig = DEFAULT_CONFIG) -> LayoutConfig:
    """Build a LayoutConfig from a mapping, overriding fields of ``base``.

    Raises:
        ValueError: On unknown keys or non-numeric values.
    """
    known = {f.name for f in fields(LayoutConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown layout config keys: {unknown}")

    overrides = {}
    for key, value in data.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(
                f"Layout config value for '{key}' must be a number, got {value!r}"
            )
        overrides[key] = float(value)

    config = replace(base, **overrides)
    # Stitching loops advance by this spacing
    if config.stitch_min_spacing <= 0:
        raise ValueError("stitch_min_spacing must be positive")
    return config


def load_config(path: Optional[Union[str, Path]] = None) -> LayoutConfig:
    """Load a layout profile from a YAML file.

    Args:
        path: YAML file with a top-level mapping of LayoutConfig fields.
              None returns the default profile.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file content is not a valid profile.
    """
    if path is None:
        return DEFAULT_CONFIG

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Layout config file not found: {config_path}")

    with open(config_path, "r") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Layout config must be a mapping: {config_path}")

    config = config_from_dict(data)
    logger.debug(f"Loaded layout config from {config_path}")
    return config
