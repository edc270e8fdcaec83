#!/usr/bin/env python3
"""
pcb-backdrop CLI

Command-line interface for the circuit board background generator.

Usage:
    pcb-backdrop render --width 1440 --height 900 -o background.svg
    pcb-backdrop plan --width 600 --height 800 [--json]
    pcb-backdrop replay --sizes 1440x900,1280x800 -o page.html
"""

import argparse
import json
import logging
import sys
import time
from typing import List

from . import __version__
from .config import load_config
from .layout.geometry import Viewport, compute_zone_geometry
from .layout.planner import PlacementPlanner
from .orchestrator import (
    ManualViewportSource,
    RedrawOrchestrator,
    RedrawState,
    StaticViewportSource,
)
from .render.host import FileHost, SvgSurfaceProvider

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool = False):
    """Configure root logging once for CLI runs."""
    root = logging.getLogger()
    if root.handlers:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S"
    ))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


def parse_size(text: str) -> Viewport:
    """Parse ``WIDTHxHEIGHT`` or ``WIDTHxHEIGHT@DENSITY``."""
    density = 1.0
    size = text.strip().lower()
    if "@" in size:
        size, density_text = size.split("@", 1)
        try:
            density = float(density_text)
        except ValueError:
            raise argparse.ArgumentTypeError(f"Invalid pixel density: {text}")
    parts = size.split("x")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"Expected WIDTHxHEIGHT, got: {text}")
    try:
        width, height = float(parts[0]), float(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid size: {text}")
    return Viewport(width, height, density)


def parse_sizes(text: str) -> List[Viewport]:
    return [parse_size(part) for part in text.split(",") if part.strip()]


def cmd_render(args):
    """Render one viewport to an SVG or HTML file."""
    config = load_config(args.config)
    viewport = Viewport(args.width, args.height, args.density)

    host = FileHost(args.output)
    orchestrator = RedrawOrchestrator(
        StaticViewportSource(viewport),
        SvgSurfaceProvider(config),
        host,
        config=config,
    )
    orchestrator.initialize()

    if orchestrator.redraw_count == 0:
        print("Error: background could not be rendered (see log)")
        return 1

    plan = orchestrator.context.plan
    print(f"Rendered {viewport.width:g}x{viewport.height:g} background to {host.path}")
    print(f"  Primitives: {len(plan)}")
    return 0


def cmd_plan(args):
    """Print zone geometry and plan summary for a viewport."""
    config = load_config(args.config)
    viewport = Viewport(args.width, args.height, args.density)
    zones = compute_zone_geometry(viewport, config)
    plan = PlacementPlanner(config).plan_zones(zones)

    if args.json:
        payload = {
            "viewport": {
                "width": viewport.width,
                "height": viewport.height,
                "pixel_density": viewport.pixel_density,
            },
            "zones": {
                "content_rect": list(zones.content_rect.as_tuple()),
                "left_gutter_width": zones.left_gutter_width,
                "right_gutter_width": zones.right_gutter_width,
                "hero_exclusion_rect": list(zones.hero_exclusion_rect.as_tuple()),
                "is_narrow_layout": zones.is_narrow_layout,
            },
            "primitives": plan.to_dicts(),
        }
        print(json.dumps(payload, indent=2))
        return 0

    content = zones.content_rect
    print(f"Viewport: {viewport.width:g}x{viewport.height:g}")
    print(f"  Layout: {'narrow' if zones.is_narrow_layout else 'wide'}")
    print(f"  Content column: x={content.x:g} width={content.width:g}")
    print(f"  Gutters: left={zones.left_gutter_width:g} right={zones.right_gutter_width:g}")
    print(f"Primitives: {len(plan)}")
    for tag, count in sorted(plan.summary().items()):
        print(f"  {tag}: {count}")
    return 0


def cmd_replay(args):
    """Feed a sequence of viewport sizes through the debounced redraw loop."""
    config = load_config(args.config)
    sizes = args.sizes
    if not sizes:
        print("Error: no sizes given")
        return 1

    source = ManualViewportSource(sizes[0])
    host = FileHost(args.output)
    orchestrator = RedrawOrchestrator(source, SvgSurfaceProvider(config), host, config=config)
    orchestrator.initialize()
    print(f"Initial render at {sizes[0].width:g}x{sizes[0].height:g}")

    for viewport in sizes[1:]:
        time.sleep(args.interval / 1000.0)
        print(f"Resize to {viewport.width:g}x{viewport.height:g}")
        source.resize(viewport.width, viewport.height, viewport.pixel_density)

    # Wait for the trailing debounced redraw
    deadline = time.monotonic() + config.debounce_seconds + 2.0
    while orchestrator.state is RedrawState.PENDING_REDRAW and time.monotonic() < deadline:
        time.sleep(0.01)

    redraws = orchestrator.redraw_count
    orchestrator.stop()
    print(f"Redraws: {redraws} (including initial) -> {host.path}")
    return 0


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="pcb-backdrop - Procedural circuit board backgrounds",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pcb-backdrop render --width 1440 --height 900 -o background.svg
  pcb-backdrop render --width 390 --height 844 --density 3 -o mobile.html
  pcb-backdrop plan --width 820 --height 600 --json
  pcb-backdrop replay --sizes 1440x900,1200x800,600x800 --interval 100 -o page.html
        """,
    )

    parser.add_argument('--version', action='version', version=f'pcb-backdrop {__version__}')
    parser.add_argument('--config', help='Layout config YAML overriding the defaults')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose logging')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    render_parser = subparsers.add_parser('render', help='Render a background for one viewport')
    render_parser.add_argument('--width', type=float, required=True, help='Viewport width (CSS px)')
    render_parser.add_argument('--height', type=float, required=True, help='Viewport height (CSS px)')
    render_parser.add_argument('--density', type=float, default=1.0, help='Pixel density (default: 1)')
    render_parser.add_argument('-o', '--output', default='background.svg',
                               help='Output .svg or .html file (default: background.svg)')

    plan_parser = subparsers.add_parser('plan', help='Show zone geometry and placement plan')
    plan_parser.add_argument('--width', type=float, required=True, help='Viewport width (CSS px)')
    plan_parser.add_argument('--height', type=float, required=True, help='Viewport height (CSS px)')
    plan_parser.add_argument('--density', type=float, default=1.0, help='Pixel density (default: 1)')
    plan_parser.add_argument('--json', action='store_true', help='Print the full plan as JSON')

    replay_parser = subparsers.add_parser('replay', help='Replay viewport resizes through the redraw loop')
    replay_parser.add_argument('--sizes', type=parse_sizes, required=True,
                               help='Comma separated WIDTHxHEIGHT[@DENSITY] list')
    replay_parser.add_argument('--interval', type=float, default=100.0,
                               help='Delay between resizes in ms (default: 100)')
    replay_parser.add_argument('-o', '--output', default='background.html',
                               help='Output .svg or .html file (default: background.html)')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    _configure_logging(args.verbose)

    commands = {
        'render': cmd_render,
        'plan': cmd_plan,
        'replay': cmd_replay,
    }

    try:
        return commands[args.command](args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
