"""
polyspiral command line.

    polyspiral                       # open a window, rotational preset
    polyspiral --preset static --sides 5
    polyspiral --headless --frames 600 --log-level DEBUG
    polyspiral --write-config polyspiral.yaml

--headless runs the same driver on an asyncio repaint loop against an
off-screen surface and logs statistics; nothing is written to disk.
"""

import argparse
import asyncio
import logging
import sys
import time
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .config import PRESETS, ConfigManager, PolyspiralConfig, apply_preset
from .driver import AnimationDriver
from .hues import HueMode
from .scheduling import AsyncioFrameScheduler
from .surfaces import get_surface

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Animated nested-polygon spirals")
    parser.add_argument("--config", type=Path, help="YAML or JSON config file")
    parser.add_argument("--preset", choices=sorted(PRESETS), help="Apply a named variant")
    parser.add_argument("--sides", type=int, help="Polygon side count (>= 3)")
    parser.add_argument("--anchor-ratio", type=float, help="Fraction along each edge, in (0, 1)")
    parser.add_argument("--hue-mode", choices=[m.value for m in HueMode], help="Per-edge hue policy")
    parser.add_argument("--shapes-per-tick", type=int, help="Nested polygons per tick (default: whole generation)")
    parser.add_argument("--fps", type=float, help="Logical tick rate")
    parser.add_argument("--width", type=int, help="Initial window / surface width")
    parser.add_argument("--height", type=int, help="Initial window / surface height")
    parser.add_argument("--headless", action="store_true", help="Run without a window and log stats")
    parser.add_argument("--frames", type=int, default=300, help="Repaints to run in headless mode (default: 300)")
    parser.add_argument("--write-config", type=Path, help="Write the effective config and exit")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ...")
    return parser


def resolve_config(args: argparse.Namespace) -> PolyspiralConfig:
    """Config file, then preset, then individual flags."""
    config = ConfigManager(args.config).load() if args.config else PolyspiralConfig()
    anim = config.animation

    if args.preset:
        anim = apply_preset(anim, args.preset)

    overrides = {
        "sides": args.sides,
        "anchor_ratio": args.anchor_ratio,
        "hue_mode": args.hue_mode,
        "shapes_per_tick": args.shapes_per_tick,
    }
    anim = replace(anim, **{k: v for k, v in overrides.items() if v is not None})

    display = config.display
    if args.fps is not None:
        display = replace(display, fps=args.fps)

    log_level = (args.log_level or config.log_level).upper()
    return replace(config, animation=anim, display=display, log_level=log_level)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


async def run_headless(config: PolyspiralConfig, frames: int, width: int, height: int) -> AnimationDriver:
    """Run the driver for `frames` repaints on an asyncio loop."""
    scheduler = AsyncioFrameScheduler(native_hz=config.display.native_hz)
    surface = get_surface(
        config.display.backend, width, height,
        background=config.display.background, line_width=config.animation.line_width,
    )
    driver = AnimationDriver(config.animation, surface, scheduler, fps=config.display.fps)

    started = time.monotonic()
    driver.on_resize(width, height)
    try:
        while scheduler.frames_run < frames and scheduler.pending:
            await asyncio.sleep(1.0 / config.display.native_hz)
    finally:
        driver.stop()
        scheduler.close()

    stats = driver.stats
    logger.info(
        "Headless run: %d frames in %.2fs, %d ticks (%d deferred), %d generations, %d polygons, %d stalls",
        scheduler.frames_run, time.monotonic() - started, stats.ticks, stats.deferred_frames,
        stats.generations, stats.polygons_drawn, stats.stalls,
    )
    return driver


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = resolve_config(args)
    setup_logging(config.log_level)

    valid, error = config.validate()
    if not valid:
        logger.error("Invalid configuration: %s", error)
        return 2

    if args.write_config:
        ok = ConfigManager(args.write_config).save(config)
        return 0 if ok else 1

    anim = config.animation
    width = args.width or int(anim.base_width // 2)
    height = args.height or int(anim.base_height // 2)

    if args.headless:
        asyncio.run(run_headless(config, args.frames, width, height))
        return 0

    from .host import PygameHost
    PygameHost(config, width, height).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
