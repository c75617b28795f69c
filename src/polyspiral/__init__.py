"""
polyspiral - animated spirals of nested regular polygons

A regular polygon is shrunk again and again toward its own centroid, each
vertex sliding a fixed fraction along its edge, and every edge is stroked
in a hue that keeps turning round the color wheel.
"""

__version__ = "0.1.0"

# Core exports
from .colors import (
    advance_hue,
    color_to_rgb,
    hsl_to_rgb,
    hsv_to_rgb,
    rgb_to_hsl,
    rgb_to_hsv,
)
from .geometry import (
    Generation,
    Point,
    iter_generations,
    iterations_until_degenerate,
    regular_polygon,
    subdivide,
)
from .hues import HueMode, HueSchedule
from .config import (
    AnimationConfig,
    DisplayConfig,
    PolyspiralConfig,
    ConfigManager,
    PRESETS,
    apply_preset,
    get_config_manager,
)
from .scheduling import AsyncioFrameScheduler, FrameScheduler, FrameThrottle, QueuedFrameScheduler
from .surfaces import DrawingSurface, RecordingSurface, get_surface
from .driver import AnimationDriver, AnimationSession, DriverState, DriverStats

__all__ = [
    "advance_hue",
    "color_to_rgb",
    "hsl_to_rgb",
    "hsv_to_rgb",
    "rgb_to_hsl",
    "rgb_to_hsv",
    "Generation",
    "Point",
    "iter_generations",
    "iterations_until_degenerate",
    "regular_polygon",
    "subdivide",
    "HueMode",
    "HueSchedule",
    "AnimationConfig",
    "DisplayConfig",
    "PolyspiralConfig",
    "ConfigManager",
    "PRESETS",
    "apply_preset",
    "get_config_manager",
    "AsyncioFrameScheduler",
    "FrameScheduler",
    "FrameThrottle",
    "QueuedFrameScheduler",
    "DrawingSurface",
    "RecordingSurface",
    "get_surface",
    "AnimationDriver",
    "AnimationSession",
    "DriverState",
    "DriverStats",
]
