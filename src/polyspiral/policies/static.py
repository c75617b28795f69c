"""
Static policy - fixed orientation, color-only motion.

The base polygon never turns, so every generation traces the same spiral.
Movement comes from the per-edge hue schedule and from the base hue drift.
The drift is spread over the polygon's sides like a per-edge hue step:
each generation moves the base hue by generation_hue_shift / sides, so the
static preset's -1/60 is -1/180 per generation for a triangle.
"""

from typing import Tuple

from ..colors import advance_hue


class StaticPolicy:
    """Keep the orientation; only shift the base hue."""

    name = "static"
    description = "Base polygon stays put; only the hue moves, by generation_hue_shift per side count"

    def next_base(self, angle: float, hue: float, config) -> Tuple[float, float]:
        return angle, advance_hue(hue, config.generation_hue_shift / config.sides)
