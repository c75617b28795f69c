"""
Rotational policy - a continuously turning pinwheel of spirals.

Each generation starts from a base polygon rotated a little further than
the last (angle_step_degrees, 1° by default), and the base hue drifts by
generation_hue_shift so successive spirals fade round the color wheel.
"""

import math
from typing import Tuple

from ..colors import advance_hue

TWO_PI = 2.0 * math.pi


class RotationalPolicy:
    """Advance orientation and base hue every generation."""

    name = "rotational"
    description = "Base polygon rotates each generation; base hue drifts with it"

    def next_base(self, angle: float, hue: float, config) -> Tuple[float, float]:
        next_angle = (angle + math.radians(config.angle_step_degrees)) % TWO_PI
        return next_angle, advance_hue(hue, config.generation_hue_shift)
