"""
Drawing Policy Protocol - how the base polygon changes between generations.

A generation is one full pass: the base polygon plus its whole spiral of
nested subdivisions. When a generation completes, the driver asks the
active policy for the next base orientation and base hue.

Policies READ the animation config. They do NOT touch the surface or the
session; the driver owns both.
"""

from __future__ import annotations

from typing import Protocol, Tuple


class DrawingPolicy(Protocol):
    """Protocol for drawing policies. Duck-typed, no inheritance required."""

    name: str
    description: str

    def next_base(self, angle: float, hue: float, config: object) -> Tuple[float, float]:
        """Return (angle, hue) for the next generation.

        angle is in radians and stays in [0, 2π); hue stays in [0, 1).
        config is an AnimationConfig (typed loosely to avoid a circular import).
        """
        ...
