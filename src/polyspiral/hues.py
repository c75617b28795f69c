"""
Hue Schedule - which hue each drawn edge gets.

Every edge drawn by the driver bumps a running line counter. The schedule
turns (base hue, line counter) into a hue:

- fixed_per_edge: one hue step per polygon side, so each spiral arm keeps
  a stepped color of its own.
- generation_synced: a smooth gradient sized so the palette completes a
  whole number of rotations across one generation. Needs the iteration
  count of the current geometry.
- rotating_base: every edge uses the base hue; color only moves when the
  drawing policy shifts the base between generations.

Each subdivision borrows its vertices from the next side of the previous
polygon, so the first edge of polygon k sits one side further round than
the first edge of polygon k - 1. negate_side_shift() cancels that drift.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .colors import advance_hue


class HueMode(str, Enum):
    """Per-edge hue policies."""
    FIXED_PER_EDGE = "fixed_per_edge"
    GENERATION_SYNCED = "generation_synced"
    ROTATING_BASE = "rotating_base"


def negate_side_shift(line_number: int, sides: int) -> int:
    """Shift a line number by one side per completed polygon (mod sides)."""
    return line_number + (line_number // sides) % sides


@dataclass
class HueSchedule:
    """Maps the running line counter to hues for one side count."""

    mode: HueMode
    sides: int
    shift_scale: float = 1.0
    negate: Optional[bool] = None  # None = the mode's default

    def __post_init__(self):
        self.mode = HueMode(self.mode)
        if self.negate is None:
            self.negate = self.mode == HueMode.FIXED_PER_EDGE

    @property
    def needs_iterations(self) -> bool:
        """Whether hue_for_line() depends on the cached iteration count."""
        return self.mode == HueMode.GENERATION_SYNCED

    def offset_for_line(self, line_number: int, iterations: int = 0) -> float:
        """Unreduced hue offset from the base for a given line."""
        if self.mode == HueMode.ROTATING_BASE:
            return 0.0

        adjusted = negate_side_shift(line_number, self.sides) if self.negate else line_number

        if self.mode == HueMode.FIXED_PER_EDGE:
            return adjusted / self.sides

        # generation_synced: sides * iterations lines make up one generation
        per_generation = self.sides * max(1, iterations)
        return (adjusted % self.sides) / self.sides + adjusted / per_generation

    def hue_for_line(self, base_hue: float, line_number: int, iterations: int = 0) -> float:
        """Hue in [0, 1) for the given line."""
        return advance_hue(base_hue, self.shift_scale * self.offset_for_line(line_number, iterations))
