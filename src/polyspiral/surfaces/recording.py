"""
Recording surface - remembers every call instead of drawing.

Used by tests and headless diagnostics. Each call is stored as
(name, args) in `calls`; style changes are recorded too so the color of
every stroke can be reconstructed.
"""

from typing import Any, List, Tuple

from .base import DrawingSurface, PointLike, RGB

DRAW_CALLS = frozenset({"begin_path", "move_to", "line_to", "stroke", "fill"})


class RecordingSurface(DrawingSurface):
    """Surface that logs calls for later inspection."""

    def __init__(self, width: int = 1, height: int = 1):
        super().__init__(width, height)
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))

    # Size and style are recorded so tests can see restarts

    def _on_resize(self) -> None:
        self._record("resize", self._width, self._height)

    @DrawingSurface.stroke_color.setter
    def stroke_color(self, color: RGB) -> None:
        DrawingSurface.stroke_color.fset(self, color)
        self._record("stroke_color", self._stroke_color)

    @DrawingSurface.fill_color.setter
    def fill_color(self, color: RGB) -> None:
        DrawingSurface.fill_color.fset(self, color)
        self._record("fill_color", self._fill_color)

    def set_transform(self, scale_x: float, scale_y: float) -> None:
        super().set_transform(scale_x, scale_y)
        self._record("set_transform", self._scale_x, self._scale_y)

    def clear(self, x: float, y: float, width: float, height: float) -> None:
        self._record("clear", x, y, width, height)

    def begin_path(self) -> None:
        self._record("begin_path")

    def move_to(self, point: PointLike) -> None:
        self._record("move_to", tuple(point))

    def line_to(self, point: PointLike) -> None:
        self._record("line_to", tuple(point))

    def stroke(self) -> None:
        self._record("stroke")

    def fill(self) -> None:
        self._record("fill")

    # --- Inspection helpers ---

    def count(self, name: str) -> int:
        """How many times a call was recorded."""
        return sum(1 for call, _ in self.calls if call == name)

    def named(self, name: str) -> List[Tuple[Any, ...]]:
        """Arguments of every recorded call with this name."""
        return [args for call, args in self.calls if call == name]

    def draw_calls(self) -> int:
        """Number of path/paint calls (excludes clears, style and transform)."""
        return sum(1 for call, _ in self.calls if call in DRAW_CALLS)

    def reset(self) -> None:
        """Forget recorded calls."""
        self.calls.clear()
