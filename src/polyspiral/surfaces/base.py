"""
Drawing surface contract - the 2D immediate-mode canvas the driver draws on.

Mirrors the subset of an HTML canvas the animation needs: paths built
with move_to/line_to, stroked or filled in the current color, a clear,
and an absolute scale transform from logical to pixel space.

Setting width or height resizes the backing store and discards its
content, the way a canvas element does.
"""

from abc import ABC, abstractmethod
from typing import Tuple

RGB = Tuple[int, int, int]
PointLike = Tuple[float, float]

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


class DrawingSurface(ABC):
    """Abstract drawing surface."""

    def __init__(self, width: int, height: int):
        self._width = int(width)
        self._height = int(height)
        self._stroke_color: RGB = WHITE
        self._fill_color: RGB = WHITE
        self._scale_x = 1.0
        self._scale_y = 1.0

    # --- Size ---

    @property
    def width(self) -> int:
        return self._width

    @width.setter
    def width(self, value: int) -> None:
        self._width = int(value)
        self._on_resize()

    @property
    def height(self) -> int:
        return self._height

    @height.setter
    def height(self, value: int) -> None:
        self._height = int(value)
        self._on_resize()

    def _on_resize(self) -> None:
        """Hook for backends that reallocate their backing store."""
        pass

    # --- Style ---

    @property
    def stroke_color(self) -> RGB:
        return self._stroke_color

    @stroke_color.setter
    def stroke_color(self, color: RGB) -> None:
        self._stroke_color = tuple(int(c) for c in color)

    @property
    def fill_color(self) -> RGB:
        return self._fill_color

    @fill_color.setter
    def fill_color(self, color: RGB) -> None:
        self._fill_color = tuple(int(c) for c in color)

    # --- Transform ---

    @property
    def transform(self) -> Tuple[float, float]:
        """Current (scale_x, scale_y)."""
        return self._scale_x, self._scale_y

    def set_transform(self, scale_x: float, scale_y: float) -> None:
        """Replace (not compose) the logical-to-pixel scale."""
        self._scale_x = float(scale_x)
        self._scale_y = float(scale_y)

    def to_pixels(self, point: PointLike) -> Tuple[float, float]:
        return point[0] * self._scale_x, point[1] * self._scale_y

    # --- Drawing ---

    @abstractmethod
    def clear(self, x: float, y: float, width: float, height: float) -> None:
        """Clear a logical rectangle to the background."""
        pass

    @abstractmethod
    def begin_path(self) -> None:
        """Discard the current path and start a new one."""
        pass

    @abstractmethod
    def move_to(self, point: PointLike) -> None:
        """Start a new sub-path at point."""
        pass

    @abstractmethod
    def line_to(self, point: PointLike) -> None:
        """Extend the current sub-path to point."""
        pass

    @abstractmethod
    def stroke(self) -> None:
        """Outline the current path in stroke_color."""
        pass

    @abstractmethod
    def fill(self) -> None:
        """Fill the current path in fill_color."""
        pass
