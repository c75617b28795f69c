"""
Pillow-backed drawing surface.

Draws into an in-memory RGB image that a host presents on screen (see
polyspiral.host). Paths are kept in logical coordinates and mapped through
the transform when stroked or filled, so a resize only needs a new
transform, not new geometry.
"""

from typing import List, Optional, Tuple

from PIL import Image, ImageDraw

from .base import BLACK, DrawingSurface, PointLike, RGB


class PilSurface(DrawingSurface):
    """Immediate-mode canvas over a PIL Image."""

    def __init__(self, width: int, height: int, background: RGB = BLACK, line_width: int = 1):
        super().__init__(width, height)
        self.background = tuple(background)
        self.line_width = int(line_width)
        self._subpaths: List[List[PointLike]] = []
        self._image: Optional[Image.Image] = None
        self._draw: Optional[ImageDraw.ImageDraw] = None
        self._on_resize()

    def _on_resize(self) -> None:
        self._image = Image.new("RGB", (max(1, self._width), max(1, self._height)), self.background)
        self._draw = ImageDraw.Draw(self._image)
        self._subpaths = []

    @property
    def image(self) -> Image.Image:
        """The backing image (live, not a copy)."""
        return self._image

    def clear(self, x: float, y: float, width: float, height: float) -> None:
        x0, y0 = self.to_pixels((x, y))
        x1, y1 = self.to_pixels((x + width, y + height))
        self._draw.rectangle([x0, y0, x1, y1], fill=self.background)

    def begin_path(self) -> None:
        self._subpaths = []

    def move_to(self, point: PointLike) -> None:
        self._subpaths.append([point])

    def line_to(self, point: PointLike) -> None:
        if not self._subpaths:
            # Like a canvas: line_to with no current point acts as move_to
            self._subpaths.append([point])
            return
        self._subpaths[-1].append(point)

    def _pixel_paths(self) -> List[List[Tuple[float, float]]]:
        return [[self.to_pixels(p) for p in path] for path in self._subpaths]

    def stroke(self) -> None:
        for path in self._pixel_paths():
            if len(path) >= 2:
                self._draw.line(path, fill=self._stroke_color, width=self.line_width)

    def fill(self) -> None:
        for path in self._pixel_paths():
            if len(path) >= 3:
                self._draw.polygon(path, fill=self._fill_color)
