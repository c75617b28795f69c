"""
Window host - pygame window that drives the animation.

The driver draws into a PilSurface; each repaint the host pushes that
image to the window, centered so the letterboxed area sits in the middle.
The host is also the repaint scheduling primitive: it is a
QueuedFrameScheduler whose frames run once per pygame repaint.

Only resize, quit and Escape are handled. Everything else is ignored.
"""

import logging
import time
from typing import Optional

import pygame

from .config import PolyspiralConfig
from .driver import AnimationDriver
from .scheduling import QueuedFrameScheduler
from .surfaces.pil import PilSurface

logger = logging.getLogger(__name__)


class PygameHost(QueuedFrameScheduler):
    """Resizable window that runs frame callbacks at the native repaint rate."""

    def __init__(self, config: PolyspiralConfig, width: Optional[int] = None, height: Optional[int] = None):
        super().__init__()
        self.config = config
        anim = config.animation
        self.initial_size = (
            int(width or anim.base_width // 2),
            int(height or anim.base_height // 2),
        )
        self.surface = PilSurface(
            *self.initial_size,
            background=config.display.background,
            line_width=anim.line_width,
        )
        self.driver = AnimationDriver(anim, self.surface, self, fps=config.display.fps, clock=time.monotonic)
        self._window: Optional[pygame.Surface] = None
        self._running = False

    def _available(self, width: int, height: int):
        margin = self.config.display.window_margin
        return max(1, width - margin), max(1, height - margin)

    def handle_event(self, event) -> None:
        """React to one pygame event."""
        if event.type == pygame.QUIT:
            self._running = False
        elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self._running = False
        elif event.type == pygame.VIDEORESIZE:
            self.driver.on_resize(*self._available(event.w, event.h))

    def present(self) -> None:
        """Blit the current surface image, centered, and flip."""
        image = self.surface.image
        frame = pygame.image.frombytes(image.tobytes(), image.size, image.mode)
        window = pygame.display.get_surface()
        window.fill(self.config.display.background)
        offset = (
            (window.get_width() - image.width) // 2,
            (window.get_height() - image.height) // 2,
        )
        window.blit(frame, offset)
        pygame.display.flip()

    def run(self) -> None:
        """Open the window and animate until closed."""
        pygame.init()
        try:
            self._window = pygame.display.set_mode(self.initial_size, pygame.RESIZABLE)
            pygame.display.set_caption(self.config.display.title)
            clock = pygame.time.Clock()

            # Establishes the initial sizing and the first session
            self.driver.on_resize(*self._available(*self.initial_size))

            self._running = True
            while self._running:
                for event in pygame.event.get():
                    self.handle_event(event)
                self.run_frame()
                self.present()
                clock.tick(self.config.display.native_hz)
        finally:
            self.driver.stop()
            self.clear()
            pygame.quit()
            logger.info(
                "Window closed after %d frames, %d generations",
                self.frames_run, self.driver.stats.generations,
            )
