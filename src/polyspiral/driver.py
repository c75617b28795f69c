"""
Animation Driver - runs the spiral forever on a resizable surface.

One generation is a base regular polygon plus its whole spiral of nested
subdivisions, down to the degeneracy threshold. The driver draws
generations back to back; between generations the drawing policy turns
the base polygon and/or shifts the base hue.

Per session the driver moves through:

    IDLE -> INITIAL_DRAW -> SUBDIVIDING* -> (RESTARTING | IDLE)

The session left behind by a restart is RETIRED.

- INITIAL_DRAW: draw the base polygon, make sure the iteration cache is
  filled if the hue schedule needs it.
- SUBDIVIDING: each tick draws `shapes_per_tick` nested polygons (or the
  whole generation when it is None). When the spiral is exhausted the next
  tick starts a new INITIAL_DRAW.
- RESTARTING: a resize rescales and clears the surface, refreshes the
  iteration cache and mints a new session id.

Cancellation is cooperative. Frame callbacks already handed to the
scheduler cannot be revoked, so every callback carries the session id it
was scheduled for and compares it with the live one before drawing or
rescheduling. A stale callback just returns.
"""

import logging
import math
import random
import time
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Callable, Optional, Tuple

from .colors import RGB, color_to_rgb
from .config import AnimationConfig
from .geometry import Polygon, edges, iterations_until_degenerate, regular_polygon, subdivide
from .hues import HueSchedule
from .policies import get_policy
from .scheduling import FrameScheduler, FrameThrottle
from .surfaces.base import DrawingSurface
from .viewport import Viewport, fit_scale

logger = logging.getLogger(__name__)


class DriverState(str, Enum):
    """Where the driver is in its session state machine.

    RETIRED names a superseded session (see AnimationSession.retired). The
    driver itself never reports it: during a resize it is RESTARTING, after
    stop() or a single non-continuous generation it is IDLE.
    """
    IDLE = "idle"
    INITIAL_DRAW = "initial_draw"
    SUBDIVIDING = "subdividing"
    RESTARTING = "restarting"
    RETIRED = "retired"


@dataclass
class AnimationSession:
    """Mutable state of one continuous run. Replaced wholesale on resize."""
    session_id: int
    polygon: Optional[Polygon] = None  # None = next tick is an initial draw
    depth: int = 0                     # Subdivisions drawn in the current generation
    generation_index: int = 0
    retired: bool = False


@dataclass
class DriverStats:
    """Counters for diagnostics and tests."""
    ticks: int = 0
    stale_ticks: int = 0
    deferred_frames: int = 0
    generations: int = 0
    polygons_drawn: int = 0
    edges_drawn: int = 0
    stalls: int = 0
    restarts: int = 0


class AnimationDriver:
    """Draws generation after generation of nested polygons on a surface."""

    def __init__(
        self,
        config: AnimationConfig,
        surface: DrawingSurface,
        scheduler: FrameScheduler,
        fps: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
        rng: Optional[random.Random] = None,
    ):
        valid, error = config.validate()
        if not valid:
            raise ValueError(f"Invalid animation config: {error}")

        self.config = config
        self.surface = surface
        self.scheduler = scheduler
        self.throttle = FrameThrottle(fps, clock)
        self.policy = get_policy(config.policy)
        self.hues = HueSchedule(
            config.hue_mode,
            config.sides,
            shift_scale=config.hue_shift_scale,
            negate=config.negate_side_shift,
        )
        self.stats = DriverStats()

        if config.initial_hue is None:
            self.base_hue = (rng or random).random()
        else:
            self.base_hue = config.initial_hue % 1.0
        self.base_angle = math.radians(config.initial_angle_degrees)
        self.line_count = 0

        self.session_id = 0
        self._session: Optional[AnimationSession] = None
        self._state = DriverState.IDLE
        self._iterations_key: Optional[Tuple] = None
        self._iterations: Optional[int] = None

    # --- Introspection ---

    @property
    def state(self) -> DriverState:
        return self._state

    @property
    def session(self) -> Optional[AnimationSession]:
        return self._session

    @property
    def radius(self) -> float:
        return min(self.config.base_width, self.config.base_height) / 2.0

    @property
    def center(self) -> Tuple[float, float]:
        return self.config.base_width / 2.0, self.config.base_height / 2.0

    def base_polygon(self, angle: Optional[float] = None) -> Polygon:
        """The regular polygon a generation starts from."""
        cx, cy = self.center
        return regular_polygon(
            self.radius,
            self.config.sides,
            cx,
            cy,
            self.base_angle if angle is None else angle,
        )

    # --- Iteration cache ---

    def _geometry_key(self) -> Tuple:
        cfg = self.config
        return (self.radius, self.center, cfg.sides, cfg.anchor_ratio, cfg.continue_epsilon, cfg.max_iterations)

    def invalidate_iterations(self) -> None:
        """Forget the cached polygons-per-generation count."""
        self._iterations_key = None
        self._iterations = None

    def iterations_per_pattern(self) -> int:
        """Polygons drawn per generation (base polygon plus every subdivision).

        Computed from the unrotated base polygon and cached until the
        geometry changes.
        """
        key = self._geometry_key()
        if self._iterations is None or self._iterations_key != key:
            steps = iterations_until_degenerate(
                self.base_polygon(0.0),
                self.config.anchor_ratio,
                self.config.continue_epsilon,
                self.config.max_iterations,
            )
            self._iterations = steps + 1
            self._iterations_key = key
            logger.debug("Iterations per pattern: %d", self._iterations)
        return self._iterations

    # --- Session lifecycle ---

    def on_resize(self, available_width: float, available_height: float) -> Viewport:
        """Rescale, clear and restart for a new available size."""
        self._state = DriverState.RESTARTING
        cfg = self.config

        viewport = fit_scale(available_width, available_height, cfg.base_width, cfg.base_height)
        self.surface.width = viewport.width
        self.surface.height = viewport.height
        self.surface.set_transform(viewport.scale, viewport.scale)
        self.surface.clear(0, 0, cfg.base_width, cfg.base_height)

        self.invalidate_iterations()
        if self.hues.needs_iterations:
            self.iterations_per_pattern()

        self.stats.restarts += 1
        logger.info(
            "Restarting at %dx%d (scale %.3f)", viewport.width, viewport.height, viewport.scale,
        )
        self._start_session()
        return viewport

    def _start_session(self) -> None:
        if self._session is not None:
            self._session.retired = True

        if not self.config.persist_orientation:
            self.base_angle = math.radians(self.config.initial_angle_degrees)

        self.session_id += 1
        self._session = AnimationSession(session_id=self.session_id)
        self._state = DriverState.INITIAL_DRAW
        self.throttle.reset()
        self._request_frame(self.session_id)

    def stop(self) -> None:
        """Retire the current session. Queued ticks turn stale and drop out."""
        if self._session is not None:
            self._session.retired = True
            self._session = None
        self.session_id += 1
        self._state = DriverState.IDLE

    # --- Frame loop ---

    def _request_frame(self, session_id: int) -> None:
        self.scheduler.request_frame(partial(self._on_frame, session_id))

    def _on_frame(self, session_id: int) -> None:
        if session_id != self.session_id:
            self.stats.stale_ticks += 1
            logger.debug("Dropping tick for stale session %d (current %d)", session_id, self.session_id)
            return

        if not self.throttle.ready():
            self.stats.deferred_frames += 1
            self._request_frame(session_id)
            return

        self._tick(self._session)

    def _tick(self, session: AnimationSession) -> None:
        self.stats.ticks += 1

        if session.polygon is None:
            self._initial_draw(session)
            if self.config.shapes_per_tick is None:
                self._subdivide_frame(session)
        else:
            self._subdivide_frame(session)

        if session.polygon is None and not self.config.run_continuously:
            logger.info("Generation complete; not running continuously, going idle")
            session.retired = True
            self._state = DriverState.IDLE
            return

        self._request_frame(session.session_id)

    def _initial_draw(self, session: AnimationSession) -> None:
        self._state = DriverState.INITIAL_DRAW
        cfg = self.config

        # A restart has already cleared the surface for the first generation
        if session.generation_index > 0:
            self.surface.clear(0, 0, cfg.base_width, cfg.base_height)

        if self.hues.needs_iterations:
            self.iterations_per_pattern()

        polygon = self.base_polygon()
        self._draw_polygon(polygon)
        session.polygon = polygon
        session.depth = 0

    def _subdivide_frame(self, session: AnimationSession) -> None:
        self._state = DriverState.SUBDIVIDING
        cfg = self.config
        budget = cfg.shapes_per_tick
        drawn = 0

        while budget is None or drawn < budget:
            if session.depth >= cfg.max_iterations:
                self.stats.stalls += 1
                logger.warning(
                    "Generation stalled after %d subdivisions (ratio=%s, epsilon=%s); starting over",
                    session.depth, cfg.anchor_ratio, cfg.continue_epsilon,
                )
                self._finish_generation(session)
                return

            nested, should_continue = subdivide(session.polygon, cfg.anchor_ratio, cfg.continue_epsilon)
            self._draw_polygon(nested)
            session.polygon = nested
            session.depth += 1
            drawn += 1

            if not should_continue:
                self._finish_generation(session)
                return

    def _finish_generation(self, session: AnimationSession) -> None:
        self.stats.generations += 1
        self.base_angle, self.base_hue = self.policy.next_base(self.base_angle, self.base_hue, self.config)
        session.generation_index += 1
        session.polygon = None
        session.depth = 0
        self._state = DriverState.INITIAL_DRAW

    # --- Drawing ---

    def color_for_line(self, line_number: int) -> RGB:
        """RGB for the given line counter under the current base hue."""
        cfg = self.config
        hue = self.hues.hue_for_line(self.base_hue, line_number, self._iterations or 0)
        return color_to_rgb(hue, cfg.saturation, cfg.level, cfg.color_space)

    def _draw_polygon(self, polygon: Polygon) -> None:
        if self.config.draw_style == "filled":
            self._draw_filled(polygon)
        else:
            self._draw_edges(polygon)
        self.stats.polygons_drawn += 1

    def _draw_edges(self, polygon: Polygon) -> None:
        surface = self.surface
        for a, b in edges(polygon):
            surface.begin_path()
            surface.move_to(a)
            surface.stroke_color = self.color_for_line(self.line_count)
            surface.line_to(b)
            surface.stroke()
            self.line_count += 1
            self.stats.edges_drawn += 1

    def _draw_filled(self, polygon: Polygon) -> None:
        surface = self.surface
        color = self.color_for_line(self.line_count)
        surface.fill_color = color
        surface.stroke_color = color
        surface.begin_path()
        surface.move_to(polygon[0])
        for point in polygon[1:]:
            surface.line_to(point)
        surface.line_to(polygon[0])
        surface.fill()
        surface.stroke()
        self.line_count += len(polygon)
        self.stats.edges_drawn += len(polygon)
