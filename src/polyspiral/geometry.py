"""
Polygon Subdivision Engine - regular polygons and their nested spirals.

A polygon is an ordered, cyclic tuple of points. One subdivision step moves
each vertex a fixed fraction (the anchor ratio) of the way toward its
successor. Because new vertex i lies on old edge (i, i+1), repeated steps
rotate as they shrink, tracing a spiral instead of a concentric shrink.

Depth is bounded by geometry: stepping stops once the last-processed edge
is no longer than epsilon (1 logical pixel by default) on either
axis. Ratios very close to 0 or 1 shrink so slowly that a hard iteration
ceiling is applied; hitting it is logged as a stall, never raised.
"""

import logging
import math
from typing import Iterator, NamedTuple, Tuple

logger = logging.getLogger(__name__)

DEFAULT_EPSILON = 1.0
DEFAULT_MAX_ITERATIONS = 100_000


class Point(NamedTuple):
    """(x, y) in logical surface space."""
    x: float
    y: float


Polygon = Tuple[Point, ...]


class Generation(NamedTuple):
    """One subdivision pass: source polygon, result, and whether to keep going."""
    source: Polygon
    polygon: Polygon
    should_continue: bool


def check_anchor_ratio(anchor_ratio: float) -> None:
    """Raise ValueError unless 0 < anchor_ratio < 1."""
    if not (0.0 < anchor_ratio < 1.0):
        raise ValueError(f"anchor_ratio must be in (0, 1), got {anchor_ratio}")


def regular_polygon(
    radius: float,
    sides: int,
    center_x: float,
    center_y: float,
    start_angle: float = 0.0,
) -> Polygon:
    """Place `sides` vertices evenly on a circle, the first at start_angle (radians)."""
    if sides < 3:
        raise ValueError(f"a polygon needs at least 3 sides, got {sides}")

    arc = 2.0 * math.pi / sides
    return tuple(
        Point(
            center_x + radius * math.cos(start_angle + n * arc),
            center_y + radius * math.sin(start_angle + n * arc),
        )
        for n in range(sides)
    )


def edges(polygon: Polygon) -> Iterator[Tuple[Point, Point]]:
    """Yield (a, b) for every edge, closing back to the first vertex."""
    count = len(polygon)
    for i in range(count):
        yield polygon[i], polygon[(i + 1) % count]


def max_edge_length(polygon: Polygon) -> float:
    return max(math.hypot(b.x - a.x, b.y - a.y) for a, b in edges(polygon))


def subdivide(
    polygon: Polygon,
    anchor_ratio: float,
    epsilon: float = DEFAULT_EPSILON,
) -> Tuple[Polygon, bool]:
    """One subdivision step.

    Returns (new_polygon, should_continue). should_continue is True iff the
    last-processed edge vector of `polygon` (last vertex back to the first)
    exceeds epsilon in |x| or |y|.
    """
    check_anchor_ratio(anchor_ratio)

    new_points = []
    dx = dy = 0.0
    for a, b in edges(polygon):
        dx = b.x - a.x
        dy = b.y - a.y
        new_points.append(Point(a.x + dx * anchor_ratio, a.y + dy * anchor_ratio))

    return tuple(new_points), (abs(dx) > epsilon or abs(dy) > epsilon)


def iter_generations(
    polygon: Polygon,
    anchor_ratio: float,
    epsilon: float = DEFAULT_EPSILON,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> Iterator[Generation]:
    """Yield successive subdivisions until the continue flag drops.

    The generation that reports should_continue=False is yielded too; callers
    draw that last polygon. Stops after max_iterations steps with
    a warning if the flag never drops.
    """
    check_anchor_ratio(anchor_ratio)

    current = polygon
    for _ in range(max_iterations):
        nested, should_continue = subdivide(current, anchor_ratio, epsilon)
        yield Generation(current, nested, should_continue)
        if not should_continue:
            return
        current = nested

    logger.warning(
        "Subdivision stalled: ratio=%s still above epsilon=%s after %d steps (max edge %.3g)",
        anchor_ratio, epsilon, max_iterations, max_edge_length(current),
    )


def iterations_until_degenerate(
    polygon: Polygon,
    anchor_ratio: float,
    epsilon: float = DEFAULT_EPSILON,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> int:
    """Number of subdivision steps before the polygon collapses below epsilon.

    Counts every step taken, including the final one that reports
    should_continue=False. Returns max_iterations if the ceiling is hit.
    """
    count = 0
    for _ in iter_generations(polygon, anchor_ratio, epsilon, max_iterations):
        count += 1
    return count
