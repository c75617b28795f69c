"""Tests for geometry.py - regular polygons, subdivision and degeneration."""

import logging
import math

import pytest

from polyspiral.geometry import (
    DEFAULT_MAX_ITERATIONS,
    Point,
    edges,
    iter_generations,
    iterations_until_degenerate,
    max_edge_length,
    regular_polygon,
    subdivide,
)


def _square(side=1000.0):
    """Axis-aligned square of the given side, centered at the origin."""
    h = side / 2.0
    return (Point(-h, -h), Point(h, -h), Point(h, h), Point(-h, h))


# ---------------------------------------------------------------------------
# regular_polygon
# ---------------------------------------------------------------------------

class TestRegularPolygon:
    @pytest.mark.parametrize("sides", [3, 4, 5, 8, 17])
    def test_vertex_count(self, sides):
        assert len(regular_polygon(100.0, sides, 0.0, 0.0, 0.0)) == sides

    @pytest.mark.parametrize("sides", [3, 4, 6, 12])
    def test_all_vertices_on_circle(self, sides):
        polygon = regular_polygon(250.0, sides, 40.0, -30.0, 0.0)
        for p in polygon:
            assert math.hypot(p.x - 40.0, p.y + 30.0) == pytest.approx(250.0)

    @pytest.mark.parametrize("sides", [3, 5, 9])
    def test_equal_angular_spacing(self, sides):
        polygon = regular_polygon(10.0, sides, 0.0, 0.0, 0.0)
        angles = [math.atan2(p.y, p.x) % (2 * math.pi) for p in polygon]
        for a, b in zip(angles, angles[1:]):
            assert (b - a) % (2 * math.pi) == pytest.approx(2 * math.pi / sides)

    def test_first_vertex_at_start_angle(self):
        polygon = regular_polygon(10.0, 4, 0.0, 0.0, math.pi / 2)
        assert polygon[0].x == pytest.approx(0.0, abs=1e-9)
        assert polygon[0].y == pytest.approx(10.0)

    @pytest.mark.parametrize("sides", [0, 1, 2])
    def test_rejects_fewer_than_three_sides(self, sides):
        with pytest.raises(ValueError):
            regular_polygon(10.0, sides, 0.0, 0.0, 0.0)

    def test_points_are_immutable(self):
        polygon = regular_polygon(10.0, 3, 0.0, 0.0)
        with pytest.raises(AttributeError):
            polygon[0].x = 5.0


# ---------------------------------------------------------------------------
# subdivide
# ---------------------------------------------------------------------------

class TestSubdivide:
    def test_preserves_vertex_count(self):
        polygon = regular_polygon(100.0, 7, 0.0, 0.0)
        nested, _ = subdivide(polygon, 0.3)
        assert len(nested) == 7

    def test_vertex_lies_along_edge(self):
        square = _square(1000.0)
        nested, _ = subdivide(square, 0.25)
        # 25% of the way from (-500, -500) to (500, -500)
        assert nested[0] == pytest.approx((-250.0, -500.0))
        # Last vertex borrows from the closing edge back to vertex 0
        assert nested[3] == pytest.approx((-500.0, 250.0))

    def test_half_ratio_strictly_shrinks(self):
        polygon = _square(1000.0)
        previous = max_edge_length(polygon)
        for _ in range(15):
            polygon, _ = subdivide(polygon, 0.5)
            current = max_edge_length(polygon)
            assert current < previous
            previous = current

    def test_continue_flag_uses_last_edge(self):
        _, flag = subdivide(_square(10.0), 0.5)
        assert flag is True
        _, flag = subdivide(_square(1.0), 0.5)
        assert flag is False

    def test_epsilon_is_configurable(self):
        _, flag = subdivide(_square(10.0), 0.5, epsilon=20.0)
        assert flag is False

    def test_spiral_rotates(self):
        """Nested polygons turn relative to the source instead of shrinking in place."""
        square = _square(1000.0)
        nested, _ = subdivide(square, 0.1)
        angle_before = math.atan2(square[0].y, square[0].x)
        angle_after = math.atan2(nested[0].y, nested[0].x)
        assert angle_after != pytest.approx(angle_before)

    @pytest.mark.parametrize("ratio", [0.0, 1.0, -0.1, 1.5])
    def test_rejects_ratio_outside_open_interval(self, ratio):
        with pytest.raises(ValueError):
            subdivide(_square(), ratio)


# ---------------------------------------------------------------------------
# iterations_until_degenerate
# ---------------------------------------------------------------------------

class TestIterationsUntilDegenerate:
    def test_finite_for_half_ratio(self):
        count = iterations_until_degenerate(_square(1000.0), 0.5)
        assert 0 < count < 100

    def test_matches_iter_generations(self):
        square = _square(1000.0)
        generations = list(iter_generations(square, 0.3))
        assert len(generations) == iterations_until_degenerate(square, 0.3)
        assert generations[-1].should_continue is False
        assert all(g.should_continue for g in generations[:-1])

    def test_generations_chain(self):
        generations = list(iter_generations(_square(100.0), 0.4))
        for earlier, later in zip(generations, generations[1:]):
            assert later.source == earlier.polygon

    def test_monotonic_in_ratio(self):
        """Closer to 1 means slower convergence; down toward 0.5 means faster."""
        square = _square(1000.0)
        ratios = [0.5, 0.75, 0.9, 0.99]
        counts = [iterations_until_degenerate(square, r) for r in ratios]
        assert counts == sorted(counts)
        assert len(set(counts)) == len(counts)

    def test_near_one_terminates_under_ceiling(self):
        count = iterations_until_degenerate(_square(1000.0), 0.999)
        assert count < DEFAULT_MAX_ITERATIONS

    def test_ceiling_reports_stall(self, caplog):
        with caplog.at_level(logging.WARNING, logger="polyspiral.geometry"):
            count = iterations_until_degenerate(_square(1000.0), 1e-9, max_iterations=50)
        assert count == 50
        assert "stalled" in caplog.text

    def test_no_warning_when_converging(self, caplog):
        with caplog.at_level(logging.WARNING, logger="polyspiral.geometry"):
            iterations_until_degenerate(_square(1000.0), 0.5)
        assert caplog.text == ""


class TestEdges:
    def test_closes_polygon(self):
        square = _square(2.0)
        pairs = list(edges(square))
        assert len(pairs) == 4
        assert pairs[-1] == (square[3], square[0])
