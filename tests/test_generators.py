import math

import pytest

from heatmap_reduce.config import MAX_POINTS_COUNT, TRAJECTORY_LENGTH_STEP
from heatmap_reduce.core.bounds import compute_bounds
from heatmap_reduce.core.structures import AxisAlignedBox
from heatmap_reduce.utils.generators import generate_trajectory, generate_random_points


class TestTrajectory:

    def test_spiral_starts_at_origin(self):
        points = generate_trajectory(100)
        assert len(points) == 100
        assert points[0].position == (0.0, 0.0, 0.0)
        assert all(p.weight == 1.0 for p in points)

    def test_second_point(self):
        p = generate_trajectory(2)[1]
        angle = math.radians(0.5)
        assert p.x == pytest.approx(math.cos(angle) * TRAJECTORY_LENGTH_STEP)
        assert p.y == pytest.approx(math.sin(angle) * TRAJECTORY_LENGTH_STEP)
        assert p.z == 0.0

    def test_scaled_spiral_keeps_size(self):
        small = generate_trajectory(MAX_POINTS_COUNT, scale_to_capacity=True)[-1]
        large = generate_trajectory(4 * MAX_POINTS_COUNT, scale_to_capacity=True)[-1]
        assert math.hypot(large.x, large.y) == pytest.approx(math.hypot(small.x, small.y), rel=0.01)

    def test_plane_and_origin(self):
        points = generate_trajectory(10, plane='xz', origin=(1.0, 2.0, 3.0))
        assert all(p.y == 2.0 for p in points)
        assert points[0].position == (1.0, 2.0, 3.0)

    def test_empty(self):
        assert generate_trajectory(0) == []


class TestRandomPoints:

    def test_reproducible(self):
        assert generate_random_points(50, seed=3) == generate_random_points(50, seed=3)
        assert generate_random_points(50, seed=3) != generate_random_points(50, seed=4)

    def test_within_extent(self):
        points = generate_random_points(200, extent=0.5)
        assert all(-0.5 <= p.x <= 0.5 and -0.5 <= p.y <= 0.5 and p.z == 0.0 for p in points)

    def test_within_box_ground_plane(self):
        box = AxisAlignedBox((2.0, 0.0, -1.0), (4.0, 10.0, 1.0))
        points = generate_random_points(200, box=box, plane='xz')
        assert all(2.0 <= p.x <= 4.0 and -1.0 <= p.z <= 1.0 for p in points)
        assert all(p.y == 5.0 for p in points)

    def test_empty_box(self):
        with pytest.raises(ValueError):
            generate_random_points(5, box=compute_bounds([]))
