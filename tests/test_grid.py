"""
Тесты для grid_partition
"""
import math

import pytest

from heatmap_reduce.core.grid import grid_partition
from heatmap_reduce.core.structures import WeightedPoint, merge
from heatmap_reduce.errors import PreconditionError

from conftest import weight_sum


def _xy(x, y, w=1.0):
    return WeightedPoint(x, y, 0.0, w)


@pytest.fixture
def corner_points():
    return [
        _xy(1.0, 1.0),  # ячейка (1, 1)
        _xy(0.0, 0.0),  # (0, 0)
        _xy(0.0, 1.0),  # (0, 1)
        _xy(1.0, 0.0),  # (1, 0)
        _xy(0.2, 0.2),  # (0, 0)
        _xy(0.8, 0.8),  # (1, 1)
    ]


class TestFastPaths:

    def test_max_count_at_least_size_returns_input(self, corner_points):
        assert grid_partition(corner_points, 6) == corner_points
        assert grid_partition(corner_points, 100) == corner_points

    def test_identity_returns_new_list(self, corner_points):
        result = grid_partition(corner_points, 6)
        assert result is not corner_points

    def test_zero_max_count(self, corner_points):
        assert grid_partition(corner_points, 0) == []

    def test_empty_input(self):
        assert grid_partition([], 0) == []
        assert grid_partition([], 10) == []

    def test_negative_max_count(self, corner_points):
        with pytest.raises(PreconditionError):
            grid_partition(corner_points, -1)

    def test_empty_input_skips_bounds(self, monkeypatch):
        def fail(points):
            raise AssertionError("compute_bounds called on empty input")

        monkeypatch.setattr("heatmap_reduce.core.grid.compute_bounds", fail)
        assert grid_partition([], 10) == []
        assert grid_partition([], 0) == []


class TestCells:

    def test_cells_in_row_major_order(self, corner_points):
        result = grid_partition(corner_points, 4)
        assert len(result) == 4
        assert result[0].x == pytest.approx(0.1)
        assert result[0].y == pytest.approx(0.1)
        assert result[0].weight == 2.0
        assert result[1] == _xy(0.0, 1.0)
        assert result[2] == _xy(1.0, 0.0)
        assert result[3].x == pytest.approx(0.9)
        assert result[3].y == pytest.approx(0.9)
        assert result[3].weight == 2.0

    def test_grid_side_is_floor_sqrt(self, corner_points):
        # max_count=5 -> сетка 2x2
        assert len(grid_partition(corner_points, 5)) == 4
        # max_count=3 -> сетка 1x1, всё в одну точку
        result = grid_partition(corner_points, 3)
        assert len(result) == 1
        assert result[0].weight == 6.0

    def test_merge_follows_input_order_in_cell(self):
        points = [_xy(0.0, 0.0, 1.0), _xy(0.1, 0.0, 3.0), _xy(0.05, 0.0, 2.0), _xy(10.0, 10.0)]
        result = grid_partition(points, 4)
        assert result == [merge(merge(points[0], points[1]), points[2]), points[3]]

    def test_empty_cells_are_skipped(self):
        points = [_xy(0.0, 0.0), _xy(0.01, 0.0), _xy(3.0, 3.0), _xy(2.99, 3.0)] * 3
        result = grid_partition(points, 9)
        assert len(result) == 2
        assert [p.weight for p in result] == [6.0, 6.0]

    def test_plane_selection(self):
        # Точки разнесены только по Z
        points = [WeightedPoint(0.0, 0.0, float(z)) for z in range(8)]
        assert len(grid_partition(points, 4, plane='xy')) == 1
        assert len(grid_partition(points, 4, plane='xz')) == 2
        assert len(grid_partition(points, 4, plane='yz')) == 2

    def test_points_on_upper_bound_are_kept(self):
        points = [_xy(0.0, 0.0), _xy(1.0, 1.0), _xy(1.0, 0.0), _xy(0.0, 1.0), _xy(0.5, 0.5)]
        result = grid_partition(points, 4)
        assert weight_sum(result) == 5.0

    def test_point_on_inner_cell_edge_opens_next_cell(self):
        # Протяжённость 2.1, сетка 9x9: граница третьей ячейки ровно 0.7
        points = [_xy(0.0, 0.0), _xy(0.7, 0.0), _xy(0.5, 0.0)] + [_xy(2.1, 2.1)] * 97
        result = grid_partition(points, 81)
        assert len(result) == 4
        assert result[0] == _xy(0.0, 0.0)
        assert result[1] == _xy(0.5, 0.0)
        assert result[2] == _xy(0.7, 0.0)
        assert result[3].x == pytest.approx(2.1)
        assert result[3].y == pytest.approx(2.1)
        assert result[3].weight == 97.0

    def test_unknown_plane(self, corner_points):
        with pytest.raises(PreconditionError):
            grid_partition(corner_points, 4, plane='ab')


class TestProperties:

    @pytest.mark.parametrize('max_count', [1, 2, 4, 10, 50, 99, 250])
    def test_output_bounded_by_grid(self, random_points, max_count):
        result = grid_partition(random_points, max_count)
        side = math.isqrt(max_count)
        assert len(result) <= side * side <= max_count

    @pytest.mark.parametrize('max_count', [1, 16, 100, 400])
    def test_weight_conservation(self, random_points, max_count):
        result = grid_partition(random_points, max_count)
        assert weight_sum(result) == pytest.approx(weight_sum(random_points), rel=1e-12)
        assert all(p.weight > 0 for p in result)

    def test_trajectory(self, trajectory_points):
        result = grid_partition(trajectory_points, 1023)
        assert len(result) <= 31 * 31
        assert weight_sum(result) == pytest.approx(len(trajectory_points))
