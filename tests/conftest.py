import pytest

from heatmap_reduce.core.structures import WeightedPoint
from heatmap_reduce.utils.generators import generate_random_points, generate_trajectory


@pytest.fixture
def line_points():
    """10 точек веса 1 на оси X в позициях 0..9"""
    return [WeightedPoint(float(i), 0.0, 0.0, 1.0) for i in range(10)]


@pytest.fixture
def pair_clusters():
    """Две пары близких точек далеко друг от друга"""
    return [
        WeightedPoint(0.0, 0.0, 0.0, 1.0),
        WeightedPoint(0.0, 0.0, 0.01, 1.0),
        WeightedPoint(10.0, 10.0, 10.0, 1.0),
        WeightedPoint(10.0, 10.0, 10.01, 1.0),
    ]


@pytest.fixture
def random_points():
    return generate_random_points(500, seed=7)


@pytest.fixture
def trajectory_points():
    return generate_trajectory(3000, scale_to_capacity=True)


def weight_sum(points):
    return sum(p.weight for p in points)
