"""
Тесты для canopy_cluster
"""
import pytest

from heatmap_reduce.core.canopy import canopy_cluster, Canopy
from heatmap_reduce.core.structures import WeightedPoint, merge
from heatmap_reduce.errors import PreconditionError

from conftest import weight_sum


def _x(x, w=1.0):
    return WeightedPoint(x, 0.0, 0.0, w)


class TestCanopyCluster:

    def test_two_pairs(self, pair_clusters):
        result = canopy_cluster(pair_clusters, 0.1)
        assert len(result) == 2
        assert [p.weight for p in result] == [2.0, 2.0]
        assert result[0].position == pytest.approx((0.0, 0.0, 0.005))
        assert result[1].position == pytest.approx((10.0, 10.0, 10.005))

    def test_first_match_wins_not_nearest(self):
        # Точка 0.08 ближе ко второму представителю, но сливается с первым
        points = [_x(0.0), _x(0.15), _x(0.08)]
        result = canopy_cluster(points, 0.1)
        assert result == [merge(points[0], points[2]), points[1]]

    def test_distance_comparison_is_strict(self):
        points = [_x(0.0), _x(0.5)]
        assert len(canopy_cluster(points, 0.5)) == 2
        assert len(canopy_cluster(points, 0.5000001)) == 1

    def test_representative_moves_as_it_absorbs(self):
        # 0.12 далеко от 0.0, но близко к сдвинутому представителю 0.03
        points = [_x(0.0), _x(0.06), _x(0.12)]
        result = canopy_cluster(points, 0.1)
        assert len(result) == 1
        assert result[0].weight == 3.0
        assert result[0].x == pytest.approx(0.06)

    def test_singletons_are_kept_by_default(self, pair_clusters):
        points = pair_clusters + [WeightedPoint(-5.0, -5.0, -5.0, 2.5)]
        result = canopy_cluster(points, 0.1)
        assert len(result) == 3
        assert result[2] == points[4]
        assert weight_sum(result) == weight_sum(points)

    def test_drop_singletons(self, pair_clusters):
        points = [WeightedPoint(-5.0, -5.0, -5.0, 2.5)] + pair_clusters
        result = canopy_cluster(points, 0.1, drop_singletons=True)
        assert len(result) == 2
        assert all(p.weight == 2.0 for p in result)

    def test_drop_singletons_keeps_merged_points_as_representatives(self):
        # 0.08 сливается с 0.0 и сам становится представителем, к нему уходит 0.16
        points = [_x(0.0), _x(0.08), _x(0.16)]
        result = canopy_cluster(points, 0.1, drop_singletons=True)
        assert len(result) == 2
        assert result[0].x == pytest.approx(0.04)
        assert result[1].x == pytest.approx(0.12)
        assert [p.weight for p in result] == [2.0, 2.0]

        default = canopy_cluster(points, 0.1)
        assert default[0].x == pytest.approx(0.04)
        assert default[1] == points[2]
        assert weight_sum(default) == 3.0

    def test_planar_metric_ignores_third_axis(self):
        points = [WeightedPoint(0.0, 0.0, 0.0), WeightedPoint(0.0, 0.0, 5.0)]
        assert len(canopy_cluster(points, 0.1, metric='volumetric')) == 2
        assert len(canopy_cluster(points, 0.1, metric='planar', plane='xy')) == 1
        assert len(canopy_cluster(points, 0.1, metric='planar', plane='xz')) == 2

    def test_empty_input(self):
        assert canopy_cluster([], 0.1) == []

    @pytest.mark.parametrize('distance', [0.0, -1.0])
    def test_non_positive_distance(self, pair_clusters, distance):
        with pytest.raises(PreconditionError):
            canopy_cluster(pair_clusters, distance)

    def test_unknown_metric(self, pair_clusters):
        with pytest.raises(PreconditionError):
            canopy_cluster(pair_clusters, 0.1, metric='manhattan')

    def test_weight_conservation(self, random_points):
        result = canopy_cluster(random_points, 0.05)
        assert len(result) < len(random_points)
        assert weight_sum(result) == pytest.approx(weight_sum(random_points), rel=1e-12)
        assert all(p.weight > 0 for p in result)

    def test_input_not_modified(self, pair_clusters):
        snapshot = list(pair_clusters)
        canopy_cluster(pair_clusters, 0.1)
        assert pair_clusters == snapshot


def test_canopy_tracks_members():
    canopy = Canopy(_x(0.0))
    assert not canopy.touched
    canopy.absorb(_x(1.0))
    assert canopy.touched
    assert canopy.members == 2
    assert canopy.point == WeightedPoint(0.5, 0.0, 0.0, 2.0)
