import numpy as np
import pytest

from heatmap_reduce.config import MAX_POINTS_COUNT
from heatmap_reduce.core.structures import WeightedPoint
from heatmap_reduce.errors import CapacityError
from heatmap_reduce.render.sink import HeatmapSink


def _points(n):
    return [WeightedPoint(float(i), 0.0, 0.0, 1.0) for i in range(n)]


class TestHeatmapSink:

    def test_defaults(self):
        sink = HeatmapSink()
        assert sink.capacity == MAX_POINTS_COUNT
        assert sink.count == 0
        uniforms = sink.uniforms()
        assert uniforms['_InvRadius'] == pytest.approx(10.0)
        assert uniforms['_Intensity'] == pytest.approx(0.1)
        assert uniforms['_Points'].shape == (MAX_POINTS_COUNT, 4)

    def test_submit_and_read_back(self):
        sink = HeatmapSink(capacity=4)
        sink.submit(_points(3))
        assert sink.count == 3
        active = sink.active_points()
        assert active.dtype == np.float32
        assert active[:, 0].tolist() == [0.0, 1.0, 2.0]

    @pytest.mark.parametrize('empty', [None, []])
    def test_empty_submit_clears(self, empty):
        sink = HeatmapSink(capacity=4)
        sink.submit(_points(2))
        sink.submit(empty)
        assert sink.count == 0

    def test_over_capacity_rejected_and_state_kept(self, caplog):
        sink = HeatmapSink(capacity=4)
        sink.submit(_points(2))
        with pytest.raises(CapacityError):
            sink.submit(_points(5))
        assert sink.count == 2
        assert sink.active_points()[:, 0].tolist() == [0.0, 1.0]
        assert 'exceeds maximum' in caplog.text

    def test_capacity_error_is_value_error(self):
        with pytest.raises(ValueError):
            HeatmapSink(capacity=1).submit(_points(2))

    def test_radius_updates_inverse(self):
        sink = HeatmapSink()
        sink.radius = 0.25
        assert sink.inv_radius == 4.0
        with pytest.raises(ValueError):
            sink.radius = 0.0

    def test_capacity_limit(self):
        with pytest.raises(ValueError):
            HeatmapSink(capacity=MAX_POINTS_COUNT + 1)
