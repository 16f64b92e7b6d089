"""
Буфер точек тепловой карты с ограниченной ёмкостью
"""
from typing import Optional, Sequence
import logging
import numpy as np

from ..config import MAX_POINTS_COUNT, DEFAULT_RADIUS, DEFAULT_INTENSITY
from ..core.structures import WeightedPoint, points_to_array
from ..errors import CapacityError

logger = logging.getLogger(__name__)


class HeatmapSink:
    """
    Состояние, которое получил бы шейдер тепловой карты

    Хранит не более capacity точек в массиве float32 (capacity x 4),
    число активных точек, обратный радиус и интенсивность.
    """

    def __init__(self,
                 capacity: int = MAX_POINTS_COUNT,
                 radius: float = DEFAULT_RADIUS,
                 intensity: float = DEFAULT_INTENSITY):
        if capacity < 0 or capacity > MAX_POINTS_COUNT:
            raise ValueError(f"capacity must be in [0, {MAX_POINTS_COUNT}], got {capacity}")
        self.capacity = capacity
        self._points = np.zeros((capacity, 4), dtype=np.float32)
        self._count = 0
        self.radius = radius
        self.intensity = intensity

    @property
    def radius(self) -> float:
        return self._radius

    @radius.setter
    def radius(self, value: float) -> None:
        if value <= 0:
            raise ValueError(f"radius must be > 0, got {value}")
        self._radius = float(value)
        self._inv_radius = 1.0 / self._radius

    @property
    def inv_radius(self) -> float:
        return self._inv_radius

    @property
    def count(self) -> int:
        """Количество активных точек"""
        return self._count

    def clear(self) -> None:
        self._count = 0

    def submit(self, points: Optional[Sequence[WeightedPoint]]) -> None:
        """
        Замена набора точек

        None или пустой список очищает карту.

        Raises:
            CapacityError: Точек больше capacity; текущее состояние не меняется
        """
        if points is None or len(points) == 0:
            self.clear()
            logger.debug("Heatmap cleared")
            return

        if len(points) > self.capacity:
            message = f"#points ({len(points)}) exceeds maximum ({self.capacity})"
            logger.error(message)
            raise CapacityError(message)

        n = len(points)
        self._points[:n] = points_to_array(points).astype(np.float32)
        self._count = n
        logger.debug(f"Submitted {n} points to heatmap")

    def active_points(self) -> np.ndarray:
        """Копия активной части буфера (count x 4)"""
        return self._points[:self._count].copy()

    def uniforms(self) -> dict:
        """Значения параметров шейдера"""
        return {
            '_InvRadius': self._inv_radius,
            '_Intensity': float(self.intensity),
            '_Count': self._count,
            '_Points': self._points,
        }
