"""
Вычисление ограничивающего бокса набора точек
"""
from typing import Sequence
import logging
import numpy as np

from .structures import AxisAlignedBox, WeightedPoint, points_to_array

logger = logging.getLogger(__name__)

EMPTY_BOX = AxisAlignedBox(
    min_corner=(float('inf'),) * 3,
    max_corner=(float('-inf'),) * 3,
)


def compute_bounds(points: Sequence[WeightedPoint]) -> AxisAlignedBox:
    """
    AABB по координатам точек (вес не учитывается)

    Args:
        points: Последовательность точек

    Returns:
        Бокс с минимальным и максимальным углом.
        Для пустого входа возвращается EMPTY_BOX (min=+inf, max=-inf),
        непригодный для разбиения: вызывающий код должен проверять пустоту заранее.
    """
    if len(points) == 0:
        logger.debug("Bounds requested for an empty point set")
        return EMPTY_BOX

    xyz = points_to_array(points)[:, :3]
    min_corner = xyz.min(axis=0)
    max_corner = xyz.max(axis=0)

    return AxisAlignedBox(
        min_corner=tuple(float(v) for v in min_corner),
        max_corner=tuple(float(v) for v in max_corner),
    )


def ground_extent(box: AxisAlignedBox, axes) -> np.ndarray:
    """Размеры бокса по двум осям плоскости земли"""
    dims = np.asarray(box.dimensions(), dtype=np.float64)
    return dims[list(axes)]
