"""
Редукция на квадратную сетку в плоскости земли
"""
from typing import List, Sequence
import logging
import math
import numpy as np

from .structures import WeightedPoint, merge_all, plane_axes, points_to_array
from .bounds import compute_bounds, ground_extent
from ..errors import PreconditionError

logger = logging.getLogger(__name__)


def grid_partition(points: Sequence[WeightedPoint],
                   max_count: int,
                   plane: str = 'xy') -> List[WeightedPoint]:
    """
    Усреднение точек по ячейкам сетки n x n, n = floor(sqrt(max_count))

    Сетка натягивается на проекцию AABB на плоскость земли. Точки одной ячейки
    сливаются в порядке входа, ячейки выдаются построчно (строки по первой оси
    плоскости, столбцы по второй). Пустые ячейки ничего не дают.

    Ячейки полуоткрыты [cellMin, cellMax), cellMin = min + i * cell_size; точки на верхней границе бокса попадают
    в последнюю ячейку по соответствующей оси. Если протяжённость по оси
    нулевая, все точки попадают в первую ячейку по этой оси.

    Args:
        points: Входные точки
        max_count: Максимум точек на выходе (>= 0)
        plane: Плоскость земли ('xy', 'xz', 'yz')

    Returns:
        Не более floor(sqrt(max_count))^2 точек
    """
    if max_count < 0:
        raise PreconditionError(f"max_count should be >= 0, got {max_count}")
    axes = plane_axes(plane)

    if max_count >= len(points):
        return list(points)

    if max_count == 0:
        return []

    box = compute_bounds(points)
    n = math.isqrt(max_count)

    coords = points_to_array(points)[:, list(axes)]
    lo = np.array([box.min_corner[axes[0]], box.min_corner[axes[1]]], dtype=np.float64)
    cell_size = ground_extent(box, axes) / n

    # Ячейка i по оси - [lo + i * cell, lo + (i + 1) * cell); при нулевой протяжённости индекс 0
    cell_idx = np.zeros(coords.shape, dtype=np.int64)
    for k in range(2):
        if cell_size[k] > 0:
            edges = lo[k] + np.arange(n + 1) * cell_size[k]
            cell_idx[:, k] = np.searchsorted(edges, coords[:, k], side='right') - 1
    cell_idx = np.clip(cell_idx, 0, n - 1)
    cell_ids = cell_idx[:, 0] * n + cell_idx[:, 1]

    # Стабильная сортировка сохраняет входной порядок внутри ячейки
    order = np.argsort(cell_ids, kind='stable')
    sorted_ids = cell_ids[order]
    boundaries = np.flatnonzero(np.diff(sorted_ids)) + 1
    groups = np.split(order, boundaries)

    result = [merge_all(points[i] for i in group) for group in groups]

    logger.debug(
        f"Grid {n}x{n} on plane '{plane}', cell={cell_size.tolist()}, "
        f"occupied {len(result)}/{n * n} cells"
    )
    return result
