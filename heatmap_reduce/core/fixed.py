"""
Редукция последовательности на кластеры фиксированного размера
"""
from typing import List, Sequence, Tuple
import logging

from .structures import WeightedPoint, merge_all
from ..errors import PreconditionError

logger = logging.getLogger(__name__)


def cluster_sizing(count: int, max_count: int) -> Tuple[int, int, int]:
    """
    Размеры кластеров для count точек и не более max_count кластеров

    Args:
        count: Число входных точек
        max_count: Целевой максимум (> 0)

    Returns:
        (cluster_size, cluster_count, last_cluster_size):
        cluster_size = ceil(count / max_count), cluster_count полных кластеров
        с начала последовательности, остаток last_cluster_size (0 если деление точное)
    """
    if max_count <= 0:
        raise PreconditionError(f"max_count should be > 0, got {max_count}")
    cluster_size = -(-count // max_count)
    if cluster_size == 0:
        return 0, 0, 0
    cluster_count = count // cluster_size
    last_cluster_size = count - cluster_count * cluster_size
    return cluster_size, cluster_count, last_cluster_size


def _check_fast_path(points: Sequence[WeightedPoint], max_count: int):
    if max_count < 0:
        raise PreconditionError(f"max_count should be >= 0, got {max_count}")
    if max_count >= len(points):
        return list(points)
    if max_count == 0:
        return []
    return None


def average_clustering(points: Sequence[WeightedPoint],
                       max_count: int) -> List[WeightedPoint]:
    """
    Каждый непрерывный отрезок из cluster_size точек сливается в одну точку

    Хвостовой неполный кластер тоже сливается и добавляется последним.
    Подходит для траекторий (точки идут последовательно).
    """
    fast = _check_fast_path(points, max_count)
    if fast is not None:
        return fast

    size, count, last_size = cluster_sizing(len(points), max_count)
    result = [
        merge_all(points[i * size:(i + 1) * size])
        for i in range(count)
    ]
    if last_size > 0:
        result.append(merge_all(points[len(points) - last_size:]))

    logger.debug(f"Average clustering: size={size}, count={count}, last={last_size}")
    return result


def decimate_clustering(points: Sequence[WeightedPoint],
                        max_count: int) -> List[WeightedPoint]:
    """
    От каждого полного кластера остаётся первая точка с весом * cluster_size

    Хвостовой неполный кластер отбрасывается вместе с его весом.
    """
    fast = _check_fast_path(points, max_count)
    if fast is not None:
        return fast

    size, count, last_size = cluster_sizing(len(points), max_count)
    result = [
        points[i * size].with_weight(points[i * size].weight * size)
        for i in range(count)
    ]

    if last_size > 0:
        logger.debug(f"Decimation discarded {last_size} trailing points")
    logger.debug(f"Decimate clustering: size={size}, count={count}")
    return result
