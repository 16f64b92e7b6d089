from dataclasses import dataclass, asdict
from typing import Optional, Sequence, Tuple
import logging
import math

from .structures import WeightedPoint
from .bounds import compute_bounds

logger = logging.getLogger(__name__)


@dataclass
class PointSetSummary:
    """Сводка по набору взвешенных точек"""
    count: int
    weight_sum: float
    min_weight: float
    max_weight: float
    centroid: Optional[Tuple[float, float, float]]  # Взвешенный центр
    bbox_min: Optional[Tuple[float, float, float]]
    bbox_max: Optional[Tuple[float, float, float]]

    def to_dict(self) -> dict:
        return asdict(self)


def summarize(points: Sequence[WeightedPoint]) -> PointSetSummary:
    """
    Сводка: количество, сумма весов, взвешенный центр, AABB

    Для пустого набора центр и бокс - None.
    """
    if len(points) == 0:
        return PointSetSummary(0, 0.0, 0.0, 0.0, None, None, None)

    weights = [p.weight for p in points]
    weight_sum = math.fsum(weights)
    centroid = None
    if weight_sum > 0:
        centroid = tuple(
            math.fsum(p.coord(axis) * p.weight for p in points) / weight_sum
            for axis in range(3)
        )
    box = compute_bounds(points)

    return PointSetSummary(
        count=len(points),
        weight_sum=weight_sum,
        min_weight=min(weights),
        max_weight=max(weights),
        centroid=centroid,
        bbox_min=box.min_corner,
        bbox_max=box.max_corner,
    )


def compare_reduction(original: Sequence[WeightedPoint],
                      reduced: Sequence[WeightedPoint]) -> dict:
    """
    Сравнение наборов до и после редукции

    Returns:
        Словарь со сводками, коэффициентом сжатия и долей сохранённого веса
    """
    before = summarize(original)
    after = summarize(reduced)

    ratio = before.count / after.count if after.count else float('inf')
    retained = after.weight_sum / before.weight_sum if before.weight_sum > 0 else 1.0
    centroid_shift = None
    if before.centroid is not None and after.centroid is not None:
        centroid_shift = math.dist(before.centroid, after.centroid)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            f"Reduction {before.count} -> {after.count} (x{ratio:.2f}), "
            f"weight retained {retained:.6f}, centroid shift {centroid_shift}"
        )

    return {
        'input': before.to_dict(),
        'output': after.to_dict(),
        'compression_ratio': ratio,
        'weight_retained': retained,
        'centroid_shift': centroid_shift,
    }
