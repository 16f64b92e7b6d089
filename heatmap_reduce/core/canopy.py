"""
Canopy-кластеризация: один проход, порог расстояния
"""
from dataclasses import dataclass
from typing import List, Sequence
import logging

from .structures import WeightedPoint, merge, plane_axes
from ..errors import PreconditionError

logger = logging.getLogger(__name__)


@dataclass
class Canopy:
    """
    Представитель кластера

    Attributes:
        point: Текущая (усреднённая) точка кластера
        members: Сколько входных точек слито в представителя
    """
    point: WeightedPoint
    members: int = 1

    @property
    def touched(self) -> bool:
        """Представитель поглотил хотя бы одну точку помимо исходной"""
        return self.members > 1

    def absorb(self, point: WeightedPoint) -> None:
        self.point = merge(self.point, point)
        self.members += 1


def canopy_axes(metric: str, plane: str = 'xy') -> tuple:
    """Оси для сравнения расстояний: плоскость земли или все три"""
    if metric == 'volumetric':
        return (0, 1, 2)
    if metric == 'planar':
        return plane_axes(plane)
    raise PreconditionError(f"Unknown canopy metric '{metric}', expected 'planar' or 'volumetric'")


def canopy_cluster(points: Sequence[WeightedPoint],
                   max_distance: float,
                   metric: str = 'volumetric',
                   plane: str = 'xy',
                   drop_singletons: bool = False) -> List[WeightedPoint]:
    """
    Жадная однопроходная кластеризация

    Каждая входная точка сливается с первым по порядку представителем,
    находящимся ближе max_distance (строгое сравнение квадратов расстояний),
    иначе становится новым представителем. Минимизации по кандидатам нет.
    Размер результата не ограничен.

    Args:
        points: Входные точки (порядок определяет приоритет слияния)
        max_distance: Порог расстояния (> 0)
        metric: 'volumetric' (3 оси) или 'planar' (оси плоскости земли)
        plane: Плоскость земли для metric='planar'
        drop_singletons: Исходный вариант алгоритма: каждая входная точка
            (и слитая тоже) добавляется новым представителем, а в конце
            выбрасываются представители, не поглотившие ни одной точки.
            Сумма весов при этом не сохраняется.

    Returns:
        Представители в порядке создания
    """
    if not max_distance > 0.0:
        raise PreconditionError(f"max_distance should be > 0, got {max_distance}")
    axes = canopy_axes(metric, plane)

    sqr_max_distance = max_distance * max_distance
    canopies: List[Canopy] = []

    for point in points:
        matched = False
        for canopy in canopies:
            if canopy.point.sqr_distance_to(point, axes) < sqr_max_distance:
                canopy.absorb(point)
                matched = True
                break
        # В режиме drop_singletons каждая точка порождает представителя, даже уже слитая
        if drop_singletons or not matched:
            canopies.append(Canopy(point))

    singletons = sum(1 for c in canopies if not c.touched)
    logger.debug(
        f"Canopy ({metric}, d={max_distance}): {len(canopies)} representatives, "
        f"{singletons} singletons"
    )

    if drop_singletons:
        return [c.point for c in canopies if c.touched]
    return [c.point for c in canopies]
