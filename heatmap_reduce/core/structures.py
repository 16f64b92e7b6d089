from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple
import numpy as np

from ..errors import PreconditionError

# Оси плоскости земли: первая ось задаёт строки сетки, вторая - столбцы
PLANE_AXES = {
    'xy': (0, 1),
    'xz': (0, 2),
    'yz': (1, 2),
}


def plane_axes(plane: str) -> Tuple[int, int]:
    """Индексы осей для названия плоскости ('xy', 'xz', 'yz')"""
    try:
        return PLANE_AXES[plane]
    except KeyError:
        raise PreconditionError(f"Unknown plane '{plane}', expected one of {tuple(PLANE_AXES)}") from None


@dataclass(frozen=True)
class WeightedPoint:
    """
    Точка в 3D с положительным весом

    Attributes:
        x, y, z: Координаты
        weight: Накопленная "масса" точки (должна быть > 0)
    """
    x: float
    y: float
    z: float
    weight: float = 1.0

    def coord(self, axis: int) -> float:
        """Координата по индексу оси (0=X, 1=Y, 2=Z)"""
        return (self.x, self.y, self.z)[axis]

    @property
    def position(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def with_weight(self, weight: float) -> 'WeightedPoint':
        """Копия точки с другим весом"""
        return WeightedPoint(self.x, self.y, self.z, weight)

    def sqr_distance_to(self, other: 'WeightedPoint',
                        axes: Sequence[int] = (0, 1, 2)) -> float:
        """Квадрат евклидова расстояния по выбранным осям"""
        total = 0.0
        for axis in axes:
            d = self.coord(axis) - other.coord(axis)
            total += d * d
        return total

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.z, self.weight)


def merge(a: WeightedPoint, b: WeightedPoint) -> WeightedPoint:
    """
    Взвешенное среднее двух точек

    Позиция - среднее координат с весами a.weight и b.weight,
    вес - сумма весов.

    Raises:
        PreconditionError: Если сумма весов не положительна
    """
    w_sum = a.weight + b.weight
    if not w_sum > 0.0:
        raise PreconditionError(f"weights should be > 0, got sum {w_sum}")
    w_inv_sum = 1.0 / w_sum
    return WeightedPoint(
        (a.x * a.weight + b.x * b.weight) * w_inv_sum,
        (a.y * a.weight + b.y * b.weight) * w_inv_sum,
        (a.z * a.weight + b.z * b.weight) * w_inv_sum,
        w_sum,
    )


def merge_all(points: Iterable[WeightedPoint]) -> WeightedPoint:
    """Последовательное слияние слева направо: merge(merge(p0, p1), p2)..."""
    iterator = iter(points)
    try:
        result = next(iterator)
    except StopIteration:
        raise PreconditionError("cannot merge an empty group of points")
    for point in iterator:
        result = merge(result, point)
    return result


@dataclass(frozen=True)
class AxisAlignedBox:
    """
    Axis-Aligned Bounding Box в мировых координатах

    Для пустого набора точек min_corner = +inf, max_corner = -inf
    (вырожденный бокс, is_empty() == True).
    """
    min_corner: Tuple[float, float, float]
    max_corner: Tuple[float, float, float]

    def is_empty(self) -> bool:
        """Бокс вырожден (min > max хотя бы по одной оси)"""
        return any(lo > hi for lo, hi in zip(self.min_corner, self.max_corner))

    def dimensions(self) -> Tuple[float, float, float]:
        """Размеры по осям"""
        return tuple(hi - lo for lo, hi in zip(self.min_corner, self.max_corner))

    def center(self) -> Tuple[float, float, float]:
        return tuple((lo + hi) * 0.5 for lo, hi in zip(self.min_corner, self.max_corner))

    def contains(self, point: WeightedPoint) -> bool:
        """Принадлежность точки боксу (границы включены)"""
        return all(
            lo <= point.coord(i) <= hi
            for i, (lo, hi) in enumerate(zip(self.min_corner, self.max_corner))
        )

    def to_dict(self) -> dict:
        return {'min': list(self.min_corner), 'max': list(self.max_corner)}


def points_to_array(points: Sequence[WeightedPoint]) -> np.ndarray:
    """Упаковка точек в массив N x 4 (x, y, z, w), float64"""
    if len(points) == 0:
        return np.empty((0, 4), dtype=np.float64)
    return np.array([p.as_tuple() for p in points], dtype=np.float64)


def points_from_array(array: np.ndarray) -> List[WeightedPoint]:
    """
    Распаковка массива N x 3 или N x 4 в список точек

    При N x 3 всем точкам назначается вес 1.
    """
    arr = np.asarray(array, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] not in (3, 4):
        raise ValueError(f"Expected array of shape (N, 3) or (N, 4), got {arr.shape}")
    if arr.shape[1] == 3:
        return [WeightedPoint(float(x), float(y), float(z)) for x, y, z in arr]
    return [WeightedPoint(float(x), float(y), float(z), float(w)) for x, y, z, w in arr]
