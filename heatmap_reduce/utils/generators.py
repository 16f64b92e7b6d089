"""
Генераторы наборов точек: спиральная траектория и равномерный шум
"""
import numpy as np
from typing import List, Optional, Sequence
import logging

from ..config import (
    MAX_POINTS_COUNT,
    TRAJECTORY_LENGTH_STEP,
    TRAJECTORY_ANGLE_STEP_DEG,
    RANDOM_EXTENT,
)
from ..core.structures import AxisAlignedBox, WeightedPoint, plane_axes, points_from_array

logger = logging.getLogger(__name__)


def _embed(ground: np.ndarray, plane: str, origin: Sequence[float]) -> np.ndarray:
    """Перенос 2D координат в 3D: оси плоскости + смещение origin"""
    a0, a1 = plane_axes(plane)
    xyz = np.tile(np.asarray(origin, dtype=np.float64), (ground.shape[0], 1))
    xyz[:, a0] += ground[:, 0]
    xyz[:, a1] += ground[:, 1]
    return xyz


def generate_trajectory(count: int,
                        length_step: float = TRAJECTORY_LENGTH_STEP,
                        angle_step_deg: float = TRAJECTORY_ANGLE_STEP_DEG,
                        scale_to_capacity: bool = False,
                        plane: str = 'xy',
                        origin: Sequence[float] = (0.0, 0.0, 0.0)) -> List[WeightedPoint]:
    """
    Спиральная траектория из count точек с весом 1

    Точка k лежит на угле k * angle_step и расстоянии k * length_step от origin.

    Args:
        count: Количество точек
        length_step: Приращение радиуса на точку
        angle_step_deg: Приращение угла на точку (градусы)
        scale_to_capacity: Умножить length_step на MAX_POINTS_COUNT / count,
            чтобы спираль имела одинаковый размер при любом count
        plane: Плоскость, в которой лежит спираль
        origin: Центр спирали
    """
    if count <= 0:
        return []

    if scale_to_capacity:
        length_step = length_step * MAX_POINTS_COUNT / count

    k = np.arange(count, dtype=np.float64)
    angle = k * np.deg2rad(angle_step_deg)
    length = k * length_step
    ground = np.column_stack([np.cos(angle) * length, np.sin(angle) * length])

    xyz = _embed(ground, plane, origin)
    logger.debug(f"Generated trajectory of {count} points (step={length_step:.6g})")
    return points_from_array(xyz)


def generate_random_points(count: int,
                           seed: Optional[int] = 42,
                           box: Optional[AxisAlignedBox] = None,
                           extent: float = RANDOM_EXTENT,
                           plane: str = 'xy') -> List[WeightedPoint]:
    """
    Равномерно распределённые точки в плоскости, вес 1

    Args:
        count: Количество точек
        seed: Seed генератора для воспроизводимости
        box: Если задан, точки берутся в проекции бокса на плоскость,
            третья координата - центр бокса
        extent: Полуразмер квадрата [-extent, extent]^2 вокруг начала координат,
            когда box не задан
        plane: Плоскость генерации
    """
    if count <= 0:
        return []

    rng = np.random.default_rng(seed)
    a0, a1 = plane_axes(plane)

    if box is not None:
        if box.is_empty():
            raise ValueError("Cannot generate points inside an empty box")
        low = np.array([box.min_corner[a0], box.min_corner[a1]])
        high = np.array([box.max_corner[a0], box.max_corner[a1]])
        origin = np.array(box.center())
        origin[[a0, a1]] = 0.0
    else:
        low = np.array([-extent, -extent])
        high = np.array([extent, extent])
        origin = np.zeros(3)

    ground = rng.uniform(low, high, size=(count, 2))
    xyz = _embed(ground, plane, origin)
    logger.debug(f"Generated {count} random points in [{low.tolist()}, {high.tolist()}]")
    return points_from_array(xyz)
