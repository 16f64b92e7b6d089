"""
Утилиты для генерации тестовых наборов точек
"""
from .generators import (
    generate_trajectory,
    generate_random_points,
)

__all__ = [
    'generate_trajectory',
    'generate_random_points',
]
