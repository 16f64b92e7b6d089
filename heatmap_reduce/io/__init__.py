"""
Модуль ввода-вывода для взвешенных точек
"""
from .loaders import (
    load_weighted_points,
    validate_weighted_points,
)
from .exporters import (
    export_points,
    export_statistics,
)

__all__ = [
    'load_weighted_points',
    'validate_weighted_points',
    'export_points',
    'export_statistics',
]
