"""
Получатель редуцированных точек (рендер ограниченной ёмкости)
"""
from .sink import HeatmapSink

__all__ = ['HeatmapSink']
