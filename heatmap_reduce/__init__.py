from __future__ import annotations
from typing import Any

# 1) Версия пакета
try:
    from importlib.metadata import version as _pkg_version, PackageNotFoundError
    __version__ = _pkg_version("heatmap-reduce")
except PackageNotFoundError:
    # пакет не установлен (запуск из исходников)
    __version__ = "0.1.0"

__all__ = [
    "__version__",
    "PointReducer",
    "ReductionConfig",
    "WeightedPoint",
    "AxisAlignedBox",
    "HeatmapSink",
    "MAX_POINTS_COUNT",
]

_LAZY = {
    "PointReducer": ("heatmap_reduce.core.reducer", "PointReducer"),
    "ReductionConfig": ("heatmap_reduce.config", "ReductionConfig"),
    "MAX_POINTS_COUNT": ("heatmap_reduce.config", "MAX_POINTS_COUNT"),
    "WeightedPoint": ("heatmap_reduce.core.structures", "WeightedPoint"),
    "AxisAlignedBox": ("heatmap_reduce.core.structures", "AxisAlignedBox"),
    "HeatmapSink": ("heatmap_reduce.render.sink", "HeatmapSink"),
}


# 2) Ленивый экспорт для публичного API (избегаем ранних импортов numpy)
def __getattr__(name: str) -> Any:
    if name in _LAZY:
        from importlib import import_module
        module_name, attr = _LAZY[name]
        return getattr(import_module(module_name), attr)
    raise AttributeError(name)
