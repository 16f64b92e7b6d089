"""
Алгоритмы редукции взвешенных точек
"""
from .structures import WeightedPoint, AxisAlignedBox, merge
from .bounds import compute_bounds
from .grid import grid_partition
from .canopy import canopy_cluster
from .fixed import cluster_sizing, average_clustering, decimate_clustering

__all__ = [
    'WeightedPoint',
    'AxisAlignedBox',
    'merge',
    'compute_bounds',
    'grid_partition',
    'canopy_cluster',
    'cluster_sizing',
    'average_clustering',
    'decimate_clustering',
]
