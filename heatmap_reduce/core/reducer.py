from typing import List, Optional, Sequence
import logging
import time

from .structures import WeightedPoint
from .grid import grid_partition
from .canopy import canopy_cluster
from .fixed import average_clustering, decimate_clustering
from ..config import ReductionConfig, MAX_POINTS_COUNT

logger = logging.getLogger(__name__)


class PointReducer:
    """Редуктор набора точек выбранной стратегией"""

    def __init__(self, config: Optional[ReductionConfig] = None):
        """
        Args:
            config: Конфигурация (по умолчанию ReductionConfig())
        """
        self.config = config if config is not None else ReductionConfig()
        self.config.validate()

        # Статистика последнего вызова
        self.stats = {
            'reduce_time': 0.0,
            'input_points': 0,
            'output_points': 0,
            'strategy': self.config.strategy,
        }

    def reduce(self,
               points: Sequence[WeightedPoint],
               max_count: Optional[int] = None) -> List[WeightedPoint]:
        """
        Редукция стратегией из конфигурации

        Args:
            points: Входные точки
            max_count: Перекрывает config.max_points для ограниченных стратегий

        Returns:
            Новый список точек
        """
        cfg = self.config
        limit = cfg.max_points if max_count is None else max_count

        start_time = time.perf_counter()

        if cfg.strategy == 'grid':
            result = grid_partition(points, limit, plane=cfg.plane)
        elif cfg.strategy == 'canopy':
            result = canopy_cluster(
                points,
                cfg.max_distance,
                metric=cfg.canopy_metric,
                plane=cfg.plane,
                drop_singletons=cfg.drop_singletons,
            )
        elif cfg.strategy == 'average':
            result = average_clustering(points, limit)
        elif cfg.strategy == 'decimate':
            result = decimate_clustering(points, limit)
        else:
            raise ValueError(f"Unknown strategy: {cfg.strategy}")

        elapsed = time.perf_counter() - start_time
        self.stats.update({
            'reduce_time': elapsed,
            'input_points': len(points),
            'output_points': len(result),
            'strategy': cfg.strategy,
        })

        logger.info(
            f"Reduced {len(points):,} -> {len(result):,} points "
            f"with '{cfg.strategy}' in {elapsed:.3f}s"
        )
        return result

    def reduce_to_capacity(self,
                           points: Sequence[WeightedPoint],
                           capacity: int = MAX_POINTS_COUNT) -> List[WeightedPoint]:
        """
        Редукция только если точек больше, чем вмещает рендер

        Для ограниченных стратегий целевой максимум не превышает capacity.
        Результат canopy не ограничен: его размер проверяет получатель.
        """
        if len(points) <= capacity:
            logger.debug(f"{len(points)} points fit capacity {capacity}, no reduction needed")
            return list(points)

        limit = min(self.config.max_points, capacity)
        result = self.reduce(points, limit)

        if len(result) > capacity:
            logger.warning(
                f"'{self.config.strategy}' produced {len(result)} points, "
                f"capacity is {capacity}"
            )
        return result


def reduce(points: Sequence[WeightedPoint], config: Optional[ReductionConfig] = None,
           **overrides) -> List[WeightedPoint]:
    """
    Однократная редукция

    Args:
        points: Входные точки
        config: Базовая конфигурация
        **overrides: Поля ReductionConfig, например strategy='canopy', max_distance=0.1
    """
    base = config if config is not None else ReductionConfig()
    cfg = ReductionConfig(**{**base.__dict__, **overrides})
    return PointReducer(cfg).reduce(points)
