"""
Конфигурация и константы для редукции взвешенных точек
"""
from dataclasses import dataclass, asdict, replace
from typing import Literal
import json
from pathlib import Path

# ============ КОНСТАНТЫ ============

# Рендеринг
MAX_POINTS_COUNT = 1023  # Максимальный размер массива точек, который принимает шейдер
DEFAULT_RADIUS = 0.1  # Радиус влияния точки
DEFAULT_INTENSITY = 0.1  # Интенсивность окраски

# Кластеризация
DEFAULT_CANOPY_DISTANCE = 0.033  # Порог расстояния для canopy-кластеризации

# Генерация траекторий (спираль)
TRAJECTORY_LENGTH_STEP = 0.00025  # Приращение радиуса спирали на точку
TRAJECTORY_ANGLE_STEP_DEG = 0.5  # Приращение угла на точку (градусы)
RANDOM_EXTENT = 0.5  # Полуразмер квадрата для случайных точек

STRATEGIES = ('grid', 'canopy', 'average', 'decimate')
PLANES = ('xy', 'xz', 'yz')
CANOPY_METRICS = ('planar', 'volumetric')
GENERATORS = ('none', 'random', 'trajectory')


@dataclass
class ReductionConfig:
    """Конфигурация редукции точек"""

    # ======== Стратегия ========
    strategy: Literal['grid', 'canopy', 'average', 'decimate'] = 'grid'
    max_points: int = MAX_POINTS_COUNT  # Целевой максимум для grid/average/decimate

    # ======== Canopy ========
    max_distance: float = DEFAULT_CANOPY_DISTANCE
    canopy_metric: Literal['planar', 'volumetric'] = 'volumetric'
    drop_singletons: bool = False  # Исходный canopy: каждая точка - представитель, нетронутые выбрасываются

    # ======== Плоскость земли ========
    plane: Literal['xy', 'xz', 'yz'] = 'xy'

    # ======== Рендеринг ========
    capacity: int = MAX_POINTS_COUNT
    radius: float = DEFAULT_RADIUS
    intensity: float = DEFAULT_INTENSITY

    # ======== Генерация точек ========
    generator: Literal['none', 'random', 'trajectory'] = 'none'
    generate_count: int = MAX_POINTS_COUNT
    random_seed: int = 42

    def validate(self) -> None:
        """Проверка корректности конфигурации"""
        if self.strategy not in STRATEGIES:
            raise ValueError(f"Unknown strategy '{self.strategy}', expected one of {STRATEGIES}")

        if self.max_points < 0:
            raise ValueError(f"max_points должно быть >= 0, получено: {self.max_points}")

        if self.max_distance <= 0:
            raise ValueError(f"max_distance должно быть > 0, получено: {self.max_distance}")

        if self.plane not in PLANES:
            raise ValueError(f"Unknown plane '{self.plane}', expected one of {PLANES}")

        if self.canopy_metric not in CANOPY_METRICS:
            raise ValueError(
                f"Unknown canopy metric '{self.canopy_metric}', expected one of {CANOPY_METRICS}"
            )

        if self.capacity < 0 or self.capacity > MAX_POINTS_COUNT:
            raise ValueError(
                f"capacity должна быть в диапазоне [0, {MAX_POINTS_COUNT}], получено: {self.capacity}"
            )

        if self.radius <= 0:
            raise ValueError(f"radius должен быть > 0, получено: {self.radius}")

        if self.generator not in GENERATORS:
            raise ValueError(f"Unknown generator '{self.generator}', expected one of {GENERATORS}")

        if self.generate_count < 0:
            raise ValueError(f"generate_count должно быть >= 0, получено: {self.generate_count}")

    def save(self, path: Path) -> None:
        """Сохранение конфигурации в JSON"""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(asdict(self), f, indent=2, ensure_ascii=False)

    @classmethod
    def load(cls, path: Path) -> 'ReductionConfig':
        """Загрузка конфигурации из JSON"""
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_args(cls, args, base: 'ReductionConfig' = None) -> 'ReductionConfig':
        """
        Создание конфигурации из аргументов командной строки

        Args:
            args: Пространство имён argparse
            base: Конфигурация из файла; аргументы со значением None её не перекрывают
        """
        config = replace(base) if base is not None else cls()

        mapping = {
            'strategy': 'strategy',
            'max_points': 'max_points',
            'max_distance': 'max_distance',
            'canopy_metric': 'canopy_metric',
            'plane': 'plane',
            'capacity': 'capacity',
            'radius': 'radius',
            'intensity': 'intensity',
            'generate': 'generator',
            'count': 'generate_count',
            'random_seed': 'random_seed',
        }
        for arg_name, field_name in mapping.items():
            value = getattr(args, arg_name, None)
            if value is not None:
                setattr(config, field_name, value)

        if getattr(args, 'drop_singletons', False):
            config.drop_singletons = True

        config.validate()
        return config
