"""
Загрузчики наборов взвешенных точек
"""
import json
import numpy as np
from pathlib import Path
from typing import Tuple, Dict, Any, List
import logging

from ..core.structures import WeightedPoint, points_from_array

logger = logging.getLogger(__name__)

TEXT_FORMATS = ['.txt', '.xyz', '.pts', '.csv']


def load_weighted_points(file_path: str) -> Tuple[List[WeightedPoint], Dict[str, Any]]:
    """
    Универсальный загрузчик взвешенных точек

    Args:
        file_path: Путь к файлу

    Returns:
        (points, metadata)
        points: Список WeightedPoint в порядке файла
        metadata: Словарь с форматом и количеством столбцов

    Поддерживаемые форматы:
        .txt/.xyz/.pts/.csv: Текст, столбцы X Y Z [W] (без W вес = 1)
        .json: Список [x, y, z, w] или объектов {"x", "y", "z", "weight"}
        .npy: Массив N x 3 или N x 4
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Файл не найден: {path}")

    ext = path.suffix.lower()
    metadata: Dict[str, Any] = {
        'format': ext.lstrip('.'),
        'source_path': path.as_posix(),
        'filename': path.name
    }

    logger.info(f"Loading {ext} file: {path.name}")

    if ext in TEXT_FORMATS:
        arr = _load_text_format(path)
    elif ext == '.json':
        arr = _load_json_format(path)
    elif ext == '.npy':
        arr = _load_npy_format(path)
    else:
        raise ValueError(f"Неподдерживаемый формат: {ext}")

    metadata['columns'] = arr.shape[1]
    metadata['has_weights'] = arr.shape[1] == 4

    points = points_from_array(arr)
    logger.info(f"Loaded {len(points):,} points from {path.name}")
    return points, metadata


def _as_point_table(arr: np.ndarray, path: Path) -> np.ndarray:
    """Приведение к таблице N x 3 или N x 4"""
    if arr.size == 0:
        return np.empty((0, 4), dtype=np.float64)

    if arr.ndim == 1:
        if arr.size in (3, 4):
            arr = arr.reshape(1, -1)
        else:
            raise ValueError(f"В файле {path} одна строка из {arr.size} чисел, ожидается 3 или 4")

    if arr.ndim != 2 or arr.shape[1] < 3:
        raise ValueError(f"В файле {path} меньше 3 столбцов (x y z)")

    if arr.shape[1] > 4:
        logger.debug(f"Ignoring {arr.shape[1] - 4} extra columns")
        arr = arr[:, :4]

    return arr.astype(np.float64)


def _load_text_format(path: Path) -> np.ndarray:
    """Загрузка текстовых форматов (TXT, XYZ, PTS, CSV)"""
    delimiter = ',' if path.suffix.lower() == '.csv' else None
    try:
        arr = np.loadtxt(path.as_posix(), dtype=np.float64, delimiter=delimiter, ndmin=1)
    except ValueError as e:
        raise ValueError(f"Ошибка чтения текстового файла {path}: {e}")
    return _as_point_table(arr, path)


def _load_json_format(path: Path) -> np.ndarray:
    """Загрузка JSON: список массивов или объектов"""
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, dict) and 'points' in data:
        data = data['points']
    if not isinstance(data, list):
        raise ValueError(f"Ожидается список точек в {path}")

    rows = []
    for i, item in enumerate(data):
        if isinstance(item, dict):
            try:
                rows.append([item['x'], item['y'], item['z'], item.get('weight', 1.0)])
            except KeyError as e:
                raise ValueError(f"Точка {i} в {path}: нет поля {e}")
        else:
            if len(item) == 3:
                rows.append([*item, 1.0])
            elif len(item) == 4:
                rows.append(list(item))
            else:
                raise ValueError(f"Точка {i} в {path}: ожидается 3 или 4 числа, получено {len(item)}")

    return _as_point_table(np.array(rows, dtype=np.float64), path)


def _load_npy_format(path: Path) -> np.ndarray:
    """Загрузка массива NumPy"""
    arr = np.load(path.as_posix(), allow_pickle=False)
    return _as_point_table(np.asarray(arr), path)


def validate_weighted_points(points: List[WeightedPoint],
                             min_points: int = 1,
                             max_points: int = None) -> None:
    """
    Валидация загруженного набора точек

    Args:
        points: Список точек
        min_points: Минимальное количество точек
        max_points: Максимальное количество точек (опционально)

    Raises:
        ValueError: Если данные не соответствуют требованиям
    """
    n = len(points)

    if n < min_points:
        raise ValueError(f"Too few points: {n} < {min_points}")

    if max_points and n > max_points:
        raise ValueError(f"Too many points: {n} > {max_points}")

    if n == 0:
        return

    arr = np.array([p.as_tuple() for p in points], dtype=np.float64)

    if not np.isfinite(arr).all():
        n_invalid = (~np.isfinite(arr)).any(axis=1).sum()
        raise ValueError(f"Found {n_invalid} points with NaN or Inf values")

    n_bad_weight = int((arr[:, 3] <= 0).sum())
    if n_bad_weight:
        raise ValueError(f"Found {n_bad_weight} points with non-positive weight")
