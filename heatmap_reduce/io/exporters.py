import json
import numpy as np
from pathlib import Path
from typing import Optional, List, Any, Sequence
from dataclasses import asdict
import logging

from ..core.structures import WeightedPoint, points_to_array
from ..core.metrics import compare_reduction

logger = logging.getLogger(__name__)


def export_points(points: Sequence[WeightedPoint],
                  output_dir: str,
                  formats: List[str],
                  basename: str = 'points') -> List[Path]:
    """
    Экспорт набора точек в указанные форматы

    Args:
        points: Точки для записи
        output_dir: Выходная директория
        formats: Список форматов ['json', 'xyz', 'txt', 'pts', 'ply']
        basename: Имя файлов без расширения

    Returns:
        Пути записанных файлов
    """
    out_path = Path(output_dir)
    out_path.mkdir(parents=True, exist_ok=True)
    written = []

    for fmt in formats:
        if fmt == 'none':
            continue

        logger.info(f"Exporting to {fmt.upper()} format...")

        if fmt == 'json':
            target = out_path / f'{basename}.json'
            export_points_json(points, target)
        elif fmt in ['xyz', 'txt', 'pts']:
            target = out_path / f'{basename}.{fmt}'
            export_points_text(points, target)
        elif fmt == 'ply':
            target = out_path / f'{basename}.ply'
            _write_ascii_ply(target, points_to_array(points))
        else:
            logger.warning(f"Unknown export format: {fmt}")
            continue

        written.append(target)

    return written


def export_points_json(points: Sequence[WeightedPoint], output_file: Path) -> None:
    """
    Экспорт точек в JSON

    Формат:
    [
        {"x": float, "y": float, "z": float, "weight": float},
        ...
    ]
    """
    data = [
        {'x': p.x, 'y': p.y, 'z': p.z, 'weight': p.weight}
        for p in points
    ]

    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    logger.info(f"Exported {len(data)} points to {output_file}")


def export_points_text(points: Sequence[WeightedPoint], output_file: Path) -> None:
    """Экспорт в текст: X Y Z W в каждой строке"""
    output_file.parent.mkdir(parents=True, exist_ok=True)
    np.savetxt(output_file.as_posix(), points_to_array(points), fmt='%.9g')
    logger.info(f"Exported {len(points)} points to {output_file}")


def _write_ascii_ply(output_file: Path, data: np.ndarray) -> None:
    """Запись ASCII PLY с вершинным свойством weight"""
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, 'w', encoding='ascii') as f:
        # Header
        f.write("ply\n")
        f.write("format ascii 1.0\n")
        f.write(f"element vertex {data.shape[0]}\n")
        f.write("property float x\n")
        f.write("property float y\n")
        f.write("property float z\n")
        f.write("property float weight\n")
        f.write("end_header\n")

        # Data
        for j in range(data.shape[0]):
            f.write(f"{data[j,0]} {data[j,1]} {data[j,2]} {data[j,3]}\n")

    logger.info(f"Exported {data.shape[0]} points to {output_file}")


def export_statistics(original: Sequence[WeightedPoint],
                      reduced: Sequence[WeightedPoint],
                      output_file: Path,
                      reduce_time: Optional[float] = None,
                      peak_memory_mb: Optional[float] = None,
                      cpu_time_sec: Optional[float] = None,
                      config: Optional[Any] = None) -> dict:
    """
    Экспорт статистики редукции

    Args:
        original: Входные точки
        reduced: Результат редукции
        output_file: Путь к выходному JSON файлу
        reduce_time: Время редукции (секунды)
        config: Конфигурация редукции
    """
    result = compare_reduction(original, reduced)

    if reduce_time is not None:
        n = len(original)
        result['performance'] = {
            'reduce_time_wall_sec': reduce_time,
            'reduce_time_cpu_sec': cpu_time_sec,
            'peak_memory_mb': peak_memory_mb,
            'points_per_sec_wall': n / reduce_time if reduce_time > 0 else 0,
            'points_per_sec_cpu': n / cpu_time_sec if cpu_time_sec else 0
        }

    if config is not None:
        result['config'] = asdict(config)

    output_file.parent.mkdir(parents=True, exist_ok=True)

    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(result, f, ensure_ascii=False, indent=2)

    logger.info(f"Exported statistics to {output_file}")
    return result
