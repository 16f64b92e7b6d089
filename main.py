#!/usr/bin/env python
"""
Heatmap Reduce - Точка входа для CLI

Редукция набора взвешенных точек до размера, который принимает рендер тепловой карты
"""
import psutil
import os
import argparse
import logging
import sys
import time
from pathlib import Path

logger = logging.getLogger(__name__)


def setup_logging(log_path: Path, verbose: bool, quiet: bool = False):
    """Настраивает раздельное логирование в файл и консоль."""
    log_path.parent.mkdir(parents=True, exist_ok=True)

    # Уровень для файла всегда DEBUG, для консоли - в зависимости от флагов
    if verbose:
        console_level = logging.DEBUG
    elif quiet:
        console_level = logging.WARNING
    else:
        console_level = logging.INFO
    file_level = logging.DEBUG

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Убираем все предыдущие обработчики, чтобы избежать дублирования
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    file_handler = logging.FileHandler(log_path, mode='w', encoding='utf-8')
    file_handler.setLevel(file_level)
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    root.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))
    root.addHandler(console_handler)


# Импорты модулей проекта
from heatmap_reduce import __version__
from heatmap_reduce.config import (
    ReductionConfig, STRATEGIES, PLANES, CANOPY_METRICS, MAX_POINTS_COUNT
)
from heatmap_reduce.core.reducer import PointReducer
from heatmap_reduce.io.loaders import load_weighted_points, validate_weighted_points
from heatmap_reduce.io.exporters import export_points, export_statistics
from heatmap_reduce.render.sink import HeatmapSink
from heatmap_reduce.utils.generators import generate_random_points, generate_trajectory


def parse_arguments(argv=None) -> argparse.Namespace:
    """Парсинг аргументов командной строки"""
    parser = argparse.ArgumentParser(
        description='Heatmap Reduce - редукция взвешенных точек для рендера тепловой карты',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Примеры использования:
    %(prog)s --input points.xyz --strategy grid --max-points 900 --export json
    %(prog)s --generate trajectory --count 100000 --strategy average --only-if-needed
    %(prog)s --generate random --count 1000 --strategy canopy --max-distance 0.05 --stats
            """
    )

    # Источник точек
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--input', '-i', type=str,
                        help='Путь к файлу точек (.xyz, .txt, .pts, .csv, .json, .npy)')
    source.add_argument('--generate', choices=['random', 'trajectory'],
                        help='Сгенерировать тестовый набор точек')
    parser.add_argument('--output', '-o', default='output', type=str,
                        help='Выходная директория (по умолчанию: output)')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    # Генерация
    group_gen = parser.add_argument_group('Генерация')
    group_gen.add_argument('--count', type=int,
                           help=f'Количество генерируемых точек (по умолчанию: {MAX_POINTS_COUNT})')
    group_gen.add_argument('--random-seed', type=int,
                           help='Seed для воспроизводимости (по умолчанию: 42)')

    # Редукция
    group_algo = parser.add_argument_group('Редукция')
    group_algo.add_argument('--strategy', choices=STRATEGIES,
                            help='Стратегия редукции (по умолчанию: grid)')
    group_algo.add_argument('--max-points', type=int,
                            help=f'Целевой максимум точек (по умолчанию: {MAX_POINTS_COUNT})')
    group_algo.add_argument('--max-distance', type=float,
                            help='Порог расстояния для canopy (по умолчанию: 0.033)')
    group_algo.add_argument('--plane', choices=PLANES,
                            help='Плоскость земли (по умолчанию: xy)')
    group_algo.add_argument('--canopy-metric', choices=CANOPY_METRICS,
                            help='Метрика canopy (по умолчанию: volumetric)')
    group_algo.add_argument('--drop-singletons', action='store_true',
                            help='Canopy: исходный вариант (каждая точка - представитель, нетронутые выбрасываются)')
    group_algo.add_argument('--only-if-needed', action='store_true',
                            help='Редуцировать только если точек больше ёмкости рендера')

    # Рендер
    group_render = parser.add_argument_group('Рендер')
    group_render.add_argument('--capacity', type=int,
                              help=f'Ёмкость рендера (по умолчанию: {MAX_POINTS_COUNT})')
    group_render.add_argument('--radius', type=float,
                              help='Радиус точки (по умолчанию: 0.1)')
    group_render.add_argument('--intensity', type=float,
                              help='Интенсивность (по умолчанию: 0.1)')

    # Экспорт и отладка
    group_out = parser.add_argument_group('Экспорт и отладка')
    group_out.add_argument('--export', nargs='+',
                           choices=['none', 'json', 'xyz', 'txt', 'pts', 'ply'],
                           default=['json'],
                           help='Форматы экспорта (можно несколько)')
    group_out.add_argument('--stats', action='store_true',
                           help='Экспортировать статистику редукции')
    group_out.add_argument('--verbose', '-v', action='store_true',
                           help='Подробный вывод')
    group_out.add_argument('--quiet', '-q', action='store_true',
                           help='Минимальный вывод')

    # Дополнительные опции
    parser.add_argument('--config', type=str,
                        help='Путь к файлу конфигурации JSON')
    parser.add_argument('--save-config', type=str,
                        help='Сохранить текущую конфигурацию в файл')

    return parser.parse_args(argv)


def main(argv=None):
    """Основная функция"""
    args = parse_arguments(argv)
    output_dir = Path(args.output)
    log_file_path = output_dir / 'reduce_log.txt'
    setup_logging(log_file_path, args.verbose, args.quiet)
    logger.info(f"Detailed logs are being saved to {log_file_path}")
    process = psutil.Process(os.getpid())
    try:
        # ============ 1. Загрузка конфигурации ============
        base = None
        if args.config:
            logger.info(f"Loading config from {args.config}")
            base = ReductionConfig.load(Path(args.config))
        config = ReductionConfig.from_args(args, base)

        if args.save_config:
            config.save(Path(args.save_config))
            logger.info(f"Config saved to {args.save_config}")

        # ============ 2. Получение точек ============
        start_time = time.perf_counter()
        if args.input:
            input_path = Path(args.input)
            if not input_path.exists():
                raise FileNotFoundError(f"Input file not found: {input_path}")
            points, metadata = load_weighted_points(input_path.as_posix())
            source_name = input_path.name
        elif config.generator == 'trajectory':
            points = generate_trajectory(
                config.generate_count,
                scale_to_capacity=config.generate_count > MAX_POINTS_COUNT,
                plane=config.plane,
            )
            source_name = 'trajectory'
        else:
            points = generate_random_points(
                config.generate_count, seed=config.random_seed, plane=config.plane
            )
            source_name = 'random'
        load_time = time.perf_counter() - start_time

        validate_weighted_points(points)
        logger.info(f"Got {len(points):,} points from {source_name} in {load_time:.2f}s")

        # ============ 3. Редукция ============
        reducer = PointReducer(config)
        cpu_time_before = process.cpu_times()

        if args.only_if_needed:
            reduced = reducer.reduce_to_capacity(points, config.capacity)
        else:
            reduced = reducer.reduce(points)
        reduce_time = reducer.stats['reduce_time']

        cpu_time_after = process.cpu_times()
        cpu_time_sec = (cpu_time_after.user - cpu_time_before.user) + (cpu_time_after.system - cpu_time_before.system)
        peak_memory_mb = process.memory_info().rss / (1024 * 1024)

        # ============ 4. Передача в рендер ============
        sink = HeatmapSink(config.capacity, config.radius, config.intensity)
        sink.submit(reduced)

        # ============ 5. Экспорт результатов ============
        output_dir.mkdir(parents=True, exist_ok=True)

        export_formats = [fmt for fmt in args.export if fmt != 'none']
        if export_formats:
            logger.info(f"Exporting to formats: {', '.join(export_formats)}")
            export_points(reduced, output_dir, export_formats)

        if args.stats:
            stats_file = output_dir / 'statistics.json'
            export_statistics(
                points, reduced, stats_file,
                reduce_time, peak_memory_mb, cpu_time_sec, config
            )

        # ============ 6. Итоговая информация ============
        logger.info("=" * 60)
        logger.info("Heatmap Reduce completed successfully!")
        logger.info(f"Input: {len(points):,} points from {source_name}")
        logger.info(f"Output: {sink.count} points (capacity {sink.capacity}) in {output_dir}")
        logger.info(f"Total time: {load_time + reduce_time:.2f}s")
        logger.info("=" * 60)

        return 0

    except KeyboardInterrupt:
        logger.info("Process interrupted by user")
        return 130

    except FileNotFoundError as e:
        logger.error(f"File error: {e}")
        return 1

    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        return 2

    except ImportError as e:
        logger.error(f"Missing dependency: {e}")
        return 3

    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 255


if __name__ == '__main__':
    sys.exit(main())
