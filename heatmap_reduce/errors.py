"""
Исключения пакета
"""


class PreconditionError(AssertionError):
    """Нарушение предусловия алгоритма (ошибка вызывающего кода)"""


class CapacityError(ValueError):
    """Набор точек превышает ёмкость рендера"""
