# WO Scheduler - Scale Table
"""
Модуль масштабов таймлайна: гранулярность и пикселей на день.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union

logger = logging.getLogger(__name__)


class Granularity(Enum):
    """Уровень детализации таймлайна."""
    DAY = 'day'
    WEEK = 'week'
    MONTH = 'month'


# Пикселей на календарный день для каждой гранулярности
DEFAULT_SCALES = {
    Granularity.DAY: 90,    # Высокая детализация
    Granularity.WEEK: 16,   # Баланс
    Granularity.MONTH: 3,   # Обзор всего диапазона
}

GRANULARITY_LABELS = {
    Granularity.DAY: 'Day',
    Granularity.WEEK: 'Week',
    Granularity.MONTH: 'Month',
}


@dataclass(frozen=True)
class ScaleTable:
    """Неизменяемая таблица масштабов Granularity -> пикселей на день."""
    scales: Mapping[Granularity, int] = field(
        default_factory=lambda: dict(DEFAULT_SCALES)
    )

    def __post_init__(self):
        """Валидация и заморозка таблицы."""
        missing = [g.value for g in Granularity if g not in self.scales]
        if missing:
            raise ValueError(f"Scale table is missing granularities: {', '.join(missing)}")

        for granularity, value in self.scales.items():
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(
                    f"Pixels per day for '{granularity.value}' must be a positive integer, got {value!r}"
                )

        object.__setattr__(self, 'scales', MappingProxyType(dict(self.scales)))

    def __hash__(self):
        return hash(tuple(sorted((g.value, v) for g, v in self.scales.items())))

    @classmethod
    def from_values(cls, day: int, week: int, month: int) -> 'ScaleTable':
        return cls({
            Granularity.DAY: day,
            Granularity.WEEK: week,
            Granularity.MONTH: month,
        })

    def pixels_per_day(self, granularity: Granularity) -> int:
        """Пикселей на календарный день для гранулярности.

        Args:
            granularity: Уровень детализации

        Returns:
            Положительное целое число пикселей
        """
        return self.scales[granularity]


def parse_granularity(value: Union[Granularity, str, None]) -> Optional[Granularity]:
    """Разбор значения выбора гранулярности.

    Пустые и неизвестные значения не являются ошибкой: возвращается None,
    вызывающий код оставляет текущее состояние без изменений.

    Args:
        value: Granularity, строка 'day'/'week'/'month' (регистр не важен) или None

    Returns:
        Granularity или None
    """
    if not value:
        return None

    if isinstance(value, Granularity):
        return value

    if not isinstance(value, str):
        logger.warning(f"Ignoring granularity selection of type {type(value).__name__}")
        return None

    normalized = value.strip().lower()
    if not normalized:
        return None

    try:
        return Granularity(normalized)
    except ValueError:
        logger.warning(f"Ignoring unknown granularity selection: {value!r}")
        return None
