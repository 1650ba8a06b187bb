# WO Scheduler - Today Indicator & Viewport Centering
"""
Модуль расчёта позиции индикатора "сегодня" и целевой прокрутки,
при которой индикатор оказывается в центре видимой области.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from src.processing.dates import DateLike, days_between


@dataclass(frozen=True)
class ScrollTarget:
    """Желаемое горизонтальное смещение прокрутки."""
    left_px: float


def today_offset(
    bounds_start: DateLike,
    pixels_per_day: int,
    today: Optional[DateLike] = None
) -> int:
    """Смещение индикатора "сегодня" от начала таймлайна.

    Args:
        bounds_start: Начальная дата таймлайна
        pixels_per_day: Текущий масштаб
        today: Дата индикатора (по умолчанию текущая дата устройства)

    Returns:
        Смещение в пикселях
    """
    if today is None:
        today = date.today()
    return days_between(bounds_start, today) * pixels_per_day


def center_on(indicator_offset_px: float, viewport_width_px: float) -> ScrollTarget:
    """Прокрутка, центрирующая индикатор в видимой области.

    Результат не ограничивается диапазоном [0, max_scroll]: это задача
    механизма прокрутки.
    """
    return ScrollTarget(left_px=indicator_offset_px - viewport_width_px / 2)
