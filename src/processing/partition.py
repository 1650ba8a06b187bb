# WO Scheduler - Interval Partitioner
"""
Модуль разбиения фиксированного интервала таймлайна на деления шапки
(месяцы, недели или дни) с шириной в пикселях и флагом текущего деления.

Текущее деление определяется равенством подписей, а не попаданием даты
в диапазон деления: подпись дня не содержит год, поэтому в многолетнем
интервале флаг может стоять на нескольких днях.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

import pandas as pd

from src.processing.dates import (
    DEFAULT_WEEK_STARTS_ON,
    DateLike,
    day_label,
    month_label,
    parse_calendar_date,
    start_of_month,
    start_of_week,
    week_label,
)
from src.processing.models import TimelineBounds
from src.processing.scale import Granularity, ScaleTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Increment:
    """Одно деление шапки таймлайна."""
    label: str
    width_px: int
    is_current: bool
    start: date


def enumerate_months(bounds: TimelineBounds) -> list[date]:
    """Первые дни всех месяцев от месяца начала до месяца конца."""
    stamps = pd.date_range(start=start_of_month(bounds.start), end=bounds.end, freq='MS')
    return [ts.date() for ts in stamps]


def enumerate_weeks(
    bounds: TimelineBounds,
    week_starts_on: int = DEFAULT_WEEK_STARTS_ON
) -> list[date]:
    """Начала всех недель от недели, содержащей start, до end."""
    first = start_of_week(bounds.start, week_starts_on)
    stamps = pd.date_range(start=first, end=bounds.end, freq='7D')
    return [ts.date() for ts in stamps]


def enumerate_days(bounds: TimelineBounds) -> list[date]:
    """Все дни интервала включительно."""
    stamps = pd.date_range(start=bounds.start, end=bounds.end, freq='D')
    return [ts.date() for ts in stamps]


def _month_increments(bounds: TimelineBounds, pixels_per_day: int, reference: date) -> list[Increment]:
    current_label = month_label(reference)
    increments = []
    for month_start in enumerate_months(bounds):
        label = month_label(month_start)
        days_in_month = pd.Timestamp(month_start).days_in_month
        increments.append(Increment(
            label=label,
            width_px=days_in_month * pixels_per_day,
            is_current=label == current_label,
            start=month_start,
        ))
    return increments


def _week_increments(
    bounds: TimelineBounds,
    pixels_per_day: int,
    reference: date,
    week_starts_on: int
) -> list[Increment]:
    current_label = week_label(reference, week_starts_on)
    increments = []
    for week_start in enumerate_weeks(bounds, week_starts_on):
        label = week_label(week_start, week_starts_on)
        increments.append(Increment(
            label=label,
            width_px=7 * pixels_per_day,
            is_current=label == current_label,
            start=week_start,
        ))
    return increments


def _day_increments(bounds: TimelineBounds, pixels_per_day: int, reference: date) -> list[Increment]:
    current_label = day_label(reference)
    increments = []
    for day in enumerate_days(bounds):
        label = day_label(day)
        increments.append(Increment(
            label=label,
            width_px=pixels_per_day,
            is_current=label == current_label,
            start=day,
        ))
    return increments


def partition(
    bounds: TimelineBounds,
    granularity: Granularity,
    reference_date: Optional[DateLike] = None,
    scale_table: Optional[ScaleTable] = None,
    week_starts_on: int = DEFAULT_WEEK_STARTS_ON
) -> tuple[Increment, ...]:
    """Разбиение интервала таймлайна на деления.

    Args:
        bounds: Границы таймлайна
        granularity: Уровень детализации
        reference_date: Дата для флага is_current (по умолчанию сегодня)
        scale_table: Таблица масштабов (по умолчанию DEFAULT_SCALES)
        week_starts_on: День начала недели (нумерация Python, понедельник = 0)

    Returns:
        Кортеж делений в хронологическом порядке
    """
    scale_table = scale_table or ScaleTable()
    reference = parse_calendar_date(reference_date) if reference_date is not None else date.today()
    pixels_per_day = scale_table.pixels_per_day(granularity)

    if granularity is Granularity.MONTH:
        increments = _month_increments(bounds, pixels_per_day, reference)
    elif granularity is Granularity.WEEK:
        increments = _week_increments(bounds, pixels_per_day, reference, week_starts_on)
    else:
        increments = _day_increments(bounds, pixels_per_day, reference)

    logger.debug(
        f"Partitioned {bounds.start}..{bounds.end} by {granularity.value}: "
        f"{len(increments)} increments"
    )
    return tuple(increments)


def total_width(increments) -> int:
    """Суммарная ширина делений в пикселях."""
    return sum(inc.width_px for inc in increments)
