# WO Scheduler - Calendar Date Helpers
"""
Модуль работы с календарными датами: разбор YYYY-MM-DD, разница в днях,
номера недель и подписи делений таймлайна.

Время суток и часовые пояса не учитываются: дата трактуется как
календарная дата "как на стене".
"""

import re
from datetime import date, datetime, timedelta
from typing import Union

import pandas as pd


DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')

# Дни недели в нумерации Python (понедельник = 0)
WEEKDAYS = {
    'monday': 0,
    'tuesday': 1,
    'wednesday': 2,
    'thursday': 3,
    'friday': 4,
    'saturday': 5,
    'sunday': 6,
}

# Неделя начинается с воскресенья (как в en-US)
DEFAULT_WEEK_STARTS_ON = WEEKDAYS['sunday']

MONTH_LABEL_FORMAT = '%b %Y'
DAY_LABEL_FORMAT = '%a, %d %b'

DateLike = Union[str, date]


class InvalidDateFormat(ValueError):
    """Строка не является календарной датой в формате YYYY-MM-DD."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid calendar date {value!r}, expected YYYY-MM-DD")


def parse_calendar_date(value: DateLike) -> date:
    """Разбор календарной даты.

    Args:
        value: Строка 'YYYY-MM-DD' или объект date/datetime/Timestamp

    Returns:
        date без времени

    Raises:
        InvalidDateFormat: Если строку нельзя разобрать как дату
    """
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if not isinstance(value, str):
        raise InvalidDateFormat(value)

    text = value.strip()
    if not DATE_PATTERN.match(text):
        raise InvalidDateFormat(value)

    try:
        return datetime.strptime(text, '%Y-%m-%d').date()
    except ValueError as e:
        raise InvalidDateFormat(value) from e


def days_between(start: DateLike, end: DateLike) -> int:
    """Разница в календарных днях (end - start), без учёта времени."""
    return (parse_calendar_date(end) - parse_calendar_date(start)).days


def days_inclusive(start: DateLike, end: DateLike) -> int:
    """Количество дней в интервале [start, end] включительно."""
    return days_between(start, end) + 1


def parse_weekday(value: Union[str, int]) -> int:
    """Разбор дня начала недели: имя ('sunday') или номер Python (0-6)."""
    if isinstance(value, int) and not isinstance(value, bool):
        if 0 <= value <= 6:
            return value
        raise ValueError(f"Weekday number must be within 0..6, got {value}")

    key = str(value).strip().lower()
    if key.isdigit():
        return parse_weekday(int(key))
    if key not in WEEKDAYS:
        raise ValueError(f"Unknown weekday: {value!r}")
    return WEEKDAYS[key]


def start_of_week(d: date, week_starts_on: int = DEFAULT_WEEK_STARTS_ON) -> date:
    """Первый день недели, содержащей дату."""
    shift = (d.weekday() - week_starts_on) % 7
    return d - timedelta(days=shift)


def start_of_month(d: date) -> date:
    return d.replace(day=1)


def locale_week_number(d: date, week_starts_on: int = DEFAULT_WEEK_STARTS_ON) -> int:
    """Номер недели по локальному правилу.

    Неделя 1 - та, что содержит 1 января; недели начинаются с week_starts_on.
    Последние дни декабря могут относиться к неделе 1 следующего года.

    Args:
        d: Дата
        week_starts_on: День начала недели (нумерация Python, понедельник = 0)

    Returns:
        Номер недели (1-53)
    """
    next_year_start = start_of_week(date(d.year + 1, 1, 1), week_starts_on)
    this_year_start = start_of_week(date(d.year, 1, 1), week_starts_on)

    if d >= next_year_start:
        week_year_start = next_year_start
    elif d >= this_year_start:
        week_year_start = this_year_start
    else:
        week_year_start = start_of_week(date(d.year - 1, 1, 1), week_starts_on)

    return (start_of_week(d, week_starts_on) - week_year_start).days // 7 + 1


def month_label(d: date) -> str:
    """Подпись месяца: 'Jan 2026'."""
    return d.strftime(MONTH_LABEL_FORMAT)


def week_label(d: date, week_starts_on: int = DEFAULT_WEEK_STARTS_ON) -> str:
    """Подпись недели: 'Week 2 (Jan)' - номер недели и месяц самой даты."""
    return f"Week {locale_week_number(d, week_starts_on)} ({d.strftime('%b')})"


def day_label(d: date) -> str:
    """Подпись дня: 'Mon, 05 Jan'."""
    return d.strftime(DAY_LABEL_FORMAT)
