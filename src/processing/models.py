# WO Scheduler - Data Models
"""
Модели данных: границы таймлайна, рабочие центры и заказы-наряды.
"""

from dataclasses import dataclass
from datetime import date

from src.processing.dates import DateLike, days_inclusive, parse_calendar_date


# Статусы заказов
WORK_ORDER_STATUSES = ('open', 'in-progress', 'complete', 'blocked')

STATUS_NAMES = {
    'open': 'Open',
    'in-progress': 'In progress',
    'complete': 'Complete',
    'blocked': 'Blocked',
}


@dataclass(frozen=True)
class TimelineBounds:
    """Фиксированный календарный интервал таймлайна [start, end]."""
    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(
                f"Timeline start {self.start.isoformat()} is after end {self.end.isoformat()}"
            )

    @classmethod
    def from_strings(cls, start: DateLike, end: DateLike) -> 'TimelineBounds':
        return cls(parse_calendar_date(start), parse_calendar_date(end))

    @property
    def total_days(self) -> int:
        """Количество дней в интервале включительно."""
        return days_inclusive(self.start, self.end)


DEFAULT_BOUNDS = TimelineBounds(date(2025, 1, 1), date(2027, 12, 31))


@dataclass(frozen=True)
class WorkCenter:
    """Рабочий центр (строка таймлайна)."""
    id: str
    name: str


@dataclass(frozen=True)
class WorkOrder:
    """Заказ-наряд, размещаемый на таймлайне как полоса.

    Даты хранятся строками 'YYYY-MM-DD' как во внешнем источнике,
    разбор выполняется при размещении.
    """
    id: str
    work_center_id: str
    start_date: str
    end_date: str
    name: str = ''
    status: str = 'open'

    def __post_init__(self):
        if not self.id:
            raise ValueError("Work order id cannot be empty")
