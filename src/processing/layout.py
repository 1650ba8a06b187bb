# WO Scheduler - Timeline Layout Controller
"""
Модуль согласованного пересчёта раскладки таймлайна при смене
гранулярности: деления шапки, индикатор "сегодня" и целевая прокрутка
считаются за один проход от одного значения гранулярности.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Union

from src.processing.dates import (
    DEFAULT_WEEK_STARTS_ON,
    DateLike,
    days_between,
    parse_calendar_date,
)
from src.processing.models import DEFAULT_BOUNDS, TimelineBounds, WorkOrder
from src.processing.partition import Increment, partition, total_width
from src.processing.position import BarPlacement, PositionMapper
from src.processing.scale import Granularity, ScaleTable, parse_granularity
from src.processing.viewport import ScrollTarget, center_on, today_offset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimelineView:
    """Результат одного прохода раскладки."""
    granularity: Granularity
    pixels_per_day: int
    increments: tuple[Increment, ...]
    today_offset_px: int
    total_width_px: int
    origin: date
    scroll_target: Optional[ScrollTarget] = None

    @property
    def current_increments(self) -> list[Increment]:
        return [inc for inc in self.increments if inc.is_current]

    def increment_offset(self, increment: Increment) -> int:
        """Смещение начала деления в системе координат полос (0 = начало таймлайна).

        Первая неделя или месяц может начинаться раньше начала таймлайна,
        тогда смещение отрицательное.
        """
        return days_between(self.origin, increment.start) * self.pixels_per_day


def build_view(
    bounds: TimelineBounds,
    granularity: Granularity,
    scale_table: Optional[ScaleTable] = None,
    viewport_width: Optional[float] = None,
    today: Optional[DateLike] = None,
    week_starts_on: int = DEFAULT_WEEK_STARTS_ON
) -> TimelineView:
    """Полный пересчёт раскладки для заданной гранулярности.

    Args:
        bounds: Границы таймлайна
        granularity: Уровень детализации
        scale_table: Таблица масштабов
        viewport_width: Ширина видимой области; если None, прокрутка не считается
        today: Текущая дата (по умолчанию дата устройства)
        week_starts_on: День начала недели

    Returns:
        TimelineView
    """
    scale_table = scale_table or ScaleTable()
    pixels_per_day = scale_table.pixels_per_day(granularity)
    # Одна дата на весь проход: флаг текущего деления и индикатор не расходятся
    today = parse_calendar_date(today) if today is not None else date.today()

    increments = partition(
        bounds,
        granularity,
        reference_date=today,
        scale_table=scale_table,
        week_starts_on=week_starts_on,
    )
    indicator = today_offset(bounds.start, pixels_per_day, today)
    scroll_target = center_on(indicator, viewport_width) if viewport_width is not None else None

    return TimelineView(
        granularity=granularity,
        pixels_per_day=pixels_per_day,
        increments=increments,
        today_offset_px=indicator,
        total_width_px=total_width(increments),
        scroll_target=scroll_target,
        origin=bounds.start,
    )


class TimelineController:
    """Владелец текущего выбора гранулярности.

    Обеспечивает:
    - Игнорирование пустых и неизвестных значений выбора
    - Пересчёт делений, индикатора и прокрутки за один проход под блокировкой
    - Размещение заказов в текущем масштабе
    """

    def __init__(
        self,
        bounds: TimelineBounds = DEFAULT_BOUNDS,
        scale_table: Optional[ScaleTable] = None,
        granularity: Granularity = Granularity.MONTH,
        week_starts_on: int = DEFAULT_WEEK_STARTS_ON
    ):
        self.bounds = bounds
        self.scale_table = scale_table or ScaleTable()
        self.week_starts_on = week_starts_on
        self.mapper = PositionMapper(bounds, self.scale_table)
        self._granularity = granularity
        self._lock = threading.RLock()

    @property
    def granularity(self) -> Granularity:
        with self._lock:
            return self._granularity

    @property
    def pixels_per_day(self) -> int:
        return self.scale_table.pixels_per_day(self.granularity)

    def select(
        self,
        value: Union[Granularity, str, None],
        viewport_width: Optional[float] = None,
        today: Optional[DateLike] = None
    ) -> Optional[TimelineView]:
        """Обработка выбора гранулярности.

        Args:
            value: Выбранное значение; пустое или неизвестное игнорируется
            viewport_width: Ширина видимой области для центрирования
            today: Текущая дата (по умолчанию дата устройства)

        Returns:
            Новый TimelineView или None, если выбор проигнорирован
        """
        granularity = parse_granularity(value)
        if granularity is None:
            logger.debug(f"Granularity selection {value!r} ignored")
            return None

        with self._lock:
            self._granularity = granularity
            logger.info(f"Timescale changed to: {granularity.value}")
            return self._build(granularity, viewport_width, today)

    def view(
        self,
        viewport_width: Optional[float] = None,
        today: Optional[DateLike] = None
    ) -> TimelineView:
        """Раскладка для текущей гранулярности."""
        with self._lock:
            return self._build(self._granularity, viewport_width, today)

    def recenter(self, viewport_width: float, today: Optional[DateLike] = None) -> ScrollTarget:
        """Повторный расчёт прокрутки после того, как раскладка устоялась."""
        with self._lock:
            pixels_per_day = self.scale_table.pixels_per_day(self._granularity)
        return center_on(today_offset(self.bounds.start, pixels_per_day, today), viewport_width)

    def place_orders(self, orders: Iterable[WorkOrder]) -> list[BarPlacement]:
        """Размещение заказов в текущем масштабе."""
        with self._lock:
            granularity = self._granularity
        return self.mapper.place_orders(orders, granularity)

    def _build(
        self,
        granularity: Granularity,
        viewport_width: Optional[float],
        today: Optional[DateLike]
    ) -> TimelineView:
        return build_view(
            self.bounds,
            granularity,
            scale_table=self.scale_table,
            viewport_width=viewport_width,
            today=today,
            week_starts_on=self.week_starts_on,
        )
