# WO Scheduler - Position Mapper
"""
Модуль перевода календарных дат в пиксельные смещения и ширины
относительно начала таймлайна при линейном масштабе пикселей на день.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from src.processing.dates import DateLike, days_between
from src.processing.models import TimelineBounds, WorkOrder
from src.processing.scale import Granularity, ScaleTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PositionResult:
    """Смещение (и ширина для диапазона) в пикселях."""
    offset_px: int
    width_px: Optional[int] = None


@dataclass(frozen=True)
class BarPlacement:
    """Геометрия полосы заказа на таймлайне."""
    order_id: str
    work_center_id: str
    offset_px: int
    width_px: int


class PositionMapper:
    """Перевод дат в пиксели.

    Даты вне границ таймлайна не отклоняются: смещение экстраполируется
    по той же линейной формуле и может быть отрицательным.
    """

    def __init__(self, bounds: TimelineBounds, scale_table: Optional[ScaleTable] = None):
        """
        Args:
            bounds: Границы таймлайна (смещение 0 = bounds.start)
            scale_table: Таблица масштабов
        """
        self.bounds = bounds
        self.scale_table = scale_table or ScaleTable()

    def position_of(self, value: DateLike, granularity: Granularity) -> int:
        """Смещение даты от начала таймлайна в пикселях.

        Raises:
            InvalidDateFormat: Если дату нельзя разобрать
        """
        return days_between(self.bounds.start, value) * self.scale_table.pixels_per_day(granularity)

    def width_of(self, start: DateLike, end: DateLike, granularity: Granularity) -> int:
        """Ширина диапазона дат в пикселях, дата конца включительно.

        Порядок дат не проверяется: при end < start ширина будет нулевой
        или отрицательной.
        """
        days = days_between(start, end) + 1
        return days * self.scale_table.pixels_per_day(granularity)

    def locate(self, start: DateLike, end: DateLike, granularity: Granularity) -> PositionResult:
        """Смещение и ширина диапазона дат."""
        return PositionResult(
            offset_px=self.position_of(start, granularity),
            width_px=self.width_of(start, end, granularity),
        )

    def place(self, order: WorkOrder, granularity: Granularity) -> BarPlacement:
        """Геометрия полосы для одного заказа."""
        result = self.locate(order.start_date, order.end_date, granularity)
        return BarPlacement(
            order_id=order.id,
            work_center_id=order.work_center_id,
            offset_px=result.offset_px,
            width_px=result.width_px,
        )

    def place_orders(self, orders: Iterable[WorkOrder], granularity: Granularity) -> list[BarPlacement]:
        """Геометрия полос для последовательности заказов (порядок сохраняется).

        Raises:
            InvalidDateFormat: Для первого заказа с некорректной датой
        """
        placements = [self.place(order, granularity) for order in orders]
        logger.debug(f"Placed {len(placements)} work orders at {granularity.value} scale")
        return placements
