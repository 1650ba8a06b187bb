# WO Scheduler - Work Order Store
"""
Хранилище рабочих центров и заказов в памяти с уведомлением подписчиков
об изменениях. Долговременное хранение не поддерживается.
"""

import logging
import threading
from typing import Callable, Iterable, Optional

from src.processing.models import WorkCenter, WorkOrder

logger = logging.getLogger(__name__)


DEFAULT_WORK_CENTERS = [
    WorkCenter('wc_1', 'Funnel Distribution'),
    WorkCenter('wc_2', 'Software Handling'),
    WorkCenter('wc_3', 'Assembled Electronics'),
    WorkCenter('wc_4', 'Awesome Hardware'),
    WorkCenter('wc_5', 'Tims Manufacturing'),
]

DEFAULT_WORK_ORDERS = [
    WorkOrder('wo_1', 'wc_1', '2026-01-05', '2026-04-15', 'Bicycle World', 'complete'),
    WorkOrder('wo_2', 'wc_2', '2025-11-10', '2026-08-20', 'Handlebar Systems', 'in-progress'),
    WorkOrder('wo_3', 'wc_3', '2025-10-15', '2026-01-15', 'Final Distribution', 'complete'),
    WorkOrder('wo_4', 'wc_4', '2025-12-01', '2026-04-15', 'Paint Inspection Ltd', 'blocked'),
    WorkOrder('wo_5', 'wc_5', '2026-02-01', '2026-08-30', 'Crate Builders', 'open'),
    WorkOrder('wo_6', 'wc_3', '2026-01-18', '2026-05-15', 'Hammond Assembly Inc', 'in-progress'),
    WorkOrder('wo_7', 'wc_1', '2026-06-01', '2026-11-01', 'Metrics Measured', 'open'),
    WorkOrder('wo_8', 'wc_3', '2026-06-01', '2027-04-01', 'Chain Inc', 'open'),
    WorkOrder('wo_9', 'wc_2', '2027-01-15', '2027-06-15', 'Global Logistics Corp', 'open'),
    WorkOrder('wo_10', 'wc_4', '2026-04-21', '2027-08-01', 'Vertex Systems', 'in-progress'),
]

Subscriber = Callable[[list[WorkOrder]], None]


class WorkOrderStore:
    """Упорядоченные по вставке последовательности центров и заказов."""

    def __init__(
        self,
        work_centers: Optional[Iterable[WorkCenter]] = None,
        work_orders: Optional[Iterable[WorkOrder]] = None
    ):
        """
        Args:
            work_centers: Начальные рабочие центры (по умолчанию DEFAULT_WORK_CENTERS)
            work_orders: Начальные заказы (по умолчанию DEFAULT_WORK_ORDERS)
        """
        self._work_centers = list(DEFAULT_WORK_CENTERS if work_centers is None else work_centers)
        self._work_orders = list(DEFAULT_WORK_ORDERS if work_orders is None else work_orders)
        self._subscribers: list[Subscriber] = []
        self._lock = threading.Lock()

    def get_work_centers(self) -> list[WorkCenter]:
        with self._lock:
            return list(self._work_centers)

    def get_work_orders(self) -> list[WorkOrder]:
        with self._lock:
            return list(self._work_orders)

    def get_work_order(self, order_id: str) -> Optional[WorkOrder]:
        with self._lock:
            for order in self._work_orders:
                if order.id == order_id:
                    return order
        return None

    def orders_for_center(self, work_center_id: str) -> list[WorkOrder]:
        with self._lock:
            return [o for o in self._work_orders if o.work_center_id == work_center_id]

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Подписка на изменения списка заказов.

        Returns:
            Функция отписки
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def add_work_order(self, order: WorkOrder) -> None:
        with self._lock:
            if any(o.id == order.id for o in self._work_orders):
                raise ValueError(f"Work order {order.id} already exists")
            self._work_orders.append(order)
            snapshot = list(self._work_orders)
        logger.info(f"Work order added: {order.id}")
        self._notify(snapshot)

    def update_work_order(self, order: WorkOrder) -> bool:
        """Замена заказа с тем же id; неизвестный id игнорируется."""
        with self._lock:
            for index, existing in enumerate(self._work_orders):
                if existing.id == order.id:
                    self._work_orders[index] = order
                    snapshot = list(self._work_orders)
                    break
            else:
                logger.debug(f"Update ignored, work order {order.id} not found")
                return False
        logger.info(f"Work order updated: {order.id}")
        self._notify(snapshot)
        return True

    def delete_work_order(self, order_id: str) -> bool:
        """Удаление заказа по id; неизвестный id игнорируется."""
        with self._lock:
            remaining = [o for o in self._work_orders if o.id != order_id]
            if len(remaining) == len(self._work_orders):
                logger.debug(f"Delete ignored, work order {order_id} not found")
                return False
            self._work_orders = remaining
            snapshot = list(remaining)
        logger.info(f"Work order deleted: {order_id}")
        self._notify(snapshot)
        return True

    def _notify(self, orders: list[WorkOrder]) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            callback(orders)
