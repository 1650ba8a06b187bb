# WO Scheduler - Processing package
"""
Модули раскладки таймлайна: масштабы, разбиение интервала, позиции,
индикатор "сегодня", загрузка и хранение заказов.
"""

from src.processing.dates import InvalidDateFormat
from src.processing.layout import TimelineController, TimelineView, build_view
from src.processing.loader import DataLoader
from src.processing.models import TimelineBounds, WorkCenter, WorkOrder
from src.processing.partition import Increment, partition
from src.processing.position import BarPlacement, PositionMapper, PositionResult
from src.processing.scale import Granularity, ScaleTable
from src.processing.store import WorkOrderStore
from src.processing.viewport import ScrollTarget, center_on, today_offset

__all__ = [
    'InvalidDateFormat',
    'TimelineController',
    'TimelineView',
    'build_view',
    'DataLoader',
    'TimelineBounds',
    'WorkCenter',
    'WorkOrder',
    'Increment',
    'partition',
    'BarPlacement',
    'PositionMapper',
    'PositionResult',
    'Granularity',
    'ScaleTable',
    'WorkOrderStore',
    'ScrollTarget',
    'center_on',
    'today_offset',
]
