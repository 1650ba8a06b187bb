# WO Scheduler - Data Loader
"""
Модуль загрузки рабочих центров и заказов из CSV/JSON файлов.
"""

import json
import logging
import os
from typing import Optional

import pandas as pd

from src.processing.models import WORK_ORDER_STATUSES, WorkCenter, WorkOrder
from src.processing.store import DEFAULT_WORK_CENTERS, DEFAULT_WORK_ORDERS

logger = logging.getLogger(__name__)


# Маппинг вариантов названий колонок к стандартным именам
COLUMN_MAPPING = {
    # ID
    'id': 'id',
    'docid': 'id',
    'doc_id': 'id',

    # Название
    'name': 'name',
    'data.name': 'name',

    # Рабочий центр
    'work_center_id': 'work_center_id',
    'workcenterid': 'work_center_id',
    'data.workcenterid': 'work_center_id',
    'work_center': 'work_center_id',

    # Статус
    'status': 'status',
    'data.status': 'status',

    # Даты
    'start_date': 'start_date',
    'startdate': 'start_date',
    'data.startdate': 'start_date',
    'start': 'start_date',
    'end_date': 'end_date',
    'enddate': 'end_date',
    'data.enddate': 'end_date',
    'end': 'end_date',
}

ORDER_REQUIRED_COLUMNS = ['id', 'work_center_id', 'start_date', 'end_date']
CENTER_REQUIRED_COLUMNS = ['id', 'name']


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Приведение названий колонок к стандартным."""
    renamed = {}
    for col in df.columns:
        key = str(col).strip().lower()
        if key in COLUMN_MAPPING:
            renamed[col] = COLUMN_MAPPING[key]
    df = df.rename(columns=renamed)

    # Плоские записи и документы {docId, data} в одном файле дают дубли колонок
    if df.columns.has_duplicates:
        merged = {}
        for name in dict.fromkeys(df.columns):
            block = df.loc[:, df.columns == name]
            merged[name] = block.bfill(axis=1).iloc[:, 0]
        df = pd.DataFrame(merged, index=df.index)

    return df


class DataLoader:
    """Загрузка данных таймлайна из файлов.

    Обеспечивает:
    - Чтение CSV и JSON (плоские записи или документы вида {docId, data: {...}})
    - Нормализацию названий колонок
    - Отбрасывание неполных строк с предупреждением
    - Возврат к встроенному набору данных, если файл не указан или не найден
    """

    def load_work_orders(self, path: Optional[str] = None) -> list[WorkOrder]:
        """Загрузка заказов.

        Args:
            path: Путь к CSV/JSON файлу

        Returns:
            Список WorkOrder в порядке файла
        """
        df = self._read_table(path)
        if df is None:
            logger.info(f"Using built-in work orders ({len(DEFAULT_WORK_ORDERS)})")
            return list(DEFAULT_WORK_ORDERS)

        df = self._drop_incomplete(df, ORDER_REQUIRED_COLUMNS, path)
        if df.empty:
            return []

        orders = []
        for _, row in df.iterrows():
            status = self._clean(row.get('status')) or 'open'
            if status not in WORK_ORDER_STATUSES:
                logger.warning(f"Unknown status '{status}' for work order {row['id']}")
            orders.append(WorkOrder(
                id=self._clean(row['id']),
                work_center_id=self._clean(row['work_center_id']),
                start_date=self._clean(row['start_date']),
                end_date=self._clean(row['end_date']),
                name=self._clean(row.get('name')),
                status=status,
            ))

        logger.info(f"Loaded {len(orders)} work orders from {path}")
        return orders

    def load_work_centers(self, path: Optional[str] = None) -> list[WorkCenter]:
        """Загрузка рабочих центров.

        Args:
            path: Путь к CSV/JSON файлу

        Returns:
            Список WorkCenter в порядке файла
        """
        df = self._read_table(path)
        if df is None:
            logger.info(f"Using built-in work centers ({len(DEFAULT_WORK_CENTERS)})")
            return list(DEFAULT_WORK_CENTERS)

        df = self._drop_incomplete(df, CENTER_REQUIRED_COLUMNS, path)
        centers = [
            WorkCenter(id=self._clean(row['id']), name=self._clean(row['name']))
            for _, row in df.iterrows()
        ]

        logger.info(f"Loaded {len(centers)} work centers from {path}")
        return centers

    def _read_table(self, path: Optional[str]) -> Optional[pd.DataFrame]:
        """Чтение файла в DataFrame со стандартными колонками.

        Returns:
            DataFrame или None, если файл не указан или не найден
        """
        if not path:
            return None

        if not os.path.exists(path):
            logger.warning(f"Data file not found at {path}, using built-in data")
            return None

        if path.lower().endswith('.json'):
            with open(path, 'r', encoding='utf-8') as f:
                records = json.load(f)
            df = pd.json_normalize(records)
        else:
            df = pd.read_csv(path, dtype=str, keep_default_na=False)

        return normalize_columns(df)

    @staticmethod
    def _drop_incomplete(df: pd.DataFrame, required: list[str], path: str) -> pd.DataFrame:
        missing = [col for col in required if col not in df.columns]
        if missing:
            raise ValueError(f"{path}: missing required columns: {', '.join(missing)}")

        result = df.copy()
        for col in required:
            result[col] = result[col].map(DataLoader._clean)
        mask = (result[required] != '').all(axis=1)

        dropped = int((~mask).sum())
        if dropped:
            logger.warning(f"{path}: skipped {dropped} incomplete rows")

        return result[mask].reset_index(drop=True)

    @staticmethod
    def _clean(value) -> str:
        if value is None:
            return ''
        if isinstance(value, float) and pd.isna(value):
            return ''
        return str(value).strip()
