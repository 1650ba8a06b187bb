# WO Scheduler - Tests for DataLoader
"""
Tests for loading work centers and work orders from CSV/JSON files.
"""

import json

import pandas as pd
import pytest
from hypothesis import given, strategies as st, settings

from src.processing.loader import COLUMN_MAPPING, DataLoader, normalize_columns
from src.processing.models import WorkOrder
from src.processing.store import DEFAULT_WORK_CENTERS, DEFAULT_WORK_ORDERS


@pytest.fixture
def loader():
    return DataLoader()


class TestDataLoader:
    """Загрузка заказов и рабочих центров."""

    def test_no_path_uses_builtin_data(self, loader):
        assert loader.load_work_orders(None) == DEFAULT_WORK_ORDERS
        assert loader.load_work_centers('') == DEFAULT_WORK_CENTERS

    def test_missing_file_uses_builtin_data(self, loader, tmp_path):
        assert loader.load_work_orders(str(tmp_path / 'missing.csv')) == DEFAULT_WORK_ORDERS

    def test_csv_orders(self, loader, tmp_path):
        path = tmp_path / 'orders.csv'
        path.write_text(
            'Id,Work_Center_Id,Name,Status,Start_Date,End_Date\n'
            'wo_1,wc_1,Bicycle World,complete,2026-01-05,2026-04-15\n'
            'wo_2,wc_2,Handlebar Systems,,2025-11-10,2026-08-20\n',
            encoding='utf-8',
        )

        orders = loader.load_work_orders(str(path))

        assert orders == [
            WorkOrder('wo_1', 'wc_1', '2026-01-05', '2026-04-15', 'Bicycle World', 'complete'),
            WorkOrder('wo_2', 'wc_2', '2025-11-10', '2026-08-20', 'Handlebar Systems', 'open'),
        ]

    def test_incomplete_rows_are_dropped(self, loader, tmp_path):
        path = tmp_path / 'orders.csv'
        path.write_text(
            'id,work_center_id,start_date,end_date\n'
            'wo_1,wc_1,2026-01-05,2026-04-15\n'
            'wo_2,,2026-01-05,2026-04-15\n'
            'wo_3,wc_1,,2026-04-15\n',
            encoding='utf-8',
        )

        orders = loader.load_work_orders(str(path))

        assert [o.id for o in orders] == ['wo_1']

    def test_dates_are_kept_as_strings(self, loader, tmp_path):
        path = tmp_path / 'orders.csv'
        path.write_text(
            'id,work_center_id,start_date,end_date\n'
            'wo_1,wc_1,2026-01-05,not-a-date\n',
            encoding='utf-8',
        )

        orders = loader.load_work_orders(str(path))

        assert orders[0].end_date == 'not-a-date'

    def test_missing_required_column_raises(self, loader, tmp_path):
        path = tmp_path / 'orders.csv'
        path.write_text('id,start_date,end_date\nwo_1,2026-01-05,2026-04-15\n', encoding='utf-8')

        with pytest.raises(ValueError):
            loader.load_work_orders(str(path))

    def test_json_documents(self, loader, tmp_path):
        path = tmp_path / 'orders.json'
        path.write_text(json.dumps([
            {
                'docId': 'wo_1', 'docType': 'workOrder',
                'data': {
                    'name': 'Bicycle World', 'workCenterId': 'wc_1', 'status': 'complete',
                    'startDate': '2026-01-05', 'endDate': '2026-04-15',
                },
            },
        ]), encoding='utf-8')

        orders = loader.load_work_orders(str(path))

        assert orders == [
            WorkOrder('wo_1', 'wc_1', '2026-01-05', '2026-04-15', 'Bicycle World', 'complete'),
        ]

    def test_json_work_centers(self, loader, tmp_path):
        path = tmp_path / 'centers.json'
        path.write_text(json.dumps([
            {'docId': 'wc_1', 'docType': 'workCenter', 'data': {'name': 'Funnel Distribution'}},
            {'id': 'wc_2', 'name': 'Software Handling'},
        ]), encoding='utf-8')

        centers = loader.load_work_centers(str(path))

        assert [(c.id, c.name) for c in centers] == [
            ('wc_1', 'Funnel Distribution'),
            ('wc_2', 'Software Handling'),
        ]


@settings(max_examples=50)
@given(
    variant=st.sampled_from(list(COLUMN_MAPPING.keys())),
    upper=st.booleans(),
)
def test_column_variants_are_normalized(variant, upper):
    """
    Feature: wo-scheduler, Property: Column name normalization

    Any known column spelling maps to its standard name regardless of case.
    """
    name = variant.upper() if upper else variant
    df = normalize_columns(pd.DataFrame(columns=[f' {name} ']))

    assert list(df.columns) == [COLUMN_MAPPING[variant]]
