"""
Tests for TimelineReportOrchestrator and the command line entry point.

Feature: wo-scheduler, Property: Reports follow the selection sequence
"""

import os
from datetime import date

import pytest
from hypothesis import given, strategies as st, settings, HealthCheck
from unittest.mock import patch

from src.config import ConfigManager
from src.main import TimelineReportOrchestrator, main, parse_date
from src.processing.models import WorkCenter, WorkOrder
from src.processing.scale import Granularity
from src.processing.store import WorkOrderStore


TODAY = date(2026, 1, 5)


def make_config(output_dir: str, **overrides) -> ConfigManager:
    """Создаёт валидную конфигурацию без чтения .env."""
    values = dict(
        timeline_start='2025-01-01',
        timeline_end='2027-12-31',
        scale_day=90,
        scale_week=16,
        scale_month=3,
        default_granularity='month',
        week_starts_on='sunday',
        viewport_width=1200,
        row_height=48,
        work_orders_path='',
        work_centers_path='',
        output_dir=output_dir,
    )
    values.update(overrides)
    return ConfigManager(**values)


def run_main(argv):
    """Запуск main() с пустым окружением."""
    with patch('src.config.load_dotenv'):
        with patch('os.getenv', side_effect=lambda key, default=None: default):
            return main(argv)


class TestOrchestrator:
    """Построение отчётов."""

    def test_reports_for_each_selection(self, tmp_path):
        orchestrator = TimelineReportOrchestrator(make_config(str(tmp_path)))

        paths = orchestrator.run(['month', 'week', 'day'], today=TODAY)

        assert [os.path.basename(p) for p in paths] == [
            'WO_Timeline_month_05-01-2026.html',
            'WO_Timeline_week_05-01-2026.html',
            'WO_Timeline_day_05-01-2026.html',
        ]
        assert orchestrator.controller.granularity is Granularity.DAY

    def test_empty_and_unknown_selections_are_skipped(self, tmp_path):
        orchestrator = TimelineReportOrchestrator(make_config(str(tmp_path)))

        paths = orchestrator.run(['', 'week', 'year'], today=TODAY)

        assert len(paths) == 1
        assert orchestrator.controller.granularity is Granularity.WEEK

    def test_orders_with_bad_dates_are_skipped(self, tmp_path):
        store = WorkOrderStore(
            work_centers=[WorkCenter('wc_1', 'Assembly')],
            work_orders=[
                WorkOrder('wo_1', 'wc_1', '2026-01-05', '2026-04-15'),
                WorkOrder('wo_2', 'wc_1', '2026-01-05', '15.04.2026'),
            ],
        )
        orchestrator = TimelineReportOrchestrator(make_config(str(tmp_path)), store=store)
        view = orchestrator.controller.select('month', today=TODAY)

        placements = orchestrator.place_orders(view, store.get_work_orders())

        assert [p.order_id for p in placements] == ['wo_1']
        assert placements[0].offset_px == 1107

    def test_data_loaded_from_files(self, tmp_path):
        orders = tmp_path / 'orders.csv'
        orders.write_text(
            'id,work_center_id,start_date,end_date\nwo_1,wc_9,2026-01-05,2026-01-06\n',
            encoding='utf-8',
        )
        centers = tmp_path / 'centers.csv'
        centers.write_text('id,name\nwc_9,Paint Shop\n', encoding='utf-8')

        orchestrator = TimelineReportOrchestrator(make_config(
            str(tmp_path / 'out'),
            work_orders_path=str(orders),
            work_centers_path=str(centers),
        ))
        store = orchestrator.load_data()

        assert [c.name for c in store.get_work_centers()] == ['Paint Shop']
        assert [o.id for o in store.get_work_orders()] == ['wo_1']


class TestMain:
    """Точка входа командной строки."""

    def test_all_granularities(self, tmp_path):
        out = tmp_path / 'reports'

        code = run_main([
            '--all',
            '--out', str(out),
            '--today', '2026-01-05',
            '--config', str(tmp_path / 'missing.json'),
        ])

        assert code == 0
        assert sorted(os.listdir(out)) == [
            'WO_Timeline_day_05-01-2026.html',
            'WO_Timeline_month_05-01-2026.html',
            'WO_Timeline_week_05-01-2026.html',
        ]

    def test_plotly_format(self, tmp_path):
        code = run_main([
            '--granularity', 'week',
            '--format', 'plotly',
            '--out', str(tmp_path),
            '--today', '05.01.2026',
            '--config', str(tmp_path / 'missing.json'),
        ])

        assert code == 0
        with open(tmp_path / 'WO_Timeline_week_05-01-2026.html', encoding='utf-8') as f:
            assert 'plotly-graph-div' in f.read()

    def test_bad_today_returns_error(self, tmp_path):
        code = run_main([
            '--out', str(tmp_path),
            '--today', 'yesterday',
            '--config', str(tmp_path / 'missing.json'),
        ])

        assert code == 1

    def test_unknown_granularity_rejected_by_parser(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            run_main(['--granularity', 'year', '--config', str(tmp_path / 'missing.json')])

        assert exc_info.value.code == 2


class TestParseDate:

    def test_formats(self):
        assert parse_date('2026-01-05') == TODAY
        assert parse_date('05.01.2026') == TODAY

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            parse_date('01/05/2026')


@settings(max_examples=10, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(sequence=st.lists(st.sampled_from(['day', 'week', 'month', '']), max_size=4))
def test_one_report_per_valid_selection(tmp_path, sequence):
    """
    Feature: wo-scheduler, Property: Reports follow the selection sequence

    Every non-empty selection produces exactly one report for that
    granularity, empty selections produce none.
    """
    orchestrator = TimelineReportOrchestrator(make_config(str(tmp_path)))

    paths = orchestrator.run(sequence, today=TODAY)

    expected = [f'WO_Timeline_{v}_05-01-2026.html' for v in sequence if v]
    assert [os.path.basename(p) for p in paths] == expected
