# WO Scheduler - Main Orchestrator
"""
Главный оркестратор построения таймлайна заказов.
Загружает конфигурацию и данные, выполняет выбор гранулярности
и сохраняет HTML-отчёты.
"""

import argparse
import logging
import sys
from datetime import date, datetime
from typing import Optional, List

from src.config import ConfigManager
from src.processing.dates import InvalidDateFormat
from src.processing.layout import TimelineController, TimelineView
from src.processing.loader import DataLoader
from src.processing.models import WorkOrder
from src.processing.position import BarPlacement
from src.processing.scale import Granularity
from src.processing.store import WorkOrderStore
from src.reports.generator import ReportGenerator
from src.reports.svg_generator import SVGTimelineGenerator, generate_report_filename

logger = logging.getLogger(__name__)


class TimelineReportOrchestrator:
    """Главный оркестратор построения отчётов таймлайна."""

    def __init__(self, config: ConfigManager, store: Optional[WorkOrderStore] = None):
        self.config = config
        self.controller = TimelineController(
            bounds=config.get_bounds(),
            scale_table=config.get_scale_table(),
            granularity=config.get_default_granularity(),
            week_starts_on=config.get_week_starts_on(),
        )
        self.data_loader = DataLoader()
        self.store = store
        self.reports = ReportGenerator(
            svg_generator=SVGTimelineGenerator(
                row_height=config.row_height,
                viewport_width=config.viewport_width,
            ),
            row_height=config.row_height,
        )

    def load_data(self) -> WorkOrderStore:
        """Загрузка рабочих центров и заказов в хранилище."""
        if self.store is None:
            self.store = WorkOrderStore(
                work_centers=self.data_loader.load_work_centers(self.config.work_centers_path or None),
                work_orders=self.data_loader.load_work_orders(self.config.work_orders_path or None),
            )
        return self.store

    def run(
        self,
        granularities: List[str],
        today: Optional[date] = None,
        output_format: str = 'html'
    ) -> List[str]:
        """Построение отчётов для последовательности выборов гранулярности.

        Args:
            granularities: Значения выбора ('day'/'week'/'month'); пустые игнорируются
            today: Дата индикатора (по умолчанию сегодня)
            output_format: 'html' или 'plotly'

        Returns:
            Пути к созданным файлам
        """
        store = self.load_data()
        report_date = today or date.today()
        paths = []

        for value in granularities:
            view = self.controller.select(
                value,
                viewport_width=self.config.viewport_width,
                today=report_date,
            )
            if view is None:
                continue

            work_orders = store.get_work_orders()
            placements = self.place_orders(view, work_orders)

            html_content = self.reports.generate_html_string(
                view,
                store.get_work_centers(),
                work_orders,
                placements,
                output_format=output_format,
            )
            filename = generate_report_filename(view.granularity.value, report_date)
            paths.append(self.reports.save_report(html_content, self.config.output_dir, filename))

            logger.info(
                f"Timeline {view.granularity.value}: {len(view.increments)} increments, "
                f"{len(placements)} bars, today at {view.today_offset_px}px, "
                f"scroll to {view.scroll_target.left_px}px"
            )

        return paths

    def place_orders(self, view: TimelineView, work_orders: List[WorkOrder]) -> List[BarPlacement]:
        """Размещение заказов; заказы с некорректными датами пропускаются."""
        placements = []
        for order in work_orders:
            try:
                placements.append(self.controller.mapper.place(order, view.granularity))
            except InvalidDateFormat as e:
                logger.warning(f"Work order {order.id} skipped: {e}")
        return placements


def parse_date(date_str: str) -> date:
    for fmt in ['%Y-%m-%d', '%d.%m.%Y']:
        try: return datetime.strptime(date_str, fmt).date()
        except ValueError: continue
    raise ValueError(f"Unknown date format: {date_str}")


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    parser = argparse.ArgumentParser(description='Work order timeline report')
    parser.add_argument('--granularity', type=str, nargs='+', default=None,
                        choices=[g.value for g in Granularity])
    parser.add_argument('--all', action='store_true', help='Build month, week and day reports')
    parser.add_argument('--orders', type=str, default=None)
    parser.add_argument('--centers', type=str, default=None)
    parser.add_argument('--out', type=str, default=None)
    parser.add_argument('--viewport-width', type=int, default=None)
    parser.add_argument('--today', type=str, default=None)
    parser.add_argument('--format', type=str, default='html', choices=['html', 'plotly'])
    parser.add_argument('--env', type=str, default=None)
    parser.add_argument('--config', type=str, default='timeline_config.json')
    args = parser.parse_args(argv)

    config = ConfigManager.load(env_path=args.env, timeline_config_path=args.config)
    if args.orders:
        config.work_orders_path = args.orders
    if args.centers:
        config.work_centers_path = args.centers
    if args.out:
        config.output_dir = args.out
    if args.viewport_width:
        config.viewport_width = args.viewport_width

    if args.all:
        granularities = [g.value for g in (Granularity.MONTH, Granularity.WEEK, Granularity.DAY)]
    else:
        granularities = args.granularity or [config.get_default_granularity().value]

    try:
        today = parse_date(args.today) if args.today else None
        orchestrator = TimelineReportOrchestrator(config)
        paths = orchestrator.run(granularities, today=today, output_format=args.format)
    except Exception as e:
        logger.error(f"Critical error: {e}", exc_info=True)
        return 1

    if not paths:
        logger.warning("No reports were generated")
        return 1

    print(f"Reports: {', '.join(paths)}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
