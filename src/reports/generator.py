# WO Scheduler - Report Generator
"""
Модуль генерации отчётов таймлайна: HTML-страница (SVG) и Plotly-график.
"""

import logging
import os
from html import escape
from typing import Optional

import plotly.graph_objects as go

from src.processing.layout import TimelineView
from src.processing.models import STATUS_NAMES, WorkCenter, WorkOrder
from src.processing.position import BarPlacement
from src.processing.scale import GRANULARITY_LABELS
from src.reports.svg_generator import (
    DEFAULT_STATUS_COLOR,
    STATUS_COLORS,
    TODAY_COLOR,
    SVGTimelineGenerator,
)


logger = logging.getLogger(__name__)


class ReportGenerator:
    """
    Генерация отчётов таймлайна.

    Обеспечивает:
    - Построение Plotly-фигуры с полосами заказов по рабочим центрам
    - Конвертацию Plotly-фигур в HTML
    - Сохранение HTML-отчётов (SVG или Plotly) на диск
    """

    def __init__(
        self,
        svg_generator: Optional[SVGTimelineGenerator] = None,
        row_height: int = 48
    ):
        """
        Args:
            svg_generator: Генератор SVG-страниц
            row_height: Высота строки рабочего центра в пикселях
        """
        self.svg_generator = svg_generator or SVGTimelineGenerator(row_height=row_height)
        self.row_height = row_height

    def build_figure(
        self,
        view: TimelineView,
        work_centers: list[WorkCenter],
        work_orders: list[WorkOrder],
        placements: list[BarPlacement]
    ) -> go.Figure:
        """
        Построение Plotly-фигуры таймлайна.

        Ось X - пиксели таймлайна, деления шапки используются как метки оси.

        Args:
            view: Раскладка таймлайна
            work_centers: Рабочие центры (порядок строк)
            work_orders: Заказы (для названий и статусов)
            placements: Геометрия полос

        Returns:
            Plotly Figure
        """
        centers_by_id = {c.id: c.name for c in work_centers}
        orders_by_id = {o.id: o for o in work_orders}

        fig = go.Figure()

        for placement in placements:
            order = orders_by_id.get(placement.order_id)
            status = order.status if order else ''
            name = order.name if order else placement.order_id
            center_name = centers_by_id.get(placement.work_center_id, placement.work_center_id)

            fig.add_trace(go.Bar(
                x=[placement.width_px],
                y=[center_name],
                base=[placement.offset_px],
                orientation='h',
                marker_color=STATUS_COLORS.get(status, DEFAULT_STATUS_COLOR),
                name=name,
                hovertemplate=(
                    f"<b>{name}</b><br>"
                    f"Status: {STATUS_NAMES.get(status, status)}<br>"
                    f"{order.start_date if order else ''} - {order.end_date if order else ''}"
                    "<extra></extra>"
                ),
                showlegend=False,
            ))

        # Метки оси по началам делений в координатах полос
        tickvals = [view.increment_offset(inc) for inc in view.increments]
        ticktext = [inc.label for inc in view.increments]
        axis_start = tickvals[0] if tickvals else 0

        fig.add_vline(x=view.today_offset_px, line_color=TODAY_COLOR, line_width=2)

        fig.update_layout(
            title=f"Work Orders ({GRANULARITY_LABELS[view.granularity]})",
            xaxis=dict(
                range=[axis_start, axis_start + view.total_width_px],
                tickvals=tickvals,
                ticktext=ticktext,
                side='top',
            ),
            yaxis=dict(
                categoryorder='array',
                categoryarray=[c.name for c in reversed(work_centers)],
            ),
            height=max(len(work_centers), 1) * self.row_height + 120,
            barmode='overlay',
            showlegend=False,
        )

        return fig

    def fig_to_div(self, fig: go.Figure, title: str = "") -> str:
        """
        Конвертация Plotly-фигуры в HTML div.

        Args:
            fig: Plotly Figure объект
            title: Заголовок для div

        Returns:
            HTML-строка с div содержащим график
        """
        if fig is None:
            return f"<div class='chart-container'><h3>{escape(title)}</h3><p>No data</p></div>"

        chart_html = fig.to_html(
            full_html=False,
            include_plotlyjs=True,
            div_id=f"chart-{abs(hash(title)) % 10000}"
        )

        return f"""<div class='chart-container'>
    <h3>{escape(title)}</h3>
    {chart_html}
</div>"""

    def generate_html_string(
        self,
        view: TimelineView,
        work_centers: list[WorkCenter],
        work_orders: list[WorkOrder],
        placements: list[BarPlacement],
        output_format: str = 'html',
        title: str = 'Work Order Timeline'
    ) -> str:
        """
        Генерация HTML-отчёта в строку.

        Args:
            output_format: 'html' (SVG-страница) или 'plotly'

        Returns:
            HTML-строка
        """
        if output_format == 'plotly':
            fig = self.build_figure(view, work_centers, work_orders, placements)
            return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{escape(title)}</title>
</head>
<body>
{self.fig_to_div(fig, title)}
</body>
</html>"""

        if output_format != 'html':
            raise ValueError(f"Unknown report format: {output_format}")

        return self.svg_generator.generate_timeline_html(
            view, work_centers, work_orders, placements, title=title
        )

    def save_report(self, html_content: str, output_dir: str, filename: str) -> str:
        """
        Сохранение HTML-отчёта.

        Returns:
            Путь к созданному файлу
        """
        os.makedirs(output_dir, exist_ok=True)
        path = os.path.join(output_dir, filename)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(html_content)
        logger.info(f"Report saved: {path}")
        return path


def validate_html_structure(html: str) -> dict:
    """
    Проверка структуры HTML-отчёта таймлайна.

    Args:
        html: HTML-строка

    Returns:
        Словарь с результатами проверки:
        - has_header: наличие шапки делений
        - increments_count: количество делений
        - current_increments_count: количество подсвеченных делений
        - bars_count: количество полос заказов
        - has_today_line: наличие линии "сегодня"
        - has_plotly_chart: наличие Plotly-графика
    """
    result = {
        'has_header': 'class="timeline-header"' in html,
        'increments_count': html.count('class="increment'),
        'current_increments_count': html.count('class="increment current"'),
        'bars_count': html.count('class="bar"'),
        'has_today_line': 'class="today-line"' in html,
        'has_plotly_chart': False,
    }

    plotly_markers = [
        'plotly-graph-div',
        'Plotly.newPlot',
    ]
    for marker in plotly_markers:
        if marker in html:
            result['has_plotly_chart'] = True

    return result
