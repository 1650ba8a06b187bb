# WO Scheduler - SVG Timeline Generator
"""
Модуль генерации HTML-страницы таймлайна заказов (SVG-полосы).

Особенности:
- Шапка из делений текущей гранулярности, текущее деление подсвечено
- Строка на каждый рабочий центр, полосы окрашены по статусу
- Вертикальная линия "сегодня"
- Центрирование прокрутки на индикаторе после загрузки
- Полностью оффлайн (без CDN)
"""

import html
import json
from datetime import date
from typing import Optional

from src.processing.layout import TimelineView
from src.processing.models import STATUS_NAMES, WorkCenter, WorkOrder
from src.processing.position import BarPlacement
from src.processing.scale import GRANULARITY_LABELS


# Цвета статусов заказов
STATUS_COLORS = {
    'open': '#3498DB',
    'in-progress': '#8E44AD',
    'complete': '#27AE60',
    'blocked': '#E67E22',
}

DEFAULT_STATUS_COLOR = '#95A5A6'
TODAY_COLOR = '#E74C3C'


def lighten_color(hex_color: str, factor: float = 0.4) -> str:
    """Осветление цвета для заливки полос."""
    hex_color = hex_color.lstrip('#')
    r, g, b = int(hex_color[0:2], 16), int(hex_color[2:4], 16), int(hex_color[4:6], 16)
    r = int(r + (255 - r) * factor)
    g = int(g + (255 - g) * factor)
    b = int(b + (255 - b) * factor)
    return f'#{r:02x}{g:02x}{b:02x}'


class SVGTimelineGenerator:
    """Генератор HTML-страниц таймлайна заказов."""

    def __init__(self, row_height: int = 48, viewport_width: int = 1200):
        """
        Args:
            row_height: Высота строки рабочего центра в пикселях
            viewport_width: Ширина видимой области по умолчанию
        """
        self.row_height = row_height
        self.viewport_width = viewport_width

    def _generate_header(self, view: TimelineView) -> str:
        """Шапка таймлайна из делений."""
        cells = []
        for inc in view.increments:
            css_class = 'increment current' if inc.is_current else 'increment'
            cells.append(
                f'<div class="{css_class}" style="width:{inc.width_px}px" '
                f'data-start="{inc.start.isoformat()}">{html.escape(inc.label)}</div>'
            )
        return ''.join(cells)

    def _generate_rows(
        self,
        view: TimelineView,
        work_centers: list[WorkCenter],
        orders: dict[str, WorkOrder],
        placements: list[BarPlacement]
    ) -> tuple[str, str]:
        """Строки рабочих центров.

        Returns:
            Tuple (HTML подписей строк, SVG-содержимое полос)
        """
        labels_html = []
        svg_parts = []
        bar_height = self.row_height - 16

        for row_index, center in enumerate(work_centers):
            y = row_index * self.row_height
            labels_html.append(
                f'<div class="row-label" style="height:{self.row_height}px">'
                f'{html.escape(center.name)}</div>'
            )
            svg_parts.append(
                f'<line x1="0" y1="{y + self.row_height}" x2="{view.total_width_px}" '
                f'y2="{y + self.row_height}" class="row-line"/>'
            )

            for placement in placements:
                if placement.work_center_id != center.id:
                    continue
                order = orders.get(placement.order_id)
                status = order.status if order else ''
                name = order.name if order else placement.order_id
                color = STATUS_COLORS.get(status, DEFAULT_STATUS_COLOR)
                svg_parts.append(
                    f'<g class="bar" data-order-id="{html.escape(placement.order_id)}">'
                    f'<rect x="{placement.offset_px}" y="{y + 8}" width="{max(placement.width_px, 0)}" '
                    f'height="{bar_height}" rx="6" fill="{lighten_color(color, 0.7)}" stroke="{color}"/>'
                    f'<text x="{placement.offset_px + 8}" y="{y + 8 + bar_height / 2 + 4}" '
                    f'class="bar-label">{html.escape(name)} · {STATUS_NAMES.get(status, status)}</text>'
                    f'</g>'
                )

        return ''.join(labels_html), ''.join(svg_parts)

    def generate_timeline_html(
        self,
        view: TimelineView,
        work_centers: list[WorkCenter],
        work_orders: list[WorkOrder],
        placements: list[BarPlacement],
        title: str = 'Work Order Timeline'
    ) -> str:
        """Генерация полного HTML таймлайна.

        Args:
            view: Раскладка от TimelineController / build_view
            work_centers: Рабочие центры (порядок строк)
            work_orders: Заказы (для названий и статусов)
            placements: Геометрия полос
            title: Заголовок страницы

        Returns:
            HTML-строка
        """
        orders_by_id = {o.id: o for o in work_orders}
        header_html = self._generate_header(view)
        labels_html, svg_content = self._generate_rows(view, work_centers, orders_by_id, placements)
        svg_height = max(len(work_centers), 1) * self.row_height

        initial_scroll = view.scroll_target.left_px if view.scroll_target else 0
        js_data = json.dumps({
            'granularity': view.granularity.value,
            'pixelsPerDay': view.pixels_per_day,
            'todayOffset': view.today_offset_px,
            'initialScroll': initial_scroll,
            'totalWidth': view.total_width_px,
        })

        return f'''<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{html.escape(title)}</title>
{self._get_css()}
</head>
<body>
<div class="container">
<div class="card">
<div class="header">
  <div class="title">{html.escape(title)}</div>
  <div class="subtitle">Timescale: {GRANULARITY_LABELS[view.granularity]}</div>
</div>
<div class="timeline">
  <div class="row-labels">
    <div class="row-label header-spacer">Work Center</div>
    {labels_html}
  </div>
  <div class="viewport" id="timelineViewport" style="max-width:{self.viewport_width}px">
    <div class="canvas" style="width:{view.total_width_px}px">
      <div class="timeline-header">{header_html}</div>
      <svg id="timelineSvg" width="{view.total_width_px}" height="{svg_height}">
        {svg_content}
        <line x1="{view.today_offset_px}" y1="0" x2="{view.today_offset_px}" y2="{svg_height}" class="today-line"/>
      </svg>
    </div>
  </div>
</div>
</div>
</div>
{self._get_js_script(js_data)}
</body>
</html>'''

    def _get_css(self) -> str:
        """Возвращает CSS стили."""
        return f'''<style>
* {{ box-sizing: border-box; margin: 0; padding: 0; }}
body {{ font-family: 'Segoe UI', Arial, sans-serif; background: #f0f2f5; padding: 24px; color: #333; }}
.container {{ max-width: 1600px; margin: 0 auto; }}
.card {{ background: #fff; border-radius: 12px; box-shadow: 0 2px 12px rgba(0,0,0,0.08); padding: 20px; }}
.header {{ margin-bottom: 20px; }}
.title {{ font-size: 22px; font-weight: 600; color: #1a1a2e; }}
.subtitle {{ font-size: 14px; color: #666; margin-top: 4px; }}
.timeline {{ display: flex; }}
.row-labels {{ flex-shrink: 0; width: 200px; border-right: 1px solid #e0e0e0; }}
.row-label {{ display: flex; align-items: center; padding: 0 12px; font-size: 13px; border-bottom: 1px solid #eee; height: {self.row_height}px; }}
.header-spacer {{ height: 32px; font-weight: 600; color: #666; }}
.viewport {{ flex: 1; overflow-x: auto; background: #fafafa; }}
.timeline-header {{ display: flex; height: 32px; border-bottom: 1px solid #e0e0e0; }}
.increment {{ flex-shrink: 0; font-size: 11px; color: #666; padding: 8px 4px; border-left: 1px solid #eee; white-space: nowrap; overflow: hidden; }}
.increment.current {{ background: #e3f2fd; color: #1976d2; font-weight: 600; }}
.row-line {{ stroke: #eee; }}
.today-line {{ stroke: {TODAY_COLOR}; stroke-width: 2; }}
.bar-label {{ font-size: 12px; fill: #1a1a2e; }}
</style>'''

    def _get_js_script(self, js_data: str) -> str:
        """JavaScript для центрирования прокрутки на индикаторе."""
        return f'''
<script>
const DATA = {js_data};

function scrollToToday() {{
  const viewport = document.getElementById('timelineViewport');
  if (!viewport) return;
  viewport.scrollTo({{ left: DATA.todayOffset - viewport.clientWidth / 2, behavior: 'smooth' }});
}}

document.addEventListener('DOMContentLoaded', function() {{
  const viewport = document.getElementById('timelineViewport');
  if (viewport) viewport.scrollLeft = DATA.initialScroll;
  setTimeout(scrollToToday, 50);
}});
</script>'''


def generate_report_filename(granularity: str, report_date: Optional[date]) -> str:
    """Генерация имени файла отчёта.

    Args:
        granularity: Гранулярность ('day'/'week'/'month')
        report_date: Дата отчёта

    Returns:
        Имя файла в формате "WO_Timeline_{granularity}_{dd-mm-yyyy}.html"
    """
    date_str = report_date.strftime('%d-%m-%Y') if report_date else 'unknown'
    safe_name = "".join(c for c in granularity if c.isalnum() or c in ('-', '_')).strip()
    return f"WO_Timeline_{safe_name}_{date_str}.html"
