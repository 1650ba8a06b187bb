# WO Scheduler - Reports package
"""
Модули генерации отчётов: HTML (SVG-таймлайн) и Plotly.
"""

from src.reports.generator import (
    ReportGenerator,
    validate_html_structure,
)

from src.reports.svg_generator import (
    SVGTimelineGenerator,
    generate_report_filename,
    STATUS_COLORS,
)
