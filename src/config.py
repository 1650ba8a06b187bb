"""
ConfigManager - Управление конфигурацией приложения WO Scheduler.

Поддерживает:
- Глобальные настройки из .env
- Настройки таймлайна из timeline_config.json
"""

import json
import os
import sys
from dataclasses import dataclass
from typing import Optional, List
from dotenv import load_dotenv

from src.processing.dates import parse_weekday
from src.processing.models import TimelineBounds
from src.processing.scale import Granularity, ScaleTable, parse_granularity


@dataclass
class ConfigManager:
    """Загрузка и валидация конфигурации."""

    # Таймлайн
    timeline_start: str
    timeline_end: str
    scale_day: int
    scale_week: int
    scale_month: int
    default_granularity: str
    week_starts_on: str

    # Отображение
    viewport_width: int
    row_height: int

    # Данные и отчёты
    work_orders_path: str
    work_centers_path: str
    output_dir: str

    @classmethod
    def load(
        cls,
        env_path: Optional[str] = None,
        timeline_config_path: str = 'timeline_config.json'
    ) -> 'ConfigManager':
        """
        Загрузка конфигурации из .env и timeline_config.json.

        Args:
            env_path: Путь к .env файлу
            timeline_config_path: Путь к JSON-файлу с настройками таймлайна

        Returns:
            ConfigManager с загруженной конфигурацией

        Raises:
            SystemExit: При некорректных параметрах (exit code 1)
        """
        load_dotenv(dotenv_path=env_path)

        file_config = cls._load_timeline_config(timeline_config_path)

        # Приоритет: .env > timeline_config.json > defaults
        def get_param(env_key: str, json_key: str, default: str = '') -> str:
            value = os.getenv(env_key) or file_config.get(json_key, default)
            return str(value).strip()

        try:
            config = cls(
                timeline_start=get_param('TIMELINE_START', 'timeline_start', '2025-01-01'),
                timeline_end=get_param('TIMELINE_END', 'timeline_end', '2027-12-31'),
                scale_day=int(get_param('SCALE_DAY', 'scale_day', '90')),
                scale_week=int(get_param('SCALE_WEEK', 'scale_week', '16')),
                scale_month=int(get_param('SCALE_MONTH', 'scale_month', '3')),
                default_granularity=get_param('DEFAULT_GRANULARITY', 'default_granularity', 'month'),
                week_starts_on=get_param('WEEK_STARTS_ON', 'week_starts_on', 'sunday'),
                viewport_width=int(get_param('VIEWPORT_WIDTH', 'viewport_width', '1200')),
                row_height=int(get_param('ROW_HEIGHT', 'row_height', '48')),
                work_orders_path=get_param('WORK_ORDERS_PATH', 'work_orders_path'),
                work_centers_path=get_param('WORK_CENTERS_PATH', 'work_centers_path'),
                output_dir=get_param('OUTPUT_DIR', 'output_dir', 'reports'),
            )
        except ValueError as e:
            print(f"ERROR: Invalid configuration value: {e}", file=sys.stderr)
            sys.exit(1)

        errors = config.validation_errors()
        if errors:
            error_msg = f"Invalid configuration: {'; '.join(errors)}"
            print(f"ERROR: {error_msg}", file=sys.stderr)
            sys.exit(1)

        return config

    @classmethod
    def _load_timeline_config(cls, path: str) -> dict:
        """Загрузка JSON-конфигурации таймлайна."""
        if not os.path.exists(path):
            print(f"WARNING: Timeline config not found at {path}, using defaults",
                  file=sys.stderr)
            return {}

        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            print(f"ERROR: Invalid JSON in {path}: {e}", file=sys.stderr)
            sys.exit(1)

    def validation_errors(self) -> List[str]:
        """Список ошибок конфигурации (пустой, если всё корректно)."""
        errors = []

        # InvalidDateFormat - подкласс ValueError
        try:
            self.get_bounds()
        except ValueError as e:
            errors.append(str(e))

        for name in ('scale_day', 'scale_week', 'scale_month', 'viewport_width', 'row_height'):
            if getattr(self, name) <= 0:
                errors.append(f"{name} must be positive")

        if parse_granularity(self.default_granularity) is None:
            errors.append(f"unknown default_granularity '{self.default_granularity}'")

        try:
            parse_weekday(self.week_starts_on)
        except ValueError as e:
            errors.append(str(e))

        return errors

    def validate(self) -> bool:
        """Полная валидация конфигурации."""
        return not self.validation_errors()

    def get_bounds(self) -> TimelineBounds:
        return TimelineBounds.from_strings(self.timeline_start, self.timeline_end)

    def get_scale_table(self) -> ScaleTable:
        return ScaleTable.from_values(
            day=self.scale_day,
            week=self.scale_week,
            month=self.scale_month,
        )

    def get_default_granularity(self) -> Granularity:
        return parse_granularity(self.default_granularity) or Granularity.MONTH

    def get_week_starts_on(self) -> int:
        return parse_weekday(self.week_starts_on)
