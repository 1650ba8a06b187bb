"""
Tests for ConfigManager.

Feature: wo-scheduler, Property: Invalid config termination
"""

import json

import pytest
from hypothesis import given, strategies as st, settings
from unittest.mock import patch

from src.config import ConfigManager
from src.processing.models import TimelineBounds
from src.processing.scale import Granularity, ScaleTable


def create_valid_env() -> dict:
    """Создаёт полный набор валидных переменных окружения."""
    return {
        'TIMELINE_START': '2025-01-01',
        'TIMELINE_END': '2027-12-31',
        'SCALE_DAY': '90',
        'SCALE_WEEK': '16',
        'SCALE_MONTH': '3',
        'DEFAULT_GRANULARITY': 'week',
        'WEEK_STARTS_ON': 'sunday',
        'VIEWPORT_WIDTH': '1000',
        'ROW_HEIGHT': '40',
        'OUTPUT_DIR': 'out',
    }


def load_with_env(env: dict, config_path: str):
    """Загрузка конфигурации с подменённым окружением."""
    def mock_getenv(key, default=None):
        return env.get(key, default)

    # Патчим load_dotenv чтобы не загружать реальный .env файл
    with patch('src.config.load_dotenv'):
        with patch('os.getenv', side_effect=mock_getenv):
            return ConfigManager.load(timeline_config_path=config_path)


@pytest.fixture
def missing_json(tmp_path):
    return str(tmp_path / 'missing.json')


class TestConfigLoad:
    """Загрузка конфигурации."""

    def test_valid_env(self, missing_json):
        config = load_with_env(create_valid_env(), missing_json)

        assert config.get_bounds() == TimelineBounds.from_strings('2025-01-01', '2027-12-31')
        assert config.get_scale_table() == ScaleTable()
        assert config.get_default_granularity() is Granularity.WEEK
        assert config.get_week_starts_on() == 6
        assert config.viewport_width == 1000
        assert config.row_height == 40
        assert config.output_dir == 'out'
        assert config.work_orders_path == ''
        assert config.validate()

    def test_defaults_without_env_or_json(self, missing_json, capsys):
        config = load_with_env({}, missing_json)

        assert config.timeline_start == '2025-01-01'
        assert config.timeline_end == '2027-12-31'
        assert config.get_default_granularity() is Granularity.MONTH
        assert config.output_dir == 'reports'
        assert 'WARNING' in capsys.readouterr().err

    def test_json_values_used_when_env_missing(self, tmp_path):
        path = tmp_path / 'timeline_config.json'
        path.write_text(json.dumps({
            'timeline_start': '2026-01-01',
            'timeline_end': '2026-12-31',
            'scale_month': 5,
            'week_starts_on': 'monday',
        }), encoding='utf-8')

        env = {'SCALE_MONTH': '4'}
        config = load_with_env(env, str(path))

        assert config.get_bounds().total_days == 365
        assert config.scale_month == 4
        assert config.get_week_starts_on() == 0

    def test_invalid_json_terminates(self, tmp_path):
        path = tmp_path / 'timeline_config.json'
        path.write_text('{not json', encoding='utf-8')

        with pytest.raises(SystemExit) as exc_info:
            load_with_env({}, str(path))

        assert exc_info.value.code == 1

    @pytest.mark.parametrize('key,value', [
        ('TIMELINE_START', '2028-01-01'),
        ('TIMELINE_END', '31.12.2027'),
        ('SCALE_DAY', 'ninety'),
        ('SCALE_WEEK', '0'),
        ('SCALE_MONTH', '-3'),
        ('DEFAULT_GRANULARITY', 'year'),
        ('WEEK_STARTS_ON', 'funday'),
        ('VIEWPORT_WIDTH', '0'),
    ])
    def test_invalid_value_terminates(self, missing_json, key, value):
        env = create_valid_env()
        env[key] = value

        with pytest.raises(SystemExit) as exc_info:
            load_with_env(env, missing_json)

        assert exc_info.value.code == 1


@settings(max_examples=50)
@given(scale=st.integers(max_value=0), key=st.sampled_from(['SCALE_DAY', 'SCALE_WEEK', 'SCALE_MONTH']))
def test_non_positive_scale_termination(scale, key):
    """
    Feature: wo-scheduler, Property: Invalid config termination

    For any non-positive pixels-per-day value the system SHALL
    terminate with exit code 1.
    """
    env = create_valid_env()
    env[key] = str(scale)

    with pytest.raises(SystemExit) as exc_info:
        load_with_env(env, '/nonexistent/timeline_config.json')

    assert exc_info.value.code == 1
