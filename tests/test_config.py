"""Tests for configuration loading and logging setup."""

import json
import logging

import pytest

from load_test.config import AggregatorConfig, ConfigError, load_config, setup_logging


def write_config(tmp_path, data):
    path = tmp_path / 'main.json'
    path.write_text(json.dumps(data))
    return str(path)


def test_load_config_reads_sections(tmp_path):
    path = write_config(tmp_path, {
        'global_settings': {'log_level': 'debug', 'log_dir': str(tmp_path / 'logs')},
        'aggregator': {'report_interval_seconds': 2.5, 'failure_queue_size': 10},
    })
    config = load_config(path)

    assert config.report_interval_seconds == 2.5
    assert config.failure_queue_size == 10
    assert config.log_level == 'DEBUG'
    assert config.log_dir == str(tmp_path / 'logs')


def test_missing_sections_use_defaults(tmp_path):
    config = load_config(write_config(tmp_path, {}))
    assert config == AggregatorConfig()


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match='not found'):
        load_config(str(tmp_path / 'absent.json'))


def test_invalid_json(tmp_path):
    path = tmp_path / 'main.json'
    path.write_text('{not json')
    with pytest.raises(ConfigError, match='Invalid JSON'):
        load_config(str(path))


@pytest.mark.parametrize('aggregator', [
    {'report_interval_seconds': 0},
    {'report_interval_seconds': 'soon'},
    {'failure_queue_size': -1},
])
def test_invalid_aggregator_settings(tmp_path, aggregator):
    with pytest.raises(ConfigError):
        load_config(write_config(tmp_path, {'aggregator': aggregator}))


def test_unknown_log_level(tmp_path):
    with pytest.raises(ConfigError, match='log level'):
        load_config(write_config(tmp_path, {'global_settings': {'log_level': 'LOUD'}}))


def test_setup_logging_creates_log_file(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    config = AggregatorConfig(log_level='INFO', log_dir=str(tmp_path / 'logs'))
    setup_logging(config)
    try:
        logging.getLogger('load_test.test').info('hello from test')
        added = [h for h in root.handlers if h not in saved_handlers]
        for handler in added:
            handler.flush()
        assert any(isinstance(h, logging.FileHandler) for h in added)
        log_file = tmp_path / 'logs' / 'load_test_results.log'
        assert 'hello from test' in log_file.read_text()
    finally:
        for handler in root.handlers[:]:
            if handler not in saved_handlers:
                root.removeHandler(handler)
                if isinstance(handler, logging.FileHandler):
                    handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
