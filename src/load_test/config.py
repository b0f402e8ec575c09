#!/usr/bin/env python3
"""
Configuration
Loads aggregator settings from the main JSON configuration file and sets up
logging from its global settings
"""

import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Any

DEFAULT_CONFIG_PATH = './configurations/main.json'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ConfigError(Exception):
    """Custom exception for configuration errors"""
    pass


@dataclass
class AggregatorConfig:
    """Settings consumed at construction time and never re-read"""

    report_interval_seconds: float = 1.0
    failure_queue_size: int = 1000
    log_level: str = 'INFO'
    log_dir: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AggregatorConfig':
        """
        Build config from the parsed main.json structure

        Args:
            data: Dictionary with optional 'global_settings' and 'aggregator' sections

        Returns:
            AggregatorConfig with defaults for anything missing

        Raises:
            ConfigError: If a value has the wrong type or range
        """
        global_settings = data.get('global_settings', {}) or {}
        aggregator = data.get('aggregator', {}) or {}

        try:
            interval = float(aggregator.get('report_interval_seconds', cls.report_interval_seconds))
            queue_size = int(aggregator.get('failure_queue_size', cls.failure_queue_size))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid aggregator setting: {e}")

        if interval <= 0:
            raise ConfigError(f"report_interval_seconds must be positive, got {interval}")
        if queue_size < 0:
            raise ConfigError(f"failure_queue_size must not be negative, got {queue_size}")

        log_level = str(global_settings.get('log_level', cls.log_level)).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigError(f"Unknown log level: {log_level}")

        return cls(
            report_interval_seconds=interval,
            failure_queue_size=queue_size,
            log_level=log_level,
            log_dir=global_settings.get('log_dir'),
        )


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> AggregatorConfig:
    """
    Load configuration from JSON file

    Raises:
        ConfigError: If the file is missing or not valid JSON
    """
    try:
        with open(config_path, 'r') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"Configuration file '{config_path}' not found")
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in configuration file: {e}")

    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a JSON object")

    return AggregatorConfig.from_dict(data)


def setup_logging(config: AggregatorConfig) -> None:
    """Setup logging based on global settings"""
    handlers = [logging.StreamHandler(sys.stdout)]

    if config.log_dir:
        log_dir = Path(config.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / 'load_test_results.log'))

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )
