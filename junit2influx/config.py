"""Settings for the InfluxDB connection, read from the environment and .env files."""

import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_HOST = "http://localhost:8086"

CONFIG_KEYS = [
    'INFLUXDB_HOST',
    'INFLUXDB_DATABASE',
    'INFLUXDB_RETENTION_POLICY',
    'INFLUXDB_USERNAME',
    'INFLUXDB_PASSWORD',
]


def load_config() -> dict:
    """Load config from environment variables and .env file.

    Environment variables take precedence over .env file values.
    """
    paths = [
        os.environ.get('JUNIT2INFLUX_CONFIG'),
        Path.cwd() / '.env',
        Path(__file__).parent.parent / '.env',
    ]
    config = {}
    for p in paths:
        if p and Path(p).exists():
            try:
                text = Path(p).read_text()
            except OSError as e:
                logger.warning(f"Could not read config file {p}: {e}")
                continue
            for line in text.splitlines():
                line = line.strip()
                if line and not line.startswith('#') and '=' in line:
                    key, value = line.split('=', 1)
                    config[key.strip()] = value.strip()
            logger.debug(f"Loaded config from {p}")
            break

    for key in CONFIG_KEYS:
        env_value = os.environ.get(key)
        if env_value is not None:
            config[key] = env_value

    return config


def get_default_host(config: Optional[dict] = None) -> str:
    config = load_config() if config is None else config
    return config.get('INFLUXDB_HOST') or DEFAULT_HOST


def get_default_database(config: Optional[dict] = None) -> str:
    config = load_config() if config is None else config
    return config.get('INFLUXDB_DATABASE', '')


def get_default_retention_policy(config: Optional[dict] = None) -> str:
    config = load_config() if config is None else config
    return config.get('INFLUXDB_RETENTION_POLICY', '')


def get_credentials(config: Optional[dict] = None) -> tuple[Optional[str], Optional[str]]:
    """Return (username, password); either may be None when unset."""
    config = load_config() if config is None else config
    return config.get('INFLUXDB_USERNAME') or None, config.get('INFLUXDB_PASSWORD') or None
