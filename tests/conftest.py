import pytest

from junit2influx.config import CONFIG_KEYS


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path):
    """Keep the developer's environment and .env files out of the tests."""
    for key in CONFIG_KEYS + ['JUNIT2INFLUX_CONFIG']:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
