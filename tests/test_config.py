from core.topology_platform.config import (
    DEFAULT_CONTROL_URL,
    DEFAULT_POLL_INTERVAL,
    PlatformConfig,
)


def test_defaults(monkeypatch):
    for name in ("TOPOLOGY_CONTROL_URL", "TOPOLOGY_REQUEST_TIMEOUT", "TOPOLOGY_POLL_INTERVAL",
                 "TOPOLOGY_HISTORY_SIZE", "TOPOLOGY_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    config = PlatformConfig.from_env()

    assert config.control_url == DEFAULT_CONTROL_URL == "http://127.0.0.1:7080"
    assert config.poll_interval == DEFAULT_POLL_INTERVAL
    assert config.log_level == "INFO"


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("TOPOLOGY_CONTROL_URL", "http://ctrl:9000/")
    monkeypatch.setenv("TOPOLOGY_REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("TOPOLOGY_HISTORY_SIZE", "3")
    monkeypatch.setenv("TOPOLOGY_LOG_LEVEL", "debug")

    config = PlatformConfig.from_env()

    assert config.control_url == "http://ctrl:9000"
    assert config.request_timeout == 2.5
    assert config.history_size == 3
    assert config.log_level == "DEBUG"


def test_invalid_numbers_fall_back_to_defaults(monkeypatch, caplog):
    monkeypatch.setenv("TOPOLOGY_POLL_INTERVAL", "soon")
    monkeypatch.setenv("TOPOLOGY_HISTORY_SIZE", "-1")

    config = PlatformConfig.from_env()

    assert config.poll_interval == DEFAULT_POLL_INTERVAL
    assert config.history_size == 20
    assert "TOPOLOGY_POLL_INTERVAL" in caplog.text
