import pytest

from nodelink.config import ConfigurationError
from nodelink.connection_config import SupervisorConfig, get_supervisor_config, require_env_seconds


def test_defaults_match_service_expectations():
    config = get_supervisor_config()

    assert config.connect_timeout_seconds == 30.0
    assert config.reconnect_delay_seconds == 10.0
    assert config.heartbeat_interval_seconds == 30.0
    assert config.heartbeat_stale_seconds == 45.0
    assert config.send_timeout_seconds == 10.0
    assert config.close_timeout_seconds == 5.0


def test_environment_overrides_defaults(monkeypatch):
    monkeypatch.setenv("NODELINK_RECONNECT_DELAY_SECONDS", "2.5")
    monkeypatch.setenv("NODELINK_CONNECT_TIMEOUT_SECONDS", "12")

    config = SupervisorConfig()

    assert config.reconnect_delay_seconds == 2.5
    assert config.connect_timeout_seconds == 12.0


def test_malformed_environment_value_raises(monkeypatch):
    monkeypatch.setenv("NODELINK_SEND_TIMEOUT_SECONDS", "soon")

    with pytest.raises(ConfigurationError):
        SupervisorConfig()


def test_negative_environment_value_raises(monkeypatch):
    monkeypatch.setenv("NODELINK_SEND_TIMEOUT_SECONDS", "-1")

    with pytest.raises(ConfigurationError):
        SupervisorConfig()


def test_require_env_seconds_rejects_unknown_names():
    with pytest.raises(ConfigurationError):
        require_env_seconds("NODELINK_UNKNOWN_SECONDS")


def test_validate_rejects_zero_durations():
    with pytest.raises(ConfigurationError, match="reconnect_delay_seconds"):
        SupervisorConfig(reconnect_delay_seconds=0).validate()


def test_validate_rejects_stale_threshold_below_interval():
    with pytest.raises(ConfigurationError, match="heartbeat_stale_seconds"):
        SupervisorConfig(heartbeat_interval_seconds=30, heartbeat_stale_seconds=20).validate()
