"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from nodelink.config import runtime


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep developer .env files and NODELINK_* variables out of the tests."""
    monkeypatch.setattr(runtime, "_DEFAULT_VALUES", {})
    for name in (
        "NODELINK_CONNECT_TIMEOUT_SECONDS",
        "NODELINK_RECONNECT_DELAY_SECONDS",
        "NODELINK_HEARTBEAT_INTERVAL_SECONDS",
        "NODELINK_HEARTBEAT_STALE_SECONDS",
        "NODELINK_SEND_TIMEOUT_SECONDS",
        "NODELINK_CLOSE_TIMEOUT_SECONDS",
        "NODELINK_USER_ID",
        "NODELINK_PROXY_URL",
        "NODELINK_LOG_DIR",
        "NODELINK_IGNORE_SIGHUP",
        "LOG_APPEND",
    ):
        monkeypatch.delenv(name, raising=False)
