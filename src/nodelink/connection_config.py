"""
Timing configuration for the connection supervisor.

All durations are in seconds. Each field defaults from an environment variable
(or a ``.env`` file) and falls back to the production value the remote service
expects.
"""

from dataclasses import asdict, dataclass, field
from functools import partial

from .config import ConfigurationError, env_seconds

_DEFAULT_SECONDS = {
    "NODELINK_CONNECT_TIMEOUT_SECONDS": 30.0,
    "NODELINK_RECONNECT_DELAY_SECONDS": 10.0,
    "NODELINK_HEARTBEAT_INTERVAL_SECONDS": 30.0,
    "NODELINK_HEARTBEAT_STALE_SECONDS": 45.0,
    "NODELINK_SEND_TIMEOUT_SECONDS": 10.0,
    "NODELINK_CLOSE_TIMEOUT_SECONDS": 5.0,
}


def require_env_seconds(name: str) -> float:
    """Get a duration from the environment, using the built-in default if unset."""
    if name not in _DEFAULT_SECONDS:
        raise ConfigurationError(f"No default declared for {name}")
    value = env_seconds(name, or_value=_DEFAULT_SECONDS[name])
    return float(value)


@dataclass
class SupervisorConfig:
    """
    Attributes:
        connect_timeout_seconds: Window for the transport to open, and for the
            auth challenge to arrive once it has
        reconnect_delay_seconds: Constant pause between a failed or closed
            cycle and the next connect attempt
        heartbeat_interval_seconds: Period of the PING/PONG-ack heartbeat
        heartbeat_stale_seconds: Maximum silence before the transport is aborted
        send_timeout_seconds: Maximum time for a single frame write
        close_timeout_seconds: Maximum time spent on a graceful close during cleanup
    """

    connect_timeout_seconds: float = field(default_factory=partial(require_env_seconds, "NODELINK_CONNECT_TIMEOUT_SECONDS"))
    reconnect_delay_seconds: float = field(default_factory=partial(require_env_seconds, "NODELINK_RECONNECT_DELAY_SECONDS"))
    heartbeat_interval_seconds: float = field(default_factory=partial(require_env_seconds, "NODELINK_HEARTBEAT_INTERVAL_SECONDS"))
    heartbeat_stale_seconds: float = field(default_factory=partial(require_env_seconds, "NODELINK_HEARTBEAT_STALE_SECONDS"))
    send_timeout_seconds: float = field(default_factory=partial(require_env_seconds, "NODELINK_SEND_TIMEOUT_SECONDS"))
    close_timeout_seconds: float = field(default_factory=partial(require_env_seconds, "NODELINK_CLOSE_TIMEOUT_SECONDS"))

    def validate(self) -> "SupervisorConfig":
        for name, value in asdict(self).items():
            if value <= 0:
                raise ConfigurationError.invalid_value(name, value, "Durations must be positive")
        if self.heartbeat_stale_seconds <= self.heartbeat_interval_seconds:
            raise ConfigurationError.invalid_value(
                "heartbeat_stale_seconds",
                self.heartbeat_stale_seconds,
                "Must exceed heartbeat_interval_seconds",
            )
        return self


def get_supervisor_config() -> SupervisorConfig:
    """Build and validate a configuration from the current environment."""
    return SupervisorConfig().validate()
