"""Supervised, proxied WebSocket session for the node service."""

from .clock import Clock, SystemClock
from .connection_config import SupervisorConfig, get_supervisor_config
from .connection_state import ConnectionState
from .exceptions import (
    ApplicationError,
    AuthError,
    ConfigurationError,
    NotConnectedError,
    ProxyConfigurationError,
    StateTransitionError,
)
from .proxy import ProxyDescriptor, parse_proxy_url
from .supervisor import ConnectionSupervisor

__all__ = [
    "ApplicationError",
    "AuthError",
    "Clock",
    "ConfigurationError",
    "ConnectionState",
    "ConnectionSupervisor",
    "NotConnectedError",
    "ProxyConfigurationError",
    "ProxyDescriptor",
    "StateTransitionError",
    "SupervisorConfig",
    "SystemClock",
    "get_supervisor_config",
    "parse_proxy_url",
]
