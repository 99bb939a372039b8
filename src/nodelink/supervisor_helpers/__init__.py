"""Helper modules for the connection supervisor."""

from .heartbeat import HeartbeatMonitor
from .message_operations import receive_message, send_message
from .metrics import SupervisorMetrics
from .session import Session
from .transport import (
    ENDPOINT_URL,
    UPGRADE_HEADERS,
    LivenessClientConnection,
    TransportOpener,
    detach_listeners,
    is_open,
    terminate_connection,
)

__all__ = [
    "ENDPOINT_URL",
    "HeartbeatMonitor",
    "LivenessClientConnection",
    "Session",
    "SupervisorMetrics",
    "TransportOpener",
    "UPGRADE_HEADERS",
    "detach_listeners",
    "is_open",
    "receive_message",
    "send_message",
    "terminate_connection",
]
