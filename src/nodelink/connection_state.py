"""
Connection states for the supervisor lifecycle.

The cycle is DISCONNECTED -> CONNECTING -> AUTHENTICATING -> CONNECTED, and any
state may fall back to DISCONNECTED. There is no terminal state.
"""

from enum import Enum


class ConnectionState(Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    AUTHENTICATING = "authenticating"
    CONNECTED = "connected"


ALLOWED_TRANSITIONS = {
    ConnectionState.DISCONNECTED: frozenset({ConnectionState.CONNECTING, ConnectionState.DISCONNECTED}),
    ConnectionState.CONNECTING: frozenset({ConnectionState.AUTHENTICATING, ConnectionState.DISCONNECTED}),
    ConnectionState.AUTHENTICATING: frozenset({ConnectionState.CONNECTED, ConnectionState.DISCONNECTED}),
    ConnectionState.CONNECTED: frozenset({ConnectionState.DISCONNECTED}),
}


def is_allowed_transition(current: ConnectionState, new_state: ConnectionState) -> bool:
    return new_state in ALLOWED_TRANSITIONS[current]
