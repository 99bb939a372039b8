"""
Wire messages exchanged with the remote node service.

Everything is a JSON text frame. The server opens with an auth challenge
carrying a correlation ``id``; the client answers with an ``AUTH`` payload and
from then on sends a PING and a PONG acknowledgement on every heartbeat.
"""

from __future__ import annotations

from typing import Any, Dict, Union

import orjson

from .exceptions import AuthError

USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/114.0.0.0 Safari/537.36"
CLIENT_VERSION = "4.28.1"
DEVICE_TYPE = "desktop"

# Fixed id the server expects on PONG acknowledgements
PONG_ACK_ID = "F3X"


def encode_message(payload: Dict[str, Any]) -> str:
    return orjson.dumps(payload).decode("utf-8")


def parse_auth_challenge(raw_message: Union[str, bytes]) -> str:
    """Return the correlation id carried by the server's first message."""
    try:
        message = orjson.loads(raw_message)
    except orjson.JSONDecodeError as exc:
        raise AuthError(f"Authentication failed: malformed challenge ({exc})") from exc

    if not isinstance(message, dict):
        raise AuthError("Authentication failed: challenge is not a JSON object")

    auth_id = message.get("id")
    if not isinstance(auth_id, str) or not auth_id:
        raise AuthError("Authentication failed: challenge has no id")
    return auth_id


def build_auth_payload(auth_id: str, *, browser_id: str, user_id: str, timestamp: float) -> Dict[str, Any]:
    return {
        "id": auth_id,
        "origin_action": "AUTH",
        "result": {
            "browser_id": browser_id,
            "user_id": user_id,
            "user_agent": USER_AGENT,
            "timestamp": int(timestamp),
            "device_type": DEVICE_TYPE,
            "version": CLIENT_VERSION,
        },
    }


def build_ping(message_id: str) -> Dict[str, Any]:
    return {"id": message_id, "action": "PING", "data": {}}


def build_pong_ack() -> Dict[str, Any]:
    return {"id": PONG_ACK_ID, "origin_action": "PONG"}


__all__ = [
    "CLIENT_VERSION",
    "DEVICE_TYPE",
    "PONG_ACK_ID",
    "USER_AGENT",
    "build_auth_payload",
    "build_ping",
    "build_pong_ack",
    "encode_message",
    "parse_auth_challenge",
]
