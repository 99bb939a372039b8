"""Frame-level send/receive with timeouts."""

import asyncio
from typing import Any, Dict, Union

from ..exceptions import NotConnectedError
from ..protocol import encode_message
from .transport import is_open


async def send_message(connection: Any, payload: Dict[str, Any], *, timeout: float) -> None:
    """Serialize ``payload`` and write it as one text frame. No retries."""
    if not is_open(connection):
        raise NotConnectedError()

    message = encode_message(payload)
    try:
        await asyncio.wait_for(connection.send(message), timeout=timeout)
    except asyncio.TimeoutError:
        raise TimeoutError("Send message timeout") from None


async def receive_message(connection: Any, *, timeout: float, purpose: str = "Receive") -> Union[str, bytes]:
    if not is_open(connection):
        raise NotConnectedError()

    try:
        return await asyncio.wait_for(connection.recv(), timeout=timeout)
    except asyncio.TimeoutError:
        raise TimeoutError(f"{purpose} timeout") from None
