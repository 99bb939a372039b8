"""
WebSocket transport for the node service.

Opens the ``wss`` connection with the browser-like upgrade request the service
expects, optionally through an HTTP CONNECT proxy, and exposes the pong frames
the library otherwise consumes internally.
"""

from __future__ import annotations

import logging
import socket
import ssl
from typing import Any, Awaitable, Callable, Dict, Optional

from websockets.asyncio.client import ClientConnection, connect
from websockets.protocol import State

from ..protocol import USER_AGENT
from ..proxy import ProxyDescriptor

logger = logging.getLogger(__name__)

ENDPOINT_URL = "wss://proxy2.wynd.network:4650"
ORIGIN = "https://app.getgrass.io"
MAX_FRAME_BYTES = 1024 * 1024

UPGRADE_HEADERS: Dict[str, str] = {
    "Host": "proxy2.wynd.network:4650",
    "Connection": "Upgrade",
    "Pragma": "no-cache",
    "Cache-Control": "no-cache",
    "User-Agent": USER_AGENT,
    "Upgrade": "websocket",
    "Origin": ORIGIN,
    "Sec-WebSocket-Version": "13",
    "Accept-Language": "en-US,en;q=0.9",
}

# Written by the handshake itself (or via dedicated connect() arguments) with the
# same values as above; repeating them would duplicate the header lines.
_HANDSHAKE_MANAGED_HEADERS = frozenset({"host", "connection", "upgrade", "sec-websocket-version", "user-agent", "origin"})

PongListener = Callable[[], None]


class LivenessClientConnection(ClientConnection):
    """Client connection that reports every received pong frame."""

    pong_listener: Optional[PongListener] = None

    def acknowledge_pings(self, data: bytes) -> None:
        listener = self.pong_listener
        if listener is not None:
            listener()
        super().acknowledge_pings(data)


def insecure_ssl_context() -> ssl.SSLContext:
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


def extra_upgrade_headers() -> list[tuple[str, str]]:
    return [(name, value) for name, value in UPGRADE_HEADERS.items() if name.lower() not in _HANDSHAKE_MANAGED_HEADERS]


def build_connect_options(
    proxy: Optional[ProxyDescriptor],
    open_timeout: float,
    create_connection: Callable[..., ClientConnection],
) -> Dict[str, Any]:
    options: Dict[str, Any] = {
        "additional_headers": extra_upgrade_headers(),
        "user_agent_header": USER_AGENT,
        "origin": ORIGIN,
        "compression": None,
        "max_size": MAX_FRAME_BYTES,
        "open_timeout": open_timeout,
        "ping_interval": None,
        "ping_timeout": None,
        "create_connection": create_connection,
        "proxy": None,
    }
    if proxy is not None:
        options["proxy"] = proxy.to_url()
        options["ssl"] = insecure_ssl_context()
        if proxy.is_tls:
            options["proxy_ssl"] = insecure_ssl_context()
    return options


def is_open(connection: Any) -> bool:
    return connection is not None and connection.state is State.OPEN


def terminate_connection(connection: Any) -> None:
    """Drop the TCP connection at once, skipping the closing handshake."""
    transport = getattr(connection, "transport", None)
    if transport is not None:
        transport.abort()


def detach_listeners(connection: Any) -> None:
    if hasattr(connection, "pong_listener"):
        connection.pong_listener = None


def enable_tcp_keepalive(connection: Any) -> None:
    transport = getattr(connection, "transport", None)
    sock = transport.get_extra_info("socket") if transport is not None else None
    if sock is None:
        return
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)
    except OSError as exc:  # Some proxied transports expose no settable socket
        logger.debug("Could not enable TCP keepalive: %s", exc)


Connector = Callable[..., Awaitable[ClientConnection]]


class TransportOpener:
    """
    Opens one transport per call to ``open``.

    The connection object being handshaked is kept in ``pending`` so that a
    caller whose timeout fires first can abort it with ``terminate_pending``.
    """

    def __init__(
        self,
        proxy: Optional[ProxyDescriptor],
        open_timeout: float,
        *,
        pong_listener: Optional[PongListener] = None,
        url: str = ENDPOINT_URL,
        connector: Connector = connect,
    ):
        self.proxy = proxy
        self.open_timeout = open_timeout
        self.pong_listener = pong_listener
        self.url = url
        self.connector = connector
        self.pending: Optional[ClientConnection] = None

    def _create_connection(self, *args: Any, **kwargs: Any) -> LivenessClientConnection:
        connection = LivenessClientConnection(*args, **kwargs)
        connection.pong_listener = self.pong_listener
        self.pending = connection
        return connection

    async def open(self) -> ClientConnection:
        self.pending = None
        options = build_connect_options(self.proxy, self.open_timeout, self._create_connection)
        connection = await self.connector(self.url, **options)
        self.pending = None
        if self.proxy is not None:
            enable_tcp_keepalive(connection)
        return connection

    def terminate_pending(self) -> bool:
        connection, self.pending = self.pending, None
        if connection is None:
            return False
        terminate_connection(connection)
        return True
