"""
Connection supervisor for the node service.

Keeps one authenticated WebSocket session alive for the life of the process:
connect, authenticate, heartbeat, and on any failure clean up, wait a fixed
delay and start over. Nothing raised inside a cycle escapes ``run``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from websockets import ConnectionClosedError, WebSocketException

from .clock import Clock, IdGenerator, SystemClock, uuid4_id
from .connection_config import SupervisorConfig, get_supervisor_config
from .connection_state import ConnectionState, is_allowed_transition
from .exceptions import ApplicationError, AuthError, NotConnectedError, StateTransitionError
from .protocol import build_auth_payload, parse_auth_challenge
from .proxy import parse_proxy_url
from .supervisor_helpers import (
    HeartbeatMonitor,
    Session,
    SupervisorMetrics,
    TransportOpener,
    detach_listeners,
    is_open,
    receive_message,
    send_message,
    terminate_connection,
)

# Everything a single cycle may raise; asyncio.TimeoutError and ConnectionError are OSErrors
_CYCLE_ERRORS = (ApplicationError, WebSocketException, OSError, RuntimeError, ValueError)


class ConnectionSupervisor:
    """Owns the connect/authenticate/heartbeat/teardown/backoff cycle for one user."""

    def __init__(
        self,
        user_id: str,
        proxy_url: Optional[str] = None,
        *,
        config: Optional[SupervisorConfig] = None,
        clock: Optional[Clock] = None,
        id_generator: IdGenerator = uuid4_id,
        logger: Optional[logging.Logger] = None,
        opener: Optional[TransportOpener] = None,
    ):
        self.user_id = user_id
        self.proxy = parse_proxy_url(proxy_url)
        self.config = config if config is not None else get_supervisor_config()
        self.clock = clock if clock is not None else SystemClock()
        self.id_generator = id_generator
        self.browser_id = id_generator()
        self.logger = logger if logger is not None else logging.getLogger(__name__)

        if opener is None:
            opener = TransportOpener(self.proxy, self.config.connect_timeout_seconds)
        opener.pong_listener = self._on_protocol_pong
        self.opener = opener

        self.metrics = SupervisorMetrics()
        self.state = ConnectionState.DISCONNECTED
        self.session: Optional[Session] = None
        self.heartbeat_monitor: Optional[HeartbeatMonitor] = None

    @property
    def transport(self) -> Any:
        if self.session is None:
            return None
        return self.session.connection

    @property
    def proxy_label(self) -> str:
        if self.proxy is None:
            return "direct"
        return self.proxy.display()

    def transition_state(self, new_state: ConnectionState) -> None:
        if not is_allowed_transition(self.state, new_state):
            raise StateTransitionError(
                f"Cannot move from {self.state.value} to {new_state.value}",
                current=self.state,
                requested=new_state,
            )
        if new_state is not self.state:
            self.logger.debug("State %s -> %s", self.state.value, new_state.value)
        self.state = new_state

    async def run(self) -> None:
        """Run connection cycles forever. Only task cancellation ends the loop."""
        self.logger.info("Starting supervisor for user %s (browser id %s, proxy %s)", self.user_id, self.browser_id, self.proxy_label)
        while True:
            try:
                await self._run_cycle()
            except _CYCLE_ERRORS as exc:
                self.metrics.record_failure(exc)
                self.logger.error("Connection error: %s", exc)
            except asyncio.CancelledError:
                await self.cleanup()
                raise

            await self.cleanup()
            self.logger.info("Reconnecting in %.0fs", self.config.reconnect_delay_seconds)
            await self.clock.sleep(self.config.reconnect_delay_seconds)

    async def _run_cycle(self) -> None:
        await self.connect()
        await self.authenticate()
        self.start_heartbeat()
        await self._wait_until_closed()

    async def connect(self) -> None:
        """Open the transport; the opening moment becomes the first liveness signal."""
        if self.session is not None:
            await self.cleanup()

        self.transition_state(ConnectionState.CONNECTING)
        self.metrics.record_attempt()
        try:
            connection = await asyncio.wait_for(self.opener.open(), timeout=self.config.connect_timeout_seconds)
        except asyncio.TimeoutError:
            self.opener.terminate_pending()
            raise TimeoutError("Connection timeout") from None
        except (WebSocketException, OSError) as exc:
            raise ConnectionError(f"Connection failed: {exc}") from exc

        self.session = Session(connection, opened_at=self.clock.monotonic())
        self.transition_state(ConnectionState.AUTHENTICATING)
        self.logger.info("Connected via proxy: %s", self.proxy_label)

    async def authenticate(self) -> None:
        raw_message = await receive_message(
            self.transport,
            timeout=self.config.connect_timeout_seconds,
            purpose="Authentication",
        )
        auth_id = parse_auth_challenge(raw_message)
        await self.send_auth_payload(auth_id)

        self.transition_state(ConnectionState.CONNECTED)
        self.metrics.record_authenticated()
        self.logger.info("Authentication successful")

    async def send_auth_payload(self, auth_id: str) -> None:
        payload = build_auth_payload(
            auth_id,
            browser_id=self.browser_id,
            user_id=self.user_id,
            timestamp=self.clock.wall_time(),
        )
        try:
            await self.send_message(payload)
        except (ApplicationError, WebSocketException, OSError) as exc:
            raise AuthError(f"Authentication failed: {exc}", auth_id=auth_id) from exc

    def start_heartbeat(self) -> None:
        """Arm the heartbeat for the current session, replacing any earlier one."""
        session = self.session
        if session is None:
            raise NotConnectedError("Cannot start heartbeat without an open session")

        if session.heartbeat_task is not None:
            session.heartbeat_task.cancel()

        self.heartbeat_monitor = HeartbeatMonitor(
            session,
            clock=self.clock,
            send_message=self.send_message,
            id_generator=self.id_generator,
            interval_seconds=self.config.heartbeat_interval_seconds,
            stale_seconds=self.config.heartbeat_stale_seconds,
            metrics=self.metrics,
            logger=self.logger,
        )
        session.heartbeat_task = asyncio.create_task(self.heartbeat_monitor.run(), name="nodelink-heartbeat")

    def _on_protocol_pong(self) -> None:
        if self.session is not None:
            self.session.record_liveness(self.clock.monotonic())

    async def send_message(self, payload: Dict[str, Any]) -> None:
        await send_message(self.transport, payload, timeout=self.config.send_timeout_seconds)

    async def _wait_until_closed(self) -> None:
        # Inbound frames must be drained or the library stops reading pongs and close frames
        try:
            async for message in self.transport:
                self.logger.debug("Ignoring inbound message: %.200s", message)
        except ConnectionClosedError as exc:
            self.logger.warning("Connection closed for proxy %s: %s", self.proxy_label, exc)
            return
        self.logger.warning("Connection closed for proxy: %s", self.proxy_label)

    async def cleanup(self) -> None:
        """Tear down the current session, if any. Idempotent and safe from any state."""
        self.opener.terminate_pending()

        session, self.session = self.session, None
        if session is not None:
            task, session.heartbeat_task = session.heartbeat_task, None
            if task is not None:
                task.cancel()
                await asyncio.gather(task, return_exceptions=True)

            connection = session.connection
            detach_listeners(connection)
            if is_open(connection):
                await self._close_gracefully(connection)

        self.heartbeat_monitor = None
        self.transition_state(ConnectionState.DISCONNECTED)

    async def _close_gracefully(self, connection: Any) -> None:
        try:
            await asyncio.wait_for(connection.close(), timeout=self.config.close_timeout_seconds)
        except asyncio.TimeoutError:
            self.logger.warning("Timed out closing WebSocket, aborting transport")
            terminate_connection(connection)
        except (WebSocketException, OSError, RuntimeError) as exc:
            self.logger.warning("Error closing WebSocket: %s", exc)

    def get_status(self) -> Dict[str, Any]:
        session = self.session
        silence = None
        if session is not None:
            silence = session.seconds_since_liveness(self.clock.monotonic())
        return {
            "state": self.state.value,
            "browser_id": self.browser_id,
            "user_id": self.user_id,
            "proxy": self.proxy_label,
            "connected": is_open(self.transport),
            "seconds_since_liveness": silence,
            "metrics": self.metrics.as_dict(),
        }
