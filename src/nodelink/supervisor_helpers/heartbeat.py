"""Application-level heartbeat and staleness detection."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict

from websockets import WebSocketException

from ..clock import Clock, IdGenerator
from ..exceptions import ApplicationError
from ..protocol import build_ping, build_pong_ack
from .metrics import SupervisorMetrics
from .session import Session
from .transport import is_open, terminate_connection

SendMessage = Callable[[Dict[str, Any]], Awaitable[None]]


class HeartbeatMonitor:
    """
    Sends a PING and a PONG acknowledgement every ``interval_seconds``.

    A tick that finds more than ``stale_seconds`` of silence aborts the
    transport instead of sending; so does a tick whose sends fail. Either way
    the supervisor's close wait returns and the reconnect cycle takes over.
    """

    def __init__(
        self,
        session: Session,
        *,
        clock: Clock,
        send_message: SendMessage,
        id_generator: IdGenerator,
        interval_seconds: float,
        stale_seconds: float,
        metrics: SupervisorMetrics,
        logger: logging.Logger,
    ):
        self.session = session
        self.clock = clock
        self.send_message = send_message
        self.id_generator = id_generator
        self.interval_seconds = interval_seconds
        self.stale_seconds = stale_seconds
        self.metrics = metrics
        self.logger = logger

    async def run(self) -> None:
        while True:
            await self.clock.sleep(self.interval_seconds)
            if is_open(self.session.connection):
                await self.tick()

    async def tick(self) -> bool:
        """Run one heartbeat; returns False if the transport was aborted."""
        now = self.clock.monotonic()
        silence = self.session.seconds_since_liveness(now)
        if silence > self.stale_seconds:
            self.logger.warning("Heartbeat timeout (%.1fs without liveness), reconnecting", silence)
            self.metrics.record_stale_disconnect()
            terminate_connection(self.session.connection)
            return False

        try:
            await self.send_message(build_ping(self.id_generator()))
            await self.send_message(build_pong_ack())
        except (ApplicationError, WebSocketException, OSError) as exc:
            self.logger.error("Heartbeat failed: %s", exc)
            terminate_connection(self.session.connection)
            return False

        self.session.record_liveness(now)
        self.metrics.record_heartbeat()
        self.logger.debug("Heartbeat sent")
        return True
