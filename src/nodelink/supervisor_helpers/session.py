"""Per-connection session record."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class Session:
    """
    State owned by one open transport.

    ``last_liveness`` starts at the moment the transport opened and only moves
    forward; heartbeat ticks and protocol pongs both feed it.
    """

    connection: Any
    opened_at: float
    last_liveness: float = field(init=False)
    heartbeat_task: Optional[asyncio.Task] = None

    def __post_init__(self) -> None:
        self.last_liveness = self.opened_at

    def record_liveness(self, timestamp: float) -> None:
        if timestamp > self.last_liveness:
            self.last_liveness = timestamp

    def seconds_since_liveness(self, now: float) -> float:
        return now - self.last_liveness
