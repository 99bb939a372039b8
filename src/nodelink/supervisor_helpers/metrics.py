"""Counters describing the supervisor's connection history."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass
class SupervisorMetrics:
    connection_attempts: int = 0
    successful_authentications: int = 0
    total_failures: int = 0
    consecutive_failures: int = 0
    stale_disconnects: int = 0
    heartbeats_sent: int = 0
    last_error: Optional[str] = None

    def record_attempt(self) -> None:
        self.connection_attempts += 1

    def record_authenticated(self) -> None:
        self.successful_authentications += 1
        self.consecutive_failures = 0

    def record_failure(self, error: BaseException) -> None:
        self.total_failures += 1
        self.consecutive_failures += 1
        self.last_error = f"{type(error).__name__}: {error}"

    def record_stale_disconnect(self) -> None:
        self.stale_disconnects += 1

    def record_heartbeat(self) -> None:
        self.heartbeats_sent += 1

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
