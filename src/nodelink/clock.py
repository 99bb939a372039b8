"""Time and identifier sources for the supervisor, swappable in tests."""

from __future__ import annotations

import asyncio
import time
import uuid
from typing import Callable, Protocol

IdGenerator = Callable[[], str]


class Clock(Protocol):
    def monotonic(self) -> float: ...

    def wall_time(self) -> float: ...

    async def sleep(self, seconds: float) -> None: ...


class SystemClock:
    """Monotonic time from the running loop, wall time from ``time.time``."""

    def monotonic(self) -> float:
        try:
            return asyncio.get_running_loop().time()
        except RuntimeError:
            return time.monotonic()

    def wall_time(self) -> float:
        return time.time()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


def uuid4_id() -> str:
    return str(uuid.uuid4())


__all__ = ["Clock", "IdGenerator", "SystemClock", "uuid4_id"]
