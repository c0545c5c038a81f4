"""Injectable time sources.

Audit resolution and the rising score both depend on the current time, so the
services take a ``Clock`` instead of calling ``datetime.now`` directly.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Protocol

from fritter.db.time import as_utc, utcnow


class Clock(Protocol):
    """Anything that can report the current UTC instant."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock backed by :func:`fritter.db.time.utcnow`."""

    def now(self) -> datetime:
        return utcnow()


class FrozenClock:
    """Clock that only moves when told to.

    Used by tests and by tooling that replays decisions at a fixed instant.
    """

    def __init__(self, instant: datetime | None = None) -> None:
        self._instant = as_utc(instant) if instant is not None else utcnow()

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = as_utc(instant)

    def advance(self, delta: timedelta) -> datetime:
        self._instant += delta
        return self._instant


system_clock = SystemClock()
