from __future__ import annotations

from datetime import UTC, datetime, timedelta


class SystemClock:
    def now_utc(self) -> datetime:
        return datetime.now(UTC)


class FrozenClock:
    """
    Clock that returns a fixed instant.

    Useful for deterministic testing and for reproducing a link at a known time.
    """

    def __init__(self, frozen_utc: datetime) -> None:
        self._frozen_utc = self._as_utc(frozen_utc)

    @staticmethod
    def _as_utc(moment: datetime) -> datetime:
        if moment.tzinfo is None:
            return moment.replace(tzinfo=UTC)
        return moment.astimezone(UTC)

    @classmethod
    def at_timestamp(cls, ts: int) -> FrozenClock:
        return cls(datetime.fromtimestamp(ts, tz=UTC))

    def now_utc(self) -> datetime:
        return self._frozen_utc

    def advance(self, delta: timedelta) -> None:
        self._frozen_utc = self._frozen_utc + delta

    def set(self, moment: datetime) -> None:
        self._frozen_utc = self._as_utc(moment)
