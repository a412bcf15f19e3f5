from datetime import UTC, datetime, timedelta

from src.adapters.clock import FrozenClock, SystemClock


def test_system_clock():
    clock = SystemClock()
    now = clock.now_utc()
    assert isinstance(now, datetime)
    assert now.tzinfo is not None
    # Sanity check: is it close to real now?
    real_now = datetime.now(UTC)
    diff = abs((real_now - now).total_seconds())
    assert diff < 1.0 # Should be very fast


class TestFrozenClock:
    def test_now_is_stable(self):
        clock = FrozenClock(datetime(2026, 6, 15, 12, 0, 0, tzinfo=UTC))
        assert clock.now_utc() == clock.now_utc()

    def test_naive_treated_as_utc(self):
        clock = FrozenClock(datetime(2026, 6, 15, 12, 0, 0))
        assert clock.now_utc().tzinfo is UTC
        assert clock.now_utc().hour == 12

    def test_at_timestamp(self):
        clock = FrozenClock.at_timestamp(1_700_000_000)
        assert clock.now_utc().timestamp() == 1_700_000_000

    def test_advance(self):
        clock = FrozenClock.at_timestamp(1_700_000_000)
        clock.advance(timedelta(seconds=90))
        assert clock.now_utc().timestamp() == 1_700_000_090

    def test_set(self):
        clock = FrozenClock.at_timestamp(1_700_000_000)
        clock.set(datetime(2030, 1, 1, tzinfo=UTC))
        assert clock.now_utc() == datetime(2030, 1, 1, tzinfo=UTC)
