"""Unit tests for the dispatch throttle."""

from relaychat.client.throttle import Throttle
from tests.conftest import FakeClock


class TestThrottle:
    """Tests for Throttle.acquire and remaining."""

    def test_first_call_admitted(self, clock: FakeClock) -> None:
        """Nothing has been dispatched yet, so the first call passes."""
        throttle = Throttle(1000, clock=clock)

        assert throttle.acquire() is None
        assert throttle.last_call_at == clock.now

    def test_rapid_second_call_rejected(self, clock: FakeClock) -> None:
        """A call inside the interval gets a positive whole number of seconds."""
        throttle = Throttle(1000, clock=clock)
        throttle.acquire()
        stamped = throttle.last_call_at

        clock.advance(0.2)
        wait = throttle.acquire()

        assert wait == 1
        assert throttle.last_call_at == stamped

    def test_wait_rounds_up(self, clock: FakeClock) -> None:
        """Remaining time is rounded up to whole seconds."""
        throttle = Throttle(3000, clock=clock)
        throttle.acquire()

        clock.advance(1.5)

        assert throttle.acquire() == 2

    def test_admitted_after_interval(self, clock: FakeClock) -> None:
        """Once the interval has passed, the call is admitted and stamped."""
        throttle = Throttle(1000, clock=clock)
        throttle.acquire()

        clock.advance(1.0)

        assert throttle.acquire() is None
        assert throttle.last_call_at == clock.now

    def test_zero_interval_disables(self, clock: FakeClock) -> None:
        """An interval of 0 never throttles."""
        throttle = Throttle(0, clock=clock)

        assert throttle.acquire() is None
        assert throttle.acquire() is None
        assert throttle.remaining() == 0.0

    def test_remaining_and_reset(self, clock: FakeClock) -> None:
        """remaining() reports the cooldown; reset() clears it."""
        throttle = Throttle(1000, clock=clock)
        throttle.acquire()
        clock.advance(0.25)

        assert throttle.remaining() == 0.75

        throttle.reset()

        assert throttle.remaining() == 0.0
        assert throttle.acquire() is None
