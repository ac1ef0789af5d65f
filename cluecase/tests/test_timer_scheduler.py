"""Tests for the round timer and the callback scheduler."""

from cluecase.game_utils.round_timer import RoundTimer, format_clock, in_final_countdown
from cluecase.game_utils.scheduler import CallbackScheduler


class TestRoundTimer:
    """Countdown behaviour."""

    def setup_method(self):
        self.timer = RoundTimer()
        self.timer.start(120)

    def test_start(self):
        assert self.timer.remaining == 120
        assert not self.timer.expired
        assert self.timer.format_clock() == "2:00"

    def test_tick(self):
        assert self.timer.tick(30.5) is False
        assert self.timer.remaining == 89.5
        assert self.timer.whole_seconds() == 89
        assert self.timer.format_clock() == "1:29"

    def test_time_bonus(self):
        self.timer.tick(0.5)
        assert self.timer.time_bonus() == 11900
        assert self.timer.time_bonus(per_second=10) == 1190

    def test_expires_once(self):
        assert self.timer.tick(100) is False
        assert self.timer.tick(30) is True
        assert self.timer.remaining == 0
        assert self.timer.tick(1) is False
        assert self.timer.time_bonus() == 0

    def test_negative_tick_ignored(self):
        self.timer.tick(-5)
        assert self.timer.remaining == 120

    def test_final_countdown(self):
        assert not self.timer.final_countdown
        self.timer.tick(105)
        assert self.timer.final_countdown
        self.timer.tick(15)
        assert not self.timer.final_countdown

    def test_clock_helpers(self):
        assert format_clock(75.9) == "1:15"
        assert format_clock(0) == "0:00"
        assert in_final_countdown(15)
        assert not in_final_countdown(15.5)
        assert not in_final_countdown(0)

    def test_serialization(self):
        self.timer.tick(12)
        loaded = RoundTimer.from_json(self.timer.to_json())
        assert loaded == self.timer


class TestCallbackScheduler:
    """Delayed callbacks."""

    def setup_method(self):
        self.scheduler = CallbackScheduler()
        self.fired = []

    def test_fires_when_due(self):
        self.scheduler.schedule(2, lambda: self.fired.append("a"))
        assert self.scheduler.advance(1.5) == 0
        assert self.fired == []
        assert self.scheduler.advance(0.5) == 1
        assert self.fired == ["a"]
        assert self.scheduler.advance(10) == 0
        assert self.fired == ["a"]

    def test_fires_in_order(self):
        self.scheduler.schedule(1, lambda: self.fired.append("first"))
        self.scheduler.schedule(1, lambda: self.fired.append("second"))
        self.scheduler.advance(1)
        assert self.fired == ["first", "second"]

    def test_cancel(self):
        handle = self.scheduler.schedule(1, lambda: self.fired.append("a"))
        handle.cancel()
        assert not handle.pending
        self.scheduler.advance(5)
        assert self.fired == []

    def test_cancel_all(self):
        self.scheduler.schedule(1, lambda: self.fired.append("a"))
        self.scheduler.schedule(3, lambda: self.fired.append("b"))
        self.scheduler.cancel_all()
        assert self.scheduler.pending() == []
        self.scheduler.advance(5)
        assert self.fired == []

    def test_callback_cancels_later_callback(self):
        handles = []

        def first():
            self.fired.append("first")
            handles[0].cancel()

        self.scheduler.schedule(1, first)
        handles.append(self.scheduler.schedule(1, lambda: self.fired.append("later")))
        assert self.scheduler.advance(1) == 1
        assert self.fired == ["first"]

    def test_zero_delay(self):
        self.scheduler.schedule(0, lambda: self.fired.append("now"))
        self.scheduler.advance(0)
        assert self.fired == ["now"]
