from __future__ import annotations

import math
from dataclasses import dataclass

from mashumaro.mixins.json import DataClassJSONMixin

# Warning ticks play during the last seconds of the countdown
FINAL_COUNTDOWN_SECONDS = 15


@dataclass
class RoundTimer(DataClassJSONMixin):
    """Countdown for one round, driven by tick(dt) in seconds."""

    duration: float = 120.0
    remaining: float = 120.0
    expired: bool = False

    def start(self, seconds: float) -> None:
        self.duration = max(0.0, float(seconds))
        self.remaining = self.duration
        self.expired = False

    def tick(self, dt: float) -> bool:
        """Advance the countdown.

        Returns True exactly once: on the tick that brings the timer to 0.
        """
        if self.expired:
            return False
        self.remaining = max(0.0, self.remaining - max(0.0, dt))
        if self.remaining <= 0:
            self.expired = True
            return True
        return False

    def whole_seconds(self) -> int:
        return int(math.floor(self.remaining))

    def time_bonus(self, per_second: int = 100) -> int:
        return self.whole_seconds() * per_second

    @property
    def final_countdown(self) -> bool:
        return in_final_countdown(self.remaining)

    def format_clock(self) -> str:
        return format_clock(self.remaining)


def in_final_countdown(remaining: float) -> bool:
    """True while the warning ticks should play."""
    return 0 < remaining <= FINAL_COUNTDOWN_SECONDS


def format_clock(remaining: float) -> str:
    """Render whole seconds left as m:ss."""
    seconds = int(math.floor(remaining))
    return f"{seconds // 60}:{seconds % 60:02d}"
