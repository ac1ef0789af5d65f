"""Delayed callbacks for a round.

Effects such as reopening the clue log a couple of seconds after the round
starts are queued here and fired from tick(). Every callback can be
cancelled, and the game cancels them all when a round starts or ends.
"""

from dataclasses import dataclass, field
from typing import Callable


@dataclass
class ScheduledCallback:
    """Handle for one queued callback."""

    due: float
    callback: Callable[[], None]
    name: str = ""
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def pending(self) -> bool:
        return not self.cancelled and not self.fired


@dataclass
class CallbackScheduler:
    """Queue of callbacks keyed on elapsed seconds."""

    clock: float = 0.0
    _queue: list[ScheduledCallback] = field(default_factory=list)

    def schedule(
        self, delay_seconds: float, callback: Callable[[], None], name: str = ""
    ) -> ScheduledCallback:
        """Queue a callback to fire once delay_seconds have elapsed.

        Args:
            delay_seconds: Seconds to wait (0 = fire on the next advance).
            callback: Called with no arguments.
            name: Label used when inspecting the queue.
        """
        handle = ScheduledCallback(
            due=self.clock + max(0.0, delay_seconds), callback=callback, name=name
        )
        self._queue.append(handle)
        return handle

    def advance(self, dt: float) -> int:
        """Move the clock forward and fire everything that has come due.

        Returns the number of callbacks fired.
        """
        self.clock += max(0.0, dt)

        due = [h for h in self._queue if h.pending and h.due <= self.clock]
        self._queue = [h for h in self._queue if h.pending and h.due > self.clock]

        fired = 0
        for handle in due:
            # An earlier callback may have cancelled the rest of the batch
            if handle.cancelled:
                continue
            handle.fired = True
            handle.callback()
            fired += 1
        return fired

    def cancel_all(self) -> None:
        for handle in self._queue:
            handle.cancel()
        self._queue.clear()

    def pending(self) -> list[ScheduledCallback]:
        return [h for h in self._queue if h.pending]
