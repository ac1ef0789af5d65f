"""Recording listener for unit tests and simulations."""

from dataclasses import dataclass
from typing import Any

from .events import EventListener, ModifierKind


@dataclass
class Event:
    """A captured event."""

    type: str
    data: dict[str, Any]


class RecordingListener(EventListener):
    """
    Listener that captures every event for assertion.

    Used in unit tests and in the CLI simulator.
    """

    def __init__(self) -> None:
        self.events: list[Event] = []

    def on_case_opened(self, case_number: int, value: int | str) -> None:
        self.events.append(
            Event("case_opened", {"case_number": case_number, "value": value})
        )

    def on_clue_revealed(self, text: str) -> None:
        self.events.append(Event("clue_revealed", {"text": text}))

    def on_deal_value_changed(self, value: int) -> None:
        self.events.append(Event("deal_value_changed", {"value": value}))

    def on_round_ended(self, final_value: int, time_bonus: int) -> None:
        self.events.append(
            Event("round_ended", {"final_value": final_value, "time_bonus": time_bonus})
        )

    def on_timer_tick(self, remaining_seconds: float) -> None:
        self.events.append(Event("timer_tick", {"remaining": remaining_seconds}))

    def on_modifier_applied(self, kind: ModifierKind) -> None:
        self.events.append(Event("modifier_applied", {"kind": kind}))

    def on_phase_changed(self, phase: str) -> None:
        self.events.append(Event("phase_changed", {"phase": phase}))

    def on_show_clue_log(self, clues: list[str]) -> None:
        self.events.append(Event("show_clue_log", {"clues": list(clues)}))

    # Test helper methods

    def of_type(self, event_type: str) -> list[Event]:
        """Get all events of one type, oldest first."""
        return [e for e in self.events if e.type == event_type]

    def count(self, event_type: str) -> int:
        return len(self.of_type(event_type))

    def last(self, event_type: str) -> Event | None:
        """Get the most recent event of one type."""
        for e in reversed(self.events):
            if e.type == event_type:
                return e
        return None

    def get_clue_texts(self) -> list[str]:
        return [e.data["text"] for e in self.of_type("clue_revealed")]

    def clear(self) -> None:
        self.events.clear()
