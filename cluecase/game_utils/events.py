"""Events a round emits for its view, audio and render collaborators."""

from __future__ import annotations

from enum import Enum


class ModifierKind(str, Enum):
    """One-shot powers the player can trigger."""

    FREE_CLUE = "free_clue"
    PICK_THREE = "pick3"
    DOUBLE = "double"


class EventListener:
    """
    Receiver for round events.

    Games only ever talk to this interface, never to a rendering layer.
    Every method is a no-op here so collaborators override only what they
    care about. Handlers must return promptly: the round does not wait on
    animations or sounds.
    """

    def on_case_opened(self, case_number: int, value: int | str) -> None:
        """A case was opened; value is the amount or the clue marker."""

    def on_clue_revealed(self, text: str) -> None:
        """A clue was added to the clue log."""

    def on_deal_value_changed(self, value: int) -> None:
        """The deal offer changed."""

    def on_round_ended(self, final_value: int, time_bonus: int) -> None:
        """The round froze with the given payout."""

    def on_timer_tick(self, remaining_seconds: float) -> None:
        """The countdown moved."""

    def on_modifier_applied(self, kind: ModifierKind) -> None:
        """A one-shot power took effect."""

    def on_phase_changed(self, phase: str) -> None:
        """The round moved to another phase."""

    def on_show_clue_log(self, clues: list[str]) -> None:
        """The clue log should be brought up."""
