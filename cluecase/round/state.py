"""Round state for ClueCase (replaced wholesale each round)."""

from dataclasses import dataclass, field
from enum import Enum

from mashumaro.mixins.json import DataClassJSONMixin

from ..errors import AlreadyUsedError
from ..game_utils.round_timer import RoundTimer
from .clues import ClueKind


class RoundPhase(str, Enum):
    """Round phases."""

    SETUP = "setup"  # Nothing dealt yet
    AWAITING_START = "awaiting_start"  # Cases dealt, waiting for start command
    CHOOSING = "choosing"  # Player picks a case or a power
    RESOLVING = "resolving"  # A value reveal is on screen
    PICKING = "picking"  # Pick-three selection in progress
    ENDED = "ended"


class EndReason(str, Enum):
    """Why a round froze."""

    DEAL = "deal"  # Player accepted the offer
    TIMEOUT = "timeout"
    LAST_CASE = "last_case"  # One numeric case left unopened


class PowerButton(str, Enum):
    FREE_CLUE = "free_clue"
    PICK_THREE = "pick3"
    DOUBLE = "double"
    CLUE_BUTTON = "clue_button"


@dataclass
class ButtonUsage(DataClassJSONMixin):
    """One-shot flags. Set once per round, cleared only by a new round."""

    free_clue: bool = False
    pick3: bool = False
    double: bool = False
    clue_button: bool = False

    def is_used(self, button: PowerButton) -> bool:
        return getattr(self, button.value)

    def mark_used(self, button: PowerButton) -> None:
        """Set a flag.

        Raises:
            AlreadyUsedError: If the flag was already set this round.
        """
        if self.is_used(button):
            raise AlreadyUsedError(
                f"{button.value} already used", power=button.value
            )
        setattr(self, button.value, True)

    def used_buttons(self) -> list[PowerButton]:
        return [b for b in PowerButton if self.is_used(b)]


@dataclass
class RoundState(DataClassJSONMixin):
    """Mutable state of the round in progress."""

    phase: RoundPhase = RoundPhase.SETUP
    timer: RoundTimer = field(default_factory=RoundTimer)
    round_active: bool = False  # Countdown running and time bonus on offer
    clue_pool: list[ClueKind] = field(default_factory=list)
    clues_found: list[str] = field(default_factory=list)
    used_anchors: set[int] = field(default_factory=set)
    button_usage: ButtonUsage = field(default_factory=ButtonUsage)
    pick_selection: list[int] = field(default_factory=list)
    deal_value: int = 0  # Last offer announced to the view
    final_value: int | None = None
    final_time_bonus: int = 0
    end_reason: EndReason | None = None
    elapsed: float = 0.0  # Seconds ticked since the round was dealt
    clue_log_due: float | None = None  # When the clue log pops up, in elapsed time

    @property
    def game_time_remaining(self) -> float:
        return self.timer.remaining

    @property
    def ended(self) -> bool:
        return self.phase == RoundPhase.ENDED
