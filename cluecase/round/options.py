"""Options for ClueCase rounds."""

from dataclasses import dataclass, field

from ..errors import ConfigurationError
from ..game_utils.options import GameOptions, IntOption, MenuOption, option_field
from .board import BOARD_SIZE
from .clues import DEFAULT_CLUE_POOL, ClueKind

# The classic 21-step ladder, $1 to $1,000,000
DEFAULT_CASE_VALUES: list[int] = [
    1, 5, 10, 25, 50, 75, 100, 200, 300, 400, 500,
    1000, 2500, 5000, 10000, 25000, 50000, 100000, 250000, 500000, 1000000,
]


@dataclass
class RoundOptions(GameOptions):
    """Options for a ClueCase round using the declarative option system."""

    duration_seconds: int = option_field(
        IntOption(default=120, min_val=10, max_val=600, label="option-duration")
    )
    clue_count: int = option_field(
        IntOption(default=3, min_val=0, max_val=BOARD_SIZE - 1, label="option-clue-count")
    )
    time_bonus_per_second: int = option_field(
        IntOption(default=100, min_val=0, max_val=10000, label="option-time-bonus")
    )
    free_clue_min_opened: int = option_field(
        IntOption(
            default=7,
            min_val=0,
            max_val=BOARD_SIZE,
            label="option-free-clue-min-opened",
        )
    )
    clue_log_delay_seconds: int = option_field(
        IntOption(default=2, min_val=0, max_val=30, label="option-clue-log-delay")
    )
    locale: str = option_field(
        MenuOption(default="en", choices=["en"], label="option-locale")
    )

    # Plain fields, checked in validate() below
    case_values: list[int] = field(default_factory=lambda: list(DEFAULT_CASE_VALUES))
    clue_pool: list[ClueKind] = field(default_factory=lambda: list(DEFAULT_CLUE_POOL))

    def validate(self) -> None:
        super().validate()
        if len(self.case_values) + self.clue_count != BOARD_SIZE:
            raise ConfigurationError(
                f"{len(self.case_values)} case values and {self.clue_count} clues "
                f"do not fill {BOARD_SIZE} cases",
                option="case_values",
            )
        for value in self.case_values:
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigurationError(
                    f"Case value {value!r} is not a positive integer",
                    option="case_values",
                )
