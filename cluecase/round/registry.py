"""Case slots for one round."""

from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from enum import Enum

from mashumaro.mixins.json import DataClassJSONMixin

from ..errors import ConfigurationError, InvalidStateError
from .board import BOARD_SIZE, LOW_MAX, MEDIUM_MAX

CLUE_MARKER = "CLUE"


class CaseStatus(str, Enum):
    READY = "ready"
    OPENED = "opened"


@dataclass
class CaseEntry(DataClassJSONMixin):
    """One numbered case on the board."""

    case_number: int
    value: int | str  # Dollar amount, or CLUE_MARKER
    original_value: int | str  # Value dealt at setup, never modified
    status: CaseStatus = CaseStatus.READY

    @property
    def is_clue(self) -> bool:
        return self.value == CLUE_MARKER

    @property
    def is_numeric(self) -> bool:
        return not self.is_clue

    @property
    def is_ready(self) -> bool:
        return self.status == CaseStatus.READY


def reveal_tier(value: int | str) -> str:
    """Sound category for a revealed value: low, medium, high or million."""
    if value == CLUE_MARKER:
        return "clue"
    if value <= LOW_MAX:
        return "low"
    if value <= MEDIUM_MAX:
        return "medium"
    if value <= 750000:
        return "high"
    return "million"


@dataclass
class CaseRegistry(DataClassJSONMixin):
    """
    The 24 case slots of a round.

    Case numbers are fixed board positions; setup shuffles which value each
    position holds. Cases only ever move from ready to opened. The registry
    knows nothing about round phases.
    """

    cases: list[CaseEntry] = field(default_factory=list)

    def initialize(
        self,
        values: list[int],
        clue_count: int = 3,
        rng: random.Random | None = None,
    ) -> None:
        """Deal values and clue markers across case numbers 1..N.

        Raises:
            ConfigurationError: If values is empty, holds anything but positive
                integers, or does not fill the board together with the clues.
        """
        if not values:
            raise ConfigurationError("No case values supplied")
        if clue_count < 0:
            raise ConfigurationError(f"Negative clue count {clue_count}")
        for value in values:
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"Case value {value!r} is not a positive integer")
        if len(values) + clue_count != BOARD_SIZE:
            raise ConfigurationError(
                f"{len(values)} values and {clue_count} clues do not fill "
                f"{BOARD_SIZE} cases"
            )

        dealt: list[int | str] = list(values) + [CLUE_MARKER] * clue_count
        # Fisher-Yates
        (rng or random).shuffle(dealt)

        self.cases = [
            CaseEntry(case_number=number, value=value, original_value=value)
            for number, value in enumerate(dealt, start=1)
        ]

    def open(self, case_number: int) -> int | str:
        """Open a ready case and return what it holds.

        Raises:
            InvalidStateError: If the case does not exist or is already open.
        """
        entry = self.case_at(case_number)
        if entry is None:
            raise InvalidStateError(
                f"No case {case_number}", message_id="error-no-such-case", case=case_number
            )
        if not entry.is_ready:
            raise InvalidStateError(
                f"Case {case_number} is already open",
                message_id="error-case-opened",
                case=case_number,
            )
        entry.status = CaseStatus.OPENED
        return entry.value

    # ==========================================================================
    # Queries
    # ==========================================================================

    def case_at(self, case_number: int) -> CaseEntry | None:
        if 1 <= case_number <= len(self.cases):
            return self.cases[case_number - 1]
        return None

    def numbers(self) -> list[int]:
        return [c.case_number for c in self.cases]

    def remaining_ready(self) -> list[CaseEntry]:
        return [c for c in self.cases if c.is_ready]

    def ready_numeric(self) -> list[CaseEntry]:
        return [c for c in self.cases if c.is_ready and c.is_numeric]

    def opened_count(self) -> int:
        return sum(1 for c in self.cases if not c.is_ready)

    def clue_cases(self) -> list[CaseEntry]:
        return [c for c in self.cases if c.is_clue]

    def cases_valued(self, low: int, high: int | None = None) -> list[CaseEntry]:
        """Numeric cases, opened or not, valued in [low, high]."""
        return [
            c
            for c in self.cases
            if c.is_numeric and c.value >= low and (high is None or c.value <= high)
        ]

    def highest_unopened_numeric_value(self) -> int | None:
        values = [c.value for c in self.ready_numeric()]
        return max(values) if values else None

    def lowest_unopened_numeric_value(self) -> int | None:
        values = [c.value for c in self.ready_numeric()]
        return min(values) if values else None

    def snapshot(self) -> tuple[CaseEntry, ...]:
        """Detached copies of every case, for read-only consumers."""
        return tuple(replace(c) for c in self.cases)
