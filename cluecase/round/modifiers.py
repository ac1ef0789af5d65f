"""One-shot powers that read or rewrite case values."""

from __future__ import annotations

from ..errors import InvalidSelectionError
from ..messages.localization import Localization
from .board import HIGH_MIN
from .registry import CaseEntry, CaseRegistry

PICK_THREE_SIZE = 3


class ModifierEngine:
    """Pick-three classification and the double power."""

    def __init__(self, registry: CaseRegistry, locale: str = "en"):
        self.registry = registry
        self.locale = locale

    def _text(self, message_id: str, **kwargs) -> str:
        return Localization.get(self.locale, message_id, **kwargs)

    def validate_selection(self, selection: list[int]) -> list[CaseEntry]:
        """Check a pick-three selection and return its cases in pick order.

        Raises:
            InvalidSelectionError: On duplicates, opened or unknown cases, or
                anything other than three cases.
        """
        if len(selection) != PICK_THREE_SIZE or len(set(selection)) != PICK_THREE_SIZE:
            raise InvalidSelectionError(f"Bad pick-three selection {selection}")

        entries = []
        for case_number in selection:
            entry = self.registry.case_at(case_number)
            if entry is None or not entry.is_ready:
                raise InvalidSelectionError(f"Case {case_number} cannot be picked")
            entries.append(entry)
        return entries

    def pick_three(self, selection: list[int]) -> str:
        """
        Report on three picked cases.

        The report depends on how many of the picks are clue cases: with none
        it names the lowest value case, with one it names the clue and the
        lower of the other two, with two it names both clues, and with three
        it says they are all clues. Ties on lowest value go to the earliest
        pick.
        """
        entries = self.validate_selection(selection)
        clue_cases = [e for e in entries if e.is_clue]
        numeric = [e for e in entries if e.is_numeric]

        lowest = None
        for entry in numeric:
            if lowest is None or entry.value < lowest.value:
                lowest = entry

        if len(clue_cases) == 0:
            return self._text(
                "pick-three-no-clues",
                cases=Localization.format_case_numbers(self.locale, selection),
                lowest=lowest.case_number,
            )
        if len(clue_cases) == 1:
            return self._text(
                "pick-three-one-clue",
                clue=clue_cases[0].case_number,
                lowest=lowest.case_number,
            )
        if len(clue_cases) == 2:
            first, second = sorted(e.case_number for e in clue_cases)
            return self._text("pick-three-two-clues", first=first, second=second)
        return self._text("pick-three-all-clues")

    def apply_double(self) -> CaseEntry | None:
        """
        Double the highest unopened value and flatten the small ones.

        The highest ready numeric case (lowest case number on ties) is
        doubled. Every other ready numeric case below HIGH_MIN becomes 1.
        Opened cases and clue cases are left alone.

        Returns:
            The doubled case, or None when no numeric case is unopened.
        """
        ready = self.registry.ready_numeric()
        if not ready:
            return None

        best = ready[0]
        for entry in ready[1:]:
            if entry.value > best.value:
                best = entry

        for entry in ready:
            if entry is best:
                entry.value = entry.value * 2
            elif entry.value < HIGH_MIN:
                entry.value = 1
        return best
