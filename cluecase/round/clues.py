"""
Clue generation for ClueCase.

A round deals a pool of clue instances. Each draw picks one instance at
random, renders it against the current board, and removes exactly that
instance from the pool. Clues read the whole board, opened cases included,
and never fail: when a clue has too few candidates it renders a
descriptive fallback instead.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import TYPE_CHECKING, Callable

from ..messages.localization import Localization
from .board import (
    BOTTOM_HALF,
    COLUMN_TABLE,
    LEFT_HALF,
    QUADRANT_TABLE,
    RIGHT_HALF,
    ROW_TABLE,
    TOP_HALF,
    is_high,
    is_low,
    is_medium,
    neighbours,
)
from .registry import CaseEntry, CaseRegistry

if TYPE_CHECKING:
    from .state import RoundState


class ClueKind(str, Enum):
    """Kinds of clue a pool can hold."""

    QUADRANT = "quadrant"
    ODD_EVEN = "odd_even"
    COLUMNS = "columns"
    ROW = "row"
    MEDIUM = "medium"
    HALF_TOP_BOTTOM_LOW = "half_top_bottom_low"
    HALF_SIDE_LOW = "half_side_low"
    PICK3 = "pick3"
    NEXT_TO = "next_to"
    LOW_CLUE = "low_clue"
    DOUBLE_CLUE = "double_clue"


DEFAULT_CLUE_POOL: list[ClueKind] = [
    ClueKind.QUADRANT,
    ClueKind.ODD_EVEN,
    ClueKind.COLUMNS,
    ClueKind.ROW,
    ClueKind.MEDIUM,
    ClueKind.HALF_TOP_BOTTOM_LOW,
    ClueKind.HALF_SIDE_LOW,
    ClueKind.PICK3,
    *[ClueKind.NEXT_TO] * 6,
    ClueKind.LOW_CLUE,
    ClueKind.DOUBLE_CLUE,
]

# Separator between the parts of a double clue
DOUBLE_CLUE_SEPARATOR = "\n\n"

Cases = tuple[CaseEntry, ...]


class ClueEngine:
    """
    Draws clues from the round's pool.

    The pool, the clue log and the set of used "next to" anchors all live
    on the RoundState passed in, so the engine itself holds no round data.
    """

    def __init__(
        self,
        registry: CaseRegistry,
        state: RoundState,
        rng: random.Random | None = None,
        locale: str = "en",
    ):
        self.registry = registry
        self.state = state
        self.rng = rng or random.Random()
        self.locale = locale

    def _text(self, message_id: str, **kwargs) -> str:
        return Localization.get(self.locale, message_id, **kwargs)

    def _case_list(self, cases: list[CaseEntry]) -> str:
        return Localization.format_case_numbers(
            self.locale, [c.case_number for c in cases]
        )

    # ==========================================================================
    # Drawing
    # ==========================================================================

    def select_clue(self, consume: bool = True) -> str:
        """Draw one clue from the pool and render it.

        Args:
            consume: Append the rendered text to the clue log.

        Returns:
            The clue text, or the "no more clues" text when the pool is empty.
        """
        pool = self.state.clue_pool
        if not pool:
            return self._text("clue-none-left")

        index = self.rng.randrange(len(pool))
        kind = ClueKind(pool[index])

        if kind is ClueKind.DOUBLE_CLUE:
            # Taken out first so it can't draw itself
            del pool[index]
            return self._double_clue(consume)

        text = self.STRATEGIES[kind](self, self.registry.snapshot())
        del pool[index]
        if consume:
            self.state.clues_found.append(text)
        return text

    def _double_clue(self, consume: bool) -> str:
        """Two clues under one header, drawn without using them up.

        With fewer than two other clues left in the pool the header is paired
        with a "not enough clues" line instead. That text still goes into the
        clue log when consume is set, so the player can see the power was
        spent.
        """
        header = self._text("clue-double-header")
        others = [k for k in self.state.clue_pool if k != ClueKind.DOUBLE_CLUE]
        if len(others) < 2:
            text = DOUBLE_CLUE_SEPARATOR.join([header, self._text("clue-double-short")])
        else:
            first = self.select_clue(consume=False)
            second = self.select_clue(consume=False)
            text = DOUBLE_CLUE_SEPARATOR.join([header, first, second])

        if consume:
            self.state.clues_found.append(text)
        return text

    # ==========================================================================
    # Ranking clues (quadrants and columns)
    # ==========================================================================

    @staticmethod
    def _rank_low_counts(
        cases: Cases, table: dict
    ) -> list[tuple[object, int]]:
        """Low-case count per area, highest first; ties keep table order."""
        low_numbers = {c.case_number for c in cases if is_low(c.value)}
        counts = [
            (key, sum(1 for n in members if n in low_numbers))
            for key, members in table.items()
        ]
        return sorted(counts, key=lambda item: item[1], reverse=True)

    @staticmethod
    def _ranking_outcome(ranked: list[tuple[object, int]]) -> str:
        """Classify four sorted counts: most, pair, fewest or even."""
        counts = [count for _, count in ranked]
        if counts[0] > counts[1]:
            return "most"
        if counts[1] > counts[2]:
            return "pair"
        if counts[2] > counts[3]:
            return "fewest"
        return "even"

    def _quadrant(self, cases: Cases) -> str:
        ranked = self._rank_low_counts(cases, QUADRANT_TABLE)
        outcome = self._ranking_outcome(ranked)
        if outcome == "most":
            return self._text("clue-quadrant-most", area=self._text(ranked[0][0]))
        if outcome == "pair":
            return self._text(
                "clue-quadrant-pair",
                first=self._text(ranked[0][0]),
                second=self._text(ranked[1][0]),
                count=ranked[0][1],
            )
        if outcome == "fewest":
            return self._text("clue-quadrant-fewest", area=self._text(ranked[3][0]))
        return self._text("clue-quadrant-even")

    def _columns(self, cases: Cases) -> str:
        ranked = self._rank_low_counts(cases, COLUMN_TABLE)
        outcome = self._ranking_outcome(ranked)
        if outcome == "most":
            return self._text("clue-columns-most", column=ranked[0][0])
        if outcome == "pair":
            return self._text(
                "clue-columns-pair",
                first=ranked[0][0],
                second=ranked[1][0],
                count=ranked[0][1],
            )
        if outcome == "fewest":
            return self._text("clue-columns-fewest", column=ranked[3][0])
        return self._text("clue-columns-even")

    # ==========================================================================
    # Split-board clues
    # ==========================================================================

    def _odd_even(self, cases: Cases) -> str:
        odd = sum(1 for c in cases if is_low(c.value) and c.case_number % 2 == 1)
        even = sum(1 for c in cases if is_low(c.value) and c.case_number % 2 == 0)
        # A tie reports EVEN
        if odd > even:
            return self._text("clue-odd-even-odd")
        return self._text("clue-odd-even-even")

    def _compare_halves(
        self,
        cases: Cases,
        first_half: tuple[int, ...],
        second_half: tuple[int, ...],
        first_id: str,
        second_id: str,
    ) -> str:
        low_numbers = {c.case_number for c in cases if is_low(c.value)}
        first = sum(1 for n in first_half if n in low_numbers)
        second = sum(1 for n in second_half if n in low_numbers)
        if first > second:
            return self._text(first_id)
        if second > first:
            return self._text(second_id)
        return self._text("clue-half-even")

    def _half_top_bottom_low(self, cases: Cases) -> str:
        return self._compare_halves(
            cases, TOP_HALF, BOTTOM_HALF, "clue-half-top", "clue-half-bottom"
        )

    def _half_side_low(self, cases: Cases) -> str:
        return self._compare_halves(
            cases, LEFT_HALF, RIGHT_HALF, "clue-half-left", "clue-half-right"
        )

    def _row(self, cases: Cases) -> str:
        high_numbers = {c.case_number for c in cases if is_high(c.value)}
        rows = []
        for row, members in ROW_TABLE.items():
            count = sum(1 for n in members if n in high_numbers)
            if count > 0:
                rows.append((row, count))

        if not rows:
            return self._text("clue-row-none")

        row, count = self.rng.choice(rows)
        return self._text("clue-row-high", row=row, count=count)

    # ==========================================================================
    # Named-case clues
    # ==========================================================================

    def _medium(self, cases: Cases) -> str:
        medium = [c for c in cases if is_medium(c.value)]
        if len(medium) < 3:
            return self._text("clue-medium-short", count=len(medium))
        return self._text("clue-medium", cases=self._case_list(self.rng.sample(medium, 3)))

    def _pick3(self, cases: Cases) -> str:
        low = [c for c in cases if is_low(c.value)]
        high = [c for c in cases if is_high(c.value)]
        if len(low) < 2:
            return self._text("clue-pick3-short-low", count=len(low))
        if not high:
            return self._text("clue-pick3-short-high")

        chosen = self.rng.sample(low, 2) + [self.rng.choice(high)]
        return self._text("clue-pick3", cases=self._case_list(chosen))

    def _next_to(self, cases: Cases) -> str:
        high_numbers = {c.case_number for c in cases if is_high(c.value)}

        def adjacent_highs(case_number: int) -> int:
            return sum(1 for n in neighbours(case_number) if n in high_numbers)

        used = self.state.used_anchors
        board = [c.case_number for c in cases]
        if all(n in used for n in board):
            # Every number has been an anchor; allow repeats
            search = board
        else:
            search = [n for n in board if n not in used]

        candidates = [n for n in search if adjacent_highs(n) > 0]
        if not candidates:
            return self._text("clue-next-to-none")

        anchor = self.rng.choice(candidates)
        used.add(anchor)
        return self._text("clue-next-to", count=adjacent_highs(anchor), case=anchor)

    def _low_clue(self, cases: Cases) -> str:
        low = [c for c in cases if is_low(c.value)]
        clue_cases = [c for c in cases if c.is_clue]
        if not low:
            return self._text("clue-low-clue-no-low")
        if not clue_cases:
            return self._text("clue-low-clue-no-clue")

        return self._text(
            "clue-low-clue",
            low=self.rng.choice(low).case_number,
            clue=self.rng.choice(clue_cases).case_number,
        )

    # Double clues are drawn by select_clue itself
    STRATEGIES: dict[ClueKind, Callable[["ClueEngine", Cases], str]] = {
        ClueKind.QUADRANT: _quadrant,
        ClueKind.ODD_EVEN: _odd_even,
        ClueKind.COLUMNS: _columns,
        ClueKind.ROW: _row,
        ClueKind.MEDIUM: _medium,
        ClueKind.HALF_TOP_BOTTOM_LOW: _half_top_bottom_low,
        ClueKind.HALF_SIDE_LOW: _half_side_low,
        ClueKind.PICK3: _pick3,
        ClueKind.NEXT_TO: _next_to,
        ClueKind.LOW_CLUE: _low_clue,
    }
