"""Tests for the case registry and board geometry."""

import random

import pytest

from cluecase.errors import ConfigurationError, InvalidStateError
from cluecase.round.board import (
    BOTTOM_HALF,
    COLUMN_TABLE,
    LEFT_HALF,
    QUADRANT_TABLE,
    RIGHT_HALF,
    ROW_TABLE,
    TOP_HALF,
    neighbours,
)
from cluecase.round.options import DEFAULT_CASE_VALUES
from cluecase.round.registry import CLUE_MARKER, CaseRegistry, CaseStatus, reveal_tier
from cluecase.tests.boards import LAYOUT, registry_from


class TestBoard:
    """Board geometry tables."""

    def test_tables_partition_board(self):
        for table in (QUADRANT_TABLE, COLUMN_TABLE, ROW_TABLE):
            members = sorted(n for group in table.values() for n in group)
            assert members == list(range(1, 25))

    def test_halves(self):
        assert TOP_HALF == tuple(range(1, 13))
        assert BOTTOM_HALF == tuple(range(13, 25))
        assert 1 in LEFT_HALF and 2 in LEFT_HALF and 3 in RIGHT_HALF
        assert len(LEFT_HALF) == len(RIGHT_HALF) == 12

    def test_columns(self):
        assert COLUMN_TABLE[1] == (1, 5, 9, 13, 17, 21)
        assert COLUMN_TABLE[4] == (4, 8, 12, 16, 20, 24)

    def test_neighbours(self):
        assert neighbours(1) == [2, 5]
        assert neighbours(4) == [3, 8]
        assert neighbours(6) == [5, 7, 2, 10]
        assert neighbours(24) == [23, 20]

    def test_neighbours_do_not_wrap(self):
        assert 5 not in neighbours(4)
        assert 4 not in neighbours(5)


class TestRegistrySetup:
    """Dealing values across the board."""

    def setup_method(self):
        self.registry = CaseRegistry()
        self.registry.initialize(DEFAULT_CASE_VALUES, 3, random.Random(42))

    def test_case_numbers(self):
        assert self.registry.numbers() == list(range(1, 25))

    def test_clue_count(self):
        assert len(self.registry.clue_cases()) == 3

    def test_values_are_a_permutation(self):
        numeric = sorted(c.value for c in self.registry.cases if c.is_numeric)
        assert numeric == sorted(DEFAULT_CASE_VALUES)

    def test_original_values_match(self):
        for case in self.registry.cases:
            assert case.original_value == case.value
            assert case.status == CaseStatus.READY

    def test_seed_reproducible(self):
        other = CaseRegistry()
        other.initialize(DEFAULT_CASE_VALUES, 3, random.Random(42))
        assert [c.value for c in other.cases] == [c.value for c in self.registry.cases]

    def test_many_seeds(self):
        for seed in range(50):
            registry = CaseRegistry()
            registry.initialize(DEFAULT_CASE_VALUES, 3, random.Random(seed))
            assert registry.numbers() == list(range(1, 25))
            assert sum(1 for c in registry.cases if c.value == CLUE_MARKER) == 3

    def test_empty_values_rejected(self):
        with pytest.raises(ConfigurationError):
            CaseRegistry().initialize([], 3)

    def test_wrong_total_rejected(self):
        with pytest.raises(ConfigurationError):
            CaseRegistry().initialize(DEFAULT_CASE_VALUES[:-1], 3)

    def test_bad_values_rejected(self):
        with pytest.raises(ConfigurationError):
            CaseRegistry().initialize([0] + DEFAULT_CASE_VALUES[1:], 3)
        with pytest.raises(ConfigurationError):
            CaseRegistry().initialize([True] + DEFAULT_CASE_VALUES[1:], 3)

    def test_negative_clue_count_rejected(self):
        with pytest.raises(ConfigurationError):
            CaseRegistry().initialize(DEFAULT_CASE_VALUES + [1, 2, 3, 4], -1)


class TestRegistryOpen:
    """Opening cases and querying the board."""

    def setup_method(self):
        self.registry = registry_from(LAYOUT)

    def test_open_returns_value(self):
        assert self.registry.open(3) == 1000000
        assert self.registry.case_at(3).status == CaseStatus.OPENED
        assert self.registry.opened_count() == 1

    def test_open_clue(self):
        assert self.registry.open(9) == CLUE_MARKER

    def test_open_twice_rejected(self):
        self.registry.open(3)
        with pytest.raises(InvalidStateError) as exc_info:
            self.registry.open(3)
        assert exc_info.value.message_id == "error-case-opened"
        assert exc_info.value.render() == "Case 3 is already open."

    def test_open_missing_case_rejected(self):
        for number in (0, 25, -1):
            with pytest.raises(InvalidStateError) as exc_info:
                self.registry.open(number)
            assert exc_info.value.message_id == "error-no-such-case"
        assert self.registry.opened_count() == 0

    def test_ready_numeric(self):
        self.registry.open(1)
        self.registry.open(9)
        ready = self.registry.ready_numeric()
        assert len(ready) == 20
        assert all(c.is_numeric and c.is_ready for c in ready)

    def test_cases_valued(self):
        highs = [c.case_number for c in self.registry.cases_valued(50000)]
        assert highs == [3, 18, 19, 21, 22]
        lows = [c.case_number for c in self.registry.cases_valued(1, 500)]
        assert lows == [1, 2, 4, 5, 6, 7, 8, 13, 14, 15, 23]

    def test_highest_and_lowest(self):
        assert self.registry.highest_unopened_numeric_value() == 1000000
        assert self.registry.lowest_unopened_numeric_value() == 1
        self.registry.open(3)
        self.registry.open(1)
        assert self.registry.highest_unopened_numeric_value() == 500000
        assert self.registry.lowest_unopened_numeric_value() == 5

    def test_snapshot_is_detached(self):
        snapshot = self.registry.snapshot()
        snapshot[0].value = 999
        snapshot[0].status = CaseStatus.OPENED
        assert self.registry.case_at(1).value == 1
        assert self.registry.case_at(1).is_ready

    def test_serialization_round_trip(self):
        self.registry.open(9)
        loaded = CaseRegistry.from_json(self.registry.to_json())
        assert loaded == self.registry
        assert loaded.case_at(9).is_clue
        assert loaded.case_at(9).status == CaseStatus.OPENED


def test_reveal_tier():
    assert reveal_tier(CLUE_MARKER) == "clue"
    assert reveal_tier(500) == "low"
    assert reveal_tier(1000) == "medium"
    assert reveal_tier(25000) == "medium"
    assert reveal_tier(500000) == "high"
    assert reveal_tier(1000000) == "million"
