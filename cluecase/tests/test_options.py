"""Tests for round options."""

import pytest

from cluecase.errors import ConfigurationError
from cluecase.game_utils.options import IntOption, get_all_option_metas, get_option_meta
from cluecase.round.clues import DEFAULT_CLUE_POOL, ClueKind
from cluecase.round.options import DEFAULT_CASE_VALUES, RoundOptions


class TestRoundOptions:
    """Declarative option validation."""

    def test_defaults(self):
        options = RoundOptions()
        assert options.duration_seconds == 120
        assert options.clue_count == 3
        assert options.time_bonus_per_second == 100
        assert options.free_clue_min_opened == 7
        assert options.clue_log_delay_seconds == 2
        assert options.locale == "en"
        assert options.case_values == DEFAULT_CASE_VALUES
        assert options.clue_pool == DEFAULT_CLUE_POOL

    def test_defaults_are_copies(self):
        options = RoundOptions()
        options.case_values.append(5)
        options.clue_pool.pop()
        assert len(RoundOptions().case_values) == 21
        assert len(RoundOptions().clue_pool) == 16

    def test_out_of_range_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            RoundOptions(duration_seconds=5)
        assert exc_info.value.kwargs["option"] == "duration_seconds"

    def test_unknown_locale_rejected(self):
        with pytest.raises(ConfigurationError):
            RoundOptions(locale="xx")

    def test_values_must_fill_board(self):
        with pytest.raises(ConfigurationError):
            RoundOptions(clue_count=4)
        options = RoundOptions(clue_count=4, case_values=DEFAULT_CASE_VALUES[1:])
        assert len(options.case_values) == 20

    def test_values_must_be_positive(self):
        with pytest.raises(ConfigurationError):
            RoundOptions(case_values=[0] + DEFAULT_CASE_VALUES[1:])

    def test_metadata(self):
        metas = get_all_option_metas(RoundOptions)
        assert "case_values" not in metas
        meta = get_option_meta(RoundOptions, "duration_seconds")
        assert isinstance(meta, IntOption)
        assert meta.describe()["min"] == 10
        assert meta.get_label("en") == "Round length in seconds"

    def test_apply_overrides(self):
        options = RoundOptions()
        unknown = options.apply_overrides({"duration_seconds": "60", "colour": "red"})
        assert options.duration_seconds == 60
        assert unknown == ["colour"]

    def test_overrides_clamp(self):
        options = RoundOptions()
        options.apply_overrides({"duration_seconds": "100000"})
        assert options.duration_seconds == 600

    def test_bad_override_rejected(self):
        options = RoundOptions()
        with pytest.raises(ConfigurationError):
            options.apply_overrides({"duration_seconds": "soon"})
        with pytest.raises(ConfigurationError):
            options.apply_overrides({"locale": "xx"})

    def test_json_round_trip(self):
        options = RoundOptions(duration_seconds=90, clue_pool=[ClueKind.ROW, ClueKind.ROW])
        loaded = RoundOptions.from_json(options.to_json())
        assert loaded == options
        assert loaded.clue_pool == [ClueKind.ROW, ClueKind.ROW]

    def test_json_validated_on_load(self):
        with pytest.raises(ConfigurationError):
            RoundOptions.from_json('{"duration_seconds": 1}')
