"""Tests for table rules."""

from random import Random

import pytest

from engine.constants import DEFAULT_BET, MIN_BET, STARTING_CHIPS
from engine.rules import TableRules


class TestTableRules:
    """Tests for the TableRules class."""

    def test_defaults(self):
        rules = TableRules()
        assert rules.starting_chips == STARTING_CHIPS == 100_000
        assert rules.min_bet == MIN_BET == 1_000
        assert rules.default_bet == DEFAULT_BET == 5_000
        assert rules.reshuffle_threshold == 0.8
        assert rules.split_wager_mode == "immediate"
        assert not rules.strict_actions

    def test_rules_are_frozen(self):
        rules = TableRules()
        with pytest.raises(AttributeError):
            rules.min_bet = 5

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"min_bet": 0},
            {"default_bet": 500},
            {"starting_chips": -1},
            {"reshuffle_threshold": 0.0},
            {"reshuffle_threshold": 1.2},
            {"split_wager_mode": "later"},
        ],
    )
    def test_invalid_rules_raise(self, kwargs):
        with pytest.raises(ValueError):
            TableRules(**kwargs)

    def test_deferred_split_preset(self):
        assert TableRules.deferred_split().split_wager_mode == "deferred"


class TestWagerHelpers:
    """Tests for wager validation and helpers."""

    def test_validate_accepts_legal_wager(self):
        rules = TableRules()
        assert rules.validate_wager(1_000, 100_000) is None
        assert rules.validate_wager(100_000, 100_000) is None

    def test_validate_rejects_below_minimum(self):
        assert TableRules().validate_wager(999, 100_000) == "Minimum bet is 1,000 chips"

    def test_validate_rejects_above_chips(self):
        assert TableRules().validate_wager(5_000, 4_000) == "Maximum bet is 4,000 chips"

    def test_clamp_wager(self):
        rules = TableRules()
        assert rules.clamp_wager(10, 50_000) == 1_000
        assert rules.clamp_wager(80_000, 50_000) == 50_000
        assert rules.clamp_wager(7_000, 50_000) == 7_000

    def test_default_wager(self):
        rules = TableRules()
        assert rules.default_wager(100_000) == 5_000
        assert rules.default_wager(3_000) == 3_000

    def test_all_in_wager(self):
        assert TableRules().all_in_wager(12_345) == 12_345

    def test_random_wager_in_range(self):
        rules = TableRules()
        rng = Random(42)
        for _ in range(100):
            wager = rules.random_wager(20_000, rng)
            assert 1_000 <= wager <= 20_000

    def test_random_wager_needs_minimum(self):
        with pytest.raises(ValueError):
            TableRules().random_wager(999)
