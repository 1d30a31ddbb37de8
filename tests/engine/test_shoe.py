"""Tests for the single-deck shoe."""

import logging
from random import Random

import pytest
from hypothesis import given, settings, strategies as st

from engine.cards import Card, full_deck
from engine.errors import ShoeExhausted
from engine.shoe import Shoe, ShoeCount


def _all_cards(shoe: Shoe) -> list[Card]:
    return shoe.live + shoe.discard


class TestShoe:
    """Tests for the Shoe class."""

    def test_new_shoe_is_full(self, shoe):
        assert len(shoe) == 52
        assert shoe.cards_remaining == 52
        assert shoe.cards_used == 0
        assert not shoe.needs_shuffle

    def test_new_shoe_has_every_card_once(self, shoe):
        assert sorted(c.id for c in shoe) == sorted(c.id for c in full_deck())

    def test_new_shoe_is_shuffled(self):
        assert Shoe(rng=Random(42)).live != full_deck()

    def test_same_seed_same_order(self):
        assert Shoe(rng=Random(7)).live == Shoe(rng=Random(7)).live

    def test_new_shoe_count(self, shoe):
        assert shoe.count() == ShoeCount(running=0, true=0.0, cards_dealt=0, remaining_cards=52)

    def test_draw_moves_card_to_discard(self, shoe):
        top = shoe.live[-1]
        card = shoe.draw()
        assert card == top
        assert card not in shoe.live
        assert shoe.discard == [card]
        assert shoe.cards_remaining == 51
        assert shoe.dealt_since_shuffle == 1
        assert shoe.dealt_cards == [card]

    def test_running_count_follows_hilo(self, shoe, stack_shoe):
        stack_shoe(shoe, ["2-H", "6-S", "8-C", "K-D", "A-H", "5-C"])
        expected = [1, 2, 2, 1, 0, 1]
        for running in expected:
            shoe.draw()
            assert shoe.running_count == running

    def test_true_count(self, shoe, stack_shoe):
        stack_shoe(shoe, ["2-H", "3-H", "4-H", "5-H", "6-H"])
        for _ in range(5):
            shoe.draw()

        count = shoe.count()
        assert count.running == 5
        assert count.remaining_cards == 47
        assert count.cards_dealt == 5
        # 5 / (47 / 52) = 5.53
        assert count.true == 5.5

    def test_true_count_zero_when_empty(self):
        shoe = Shoe(threshold=1.0, rng=Random(1))
        for _ in range(52):
            shoe.draw()
        count = shoe.count()
        assert count.remaining_cards == 0
        assert count.true == 0.0

    def test_reshuffle_point(self, shoe):
        assert shoe.threshold == 0.8
        assert shoe.reshuffle_point == pytest.approx(10.4)

    def test_needs_shuffle_at_threshold(self, shoe):
        for _ in range(41):
            shoe.draw()
            assert not shoe.needs_shuffle
        assert shoe.cards_remaining == 11

        shoe.draw()
        assert shoe.cards_remaining == 10
        assert shoe.needs_shuffle

    def test_reshuffle_if_needed_noop_when_not_due(self, shoe):
        for _ in range(5):
            shoe.draw()
        live_before = shoe.live
        count_before = shoe.count()

        assert shoe.reshuffle_if_needed() is False
        assert shoe.live == live_before
        assert shoe.count() == count_before

    def test_reshuffle_if_needed_resets_shoe(self, shoe):
        while not shoe.needs_shuffle:
            shoe.draw()

        assert shoe.reshuffle_if_needed() is True
        count = shoe.count()
        assert count.running == 0
        assert count.cards_dealt == 0
        assert count.remaining_cards == 52
        assert shoe.discard == []
        assert not shoe.needs_shuffle
        assert shoe.reshuffle_if_needed() is False

    def test_empty_shoe_forces_reshuffle(self, caplog):
        shoe = Shoe(threshold=1.0, rng=Random(3))
        for _ in range(52):
            shoe.draw()

        with caplog.at_level(logging.WARNING, logger="engine.shoe"):
            card = shoe.draw()

        assert isinstance(card, Card)
        assert shoe.cards_remaining == 51
        assert len(_all_cards(shoe)) == 52
        assert "forcing a reshuffle" in caplog.text

    def test_nothing_to_draw_raises(self, shoe):
        shoe._live = []
        shoe._discard = []
        with pytest.raises(ShoeExhausted):
            shoe.draw()

    def test_shoe_exhausted_is_a_runtime_error(self):
        assert issubclass(ShoeExhausted, RuntimeError)

    @pytest.mark.parametrize("threshold", [0.0, -0.5, 1.5])
    def test_invalid_threshold_raises(self, threshold):
        with pytest.raises(ValueError):
            Shoe(threshold=threshold)

    def test_initialize_rebuilds_shoe(self, shoe):
        for _ in range(20):
            shoe.draw()
        shoe.initialize()
        assert shoe.cards_remaining == 52
        assert shoe.discard == []
        assert shoe.running_count == 0

    @settings(max_examples=50)
    @given(
        seed=st.integers(min_value=0, max_value=2**32 - 1),
        ops=st.lists(st.sampled_from(["draw", "reshuffle"]), max_size=150),
    )
    def test_conservation(self, seed, ops):
        """Live plus discard is always the full deck, each card exactly once."""
        shoe = Shoe(rng=Random(seed))
        deck_ids = sorted(c.id for c in full_deck())

        for op in ops:
            if op == "draw":
                shoe.draw()
            else:
                shoe.reshuffle_if_needed()

            assert shoe.cards_remaining + shoe.cards_used == 52
            assert sorted(c.id for c in _all_cards(shoe)) == deck_ids
