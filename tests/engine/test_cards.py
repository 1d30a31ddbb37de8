"""Tests for Card, Rank and Suit."""

import pytest

from engine.cards import Card, Rank, Suit, full_deck, is_hidden_card, parse_cards


class TestCard:
    """Tests for the Card class."""

    def test_card_creation(self):
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_card_immutability(self):
        """Test that cards are immutable."""
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_value(self):
        """Test card blackjack values."""
        assert Card(Rank.TWO, Suit.HEARTS).value == 2
        assert Card(Rank.TEN, Suit.HEARTS).value == 10
        assert Card(Rank.JACK, Suit.HEARTS).value == 10
        assert Card(Rank.QUEEN, Suit.HEARTS).value == 10
        assert Card(Rank.KING, Suit.HEARTS).value == 10
        assert Card(Rank.ACE, Suit.HEARTS).value == 11

    def test_card_id(self):
        assert Card(Rank.TEN, Suit.HEARTS).id == "10-H"
        assert Card(Rank.ACE, Suit.SPADES).id == "A-S"
        assert Card(Rank.QUEEN, Suit.DIAMONDS).id == "Q-D"
        assert str(Card(Rank.SEVEN, Suit.CLUBS)) == "7-C"

    def test_card_from_id(self):
        assert Card.from_id("10-H") == Card(Rank.TEN, Suit.HEARTS)
        assert Card.from_id("A-S") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_id("k-c") == Card(Rank.KING, Suit.CLUBS)
        assert Card.from_id(" 2-D ") == Card(Rank.TWO, Suit.DIAMONDS)

    def test_every_card_id_parses_back(self):
        for card in full_deck():
            assert Card.from_id(card.id) == card

    @pytest.mark.parametrize("bad_id", ["", "10H", "1-H", "A-X", "-H", "A-", "11-S"])
    def test_card_from_invalid_id_raises(self, bad_id):
        with pytest.raises(ValueError):
            Card.from_id(bad_id)

    def test_hidden_sentinel_is_not_a_card(self):
        with pytest.raises(ValueError):
            Card.from_id("BACK")

    def test_card_equality_includes_suit(self):
        """Cards are distinct per suit so a deck holds 52 different cards."""
        assert Card(Rank.ACE, Suit.SPADES) == Card(Rank.ACE, Suit.SPADES)
        assert Card(Rank.ACE, Suit.SPADES) != Card(Rank.ACE, Suit.HEARTS)

    def test_same_rank_ignores_suit(self):
        eight_h = Card(Rank.EIGHT, Suit.HEARTS)
        assert eight_h.same_rank(Card(Rank.EIGHT, Suit.CLUBS))
        assert not eight_h.same_rank(Card(Rank.NINE, Suit.HEARTS))

    def test_face_cards_do_not_pair_with_each_other(self):
        assert not Card(Rank.KING, Suit.HEARTS).same_rank(Card(Rank.QUEEN, Suit.HEARTS))

    def test_card_hash(self):
        """Test that cards can be used in sets/dicts."""
        cards = {Card(Rank.ACE, Suit.SPADES), Card(Rank.ACE, Suit.SPADES)}
        assert len(cards) == 1


class TestDeckHelpers:
    """Tests for module-level helpers."""

    def test_full_deck_has_52_unique_cards(self):
        deck = full_deck()
        assert len(deck) == 52
        assert len(set(deck)) == 52

    def test_full_deck_has_four_of_each_rank(self):
        deck = full_deck()
        for rank in Rank:
            assert sum(1 for c in deck if c.rank == rank) == 4

    def test_is_hidden_card(self):
        assert is_hidden_card("BACK")
        assert not is_hidden_card("HIDDEN")
        assert not is_hidden_card("A-S")

    def test_parse_cards(self):
        assert parse_cards(["A-H", "K-S"]) == [
            Card(Rank.ACE, Suit.HEARTS),
            Card(Rank.KING, Suit.SPADES),
        ]

    def test_rank_from_id(self):
        assert Rank.from_id("10") == Rank.TEN
        assert Rank.from_id("J") == Rank.JACK
        with pytest.raises(ValueError):
            Rank.from_id("1")

    def test_suit_symbol(self):
        assert Suit.HEARTS.symbol == "♥"
        assert str(Suit.HEARTS) == "H"
