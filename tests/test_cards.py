"""Tests for card, starting hand and deck representation."""

from itertools import permutations

import numpy as np
import pytest
from treys import Card as TreysCard

from holdem.game.cards import (
    Card, Hand, Deck, Rank, Suit, EmptyDeckError,
    parse_cards, hand_to_treys, starting_hand_tier, STARTING_HAND_TIERS,
)


class TestCard:
    def test_from_string(self):
        card = Card.from_string("As")
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_from_string_ten(self):
        card = Card.from_string("Th")
        assert card.rank == Rank.TEN
        assert card.suit == Suit.HEARTS

    def test_from_string_ten_digits(self):
        assert Card.from_string("10h") == Card.from_string("Th")

    def test_from_string_lowercase(self):
        card = Card.from_string("kd")
        assert card.rank == Rank.KING
        assert card.suit == Suit.DIAMONDS

    def test_str(self):
        card = Card(Rank.ACE, Suit.SPADES)
        assert str(card) == "As"

    def test_pretty(self):
        assert Card(Rank.QUEEN, Suit.HEARTS).pretty == "Q♥"

    def test_color(self):
        assert Card.from_string("2d").color == "red"
        assert Card.from_string("2c").color == "black"

    def test_from_string_invalid_rank(self):
        with pytest.raises(ValueError):
            Card.from_string("Xs")

    def test_from_string_invalid_suit(self):
        with pytest.raises(ValueError):
            Card.from_string("Ax")

    def test_invalid_rank_value(self):
        with pytest.raises(ValueError):
            Card(1, Suit.SPADES)

    def test_equality(self):
        card1 = Card.from_string("As")
        card2 = Card(14, 3)
        assert card1 == card2
        assert hash(card1) == hash(card2)

    def test_to_treys(self):
        card = Card.from_string("As")
        treys_card = card.to_treys()
        assert isinstance(treys_card, int)

    def test_hand_to_treys(self):
        hand = Hand.from_string("AsKh")
        board = parse_cards("Qd Jd Td")
        hand_treys, board_treys = hand_to_treys(hand, board)
        assert hand_treys == [TreysCard.new("As"), TreysCard.new("Kh")]
        assert board_treys == [TreysCard.new(s) for s in ("Qd", "Jd", "Td")]


class TestParseCards:
    def test_packed(self):
        assert [str(c) for c in parse_cards("AsKhTd")] == ["As", "Kh", "Td"]

    def test_spaced(self):
        assert [str(c) for c in parse_cards("As, Kh 10d")] == ["As", "Kh", "Td"]

    def test_empty(self):
        assert parse_cards("") == []

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_cards("AsK")


class TestHand:
    def test_from_string_specific(self):
        hand = Hand.from_string("AsKh")
        assert hand.card1.rank == Rank.ACE
        assert hand.card2.rank == Rank.KING

    def test_from_string_pair(self):
        hand = Hand.from_string("AA")
        assert hand.is_pair

    @pytest.mark.parametrize("s", ["XX", "AXs", "1Ko", "AsK"])
    def test_from_string_invalid(self, s):
        with pytest.raises(ValueError):
            Hand.from_string(s)

    def test_canonical(self):
        assert Hand.from_string("AsAh").canonical == "AA"
        assert Hand.from_string("AsKs").canonical == "AKs"
        assert Hand.from_string("KhAs").canonical == "AKo"

    def test_cards(self):
        hand = Hand.from_string("7c9d")
        assert hand.cards == [Card.from_string("9d"), Card.from_string("7c")]


class TestStartingHandTier:
    def test_premium(self):
        assert starting_hand_tier(Card.from_string("Ah"), Card.from_string("Ad")) == 1
        assert starting_hand_tier(Card.from_string("Ks"), Card.from_string("As")) == 1

    def test_offsuit_vs_suited(self):
        ak_off = starting_hand_tier(Card.from_string("Ks"), Card.from_string("Ah"))
        assert ak_off == 2

    def test_trash(self):
        assert starting_hand_tier(Card.from_string("7s"), Card.from_string("2h")) == 7

    def test_tiers_in_range(self):
        assert set(STARTING_HAND_TIERS.values()) == {1, 2, 3, 4, 5, 6}


class TestDeck:
    def test_full_deck(self):
        deck = Deck()
        assert len(deck) == 52
        assert deck.remaining == 52
        assert len(set(deck.cards)) == 52

    def test_canonical_order(self):
        deck = Deck()
        assert deck.cards[0] == Card(Rank.TWO, Suit.HEARTS)
        assert deck.cards[12] == Card(Rank.ACE, Suit.HEARTS)
        assert deck.cards[13] == Card(Rank.TWO, Suit.DIAMONDS)
        assert deck.cards[-1] == Card(Rank.ACE, Suit.SPADES)

    def test_deal_from_end(self):
        deck = Deck()
        card = deck.deal()
        assert card == Card(Rank.ACE, Suit.SPADES)
        assert deck.remaining == 51
        assert card not in deck

    def test_deal_multiple(self):
        deck = Deck()
        cards = deck.deal_multiple(5)
        assert len(cards) == 5
        assert deck.remaining == 47
        assert cards[0] == Card(Rank.ACE, Suit.SPADES)
        assert cards[1] == Card(Rank.KING, Suit.SPADES)

    def test_deal_empty(self):
        deck = Deck()
        deck.deal_multiple(52)
        with pytest.raises(EmptyDeckError):
            deck.deal()

    def test_deal_multiple_too_many_leaves_deck_intact(self):
        deck = Deck()
        deck.deal_multiple(50)
        with pytest.raises(EmptyDeckError):
            deck.deal_multiple(3)
        assert deck.remaining == 2

    def test_empty_deck_error_is_value_error(self):
        deck = Deck()
        with pytest.raises(ValueError):
            deck.deal_multiple(53)

    def test_remove_cards(self):
        deck = Deck()
        card = Card.from_string("As")
        deck.remove_cards([card])
        assert len(deck) == 51
        assert card not in deck

    def test_remove_cards_idempotent(self):
        deck = Deck()
        known = parse_cards("As Kh 2c")
        deck.remove_cards(known)
        before = list(deck.cards)
        deck.remove_cards(known)
        assert deck.cards == before
        assert deck.remaining == 49

    def test_reset(self):
        deck = Deck()
        deck.deal_multiple(20)
        deck.remove_cards(parse_cards("2h 3h"))
        deck.reset()
        assert len(deck) == 52
        assert deck.cards == Deck().cards

    def test_shuffle_keeps_cards(self, rng):
        deck = Deck(rng)
        deck.shuffle()
        assert sorted(deck.cards, key=lambda c: (c.suit, c.rank)) == Deck().cards

    def test_shuffle_changes_order(self, rng):
        deck = Deck(rng)
        deck.shuffle()
        assert deck.cards != Deck().cards

    def test_seeded_shuffle_is_reproducible(self):
        deck1 = Deck(np.random.default_rng(7))
        deck2 = Deck(np.random.default_rng(7))
        deck1.shuffle()
        deck2.shuffle()
        assert deck1.cards == deck2.cards

    def test_shuffle_uniform(self, rng):
        # Shuffle a 4-card deck many times; all 24 orderings should be
        # equally likely. Chi-square critical value for 23 degrees of
        # freedom at p = 0.001 is 49.73.
        keep = parse_cards("2h 3h 4h 5h")
        orders = {order: i for i, order in enumerate(permutations(keep))}
        counts = np.zeros(len(orders))

        deck = Deck(rng)
        trials = 24000
        for _ in range(trials):
            deck.reset()
            deck.remove_cards([c for c in deck.cards if c not in keep])
            deck.shuffle()
            counts[orders[tuple(deck.cards)]] += 1

        expected = trials / len(orders)
        chi_square = ((counts - expected) ** 2 / expected).sum()
        assert chi_square < 49.73

    def test_shuffle_positions_uniform(self, rng):
        # Each card lands in each position equally often over a full deck.
        # Chi-square critical value for 51 degrees of freedom at
        # p = 0.001 is 87.97.
        trials = 10400
        positions = np.zeros(52)
        ace = Card(Rank.ACE, Suit.SPADES)
        deck = Deck(rng)
        for _ in range(trials):
            deck.reset()
            deck.shuffle()
            positions[deck.cards.index(ace)] += 1

        expected = trials / 52
        chi_square = ((positions - expected) ** 2 / expected).sum()
        assert chi_square < 87.97
