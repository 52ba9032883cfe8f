"""Card, starting hand and deck representation."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional

import numpy as np
from treys import Card as TreysCard


class Rank(IntEnum):
    """Card ranks (2-14 where 14 is Ace)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


class Suit(IntEnum):
    """Card suits, in canonical deck order."""
    HEARTS = 0
    DIAMONDS = 1
    CLUBS = 2
    SPADES = 3


# Mapping for string conversion
RANK_STR = {
    2: "2", 3: "3", 4: "4", 5: "5", 6: "6", 7: "7", 8: "8", 9: "9",
    10: "T", 11: "J", 12: "Q", 13: "K", 14: "A"
}
STR_RANK = {v: k for k, v in RANK_STR.items()}
STR_RANK["10"] = 10

SUIT_STR = {0: "h", 1: "d", 2: "c", 3: "s"}
STR_SUIT = {v: k for k, v in SUIT_STR.items()}

SUIT_SYMBOLS = {0: "♥", 1: "♦", 2: "♣", 3: "♠"}


class EmptyDeckError(ValueError):
    """Raised when more cards are requested than the deck holds."""


@dataclass(frozen=True)
class Card:
    """A playing card."""
    rank: int  # 2-14
    suit: int  # 0-3

    def __post_init__(self):
        if self.rank not in RANK_STR:
            raise ValueError(f"Invalid rank: {self.rank}")
        if self.suit not in SUIT_STR:
            raise ValueError(f"Invalid suit: {self.suit}")

    def __str__(self) -> str:
        return f"{RANK_STR[self.rank]}{SUIT_STR[self.suit]}"

    def __repr__(self) -> str:
        return str(self)

    @property
    def pretty(self) -> str:
        """Card with its suit symbol, e.g. 'A♠'."""
        return f"{RANK_STR[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    @property
    def color(self) -> str:
        return "red" if self.suit in (Suit.HEARTS, Suit.DIAMONDS) else "black"

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse card from string like 'As', 'Th', '10h', '2c'."""
        if len(s) not in (2, 3):
            raise ValueError(f"Invalid card string: {s}")
        rank_part = s[:-1].upper()
        suit_char = s[-1].lower()

        if rank_part not in STR_RANK:
            raise ValueError(f"Invalid rank: {rank_part}")
        if suit_char not in STR_SUIT:
            raise ValueError(f"Invalid suit: {suit_char}")

        return cls(rank=STR_RANK[rank_part], suit=STR_SUIT[suit_char])

    def to_treys(self) -> int:
        """Convert to treys library card format."""
        return TreysCard.new(str(self))


def parse_cards(s: str) -> list[Card]:
    """
    Parse a run of cards.

    Accepts space/comma separated ('As Kh Td') or packed ('AsKhTd')
    notation. An empty string gives an empty list.
    """
    tokens = s.replace(",", " ").split()
    cards = []
    for token in tokens:
        i = 0
        while i < len(token):
            # '10' is the only three-character card
            width = 3 if token[i:i + 2] == "10" else 2
            cards.append(Card.from_string(token[i:i + width]))
            i += width
    return cards


def _parse_rank(c: str) -> int:
    if c.upper() not in STR_RANK:
        raise ValueError(f"Invalid rank: {c}")
    return STR_RANK[c.upper()]


@dataclass
class Hand:
    """A two-card starting hand."""
    card1: Card
    card2: Card

    def __post_init__(self):
        # Ensure card1 has higher or equal rank
        if self.card1.rank < self.card2.rank:
            self.card1, self.card2 = self.card2, self.card1

    @property
    def cards(self) -> list[Card]:
        return [self.card1, self.card2]

    @property
    def is_pair(self) -> bool:
        """Check if hand is a pocket pair."""
        return self.card1.rank == self.card2.rank

    @property
    def is_suited(self) -> bool:
        """Check if hand is suited."""
        return self.card1.suit == self.card2.suit

    @property
    def canonical(self) -> str:
        """
        Get canonical hand notation (e.g., 'AKs', 'QQ', '72o').

        This groups equivalent hands regardless of specific suits.
        """
        r1 = RANK_STR[self.card1.rank]
        r2 = RANK_STR[self.card2.rank]

        if self.is_pair:
            return f"{r1}{r2}"
        elif self.is_suited:
            return f"{r1}{r2}s"
        else:
            return f"{r1}{r2}o"

    @property
    def tier(self) -> int:
        return STARTING_HAND_TIERS.get(self.canonical, 7)

    def __str__(self) -> str:
        return f"{self.card1}{self.card2}"

    def __repr__(self) -> str:
        return f"Hand({self.card1}, {self.card2})"

    @classmethod
    def from_string(cls, s: str) -> "Hand":
        """Parse hand from string like 'AsKh' or 'AKs'."""
        if len(s) == 4:
            # Specific cards: 'AsKh'
            card1 = Card.from_string(s[:2])
            card2 = Card.from_string(s[2:])
            return cls(card1, card2)
        elif len(s) == 2:
            # Pair: 'AA'
            rank = _parse_rank(s[0])
            return cls(
                Card(rank, Suit.SPADES),
                Card(rank, Suit.HEARTS)
            )
        elif len(s) == 3:
            # Suited or offsuit: 'AKs' or 'AKo'
            r1 = _parse_rank(s[0])
            r2 = _parse_rank(s[1])
            suited = s[2].lower() == 's'

            if suited:
                return cls(Card(r1, Suit.SPADES), Card(r2, Suit.SPADES))
            else:
                return cls(Card(r1, Suit.SPADES), Card(r2, Suit.HEARTS))
        else:
            raise ValueError(f"Invalid hand string: {s}")

    def to_treys(self) -> list[int]:
        """Convert to treys library format."""
        return [self.card1.to_treys(), self.card2.to_treys()]


class Deck:
    """
    A standard 52-card deck.

    Cards are dealt from the end of ``cards``, so the order left by
    ``shuffle`` decides the deal order. Randomness comes from the
    injected numpy generator; pass a seeded one for reproducible deals.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.cards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Reset deck to full 52 cards, suit-major with ranks ascending."""
        self.cards = [
            Card(rank, suit)
            for suit in Suit
            for rank in Rank
        ]

    def shuffle(self) -> None:
        """Fisher-Yates shuffle in place."""
        cards = self.cards
        n = len(cards)
        if n < 2:
            return
        # swaps[k] is uniform in [0, i] for i = n-1, n-2, ..., 1
        swaps = self.rng.integers(0, np.arange(n, 1, -1))
        for i, j in zip(range(n - 1, 0, -1), swaps):
            cards[i], cards[j] = cards[j], cards[i]

    def deal(self) -> Card:
        """Deal one card from the end of the deck."""
        if not self.cards:
            raise EmptyDeckError("Cannot deal from an empty deck")
        return self.cards.pop()

    def deal_multiple(self, n: int) -> list[Card]:
        """
        Deal n cards, as n calls to deal().

        Raises EmptyDeckError without touching the deck if fewer than
        n cards remain.
        """
        if n < 0:
            raise ValueError(f"Cannot deal a negative number of cards: {n}")
        if n > len(self.cards):
            raise EmptyDeckError(
                f"Cannot deal {n} cards, only {len(self.cards)} remaining"
            )
        return [self.deal() for _ in range(n)]

    def remove_cards(self, cards: Iterable[Card]) -> None:
        """Remove specific cards from the deck. Absent cards are ignored."""
        excluded = {(c.rank, c.suit) for c in cards}
        self.cards = [c for c in self.cards if (c.rank, c.suit) not in excluded]

    @property
    def remaining(self) -> int:
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __contains__(self, card: Card) -> bool:
        return card in self.cards


def hand_to_treys(hand: Hand, board: list[Card]) -> tuple[list[int], list[int]]:
    """Convert hand and board to treys format."""
    hand_treys = hand.to_treys()
    board_treys = [c.to_treys() for c in board]
    return hand_treys, board_treys


def _build_starting_hand_tiers() -> dict[str, int]:
    tiers = {
        1: ["AA", "KK", "QQ", "AKs"],
        2: ["JJ", "TT", "AQs", "AKo", "AQo"],
        3: ["99", "88", "AJs", "KQs", "ATs", "AJo", "KQo"],
        4: ["77", "66", "KJs", "QJs", "JTs", "ATo", "KJo", "QJo", "JTo",
            "T9s", "98s", "87s", "76s"],
        5: ["55", "44", "A9s", "A8s", "A7s", "A6s", "A5s", "A4s", "A3s",
            "A2s", "KTs", "QTs", "T9o", "98o", "87o", "76o", "65s", "54s"],
        6: ["33", "22", "K9s", "K8s", "K7s", "Q9s", "J9s", "T8s", "97s",
            "86s", "75s", "64s", "53s", "A9o", "A8o", "KTo", "QTo"],
    }
    return {hand: tier for tier, hands in tiers.items() for hand in hands}


# Starting hand tiers: 1 = premium, 6 = weak, anything missing is tier 7
STARTING_HAND_TIERS = _build_starting_hand_tiers()


def starting_hand_tier(card1: Card, card2: Card) -> int:
    """Coarse preflop tier (1 premium ... 7 trash) for two hole cards."""
    return Hand(card1, card2).tier
