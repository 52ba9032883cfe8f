"""
Five-card hand classification and best-hand search.

Hands are tagged values: a category plus a tie-break tuple. Comparing
two EvaluatedHand objects compares category first, then the tie-break
ranks lexicographically, so ``max`` picks the best hand and ``==``
means a split pot.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import IntEnum
from itertools import combinations
from typing import Iterable, Sequence

from .cards import Card, Rank


class HandCategory(IntEnum):
    """Hand categories, weakest to strongest."""
    HIGH_CARD = 1
    PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9
    ROYAL_FLUSH = 10

    @property
    def label(self) -> str:
        return CATEGORY_NAMES[self]


CATEGORY_NAMES = {
    HandCategory.HIGH_CARD: "High Card",
    HandCategory.PAIR: "Pair",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.FLUSH: "Flush",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.ROYAL_FLUSH: "Royal Flush",
}

WHEEL = (Rank.ACE, Rank.FIVE, Rank.FOUR, Rank.THREE, Rank.TWO)


class InsufficientCardsError(ValueError):
    """Raised when fewer than five cards are available for a hand."""


@dataclass(frozen=True, order=True)
class EvaluatedHand:
    """Result of evaluating a poker hand."""
    category: HandCategory
    tiebreak: tuple[int, ...]
    cards: tuple[Card, ...] = field(default=(), compare=False)

    @property
    def name(self) -> str:
        return self.category.label

    def __str__(self) -> str:
        return f"{self.name} ({' '.join(str(c) for c in self.cards)})"


def _straight_high(ranks: Sequence[int]) -> int:
    """
    High card of a straight, or 0 if not a straight.

    ``ranks`` must be sorted descending.
    """
    if len(set(ranks)) != 5:
        return 0
    if tuple(ranks) == WHEEL:
        return 5
    if ranks[0] - ranks[4] == 4:
        return ranks[0]
    return 0


def evaluate_five(cards: Sequence[Card]) -> EvaluatedHand:
    """
    Classify exactly five cards.

    Args:
        cards: Five distinct cards, in any order

    Returns:
        EvaluatedHand with category and tie-break key
    """
    if len(cards) != 5:
        raise ValueError(f"Must evaluate exactly 5 cards, got {len(cards)}")

    ordered = tuple(sorted(cards, key=lambda c: (c.rank, c.suit), reverse=True))
    ranks = [c.rank for c in ordered]

    is_flush = len({c.suit for c in ordered}) == 1
    straight_high = _straight_high(ranks)

    # Group ranks by (count, rank), biggest group first
    groups = sorted(Counter(ranks).items(), key=lambda x: (x[1], x[0]), reverse=True)
    pattern = tuple(count for _, count in groups)
    grouped = tuple(rank for rank, _ in groups)

    if is_flush and straight_high:
        if straight_high == Rank.ACE:
            category, tiebreak = HandCategory.ROYAL_FLUSH, (Rank.ACE,)
        else:
            category, tiebreak = HandCategory.STRAIGHT_FLUSH, (straight_high,)
    elif pattern == (4, 1):
        category, tiebreak = HandCategory.FOUR_OF_A_KIND, grouped
    elif pattern == (3, 2):
        category, tiebreak = HandCategory.FULL_HOUSE, grouped
    elif is_flush:
        category, tiebreak = HandCategory.FLUSH, tuple(ranks)
    elif straight_high:
        category, tiebreak = HandCategory.STRAIGHT, (straight_high,)
    elif pattern == (3, 1, 1):
        category, tiebreak = HandCategory.THREE_OF_A_KIND, grouped
    elif pattern == (2, 2, 1):
        category, tiebreak = HandCategory.TWO_PAIR, grouped
    elif pattern == (2, 1, 1, 1):
        category, tiebreak = HandCategory.PAIR, grouped
    else:
        category, tiebreak = HandCategory.HIGH_CARD, tuple(ranks)

    return EvaluatedHand(
        category=category,
        tiebreak=tuple(int(r) for r in tiebreak),
        cards=ordered,
    )


def best_hand(cards: Iterable[Card]) -> EvaluatedHand:
    """
    Find the best 5-card hand from five or more cards.

    Every 5-card combination is classified (21 for seven cards), so the
    result never depends on card order.

    Raises:
        InsufficientCardsError: fewer than five cards given
    """
    cards = list(cards)
    if len(cards) < 5:
        raise InsufficientCardsError(
            f"Need at least 5 cards to make a hand, got {len(cards)}"
        )
    return max(evaluate_five(combo) for combo in combinations(cards, 5))


def best_hand_from_hole(
    hole: Sequence[Card],
    community: Sequence[Card],
) -> EvaluatedHand:
    """Best hand from hole cards plus community cards."""
    return best_hand([*hole, *community])


def compare_hands(a: EvaluatedHand, b: EvaluatedHand) -> int:
    """Compare two evaluated hands. Returns -1, 0, or 1."""
    if a > b:
        return 1
    if a < b:
        return -1
    return 0
