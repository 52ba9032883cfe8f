"""Outs counting for drawing hands."""

from typing import Sequence

from .cards import Card, Rank, Suit
from .evaluator import best_hand


def find_outs(hole: Sequence[Card], community: Sequence[Card]) -> list[Card]:
    """
    Find every unseen card that improves the hand category.

    Each unseen card is added to the known cards in turn and the best
    hand recomputed. A card counts once, however many draws it
    completes. Improving only the kicker or the rank within the same
    category does not count.

    Args:
        hole: Hero's hole cards
        community: Community cards (3 or 4 on flop/turn)

    Returns:
        Out cards, ordered by rank then suit
    """
    known = [*hole, *community]
    current = best_hand(known).category
    seen = {(c.rank, c.suit) for c in known}

    outs = []
    for rank in Rank:
        for suit in Suit:
            if (rank, suit) in seen:
                continue
            candidate = Card(rank, suit)
            if best_hand(known + [candidate]).category > current:
                outs.append(candidate)
    return outs


def count_outs(hole: Sequence[Card], community: Sequence[Card]) -> int:
    """Number of unseen cards that improve the hand category."""
    return len(find_outs(hole, community))


def outs_to_equity(outs: int, cards_to_come: int) -> float:
    """
    Approximate equity from outs with the rule of 2 and 4.

    Outs x 4% with two cards to come (flop), outs x 2% with one
    (turn), capped at 100%.
    """
    if cards_to_come not in (1, 2):
        raise ValueError(f"cards_to_come must be 1 or 2, got {cards_to_come}")
    multiplier = 4 if cards_to_come == 2 else 2
    return min(100, outs * multiplier) / 100
