"""Game representation and hand evaluation module."""

from .cards import (
    Card, Hand as CardHand, Deck, Rank, Suit, EmptyDeckError,
    parse_cards, hand_to_treys, starting_hand_tier, STARTING_HAND_TIERS,
)
from .evaluator import (
    HandCategory, EvaluatedHand, InsufficientCardsError,
    evaluate_five, best_hand, best_hand_from_hole, compare_hands,
)
from .outs import find_outs, count_outs, outs_to_equity
from .equity import (
    EquityCalculator, EquityConfig, EquityResult,
    estimate_equity, quick_hand_strength, preflop_strength,
)

__all__ = [
    "Card",
    "CardHand",
    "Deck",
    "Rank",
    "Suit",
    "EmptyDeckError",
    "parse_cards",
    "hand_to_treys",
    "starting_hand_tier",
    "STARTING_HAND_TIERS",
    "HandCategory",
    "EvaluatedHand",
    "InsufficientCardsError",
    "evaluate_five",
    "best_hand",
    "best_hand_from_hole",
    "compare_hands",
    "find_outs",
    "count_outs",
    "outs_to_equity",
    "EquityCalculator",
    "EquityConfig",
    "EquityResult",
    "estimate_equity",
    "quick_hand_strength",
    "preflop_strength",
]
