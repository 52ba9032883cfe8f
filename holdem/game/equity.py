"""Equity calculation utilities."""

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np

from .cards import Card, Hand, Deck
from .evaluator import HandCategory, best_hand

logger = logging.getLogger(__name__)

HoleCards = Union[Hand, Sequence[Card]]

VALID_BOARD_SIZES = (0, 3, 4, 5)

# Base strength per category for the postflop heuristic
CATEGORY_STRENGTH = {
    HandCategory.HIGH_CARD: 0.1,
    HandCategory.PAIR: 0.3,
    HandCategory.TWO_PAIR: 0.5,
    HandCategory.THREE_OF_A_KIND: 0.6,
    HandCategory.STRAIGHT: 0.65,
    HandCategory.FLUSH: 0.7,
    HandCategory.FULL_HOUSE: 0.8,
    HandCategory.FOUR_OF_A_KIND: 0.9,
    HandCategory.STRAIGHT_FLUSH: 0.95,
    HandCategory.ROYAL_FLUSH: 1.0,
}


@dataclass
class EquityConfig:
    """Configuration for Monte Carlo equity estimation."""
    simulations: int = 500
    num_opponents: int = 1
    workers: int = 1               # >1 fans trials out to worker processes
    seed: Optional[int] = None     # Seed for the default generator


@dataclass
class EquityResult:
    """Tally of simulated showdowns."""
    simulations: int = 0
    wins: int = 0
    ties: int = 0
    losses: int = 0
    tie_share: float = 0.0  # Sum of 1/k pot shares over k-way ties

    @property
    def equity(self) -> float:
        if self.simulations == 0:
            return 0.0
        return (self.wins + self.tie_share) / self.simulations

    @property
    def win_rate(self) -> float:
        return self.wins / self.simulations if self.simulations else 0.0

    @property
    def tie_rate(self) -> float:
        return self.ties / self.simulations if self.simulations else 0.0

    @property
    def loss_rate(self) -> float:
        return self.losses / self.simulations if self.simulations else 0.0

    def merge(self, other: "EquityResult") -> "EquityResult":
        """Combine two partial results."""
        return EquityResult(
            simulations=self.simulations + other.simulations,
            wins=self.wins + other.wins,
            ties=self.ties + other.ties,
            losses=self.losses + other.losses,
            tie_share=self.tie_share + other.tie_share,
        )


def _hole_cards(hole: HoleCards) -> list[Card]:
    if isinstance(hole, Hand):
        return hole.cards
    return list(hole)


def _validate(
    hole: list[Card],
    community: list[Card],
    num_opponents: int,
    simulations: int,
) -> None:
    if len(hole) != 2:
        raise ValueError(f"Need exactly 2 hole cards, got {len(hole)}")
    if len(community) not in VALID_BOARD_SIZES:
        raise ValueError(f"Board must have 0, 3, 4 or 5 cards, got {len(community)}")
    if simulations <= 0:
        raise ValueError(f"simulations must be positive, got {simulations}")
    if num_opponents < 0:
        raise ValueError(f"num_opponents must be non-negative, got {num_opponents}")

    known = hole + community
    if len(set(known)) != len(known):
        raise ValueError("Duplicate cards detected")

    needed = num_opponents * 2 + 5 - len(community)
    if needed > 52 - len(known):
        raise ValueError(
            f"Not enough cards for {num_opponents} opponents: "
            f"need {needed}, {52 - len(known)} available"
        )


def _run_trials(
    hole: list[Card],
    community: list[Card],
    num_opponents: int,
    simulations: int,
    rng: np.random.Generator,
) -> EquityResult:
    """Play out ``simulations`` random showdowns."""
    result = EquityResult(simulations=simulations)
    if num_opponents == 0:
        result.wins = simulations
        return result

    known = hole + community
    remaining_board = 5 - len(community)

    for _ in range(simulations):
        deck = Deck(rng)
        deck.remove_cards(known)
        deck.shuffle()

        opp_holes = [deck.deal_multiple(2) for _ in range(num_opponents)]
        board = community + deck.deal_multiple(remaining_board)

        hero = best_hand(hole + board)
        opp_hands = [best_hand(opp + board) for opp in opp_holes]
        best_opp = max(opp_hands)

        if hero > best_opp:
            result.wins += 1
        elif hero == best_opp:
            # Split between hero and every opponent holding the same hand
            k = 1 + sum(1 for h in opp_hands if h == hero)
            result.ties += 1
            result.tie_share += 1.0 / k
        else:
            result.losses += 1

    return result


def _simulate_chunk(args: tuple) -> EquityResult:
    """Worker entry point for the process pool."""
    hole, community, num_opponents, simulations, rng = args
    return _run_trials(hole, community, num_opponents, simulations, rng)


class EquityCalculator:
    """
    Monte Carlo equity against random opponents.

    Each trial deals opponents' hole cards and the rest of the board
    from a freshly shuffled deck that excludes every known card.
    """

    def __init__(
        self,
        config: Optional[EquityConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Initialize equity calculator.

        Args:
            config: Simulation settings
            rng: Random generator; built from config.seed when omitted
        """
        self.config = config or EquityConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)

    def simulate(
        self,
        hole: HoleCards,
        community: Sequence[Card] = (),
        num_opponents: Optional[int] = None,
        simulations: Optional[int] = None,
    ) -> EquityResult:
        """
        Run the simulation and return the full tally.

        Args:
            hole: Hero's two hole cards
            community: Known community cards (0, 3, 4 or 5)
            num_opponents: Opponents with random hands (default from config)
            simulations: Number of trials (default from config)

        Returns:
            EquityResult with wins, ties and losses
        """
        hole = _hole_cards(hole)
        community = list(community)
        if num_opponents is None:
            num_opponents = self.config.num_opponents
        if simulations is None:
            simulations = self.config.simulations

        _validate(hole, community, num_opponents, simulations)
        logger.debug(
            "Simulating %s on [%s] vs %d opponents, %d trials",
            " ".join(map(str, hole)),
            " ".join(map(str, community)),
            num_opponents,
            simulations,
        )

        workers = min(self.config.workers, simulations)
        if workers > 1:
            result = self._simulate_parallel(
                hole, community, num_opponents, simulations, workers
            )
        else:
            result = _run_trials(hole, community, num_opponents, simulations, self.rng)

        logger.debug(
            "Equity %.4f (wins=%d ties=%d losses=%d)",
            result.equity, result.wins, result.ties, result.losses,
        )
        return result

    def _simulate_parallel(
        self,
        hole: list[Card],
        community: list[Card],
        num_opponents: int,
        simulations: int,
        workers: int,
    ) -> EquityResult:
        """Split trials across processes, each with its own generator."""
        chunk = simulations // workers
        sizes = [chunk] * (workers - 1) + [simulations - chunk * (workers - 1)]
        child_rngs = self.rng.spawn(workers)

        args_list = [
            (hole, community, num_opponents, size, child_rng)
            for size, child_rng in zip(sizes, child_rngs)
        ]
        logger.debug("Fanning out %d trials over %d workers: %s", simulations, workers, sizes)

        result = EquityResult()
        with ProcessPoolExecutor(max_workers=workers) as ex:
            for partial in ex.map(_simulate_chunk, args_list):
                result = result.merge(partial)
        return result

    def equity(
        self,
        hole: HoleCards,
        community: Sequence[Card] = (),
        num_opponents: Optional[int] = None,
        simulations: Optional[int] = None,
    ) -> float:
        """Hero's equity (0-1)."""
        return self.simulate(hole, community, num_opponents, simulations).equity


def estimate_equity(
    hole: HoleCards,
    community: Sequence[Card],
    num_opponents: int = 1,
    simulations: int = 500,
    rng: Optional[np.random.Generator] = None,
) -> float:
    """
    Estimate hand equity against random opponent(s).

    Args:
        hole: Hero's hole cards
        community: Board cards (0, 3, 4 or 5)
        num_opponents: Number of opponents
        simulations: Number of simulations
        rng: Random generator, for reproducible estimates

    Returns:
        Equity (0-1), ties counted as a 1/k share of the pot
    """
    calculator = EquityCalculator(rng=rng)
    return calculator.equity(hole, community, num_opponents, simulations)


def preflop_strength(hole: HoleCards) -> float:
    """
    Preflop strength (0-1) from hole cards alone.

    Weighs high card, pair, kicker, suitedness and connectivity.
    """
    c1, c2 = _hole_cards(hole)
    high = max(c1.rank, c2.rank)
    low = min(c1.rank, c2.rank)
    suited = c1.suit == c2.suit
    paired = high == low

    strength = (high - 2) / 12 * 0.4

    if paired:
        strength += 0.25 + (high - 2) / 12 * 0.2

    strength += (low - 2) / 12 * 0.15

    if suited:
        strength += 0.06

    gap = high - low
    if not paired and gap <= 4:
        strength += (5 - gap) / 5 * 0.05

    return min(1.0, strength)


def quick_hand_strength(hole: HoleCards, community: Sequence[Card]) -> float:
    """
    Cheap hand strength (0-1) without simulation.

    Not calibrated to equity; good enough to bucket hands into
    strong/decent/weak on every UI refresh.

    Args:
        hole: Hero's hole cards
        community: Board cards

    Returns:
        Strength from 0 (weakest) to 1 (strongest)
    """
    hole = _hole_cards(hole)
    if len(hole) + len(community) < 5:
        return preflop_strength(hole)

    hand = best_hand([*hole, *community])
    strength = CATEGORY_STRENGTH[hand.category]
    strength += (hand.tiebreak[0] - 2) / 12 * 0.08
    return min(1.0, strength)
