#!/usr/bin/env python3
"""Evaluate a hand: best hand, strength, outs and equity."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from holdem.game.cards import parse_cards, starting_hand_tier
from holdem.game.evaluator import best_hand_from_hole
from holdem.game.outs import find_outs, outs_to_equity
from holdem.game.equity import EquityCalculator, EquityConfig, quick_hand_strength


def main():
    parser = argparse.ArgumentParser(
        description="Evaluate hole cards on a board: best hand, outs and equity"
    )
    parser.add_argument(
        "-c", "--hole",
        required=True,
        help="Hole cards (e.g., 'AsKd' or 'As Kd')",
    )
    parser.add_argument(
        "-b", "--board",
        default="",
        help="Community cards, 0/3/4/5 of them (e.g., 'QdJdTd')",
    )
    parser.add_argument(
        "-n", "--opponents",
        type=int,
        default=1,
        help="Number of random opponents (default: 1)",
    )
    parser.add_argument(
        "-s", "--simulations",
        type=int,
        default=5000,
        help="Number of Monte Carlo trials (default: 5000)",
    )
    parser.add_argument(
        "-w", "--workers",
        type=int,
        default=1,
        help="Worker processes for the simulation (default: 1)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible equity",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args()
    console = Console()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )

    try:
        hole = parse_cards(args.hole)
        board = parse_cards(args.board)
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        return 1

    if len(hole) != 2:
        console.print("[red]Need exactly 2 hole cards[/]")
        return 1
    if len(board) not in (0, 3, 4, 5):
        console.print("[red]Board must have 0, 3, 4 or 5 cards[/]")
        return 1
    if len(set(hole + board)) != len(hole + board):
        console.print("[red]Duplicate cards detected[/]")
        return 1

    console.print(f"[bold]Hole:[/] {' '.join(c.pretty for c in hole)}")
    if board:
        console.print(f"[bold]Board:[/] {' '.join(c.pretty for c in board)}")
    console.print()

    _display_hand(console, hole, board)

    if len(board) in (3, 4):
        _display_outs(console, hole, board)

    config = EquityConfig(
        simulations=args.simulations,
        num_opponents=args.opponents,
        workers=args.workers,
        seed=args.seed,
    )
    calculator = EquityCalculator(config)

    with console.status("Running simulations..."):
        try:
            result = calculator.simulate(hole, board)
        except ValueError as e:
            console.print(f"[red]{e}[/]")
            return 1

    table = Table(title=f"Equity vs {args.opponents} random opponent(s)")
    table.add_column("Trials", justify="right")
    table.add_column("Win", justify="right")
    table.add_column("Tie", justify="right")
    table.add_column("Lose", justify="right")
    table.add_column("Equity", justify="right", style="bold")
    table.add_row(
        str(result.simulations),
        f"{result.win_rate:.1%}",
        f"{result.tie_rate:.1%}",
        f"{result.loss_rate:.1%}",
        f"{result.equity:.1%}",
    )
    console.print(table)
    return 0


def _display_hand(console: Console, hole, board) -> None:
    """Show the current made hand and quick strength."""
    strength = quick_hand_strength(hole, board)
    if strength >= 0.7:
        bucket = "[green]strong[/]"
    elif strength >= 0.4:
        bucket = "[yellow]decent[/]"
    else:
        bucket = "[red]weak[/]"

    lines = [f"Quick strength: {strength:.2f} ({bucket})"]
    if len(hole) + len(board) >= 5:
        hand = best_hand_from_hole(hole, board)
        lines.insert(0, f"Best hand: [bold]{hand.name}[/] "
                        f"({' '.join(c.pretty for c in hand.cards)})")
    else:
        lines.insert(0, f"Starting hand tier: {starting_hand_tier(*hole)}")

    console.print(Panel("\n".join(lines), title="Hand"))


def _display_outs(console: Console, hole, board) -> None:
    """Show the outs that improve the hand category."""
    outs = find_outs(hole, board)
    cards_to_come = 5 - len(board)

    console.print(f"[bold]Outs:[/] {len(outs)}")
    if outs:
        console.print(" ".join(c.pretty for c in outs))
    console.print(
        f"[dim]Rule of {'4' if cards_to_come == 2 else '2'}: "
        f"~{outs_to_equity(len(outs), cards_to_come):.0%} to improve[/]"
    )
    console.print()


if __name__ == "__main__":
    sys.exit(main())
