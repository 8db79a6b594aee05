"""
Command-line estimator: reads a board, prints the running solvability estimate.

Example:
    splendor-odds board.txt
    splendor-odds --trials 5 --steps 20000 < board.txt
"""

import argparse
import logging
import sys
from typing import List, Optional

from analytics import lift_vs_random, recovery_rounds, solvability_pct
from cards import UnrecognizedCardError, describe_card, read_board
from config import (
    ANNEAL_STEPS,
    MONTE_CARLO_TRIALS,
    RUNS_PER_COMPLETION,
    SEARCH_SEED,
    SETUP_SEED,
    WIN_THRESHOLD,
)
from logging_config import setup_logging
from models import EstimatorSettings, GameState, SolvabilityStats
from simulation import estimate_solvability

logger = logging.getLogger(__name__)


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Estimate how likely a Splendor board is to reach 31 points.")
    parser.add_argument(
        "board",
        nargs="?",
        type=argparse.FileType("r"),
        default=sys.stdin,
        help="Board file, one card per line (default: stdin).",
    )
    parser.add_argument("--trials", type=_positive_int, default=MONTE_CARLO_TRIALS, help="Random deck completions.")
    parser.add_argument("--runs", type=_positive_int, default=RUNS_PER_COMPLETION, help="Annealing runs per completion.")
    parser.add_argument("--steps", type=_positive_int, default=ANNEAL_STEPS, help="Annealing steps per run.")
    parser.add_argument("--setup-seed", type=int, default=SETUP_SEED, help="Seed for deck completion.")
    parser.add_argument("--search-seed", type=int, default=SEARCH_SEED, help="Seed for the search.")
    parser.add_argument("--target", type=int, default=WIN_THRESHOLD, help="Points needed to win.")
    parser.add_argument("--workers", type=_positive_int, default=1, help="Search trials in this many processes.")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level.")
    parser.add_argument("--log-file", type=str, default="", help="Optional JSON log file path.")
    return parser.parse_args(argv)


def format_progress(stats: SolvabilityStats) -> str:
    pct = solvability_pct(stats)
    return (
        f"\rIter {stats.trials}, Maximum: {stats.max_points}, "
        f"Solvability likelihood: {pct:.2f} %, lift vs random board {lift_vs_random(pct):.2f}"
    )


def format_solution(state: GameState) -> str:
    lines = [
        "",
        f"points: {state.points}, rounds: {state.rounds}, "
        f"tokens_cost: {state.tokens_cost}, cc {recovery_rounds(state)}",
    ]
    for move, card in zip(state.moves, state.cards):
        lines.append(f"{move}: {describe_card(card)}")
    lines.append("\n")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging(args.log_level, log_file=args.log_file or None)

    try:
        decks = read_board(args.board)
    except UnrecognizedCardError as e:
        print(e, file=sys.stderr)
        sys.exit(1)

    settings = EstimatorSettings(
        trials=args.trials,
        runs_per_completion=args.runs,
        anneal_steps=args.steps,
        setup_seed=args.setup_seed,
        search_seed=args.search_seed,
        win_threshold=args.target,
        workers=args.workers,
    )

    def on_progress(stats: SolvabilityStats) -> None:
        print(format_progress(stats), end="", flush=True)

    def on_solution(trial: int, state: GameState) -> None:
        logger.info("Trial %d reached %d points", trial, state.points)
        print(format_solution(state), flush=True)

    estimate_solvability(*decks, settings=settings, on_progress=on_progress, on_solution=on_solution)
    print()


if __name__ == "__main__":
    main()
