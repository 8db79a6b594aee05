"""
Estimate analytics: running solvability statistics and summaries.
"""

import pandas as pd

from config import RANDOM_BOARD_SOLVABILITY, TOKENS_PER_ROUND, WIN_THRESHOLD
from models import GameState, SolvabilityStats, TrialOutcome


def record_trial(stats: SolvabilityStats, best: GameState, win_threshold: int = WIN_THRESHOLD) -> TrialOutcome:
    """Fold one trial's best state into the running statistics."""
    solved = best.points >= win_threshold
    outcome = TrialOutcome(index=stats.trials + 1, best=best, solved=solved)

    stats.trials += 1
    if solved:
        stats.solved += 1
    if best.points > stats.max_points:
        stats.max_points = best.points
    stats.history.append(outcome)
    return outcome


def solvability_pct(stats: SolvabilityStats) -> float:
    """Percentage of trials solved so far."""
    if stats.trials == 0:
        return 0.0
    return 100.0 * stats.solved / stats.trials


def lift_vs_random(pct: float) -> float:
    """How many times more solvable than a uniformly random board."""
    return pct / RANDOM_BOARD_SOLVABILITY


def recovery_rounds(state: GameState) -> int:
    """Rounds played plus the rounds needed to collect the spent tokens."""
    return state.rounds + (state.tokens_cost + TOKENS_PER_ROUND - 1) // TOKENS_PER_ROUND


def history_frame(stats: SolvabilityStats) -> pd.DataFrame:
    """
    One row per trial with the running estimate after that trial:
      trial, best_points, solved, running_max, solvability_pct, lift
    """
    rows = []
    solved = 0
    running_max = 0
    for outcome in stats.history:
        if outcome.solved:
            solved += 1
        running_max = max(running_max, outcome.best.points)
        pct = 100.0 * solved / outcome.index
        rows.append(
            {
                "trial": outcome.index,
                "best_points": outcome.best.points,
                "solved": outcome.solved,
                "running_max": running_max,
                "solvability_pct": pct,
                "lift": lift_vs_random(pct),
            }
        )
    return pd.DataFrame(
        rows,
        columns=["trial", "best_points", "solved", "running_max", "solvability_pct", "lift"],
    )
