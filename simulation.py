"""
Monte Carlo driver: random deck completions searched for winning lines.
"""

import logging
from functools import partial
from typing import Callable, FrozenSet, List, Optional, Tuple

from analytics import lift_vs_random, record_trial, solvability_pct
from annealing import search_completion
from cards import load_catalogue
from config import TIER3_VALUE
from game_logic import fill_randomly
from models import Card, Deck, EstimatorSettings, GameState, SolvabilityStats
from twister import Twister

logger = logging.getLogger(__name__)

Decks = Tuple[Deck, Deck, Deck]
ProgressCallback = Callable[[SolvabilityStats], None]
TrialSolutionCallback = Callable[[int, GameState], None]


def completion_pools(
    deck1: Deck,
    deck2: Deck,
    catalogue: FrozenSet[Card],
) -> Tuple[List[Card], List[Card]]:
    """
    Catalogue cards not yet on the board, split into tier-1 and tier-2 pools.
    Tier 3 is always fully given, so it gets no pool.
    """
    known1 = set(deck1.cards())
    known2 = set(deck2.cards())
    pool1: List[Card] = []
    pool2: List[Card] = []

    for card in sorted(catalogue):
        if card.value == 0:
            if card not in known1:
                pool1.append(card)
        elif card.value == TIER3_VALUE:
            continue
        elif card not in known2:
            pool2.append(card)

    return pool1, pool2


def complete_decks(
    decks: Decks,
    pools: Tuple[List[Card], List[Card]],
    twister: Twister,
    backlog_target: int,
) -> Decks:
    """
    Copy the canonical decks and fill tiers 1 and 2 at random.

    Known reveals were read in reveal order; the backlog is popped from the
    end, so every backlog is reversed before play. That includes tier 3,
    whose listed reveals come out in listed order like the other tiers.
    """
    deck1, deck2, deck3 = (d.clone() for d in decks)
    fill_randomly(deck1, backlog_target, pools[0], twister)
    fill_randomly(deck2, backlog_target, pools[1], twister)
    for deck in (deck1, deck2, deck3):
        deck.backlog.reverse()
    return deck1, deck2, deck3


def _search_job(decks: Decks, seed: int, settings: EstimatorSettings) -> GameState:
    # Runs in a worker process with a private search generator.
    best = search_completion(*decks, Twister(seed), settings)
    return best.state


def _log_trial(stats: SolvabilityStats, total: int) -> None:
    pct = solvability_pct(stats)
    logger.info(
        "Trial %d/%d: best %d, max %d, solvability %.2f%%, lift %.2f",
        stats.trials,
        total,
        stats.history[-1].best.points,
        stats.max_points,
        pct,
        lift_vs_random(pct),
    )


def estimate_solvability(
    deck1: Deck,
    deck2: Deck,
    deck3: Deck,
    settings: EstimatorSettings = EstimatorSettings(),
    catalogue: Optional[FrozenSet[Card]] = None,
    on_progress: Optional[ProgressCallback] = None,
    on_solution: Optional[TrialSolutionCallback] = None,
) -> SolvabilityStats:
    """
    Estimate how often the board can reach the win threshold.

    Each trial completes the hidden cards at random, then searches the deal
    with `settings.runs_per_completion` annealing runs. `on_progress` gets the
    running statistics after every trial; `on_solution` gets (trial, state)
    for winning lines.

    The canonical decks are never modified.
    """
    if catalogue is None:
        catalogue = load_catalogue()
    if settings.workers > 1:
        return _estimate_parallel(deck1, deck2, deck3, settings, catalogue, on_progress, on_solution)

    setup_twister = Twister(settings.setup_seed)
    search_twister = Twister(settings.search_seed)
    pools = completion_pools(deck1, deck2, catalogue)
    stats = SolvabilityStats()

    logger.info(
        "Estimating solvability: %d trials x %d runs x %d steps",
        settings.trials,
        settings.runs_per_completion,
        settings.anneal_steps,
    )

    for i in range(settings.trials):
        decks = complete_decks((deck1, deck2, deck3), pools, setup_twister, settings.backlog_target)

        report = partial(on_solution, i + 1) if on_solution is not None else None
        best = search_completion(*decks, search_twister, settings, on_solution=report)
        record_trial(stats, best.state, settings.win_threshold)
        _log_trial(stats, settings.trials)
        if on_progress is not None:
            on_progress(stats)

    return stats


def _estimate_parallel(
    deck1: Deck,
    deck2: Deck,
    deck3: Deck,
    settings: EstimatorSettings,
    catalogue: FrozenSet[Card],
    on_progress: Optional[ProgressCallback],
    on_solution: Optional[TrialSolutionCallback],
) -> SolvabilityStats:
    """
    Same experiment with trials searched in a process pool.

    Completions still come from the shared setup generator, in trial order.
    Trial i searches with its own generator seeded search_seed + i, so results
    do not depend on the worker count. Winning lines are reported once per
    trial, after the trial finishes.
    """
    from concurrent.futures import ProcessPoolExecutor

    setup_twister = Twister(settings.setup_seed)
    pools = completion_pools(deck1, deck2, catalogue)
    completions = [
        complete_decks((deck1, deck2, deck3), pools, setup_twister, settings.backlog_target)
        for _ in range(settings.trials)
    ]
    stats = SolvabilityStats()

    logger.info(
        "Estimating solvability on %d workers: %d trials x %d runs x %d steps",
        settings.workers,
        settings.trials,
        settings.runs_per_completion,
        settings.anneal_steps,
    )

    with ProcessPoolExecutor(max_workers=settings.workers) as executor:
        jobs = [
            executor.submit(_search_job, decks, settings.search_seed + i, settings)
            for i, decks in enumerate(completions)
        ]
        for job in jobs:
            best = job.result()
            outcome = record_trial(stats, best, settings.win_threshold)
            if outcome.solved and on_solution is not None:
                on_solution(outcome.index, best)
            _log_trial(stats, settings.trials)
            if on_progress is not None:
                on_progress(stats)

    return stats
