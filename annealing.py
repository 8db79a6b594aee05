"""
Simulated-annealing search over move sequences for one concrete deal.
"""

import logging
import math
from typing import Callable, List, Optional

from config import GENERATED_TOKENS, MAX_INSERT_LENGTH, MUTATION_RETRY_LIMIT
from game_logic import replay
from models import BestState, Deck, EstimatorSettings, GameState
from twister import Twister

logger = logging.getLogger(__name__)

CHANGE, INSERT, SWAP = 0, 1, 2

SolutionCallback = Callable[[GameState], None]


def _change(moves: List[int], twister: Twister) -> bool:
    if not moves:
        return False
    pos = twister.next_bounded_int(len(moves))
    old = moves[pos]
    while True:
        token = twister.next_bounded_int(GENERATED_TOKENS)
        if token != old:
            moves[pos] = token
            return True


def _insert(moves: List[int], twister: Twister) -> bool:
    if len(moves) > MAX_INSERT_LENGTH:
        return False
    pos = twister.next_bounded_int(len(moves) + 1)
    moves.insert(pos, twister.next_bounded_int(GENERATED_TOKENS))
    return True


def _swap(moves: List[int], twister: Twister) -> bool:
    if len(moves) < 3:
        return False
    px = twister.next_bounded_int(len(moves))
    py = twister.next_bounded_int(len(moves))
    if px == py or moves[px] == moves[py]:
        return False
    moves[px], moves[py] = moves[py], moves[px]
    return True


MUTATIONS = {CHANGE: _change, INSERT: _insert, SWAP: _swap}


def mutate(moves: List[int], twister: Twister) -> bool:
    """
    Try one mutation of a uniformly chosen kind, in place.
    Returns False, possibly after consuming draws, if that kind does not apply.
    """
    kind = twister.next_bounded_int(len(MUTATIONS))
    return MUTATIONS[kind](moves, twister)


def apply_mutation(moves: List[int], twister: Twister, max_attempts: int = MUTATION_RETRY_LIMIT) -> None:
    """Mutate `moves` exactly once, retrying inapplicable kinds."""
    for _ in range(max_attempts):
        if mutate(moves, twister):
            return

    logger.warning("No mutation applied after %d attempts, forcing one", max_attempts)
    if moves:
        _change(moves, twister)
    else:
        _insert(moves, twister)


def anneal(
    deck1: Deck,
    deck2: Deck,
    deck3: Deck,
    twister: Twister,
    best: BestState,
    settings: EstimatorSettings = EstimatorSettings(),
    on_solution: Optional[SolutionCallback] = None,
) -> GameState:
    """
    One annealing run from an empty sequence.

    Every replay that beats `best` is recorded there; improvements reaching
    the win threshold are also passed to `on_solution`. Returns the final
    incumbent.
    """
    incumbent = GameState()
    temperature = settings.start_temperature
    cooldown = settings.cooldown

    while temperature > settings.final_temperature:
        candidate = incumbent.moves[:]
        apply_mutation(candidate, twister)

        refined = replay(candidate, deck1, deck2, deck3)

        if best.record(refined) and refined.points >= settings.win_threshold and on_solution is not None:
            on_solution(refined)

        delta = refined.points - incumbent.points
        draw = twister.next_float_unit()
        if delta >= 0 or math.exp(delta / temperature) > draw:
            incumbent = refined

        temperature *= cooldown

    return incumbent


def search_completion(
    deck1: Deck,
    deck2: Deck,
    deck3: Deck,
    twister: Twister,
    settings: EstimatorSettings = EstimatorSettings(),
    best: Optional[BestState] = None,
    on_solution: Optional[SolutionCallback] = None,
) -> BestState:
    """Run `settings.runs_per_completion` independent annealing runs on one deal."""
    if best is None:
        best = BestState()

    for run in range(settings.runs_per_completion):
        final = anneal(deck1, deck2, deck3, twister, best, settings, on_solution)
        logger.debug(
            "Run %d: final %d points, best so far %d",
            run + 1,
            final.points,
            best.points,
        )
    return best
