"""
Data models and state representations.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from config import (
    ANNEAL_STEPS,
    BACKLOG_FILL_TARGET,
    COLORS,
    FINAL_TEMPERATURE,
    MAX_BACKLOG,
    MAX_CARD_COST,
    MAX_SEQUENCE_LENGTH,
    MONTE_CARLO_TRIALS,
    NUM_COLORS,
    RUNS_PER_COMPLETION,
    SEARCH_SEED,
    SETUP_SEED,
    START_TEMPERATURE,
    TABLE_SLOTS,
    TIER3_VALUE,
    WIN_THRESHOLD,
)


@dataclass(frozen=True, order=True)
class Card:
    """A development card. Ordering is cost vector, then color, then value."""
    cost: Tuple[int, int, int, int, int]   # black, red, green, blue, white
    color: int                             # index into COLORS
    value: int                             # points; TIER3_VALUE tags tier 3

    def __post_init__(self) -> None:
        object.__setattr__(self, "cost", tuple(self.cost))
        if len(self.cost) != NUM_COLORS:
            raise ValueError(f"cost vector needs {NUM_COLORS} entries, got {len(self.cost)}")
        if any(c < 0 or c > MAX_CARD_COST for c in self.cost):
            raise ValueError(f"cost out of range: {self.cost}")
        if not 0 <= self.color < NUM_COLORS:
            raise ValueError(f"unknown color index {self.color}")
        if not 0 <= self.value <= TIER3_VALUE:
            raise ValueError(f"point value out of range: {self.value}")

    @property
    def color_name(self) -> str:
        return COLORS[self.color]

    @property
    def tier(self) -> int:
        if self.value == 0:
            return 1
        if self.value == TIER3_VALUE:
            return 3
        return 2


@dataclass
class Deck:
    """Visible table slots (None once bought and not refilled) plus hidden backlog."""
    table: List[Optional[Card]] = field(default_factory=list)
    backlog: List[Card] = field(default_factory=list)   # next reveal is the last element

    def __post_init__(self) -> None:
        if len(self.table) > TABLE_SLOTS:
            raise ValueError(f"table holds at most {TABLE_SLOTS} cards")
        if len(self.backlog) > MAX_BACKLOG:
            raise ValueError(f"backlog holds at most {MAX_BACKLOG} cards")

    def clone(self) -> "Deck":
        return Deck(table=self.table[:], backlog=self.backlog[:])

    def cards(self) -> List[Card]:
        """Every card still in the deck, visible or hidden."""
        return [c for c in self.table if c is not None] + self.backlog

    def occupied_slots(self) -> int:
        return sum(1 for c in self.table if c is not None)


@dataclass
class GameState:
    """Replay result of a move sequence: resolved moves plus running totals."""
    moves: List[int] = field(default_factory=list)
    cards: List[Card] = field(default_factory=list)
    points: int = 0
    tokens_cost: int = 0
    rounds: int = 0

    def __post_init__(self) -> None:
        if len(self.moves) > MAX_SEQUENCE_LENGTH:
            raise ValueError(f"move sequence holds at most {MAX_SEQUENCE_LENGTH} tokens")

    def clone(self) -> "GameState":
        return GameState(
            moves=self.moves[:],
            cards=self.cards[:],
            points=self.points,
            tokens_cost=self.tokens_cost,
            rounds=self.rounds,
        )


@dataclass
class BestState:
    """Best replay seen for one deck completion; only strict improvements count."""
    state: GameState = field(default_factory=GameState)

    @property
    def points(self) -> int:
        return self.state.points

    def record(self, candidate: GameState) -> bool:
        if candidate.points <= self.state.points:
            return False
        self.state = candidate.clone()
        return True


@dataclass(frozen=True)
class EstimatorSettings:
    """Experiment knobs; defaults reproduce the reference experiment."""
    trials: int = MONTE_CARLO_TRIALS
    runs_per_completion: int = RUNS_PER_COMPLETION
    anneal_steps: int = ANNEAL_STEPS
    start_temperature: float = START_TEMPERATURE
    final_temperature: float = FINAL_TEMPERATURE
    win_threshold: int = WIN_THRESHOLD
    backlog_target: int = BACKLOG_FILL_TARGET
    setup_seed: int = SETUP_SEED
    search_seed: int = SEARCH_SEED
    workers: int = 1

    def __post_init__(self) -> None:
        for name in ("trials", "runs_per_completion", "anneal_steps", "workers"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1, got {getattr(self, name)}")
        if not 0 < self.final_temperature < self.start_temperature:
            raise ValueError(
                f"temperatures must satisfy 0 < final < start, got "
                f"{self.final_temperature} and {self.start_temperature}"
            )
        if not 0 <= self.backlog_target <= MAX_BACKLOG:
            raise ValueError(f"backlog target must be within 0..{MAX_BACKLOG}, got {self.backlog_target}")

    @property
    def cooldown(self) -> float:
        return (self.final_temperature / self.start_temperature) ** (1.0 / self.anneal_steps)


@dataclass
class TrialOutcome:
    index: int
    best: GameState
    solved: bool


@dataclass
class SolvabilityStats:
    """Running aggregate over completed trials."""
    trials: int = 0
    solved: int = 0
    max_points: int = 0
    history: List[TrialOutcome] = field(default_factory=list)
