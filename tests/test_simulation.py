from __future__ import annotations

from annealing import search_completion
from cards import SAMPLE_BOARD, load_catalogue, read_board
from models import Deck, EstimatorSettings, SolvabilityStats
from simulation import complete_decks, completion_pools, estimate_solvability
from twister import Twister

QUICK = EstimatorSettings(trials=3, runs_per_completion=1, anneal_steps=150)


def test_pools_hold_unused_tier1_and_tier2_cards(sample_decks) -> None:
    deck1, deck2, _ = sample_decks
    pool1, pool2 = completion_pools(deck1, deck2, load_catalogue())

    assert len(pool1) == 35 - 4
    assert len(pool2) == 35 - 4
    assert all(c.value == 0 for c in pool1)
    assert all(1 <= c.value <= 9 for c in pool2)
    assert not set(pool1) & set(deck1.cards())
    assert not set(pool2) & set(deck2.cards())
    assert pool1 == sorted(pool1)
    assert pool2 == sorted(pool2)


def test_complete_decks_fills_copies_only(sample_decks) -> None:
    snapshot = [d.clone() for d in sample_decks]
    pools = completion_pools(sample_decks[0], sample_decks[1], load_catalogue())
    deck1, deck2, deck3 = complete_decks(sample_decks, pools, Twister(1), 25)

    assert list(sample_decks) == snapshot
    for deck in (deck1, deck2):
        assert len(deck.table) == 4
        assert len(deck.backlog) == 25
        assert len(set(deck.cards())) == 29
    assert deck1.table == sample_decks[0].table
    assert deck3 == sample_decks[2]


def test_known_reveals_come_out_first() -> None:
    board = SAMPLE_BOARD + "1 1 1 1 0 white 0\n0 0 0 3 0 white 0\n"
    decks = read_board(board.splitlines())
    assert len(decks[0].backlog) == 2

    pools = completion_pools(decks[0], decks[1], load_catalogue())
    deck1, _, _ = complete_decks(decks, pools, Twister(1), 25)
    assert len(deck1.backlog) == 25
    assert deck1.backlog[-1] == decks[0].backlog[0]
    assert deck1.backlog[-2] == decks[0].backlog[1]


def test_tier3_known_reveals_come_out_in_listed_order(sample_decks) -> None:
    tier3 = sorted(c for c in load_catalogue() if c.tier == 3)
    listed = Deck(table=tier3[:3], backlog=tier3[3:])
    pools = completion_pools(sample_decks[0], sample_decks[1], load_catalogue())
    _, _, deck3 = complete_decks((sample_decks[0], sample_decks[1], listed), pools, Twister(1), 25)

    assert deck3.table == tier3[:3]
    assert deck3.backlog.pop() == tier3[3]
    assert deck3.backlog.pop() == tier3[4]
    assert listed.backlog == tier3[3:]


def test_estimate_aggregates_trials(sample_decks) -> None:
    seen: list[int] = []
    stats = estimate_solvability(*sample_decks, settings=QUICK, on_progress=lambda s: seen.append(s.trials))

    assert seen == [1, 2, 3]
    assert stats.trials == 3
    assert len(stats.history) == 3
    assert [o.index for o in stats.history] == [1, 2, 3]
    assert stats.max_points == max(o.best.points for o in stats.history)
    assert stats.solved == sum(o.solved for o in stats.history)
    assert all(o.solved == (o.best.points >= 31) for o in stats.history)


def test_estimate_is_reproducible(sample_decks) -> None:
    a = estimate_solvability(*sample_decks, settings=QUICK)
    b = estimate_solvability(*sample_decks, settings=QUICK)
    assert [o.best for o in a.history] == [o.best for o in b.history]


def test_estimate_leaves_board_untouched(sample_decks) -> None:
    snapshot = [d.clone() for d in sample_decks]
    estimate_solvability(*sample_decks, settings=QUICK)
    assert list(sample_decks) == snapshot


def test_estimate_matches_manual_trial_loop(sample_decks) -> None:
    stats = estimate_solvability(*sample_decks, settings=QUICK)

    setup = Twister(QUICK.setup_seed)
    search = Twister(QUICK.search_seed)
    pools = completion_pools(sample_decks[0], sample_decks[1], load_catalogue())
    expected = []
    for _ in range(QUICK.trials):
        decks = complete_decks(sample_decks, pools, setup, QUICK.backlog_target)
        expected.append(search_completion(*decks, search, QUICK).state)

    assert [o.best for o in stats.history] == expected


def test_estimate_reports_solutions_with_trial_index(sample_decks) -> None:
    settings = EstimatorSettings(trials=2, runs_per_completion=1, anneal_steps=150, win_threshold=1)
    found: list[tuple[int, int]] = []
    stats = estimate_solvability(
        *sample_decks,
        settings=settings,
        on_solution=lambda trial, state: found.append((trial, state.points)),
    )
    assert found
    assert {trial for trial, _ in found} <= {1, 2}
    assert all(points >= 1 for _, points in found)
    assert stats.solved == 2


def test_parallel_estimate_uses_per_trial_search_seeds(sample_decks) -> None:
    settings = EstimatorSettings(trials=2, runs_per_completion=1, anneal_steps=100, workers=2)
    progress: list[SolvabilityStats] = []
    stats = estimate_solvability(*sample_decks, settings=settings, on_progress=progress.append)

    setup = Twister(settings.setup_seed)
    pools = completion_pools(sample_decks[0], sample_decks[1], load_catalogue())
    expected = []
    for i in range(settings.trials):
        decks = complete_decks(sample_decks, pools, setup, settings.backlog_target)
        expected.append(search_completion(*decks, Twister(settings.search_seed + i), settings).state)

    assert stats.trials == 2
    assert len(progress) == 2
    assert [o.best for o in stats.history] == expected
