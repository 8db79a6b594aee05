from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Allow the flat modules to be imported when running tests without installing.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from cards import SAMPLE_BOARD, load_catalogue, read_board  # noqa: E402
from simulation import complete_decks, completion_pools  # noqa: E402
from twister import Twister  # noqa: E402


@pytest.fixture
def sample_decks():
    return read_board(SAMPLE_BOARD.splitlines())


@pytest.fixture
def completed_decks(sample_decks):
    pools = completion_pools(sample_decks[0], sample_decks[1], load_catalogue())
    return complete_decks(sample_decks, pools, Twister(23590421), 25)
