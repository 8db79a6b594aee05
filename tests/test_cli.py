from __future__ import annotations

import io
import logging

import pytest

import cli
from cards import SAMPLE_BOARD
from models import Card, GameState, SolvabilityStats

QUICK_ARGS = ["--trials", "2", "--runs", "1", "--steps", "100"]


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_format_progress() -> None:
    stats = SolvabilityStats(trials=2, solved=1, max_points=31)
    assert cli.format_progress(stats) == (
        "\rIter 2, Maximum: 31, Solvability likelihood: 50.00 %, lift vs random board 13.51"
    )


def test_format_solution() -> None:
    card = Card((0, 2, 4, 1, 0), 0, 2)
    state = GameState(moves=[6], cards=[card], points=2, tokens_cost=7, rounds=1)
    text = cli.format_solution(state)
    lines = text.split("\n")
    assert lines[0] == ""
    assert lines[1] == "points: 2, rounds: 1, tokens_cost: 7, cc 3"
    assert lines[2] == "6: black (2) red 2, green 4, blue 1, "


def test_main_reads_stdin(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(SAMPLE_BOARD))
    cli.main(QUICK_ARGS)
    out = capsys.readouterr().out
    assert "\rIter 1, Maximum: " in out
    assert "\rIter 2, Maximum: " in out
    assert out.endswith("\n")


def test_main_reads_board_file(tmp_path, capsys) -> None:
    board = tmp_path / "board.txt"
    board.write_text(SAMPLE_BOARD)
    cli.main([str(board), *QUICK_ARGS])
    assert "Iter 2" in capsys.readouterr().out


def test_main_dumps_winning_lines(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(SAMPLE_BOARD))
    cli.main([*QUICK_ARGS, "--steps", "400", "--target", "1"])
    out = capsys.readouterr().out
    assert "\npoints: " in out
    assert "Solvability likelihood: 100.00 %" in out


def test_unrecognized_card_exits_with_status_1(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("0 2 0 2 0 green 0\n0 0 0 0 0 red 0\n"))
    with pytest.raises(SystemExit) as excinfo:
        cli.main(QUICK_ARGS)
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert "unrecognized card red (0)" in captured.err
    assert "Iter" not in captured.out


def test_unknown_color_exits_with_status_1(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(SAMPLE_BOARD + "0 6 0 0 0 purple 3\n"))
    with pytest.raises(SystemExit) as excinfo:
        cli.main(QUICK_ARGS)
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert "unrecognized card purple (3)" in captured.err
    assert "Iter" not in captured.out


@pytest.mark.parametrize("option", ["--trials", "--runs", "--steps", "--workers"])
@pytest.mark.parametrize("value", ["0", "-5"])
def test_counts_must_be_positive(option: str, value: str, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.parse_args([option, value])
    assert excinfo.value.code == 2
    assert "must be a positive integer" in capsys.readouterr().err
