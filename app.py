"""
Main Streamlit application.
"""

import streamlit as st

from cards import SAMPLE_BOARD, UnrecognizedCardError, read_board
from config import (
    ANNEAL_STEPS,
    MONTE_CARLO_TRIALS,
    RUNS_PER_COMPLETION,
    SEARCH_SEED,
    SETUP_SEED,
)
from logging_config import setup_logging
from models import EstimatorSettings, GameState, SolvabilityStats
from simulation import estimate_solvability

from ui import (
    render_board,
    render_progress_chart,
    render_solution,
    render_summary_metrics,
)


def run_app() -> None:
    """Run the main Streamlit application."""
    st.set_page_config(page_title="Splendor Board Solvability", layout="wide")
    st.title("Splendor Board Solvability")

    if "stats" not in st.session_state:
        setup_logging("INFO")
        st.session_state["stats"] = None
        st.session_state["solution"] = None

    input_col, settings_col = st.columns([1.4, 1])

    with input_col:
        board_text = st.text_area(
            "Board (black red green blue white color points, one card per line)",
            value=SAMPLE_BOARD,
            height=260,
        )

    with settings_col:
        trials = st.number_input("Trials", min_value=1, value=MONTE_CARLO_TRIALS)
        runs = st.number_input("Annealing runs per completion", min_value=1, value=RUNS_PER_COMPLETION)
        steps = st.number_input("Annealing steps per run", min_value=1, value=ANNEAL_STEPS, step=10_000)
        workers = st.number_input("Worker processes", min_value=1, value=1)
        with st.expander("Seeds", expanded=False):
            setup_seed = st.number_input("Deck completion seed", value=SETUP_SEED)
            search_seed = st.number_input("Search seed", value=SEARCH_SEED)

    try:
        decks = read_board(board_text.splitlines())
    except UnrecognizedCardError as e:
        st.error(str(e))
        st.stop()

    with st.expander("Parsed board", expanded=False):
        render_board(decks)

    if st.button("▶ Estimate solvability"):
        settings = EstimatorSettings(
            trials=int(trials),
            runs_per_completion=int(runs),
            anneal_steps=int(steps),
            setup_seed=int(setup_seed),
            search_seed=int(search_seed),
            workers=int(workers),
        )
        progress = st.progress(0.0, text="Searching...")
        metrics_slot = st.empty()
        st.session_state["solution"] = None

        def on_progress(stats: SolvabilityStats) -> None:
            progress.progress(stats.trials / settings.trials, text=f"Trial {stats.trials}/{settings.trials}")
            with metrics_slot.container():
                render_summary_metrics(stats)

        def on_solution(trial: int, state: GameState) -> None:
            best = st.session_state["solution"]
            if best is None or state.points > best[1].points:
                st.session_state["solution"] = (trial, state.clone())

        st.session_state["stats"] = estimate_solvability(
            *decks,
            settings=settings,
            on_progress=on_progress,
            on_solution=on_solution,
        )
        progress.empty()
        metrics_slot.empty()

    stats = st.session_state["stats"]
    if stats is None:
        st.caption("Run the estimate to see results.")
        return

    st.subheader("Estimate")
    render_summary_metrics(stats)
    render_progress_chart(stats)

    if st.session_state["solution"] is not None:
        trial, state = st.session_state["solution"]
        render_solution(trial, state)


if __name__ == "__main__":
    run_app()
