"""
UI components and visualization helpers.
"""

from typing import Tuple

import pandas as pd
import plotly.express as px
import streamlit as st

from analytics import history_frame, lift_vs_random, recovery_rounds, solvability_pct
from config import COLOR_MAP, COLORS, RANDOM_BOARD_SOLVABILITY, TABLE_SLOTS, WIN_THRESHOLD
from models import Card, Deck, GameState, SolvabilityStats


def _card_row(card: Card) -> dict:
    row = {
        "Color": card.color_name,
        "Points": card.value,
    }
    for color, amount in zip(COLORS, card.cost):
        row[color] = amount
    return row


def render_board(decks: Tuple[Deck, Deck, Deck]) -> None:
    """Table of the visible cards and known reveals of each tier."""
    rows = []
    for tier, deck in enumerate(decks, start=1):
        for slot, card in enumerate(deck.table):
            if card is None:
                continue
            rows.append({"Tier": tier, "Position": f"slot {slot + 1}", **_card_row(card)})
        for k, card in enumerate(deck.backlog, start=1):
            rows.append({"Tier": tier, "Position": f"reveal {k}", **_card_row(card)})

    if not rows:
        st.info("No cards on the board.")
        return

    df = pd.DataFrame(rows)
    st.dataframe(df, use_container_width=True, hide_index=True)

    hidden = [max(0, TABLE_SLOTS - len(d.table)) for d in decks[:2]]
    if any(hidden):
        st.caption(f"Empty table slots filled at random: tier 1 {hidden[0]}, tier 2 {hidden[1]}.")


def render_summary_metrics(stats: SolvabilityStats) -> None:
    """Headline numbers of the running estimate."""
    pct = solvability_pct(stats)
    col_trials, col_max, col_pct, col_lift = st.columns(4)
    with col_trials:
        st.metric("Trials", stats.trials)
    with col_max:
        st.metric("Maximum points", stats.max_points)
    with col_pct:
        st.metric("Solvability", f"{pct:.2f} %")
    with col_lift:
        st.metric("Lift vs random board", f"{lift_vs_random(pct):.2f}")


def render_progress_chart(stats: SolvabilityStats) -> None:
    """Running solvability estimate and per-trial best score."""
    df = history_frame(stats)
    if df.empty:
        st.info("No trials yet.")
        return

    fig = px.line(
        df,
        x="trial",
        y="solvability_pct",
        markers=True,
    )
    fig.add_hline(
        y=RANDOM_BOARD_SOLVABILITY,
        line_dash="dot",
        annotation_text="random board",
    )
    fig.update_layout(
        xaxis=dict(dtick=max(1, len(df) // 10), title="Trial"),
        yaxis=dict(title="Solvability (%)", rangemode="tozero"),
        height=350,
        margin=dict(l=10, r=10, t=30, b=10),
    )
    st.plotly_chart(fig, use_container_width=True)

    df = df.assign(outcome=df["solved"].map({True: "solved", False: "unsolved"}))
    fig_points = px.bar(
        df,
        x="trial",
        y="best_points",
        color="outcome",
        color_discrete_map={"solved": COLOR_MAP["green"], "unsolved": COLOR_MAP["black"]},
    )
    fig_points.add_hline(y=WIN_THRESHOLD, line_dash="dot", annotation_text="win")
    fig_points.update_layout(
        xaxis=dict(title="Trial"),
        yaxis=dict(title="Best points"),
        height=300,
        margin=dict(l=10, r=10, t=30, b=10),
        legend_title_text="Outcome",
    )
    st.plotly_chart(fig_points, use_container_width=True)


def render_solution(trial: int, state: GameState) -> None:
    """Move-by-move table of a winning line."""
    st.markdown(f"#### Winning line (trial {trial})")
    st.write(
        f"Points: **{state.points}**, rounds: **{state.rounds}**, "
        f"tokens spent: **{state.tokens_cost}**, rounds incl. token recovery: **{recovery_rounds(state)}**"
    )
    rows = []
    for turn, (move, card) in enumerate(zip(state.moves, state.cards), start=1):
        rows.append(
            {
                "Turn": turn,
                "Tier": move // TABLE_SLOTS + 1,
                "Slot": move % TABLE_SLOTS + 1,
                **_card_row(card),
            }
        )
    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)
