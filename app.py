"""Basic Strategy Tutor — Streamlit app.

Four tabs:
  Tab 1 — Practice         (deal, choose, get graded feedback, session summary)
  Tab 2 — Strategy Chart   (Plotly lookup + matplotlib chart of the table)
  Tab 3 — Drill Simulator  (Monte Carlo baseline for scripted policies)
  Tab 4 — History          (persisted hand history across sessions)

Run:
    streamlit run app.py
"""

from __future__ import annotations

import asyncio
import contextlib
import io
import logging

import matplotlib

matplotlib.use("Agg")  # must be set before any other matplotlib imports

import streamlit as st

from bstutor import config
from bstutor.engine.cards import card_label, card_to_str, hand_to_str
from bstutor.scoring.feedback import FeedbackTier, hand_status
from bstutor.scoring.summary import summarize
from bstutor.session.state import ChooseAction, NextHand, Restart, Settings
from bstutor.session.storage import open_storage
from bstutor.session.store import SessionStore

config.configure_logging()
logger = logging.getLogger("bstutor.app")

# ─── Page config ──────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Basic Strategy Tutor",
    page_icon="🃏",
    layout="wide",
)

# ─── Cached resources ─────────────────────────────────────────────────────────


@st.cache_resource
def _get_storage():
    """Storage adapter shared by every browser session of this process."""
    return open_storage(config.data_dir())


@st.cache_resource
def _load_analysis_modules():
    """Import plotting and simulation modules once (cached for the process lifetime)."""
    from bstutor.analysis.chart import plot_strategy_chart
    from bstutor.analysis.lookup import build_lookup_figure
    from bstutor.analysis.report import print_drill_report, print_session_report
    from bstutor.analysis.simulator import POLICIES, simulate_drills

    return {
        "plot_strategy_chart": plot_strategy_chart,
        "build_lookup_figure": build_lookup_figure,
        "print_drill_report": print_drill_report,
        "print_session_report": print_session_report,
        "policies": POLICIES,
        "simulate_drills": simulate_drills,
    }


storage = _get_storage()
m = _load_analysis_modules()

if "store" not in st.session_state:
    saved = asyncio.run(storage.load_settings())
    st.session_state["store"] = SessionStore(saved or config.default_settings())
    st.session_state["history_saved"] = False

store: SessionStore = st.session_state["store"]


def _choose(action) -> None:
    store.dispatch(ChooseAction(action))


def _next_hand() -> None:
    store.dispatch(NextHand())


def _restart(settings: Settings | None = None) -> None:
    store.dispatch(Restart(settings))
    st.session_state["history_saved"] = False


def _save_history_once(state) -> None:
    """Append a finished session to the stored history exactly once."""
    if st.session_state.get("history_saved"):
        return
    past = asyncio.run(storage.load_history())
    asyncio.run(storage.save_history(past + list(state.history)))
    st.session_state["history_saved"] = True
    logger.info("Saved %d hands (score %d/%d)", len(state.history), state.score, state.max_score)


# ─── Sidebar controls ─────────────────────────────────────────────────────────

with st.sidebar:
    st.title("🃏 Basic Strategy Tutor")
    st.markdown("---")

    current = store.snapshot().settings
    total_hands = st.number_input("Hands per session", min_value=1, max_value=200, value=current.total_hands)
    deck_count = st.number_input("Decks", min_value=1, max_value=8, value=current.deck_count)
    dealer_hits_soft17 = st.checkbox("Dealer hits soft 17", value=current.dealer_hits_soft17)

    if st.button("Start new session", type="primary"):
        new_settings = Settings(
            total_hands=int(total_hands),
            deck_count=int(deck_count),
            dealer_hits_soft17=bool(dealer_hits_soft17),
        )
        asyncio.run(storage.save_settings(new_settings))
        _restart(new_settings)

    st.markdown("---")
    st.caption("Chart: 6 decks, dealer stands on soft 17, double after split.")
    st.caption("Scoring: best play 3 pts, second-best 1 pt, otherwise 0.")

# ─── Tabs ─────────────────────────────────────────────────────────────────────

tab1, tab2, tab3, tab4 = st.tabs(
    [
        "Practice",
        "Strategy Chart",
        "Drill Simulator",
        "History",
    ]
)

# ── Tab 1: Practice ───────────────────────────────────────────────────────────

with tab1:
    state = store.snapshot()

    if state.game_over:
        _save_history_once(state)
        summary = summarize(state.history, state.total_hands)

        st.header("Session Complete!")
        col1, col2, col3, col4 = st.columns(4)
        col1.metric("Score", f"{summary.score} / {summary.max_score}", f"{summary.percentage}%")
        col2.metric("Perfect", summary.perfect)
        col3.metric("Good", summary.good)
        col4.metric("Wrong", summary.wrong)

        if summary.is_upbeat:
            st.success(summary.message)
        else:
            st.info(summary.message)

        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            m["print_session_report"](summary, state.history)
        st.code(buf.getvalue(), language=None)

        st.button("Play again", on_click=_restart, type="primary")
    else:
        col1, col2 = st.columns(2)
        col1.metric("Score", f"{state.score} / {state.max_score}")
        col2.metric("Hand", f"{state.current_hand} of {state.total_hands}")
        st.progress(state.current_hand / state.total_hands)

        st.subheader("Dealer")
        st.markdown(f"## {card_label(state.dealer_card)}")
        st.subheader("Your hand")
        st.markdown("## " + "  ".join(card_label(c) for c in state.player_cards))
        st.caption(hand_status(state.player_cards, state.dealer_card))

        buttons = st.columns(len(state.available_actions))
        for col, action in zip(buttons, state.available_actions):
            col.button(
                action.label,
                key=f"action-{action.value}",
                on_click=_choose,
                args=(action,),
                disabled=not state.awaiting_action,
                use_container_width=True,
            )

        feedback = state.feedback
        if feedback is not None:
            if feedback.tier is FeedbackTier.PERFECT:
                st.success(f"+{feedback.points_earned}  {feedback.message}")
            elif feedback.tier is FeedbackTier.SECOND_BEST:
                st.warning(f"+{feedback.points_earned}  {feedback.message}")
            else:
                st.error(f"+{feedback.points_earned}  {feedback.message}")

            st.markdown(
                "**Ranking:** "
                + " · ".join(f"{sa.rank}. {sa.action.label}" for sa in feedback.optimal)
            )
            label = "See results" if state.current_hand >= state.total_hands else "Next hand"
            st.button(label, on_click=_next_hand, type="primary")

# ── Tab 2: Strategy Chart ─────────────────────────────────────────────────────

with tab2:
    st.header("Strategy Chart")
    st.caption("H = Hit, S = Stand, D = Double, P = Split. Hover a cell for the full ranking.")

    can_double = st.checkbox("Doubling allowed", value=True)
    fig_lookup = m["build_lookup_figure"](can_double=can_double)
    st.plotly_chart(fig_lookup, use_container_width=True)

    with st.expander("Printable chart"):
        st.pyplot(m["plot_strategy_chart"](show=False))

# ── Tab 3: Drill Simulator ────────────────────────────────────────────────────

with tab3:
    st.header("Drill Simulator")
    st.caption("Deal random hands to a scripted player and score its first decision.")

    policy_name = st.selectbox("Policy", options=list(m["policies"].keys()))
    n_hands = st.slider("Hands", min_value=1_000, max_value=50_000, value=10_000, step=1_000)

    with st.spinner(f"Simulating {n_hands:,} hands …"):
        drill = m["simulate_drills"](m["policies"][policy_name](), n_hands=n_hands, seed=42)

    col1, col2, col3 = st.columns(3)
    col1.metric("Points / hand", f"{drill.mean_points:.3f}")
    col2.metric("Accuracy", f"{drill.accuracy_pct:.1f}%")
    col3.metric("95% CI", f"{drill.ci_95_low:.3f} – {drill.ci_95_high:.3f}")

    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        m["print_drill_report"](drill, label=policy_name)
    st.code(buf.getvalue(), language=None)

# ── Tab 4: History ────────────────────────────────────────────────────────────

with tab4:
    st.header("History")

    history = asyncio.run(storage.load_history())
    if history:
        import pandas as pd

        rows = [
            {
                "Hand": h.hand_number,
                "Player": hand_to_str(h.player_cards),
                "Dealer": card_to_str(h.dealer_card),
                "Chosen": h.chosen.label,
                "Best": h.optimal.label,
                "Points": h.points_earned,
            }
            for h in history
        ]
        st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

        if st.button("Clear history"):
            asyncio.run(storage.clear_history())
            st.rerun()
    else:
        st.info("No completed sessions yet.")
