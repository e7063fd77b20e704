"""Basic-strategy chart built from the decision table.

One public data builder returns NumPy matrices that can be used
programmatically or passed to the plot helper:

    build_chart_data(can_double)  — hard / soft / pair matrices of action codes

One public plot function renders a matplotlib figure:

    plot_strategy_chart(data, ...)  — 1×3 figure (hard, soft, pairs)

Matrix convention:
    Columns : dealer up-card 2, 3, ..., 10, A   (10 columns)
    Hard    : player totals 5–20                (16 rows)
    Soft    : player totals 13–20 (A-2 … A-9)   (8 rows)
    Pairs   : pair of 2s … 10s, then Aces       (10 rows)
    Values  : rank-1 action code, see ACTION_CODES
"""

from __future__ import annotations

from dataclasses import dataclass

import matplotlib
import matplotlib.colors
import matplotlib.figure
import matplotlib.pyplot as plt
import numpy as np

from bstutor.engine.actions import Action
from bstutor.strategy.table import DecisionContext, StrategyAction, rank_actions

# ─── Constants ────────────────────────────────────────────────────────────────

DEALER_VALUES: list[int] = [2, 3, 4, 5, 6, 7, 8, 9, 10, 11]
HARD_TOTALS: list[int] = list(range(5, 21))
SOFT_TOTALS: list[int] = list(range(13, 21))
PAIR_VALUES: list[int] = [2, 3, 4, 5, 6, 7, 8, 9, 10, 11]

ACTION_CODES: dict[Action, int] = {
    Action.HIT: 0,
    Action.STAND: 1,
    Action.DOUBLE: 2,
    Action.SPLIT: 3,
}
ACTION_LETTERS: dict[Action, str] = {
    Action.HIT: "H",
    Action.STAND: "S",
    Action.DOUBLE: "D",
    Action.SPLIT: "P",
}
_CODE_TO_ACTION: dict[int, Action] = {code: a for a, code in ACTION_CODES.items()}

_ACTION_COLORS: list[str] = ["#d62728", "#2ca02c", "#1f77b4", "#ff7f0e"]  # H, S, D, P


def _value_label(value: int) -> str:
    return "A" if value == 11 else str(value)


DEALER_LABELS: list[str] = [_value_label(v) for v in DEALER_VALUES]
HARD_LABELS: list[str] = [str(t) for t in HARD_TOTALS]
SOFT_LABELS: list[str] = [f"A-{t - 11}" for t in SOFT_TOTALS]
PAIR_LABELS: list[str] = [f"{_value_label(v)}-{_value_label(v)}" for v in PAIR_VALUES]


# ─── Contexts ─────────────────────────────────────────────────────────────────

def hard_context(total: int, dealer_value: int, can_double: bool = True) -> DecisionContext:
    return DecisionContext(total, False, None, dealer_value, can_double, can_split=True)


def soft_context(total: int, dealer_value: int, can_double: bool = True) -> DecisionContext:
    return DecisionContext(total, True, None, dealer_value, can_double, can_split=True)


def pair_context(value: int, dealer_value: int, can_double: bool = True) -> DecisionContext:
    """Context for a two-card pair; a pair of Aces is soft 12."""
    if value == 11:
        return DecisionContext(12, True, 11, dealer_value, can_double, can_split=True)
    return DecisionContext(2 * value, False, value, dealer_value, can_double, can_split=True)


# ─── Data builder ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ChartData:
    hard: np.ndarray
    soft: np.ndarray
    pairs: np.ndarray

    def action_at(self, section: str, row: int, col: int) -> Action:
        return _CODE_TO_ACTION[int(getattr(self, section)[row, col])]


def _section_matrix(rows: list[int], make_context, can_double: bool) -> np.ndarray:
    data = np.zeros((len(rows), len(DEALER_VALUES)), dtype=np.int8)
    for r, row_value in enumerate(rows):
        for c, dealer_value in enumerate(DEALER_VALUES):
            best = rank_actions(make_context(row_value, dealer_value, can_double))[0]
            data[r, c] = ACTION_CODES[best.action]
    return data


def build_chart_data(can_double: bool = True) -> ChartData:
    """Return the rank-1 action for every chart cell.

    Args:
        can_double: If False, build the chart for a decision where doubling
                    is no longer possible.

    Returns:
        ChartData with int8 matrices of shape (16, 10), (8, 10), (10, 10).
    """
    return ChartData(
        hard=_section_matrix(HARD_TOTALS, hard_context, can_double),
        soft=_section_matrix(SOFT_TOTALS, soft_context, can_double),
        pairs=_section_matrix(PAIR_VALUES, pair_context, can_double),
    )


def ranked_cell(section: str, row_value: int, dealer_value: int, can_double: bool = True) -> list[StrategyAction]:
    """Full ranked list behind one chart cell (section is 'hard', 'soft' or 'pairs')."""
    make_context = {"hard": hard_context, "soft": soft_context, "pairs": pair_context}[section]
    return rank_actions(make_context(row_value, dealer_value, can_double))


# ─── Rendering ────────────────────────────────────────────────────────────────

def _make_action_cmap() -> matplotlib.colors.ListedColormap:
    return matplotlib.colors.ListedColormap(_ACTION_COLORS)


_ACTION_CMAP: matplotlib.colors.Colormap = _make_action_cmap()


def _render_panel(ax, data: np.ndarray, row_labels: list[str]) -> None:
    ax.imshow(data, cmap=_ACTION_CMAP, vmin=0, vmax=len(_ACTION_COLORS) - 1, aspect="auto")

    ax.set_xticks(range(len(DEALER_LABELS)))
    ax.set_xticklabels(DEALER_LABELS, fontsize=9)
    ax.set_yticks(range(len(row_labels)))
    ax.set_yticklabels(row_labels, fontsize=9)

    for r in range(data.shape[0]):
        for c in range(data.shape[1]):
            ax.text(
                c,
                r,
                ACTION_LETTERS[_CODE_TO_ACTION[int(data[r, c])]],
                ha="center",
                va="center",
                fontsize=8,
                color="white",
                fontweight="bold",
            )


def plot_strategy_chart(
    data: ChartData | None = None,
    title: str = "Basic Strategy (6 decks, S17, DAS)",
    *,
    show: bool = True,
    save_path: str | None = None,
) -> matplotlib.figure.Figure:
    """Plot the hard, soft and pair charts as a 1×3 figure.

    Args:
        data:      Chart matrices; built with doubling allowed when None.
        title:     Figure suptitle.
        show:      If True, call plt.show() after rendering.
        save_path: If not None, save the figure to this path before showing.

    Returns:
        matplotlib.figure.Figure.
    """
    data = data if data is not None else build_chart_data()
    fig, (ax_hard, ax_soft, ax_pairs) = plt.subplots(1, 3, figsize=(15, 6))
    fig.suptitle(title, fontsize=13, fontweight="bold")

    for ax, matrix, labels, panel_title in (
        (ax_hard, data.hard, HARD_LABELS, "Hard totals"),
        (ax_soft, data.soft, SOFT_LABELS, "Soft totals"),
        (ax_pairs, data.pairs, PAIR_LABELS, "Pairs"),
    ):
        _render_panel(ax, matrix, labels)
        ax.set_title(panel_title, fontsize=10)
        ax.set_xlabel("Dealer up-card", fontsize=9)
    ax_hard.set_ylabel("Player hand", fontsize=9)

    plt.tight_layout()

    if save_path is not None:
        fig.savefig(save_path, bbox_inches="tight", dpi=120)
    if show:
        plt.show()

    return fig
