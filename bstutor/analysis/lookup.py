"""Interactive Plotly strategy lookup.

Two public functions:

    build_lookup_figure(can_double)
        — hard / soft / pair heatmaps; hovering a cell shows the hand, the
          dealer up-card and the full ranked action list.
    save_lookup_html(fig, path)
        — export any figure to a self-contained HTML file.
"""

from __future__ import annotations

import numpy as np
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from bstutor.analysis.chart import (
    ACTION_CODES,
    ACTION_LETTERS,
    DEALER_LABELS,
    DEALER_VALUES,
    HARD_LABELS,
    HARD_TOTALS,
    PAIR_LABELS,
    PAIR_VALUES,
    SOFT_LABELS,
    SOFT_TOTALS,
    build_chart_data,
    ranked_cell,
)

# Discrete colorscale over codes 0..3 (H, S, D, P).
_ACTION_COLORSCALE: list[list] = [
    [0.0, "#d62728"],
    [0.249, "#d62728"],
    [0.25, "#2ca02c"],
    [0.499, "#2ca02c"],
    [0.5, "#1f77b4"],
    [0.749, "#1f77b4"],
    [0.75, "#ff7f0e"],
    [1.0, "#ff7f0e"],
]

_SECTIONS: list[tuple[str, str, list[int], list[str]]] = [
    ("hard", "Hard totals", HARD_TOTALS, HARD_LABELS),
    ("soft", "Soft totals", SOFT_TOTALS, SOFT_LABELS),
    ("pairs", "Pairs", PAIR_VALUES, PAIR_LABELS),
]


def _build_hover(section: str, rows: list[int], labels: list[str], can_double: bool) -> list[list[str]]:
    """Return a rows×10 grid of hover strings listing each cell's ranked actions."""
    grid: list[list[str]] = []
    for row_value, label in zip(rows, labels):
        line: list[str] = []
        for dealer_value, dealer_label in zip(DEALER_VALUES, DEALER_LABELS):
            ranked = ranked_cell(section, row_value, dealer_value, can_double)
            lines = [
                f"Hand: <b>{label}</b>",
                f"Dealer: {dealer_label}",
                f"Best: <b>{ranked[0].action.label}</b>",
            ]
            lines += [f"{sa.rank}. {sa.action.label}" for sa in ranked]
            line.append("<br>".join(lines))
        grid.append(line)
    return grid


def _make_heatmap_trace(
    data: np.ndarray,
    labels: list[str],
    hover_text: list[list[str]],
    *,
    name: str,
) -> go.Heatmap:
    letters = {code: ACTION_LETTERS[a] for a, code in ACTION_CODES.items()}
    return go.Heatmap(
        z=data.tolist(),
        x=DEALER_LABELS,
        y=labels,
        colorscale=_ACTION_COLORSCALE,
        zmin=0,
        zmax=len(ACTION_CODES) - 1,
        text=[[letters[int(v)] for v in row] for row in data],
        texttemplate="%{text}",
        customdata=hover_text,
        hovertemplate="%{customdata}<extra></extra>",
        showscale=False,
        name=name,
    )


def build_lookup_figure(can_double: bool = True) -> go.Figure:
    """Build an interactive 1×3 Plotly figure of the strategy chart.

    Args:
        can_double: If False, show the chart for a decision where doubling
                    is no longer possible.

    Returns:
        go.Figure with three heatmap traces (hard, soft, pairs).
    """
    data = build_chart_data(can_double)
    fig = make_subplots(
        rows=1,
        cols=3,
        subplot_titles=[title for _, title, _, _ in _SECTIONS],
        horizontal_spacing=0.08,
    )

    for col, (section, title, rows, labels) in enumerate(_SECTIONS, start=1):
        fig.add_trace(
            _make_heatmap_trace(
                getattr(data, section),
                labels,
                _build_hover(section, rows, labels, can_double),
                name=title,
            ),
            row=1,
            col=col,
        )
        fig.update_yaxes(autorange="reversed", row=1, col=col)

    double_label = "double allowed" if can_double else "no double"
    fig.update_layout(
        title_text=f"Basic Strategy Lookup ({double_label})",
        title_font_size=15,
        height=560,
        width=1150,
    )
    fig.update_xaxes(title_text="Dealer up-card")
    return fig


def save_lookup_html(fig: go.Figure, path: str) -> None:
    """Save a Plotly figure to an HTML file (Plotly JS loaded from the CDN)."""
    fig.write_html(path, include_plotlyjs="cdn")
