"""Tests for bstutor/analysis/lookup.py — interactive Plotly lookup.

No display server is required: Plotly figures are in-memory objects and the
save helper writes HTML without rendering.
"""

from __future__ import annotations

import plotly.graph_objects as go
import pytest

from bstutor.analysis.chart import DEALER_VALUES, HARD_TOTALS, PAIR_VALUES
from bstutor.analysis.lookup import build_lookup_figure, save_lookup_html


@pytest.fixture(scope="module")
def fig() -> go.Figure:
    return build_lookup_figure()


class TestBuildLookupFigure:
    def test_returns_figure(self, fig: go.Figure) -> None:
        assert isinstance(fig, go.Figure)

    def test_three_heatmaps(self, fig: go.Figure) -> None:
        assert len(fig.data) == 3
        assert all(trace.type == "heatmap" for trace in fig.data)

    def test_trace_sizes(self, fig: go.Figure) -> None:
        assert [len(trace.z) for trace in fig.data] == [16, 8, 10]
        assert all(len(trace.x) == 10 for trace in fig.data)

    def test_title_mentions_double_mode(self, fig: go.Figure) -> None:
        assert "double allowed" in fig.layout.title.text
        assert "no double" in build_lookup_figure(can_double=False).layout.title.text

    def test_hover_lists_ranking(self, fig: go.Figure) -> None:
        hard = fig.data[0]
        hover = hard.customdata[HARD_TOTALS.index(16)][DEALER_VALUES.index(10)]
        assert "Best: <b>Hit</b>" in hover
        assert "1. Hit" in hover and "2. Stand" in hover and "3. Double" in hover

    def test_cell_letters(self, fig: go.Figure) -> None:
        pairs = fig.data[2]
        assert all(letter == "P" for letter in pairs.text[PAIR_VALUES.index(11)])


class TestSaveLookupHtml:
    def test_writes_html(self, fig: go.Figure, tmp_path) -> None:
        path = tmp_path / "lookup.html"
        save_lookup_html(fig, str(path))
        assert path.exists()
        assert "plotly" in path.read_text(encoding="utf-8").lower()
