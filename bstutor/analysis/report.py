"""Plain-text reports for drills and finished sessions.

    print_drill_report(result, label)     — points/hand, CI and outcome mix
    print_session_report(summary, history) — final score and per-hand table
"""

from __future__ import annotations

from typing import Sequence

from bstutor.analysis.simulator import DrillResult
from bstutor.engine.cards import card_to_str, hand_to_str
from bstutor.scoring.summary import SessionSummary
from bstutor.session.state import HandResult

_POINT_MARKS: dict[int, str] = {3: "perfect", 1: "good", 0: "wrong"}


def print_drill_report(result: DrillResult, label: str = "Drill") -> None:
    """Print a summary table for one simulated drill."""
    n = result.n_hands
    print("=" * 56)
    print(f"{label}")
    print("=" * 56)
    print(f"  Hands dealt:     {n:,}")
    print(f"  Points / hand:   {result.mean_points:.3f}  (max 3.000)")
    print(f"  95% CI:          [{result.ci_95_low:.3f}, {result.ci_95_high:.3f}]")
    print(f"  Accuracy:        {result.accuracy_pct:.1f}%")
    print()
    print("  Outcome mix:")
    print(f"    perfect (3)    {result.n_perfect:>8,}  ({100 * result.n_perfect / n:5.1f}%)")
    print(f"    good    (1)    {result.n_second_best:>8,}  ({100 * result.n_second_best / n:5.1f}%)")
    print(f"    wrong   (0)    {result.n_wrong:>8,}  ({100 * result.n_wrong / n:5.1f}%)")


def print_session_report(summary: SessionSummary, history: Sequence[HandResult]) -> None:
    """Print the final score followed by one line per graded hand."""
    print("=" * 56)
    print("Session Complete")
    print("=" * 56)
    print(f"  Score:    {summary.score} / {summary.max_score}  ({summary.percentage}%)")
    print(f"  Perfect:  {summary.perfect}   Good: {summary.good}   Wrong: {summary.wrong}")
    print(f"  {summary.message}")
    if not history:
        return
    print()
    print(f"  {'#':>3}  {'Player':<10} {'Dealer':<6} {'Chosen':<7} {'Best':<7} Result")
    print(f"  {'-' * 50}")
    for h in history:
        print(
            f"  {h.hand_number:>3}  {hand_to_str(h.player_cards):<10} "
            f"{card_to_str(h.dealer_card):<6} {h.chosen.label:<7} {h.optimal.label:<7} "
            f"{_POINT_MARKS.get(h.points_earned, '?')} (+{h.points_earned})"
        )
