"""
Monte Carlo drill simulator.

Plays ``n_hands`` practice decisions with a scripted policy, using the same
dealing, eligibility and scoring path as an interactive session, and reports
the average points per hand with a confidence interval.

Primary uses: sanity-check the scoring pipeline (the table policy must score
exactly 3 points on every hand) and give learners a baseline to beat (random
play, or a naive "never bust" heuristic).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

import numpy as np
from scipy import stats

from bstutor.engine.actions import Action, get_available_actions
from bstutor.engine.cards import Card
from bstutor.engine.deck import deal_hand
from bstutor.engine.hand import calculate_hand_value
from bstutor.scoring.feedback import calculate_points
from bstutor.strategy.table import get_optimal_actions

# policy(player_cards, dealer_card, available_actions) -> chosen Action
DrillPolicy = Callable[[tuple[Card, ...], Card, tuple[Action, ...]], Action]


# ─── Result type ──────────────────────────────────────────────────────────────


@dataclass
class DrillResult:
    """Aggregate statistics from a simulated drill.

    Attributes:
        n_hands:       Number of decisions simulated.
        mean_points:   Mean points per hand (0–3).
        std_points:    Sample standard deviation of per-hand points.
        ci_95_low:     Lower bound of the 95% confidence interval for mean_points.
        ci_95_high:    Upper bound of the 95% confidence interval for mean_points.
        accuracy_pct:  Share of rank-1 choices, in percent.
        n_perfect:     Hands scoring 3.
        n_second_best: Hands scoring 1.
        n_wrong:       Hands scoring 0.
        points:        Raw per-hand points (int8, length n_hands), or None if
                       simulate_drills() was called with return_points=False.
    """

    n_hands: int
    mean_points: float
    std_points: float
    ci_95_low: float
    ci_95_high: float
    accuracy_pct: float
    n_perfect: int
    n_second_best: int
    n_wrong: int
    points: np.ndarray | None = None

    def __str__(self) -> str:
        return (
            f"Hands: {self.n_hands:,} | "
            f"Points/hand: {self.mean_points:.3f} | "
            f"95% CI: [{self.ci_95_low:.3f}, {self.ci_95_high:.3f}] | "
            f"Accuracy: {self.accuracy_pct:.1f}%"
        )


# ─── Core simulation loop ─────────────────────────────────────────────────────


def simulate_drills(
    policy: DrillPolicy,
    n_hands: int = 10_000,
    seed: int | None = 42,
    return_points: bool = False,
) -> DrillResult:
    """Simulate n_hands graded first decisions and summarise the points.

    Args:
        policy:        Callable matching the DrillPolicy signature.
        n_hands:       Number of hands to deal.
        seed:          Seed for the dealing generator. None for a
                       non-deterministic run.
        return_points: If True, attach the per-hand points array.

    Returns:
        DrillResult for the run.

    Raises:
        ValueError: If n_hands < 1.
    """
    if n_hands < 1:
        raise ValueError(f"n_hands must be at least 1, got {n_hands}")

    rng = np.random.default_rng(seed)
    points = np.zeros(n_hands, dtype=np.int8)

    for i in range(n_hands):
        player_cards, dealer_card = deal_hand(rng)
        available = get_available_actions(player_cards, is_first_action=True)
        chosen = policy(player_cards, dealer_card, available)
        optimal = get_optimal_actions(
            player_cards,
            dealer_card,
            can_double=Action.DOUBLE in available,
            can_split=Action.SPLIT in available,
        )
        points[i] = calculate_points(chosen, optimal)

    arr = points.astype(np.float64)
    mean = float(np.mean(arr))
    std = float(np.std(arr, ddof=1)) if n_hands > 1 else 0.0
    z = float(stats.norm.ppf(0.975))
    ci_margin = z * std / math.sqrt(n_hands)

    n_perfect = int(np.count_nonzero(points == 3))
    return DrillResult(
        n_hands=n_hands,
        mean_points=mean,
        std_points=std,
        ci_95_low=mean - ci_margin,
        ci_95_high=mean + ci_margin,
        accuracy_pct=100.0 * n_perfect / n_hands,
        n_perfect=n_perfect,
        n_second_best=int(np.count_nonzero(points == 1)),
        n_wrong=int(np.count_nonzero(points == 0)),
        points=points if return_points else None,
    )


# ─── Policy factories ─────────────────────────────────────────────────────────


def make_table_policy() -> DrillPolicy:
    """Always play the rank-1 action from the strategy table."""

    def _policy(player_cards, dealer_card, available):
        return get_optimal_actions(
            player_cards,
            dealer_card,
            can_double=Action.DOUBLE in available,
            can_split=Action.SPLIT in available,
        )[0].action

    return _policy


def make_never_bust_policy() -> DrillPolicy:
    """Naive heuristic: stand on 12 or more, hit otherwise."""

    def _policy(player_cards, dealer_card, available):
        total, _ = calculate_hand_value(player_cards)
        return Action.STAND if total >= 12 else Action.HIT

    return _policy


def make_random_policy(seed: int | None = None) -> DrillPolicy:
    """Pick uniformly among the available actions."""
    rng = np.random.default_rng(seed)

    def _policy(player_cards, dealer_card, available):
        return available[int(rng.integers(len(available)))]

    return _policy


POLICIES: dict[str, Callable[[], DrillPolicy]] = {
    "Basic strategy": make_table_policy,
    "Never bust (stand on 12+)": make_never_bust_policy,
    "Random": make_random_policy,
}
