"""
Scoring of a chosen action and the dealer's feedback message.

Points:
    rank 1 (optimal)       -> 3
    rank 2 (second-best)   -> 1
    rank 3+, or not ranked -> 0

Messages are picked from ``MESSAGE_TEMPLATES``, keyed by (tier, action):
PERFECT rows are keyed by the chosen action, SECOND_BEST and WRONG rows by
the optimal action. Variants within a row are interchangeable; the choice is
drawn from an injected ``numpy.random.Generator`` so a seeded generator gives
a repeatable message.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import numpy as np

from bstutor.engine.actions import Action
from bstutor.engine.cards import Card
from bstutor.engine.hand import calculate_hand_value, is_bust
from bstutor.strategy.table import StrategyAction

POINTS_BY_RANK: dict[int, int] = {1: 3, 2: 1}


class FeedbackTier(Enum):
    PERFECT = 3
    SECOND_BEST = 1
    WRONG = 0


def calculate_points(chosen: Action, optimal: Sequence[StrategyAction]) -> int:
    """Return the points earned for *chosen* against the ranked list.

    Examples:
        >>> ranked = [StrategyAction(Action.HIT, 1), StrategyAction(Action.STAND, 2)]
        >>> calculate_points(Action.HIT, ranked)
        3
        >>> calculate_points(Action.SPLIT, ranked)
        0
    """
    for entry in optimal:
        if entry.action is chosen:
            return POINTS_BY_RANK.get(entry.rank, 0)
    return 0


def tier_for_points(points: int) -> FeedbackTier:
    if points >= 3:
        return FeedbackTier.PERFECT
    if points >= 1:
        return FeedbackTier.SECOND_BEST
    return FeedbackTier.WRONG


# ─── Message templates ────────────────────────────────────────────────────────

_PERFECT: dict[Action, tuple[str, ...]] = {
    Action.HIT: (
        "Perfect! Hitting was the right call here.",
        "That's it! The math says to hit in this spot.",
        "Nicely done! Hit was the optimal play.",
        "Excellent! You're following basic strategy perfectly.",
    ),
    Action.STAND: (
        "That's the play! Standing gives you the best odds here.",
        "Perfect! The dealer's likely to bust with that card showing.",
        "Exactly right! Standing is the way to go.",
        "Spot on! No need to risk busting.",
    ),
    Action.DOUBLE: (
        "Beautiful! Doubling down squeezes maximum value from this hand.",
        "Perfect! This is a prime doubling opportunity.",
        "That's the advanced play! Double down was optimal.",
        "Excellent! You're maximizing your edge here.",
    ),
    Action.SPLIT: (
        "Great decision! Splitting gives you two strong hands.",
        "Perfect! This pair should definitely be split.",
        "That's it! Splitting is the way to maximize value here.",
        "Excellent! You turned one hand into two winners.",
    ),
}

_SECOND_BEST: tuple[str, ...] = (
    "Not bad! {Chosen} works, but {optimal} squeezes a bit more value.",
    "Close! {Optimal} is slightly better here, but {chosen} isn't terrible.",
    "You're on the right track! {Optimal} is the optimal play, though.",
    "Decent choice! The math favors {optimal} by a small margin.",
    "Almost there! {Chosen} is reasonable, but {optimal} is best.",
)

_WRONG: tuple[str, ...] = (
    "The math says to {optimal} here. {reason}",
    "Tough one! {Optimal} is the play that wins over the long run.",
    "Not quite! {Optimal} gives you the best shot at this hand.",
    "That's a common mistake! {Optimal} is actually optimal here.",
    "Let's review this one. {Optimal} is what basic strategy calls for.",
)

MESSAGE_TEMPLATES: dict[tuple[FeedbackTier, Action], tuple[str, ...]] = {
    **{(FeedbackTier.PERFECT, a): msgs for a, msgs in _PERFECT.items()},
    **{(FeedbackTier.SECOND_BEST, a): _SECOND_BEST for a in Action},
    **{(FeedbackTier.WRONG, a): _WRONG for a in Action},
}

_REASONS: dict[tuple[Action, Action], str] = {
    (Action.STAND, Action.HIT): "The dealer's up card makes busting likely for them.",
    (Action.HIT, Action.STAND): "Your total is too low to stand with the dealer showing strength.",
    (Action.DOUBLE, Action.HIT): "This is a prime doubling opportunity to maximize your edge.",
}
_SPLIT_REASON = "Splitting creates two strong starting hands."
_DEFAULT_REASON = "Trust the math: basic strategy is proven over millions of hands."


def explain(optimal: Action, chosen: Action) -> str:
    """One-sentence reason the optimal action beats the chosen one."""
    if (optimal, chosen) in _REASONS:
        return _REASONS[(optimal, chosen)]
    if optimal is Action.SPLIT and chosen is not Action.SPLIT:
        return _SPLIT_REASON
    return _DEFAULT_REASON


def _fill(template: str, chosen: Action, optimal: Action) -> str:
    return template.format(
        chosen=chosen.verb,
        Chosen=chosen.verb.capitalize(),
        optimal=optimal.verb,
        Optimal=optimal.verb.capitalize(),
        reason=explain(optimal, chosen),
    )


def build_message(
    chosen: Action,
    optimal: Sequence[StrategyAction],
    points: int,
    rng: np.random.Generator | None = None,
) -> str:
    """Pick and fill a message variant for the tier implied by *points*."""
    rng = rng if rng is not None else np.random.default_rng()
    tier = tier_for_points(points)
    best = optimal[0].action if optimal else chosen
    key_action = chosen if tier is FeedbackTier.PERFECT else best
    variants = MESSAGE_TEMPLATES[(tier, key_action)]
    message = _fill(variants[int(rng.integers(len(variants)))], chosen, best)

    if tier is FeedbackTier.WRONG and len(optimal) > 1:
        message += f" {optimal[1].action.verb.capitalize()} would be second-best."
    return message


# ─── Feedback result ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class FeedbackResult:
    chosen: Action
    optimal: tuple[StrategyAction, ...]
    points_earned: int
    message: str

    @property
    def tier(self) -> FeedbackTier:
        return tier_for_points(self.points_earned)

    @property
    def optimal_action(self) -> Action:
        # An empty ranking has no better play than the one chosen.
        return self.optimal[0].action if self.optimal else self.chosen


def generate_feedback(
    chosen: Action,
    optimal: Sequence[StrategyAction],
    rng: np.random.Generator | None = None,
) -> FeedbackResult:
    """Score *chosen* and attach a message matching the score tier."""
    points = calculate_points(chosen, optimal)
    return FeedbackResult(
        chosen=chosen,
        optimal=tuple(optimal),
        points_earned=points,
        message=build_message(chosen, optimal, points, rng),
    )


# ─── In-hand status line ──────────────────────────────────────────────────────

def hand_status(player_cards: Sequence[Card], dealer_card: Card) -> str:
    """Status line shown under the player's hand.

    Examples:
        >>> hand_status(hand('AH', '6C'), str_to_card('7D'))
        "You have 17 (soft) vs dealer's 7 • Strong hand"
    """
    total, soft = calculate_hand_value(player_cards)
    dealer_value = dealer_card.value

    if is_bust(total):
        return f"Bust! ({total})"
    if total == 21:
        return f"Twenty-one! ({total})"

    message = f"You have {total}{' (soft)' if soft else ''} vs dealer's {dealer_value}"
    if total < 12:
        hint = "Safe to hit"
    elif total >= 17:
        hint = "Strong hand"
    elif dealer_value >= 7:
        hint = "Dealer shows strength"
    else:
        hint = "Dealer likely to bust"
    return f"{message} • {hint}"
