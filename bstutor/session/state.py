"""
Practice-session state and its transitions.

A session is an immutable ``SessionState`` snapshot. ``reduce(state, event)``
returns the next snapshot and never mutates its input; whoever owns the
session (see ``store.SessionStore``) swaps whole snapshots.

Hand flow:
    deal -> ChooseAction (graded, feedback shown) -> NextHand -> ... -> game over

Exactly one decision is graded per hand: the first one. The HandResult
appended to the history records that same decision.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Union

import numpy as np

from bstutor.engine.actions import Action, get_available_actions
from bstutor.engine.cards import Card, card_to_str, str_to_card
from bstutor.engine.deck import deal_hand
from bstutor.scoring.feedback import FeedbackResult, generate_feedback
from bstutor.scoring.summary import MAX_POINTS_PER_HAND
from bstutor.strategy.table import get_optimal_actions


# ─── Settings ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Settings:
    """User-adjustable session settings.

    ``deck_count`` and ``dealer_hits_soft17`` are recorded but the strategy
    table is fixed to 6 decks / dealer stands on soft 17.
    """

    total_hands: int = 20
    deck_count: int = 6
    dealer_hits_soft17: bool = False

    def __post_init__(self) -> None:
        if self.total_hands < 1:
            raise ValueError(f"total_hands must be at least 1, got {self.total_hands}")
        if self.deck_count < 1:
            raise ValueError(f"deck_count must be at least 1, got {self.deck_count}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_hands": self.total_hands,
            "deck_count": self.deck_count,
            "dealer_hits_soft17": self.dealer_hits_soft17,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Settings:
        """Build Settings from a mapping; missing keys take defaults, unknown keys are ignored."""
        defaults = cls()
        hits_soft17 = data.get("dealer_hits_soft17", defaults.dealer_hits_soft17)
        if not isinstance(hits_soft17, bool):
            hits_soft17 = defaults.dealer_hits_soft17
        return cls(
            total_hands=int(data.get("total_hands", defaults.total_hands)),
            deck_count=int(data.get("deck_count", defaults.deck_count)),
            dealer_hits_soft17=hits_soft17,
        )


# ─── History record ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class HandResult:
    hand_number: int
    player_cards: tuple[Card, ...]
    dealer_card: Card
    chosen: Action
    optimal: Action
    points_earned: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "hand_number": self.hand_number,
            "player_cards": [card_to_str(c) for c in self.player_cards],
            "dealer_card": card_to_str(self.dealer_card),
            "chosen": self.chosen.value,
            "optimal": self.optimal.value,
            "points_earned": self.points_earned,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HandResult:
        """Inverse of ``to_dict``.

        Raises:
            ValueError: On an unknown card string or action name.
            KeyError: On a missing field.
        """
        return cls(
            hand_number=int(data["hand_number"]),
            player_cards=tuple(str_to_card(s) for s in data["player_cards"]),
            dealer_card=str_to_card(data["dealer_card"]),
            chosen=Action(data["chosen"]),
            optimal=Action(data["optimal"]),
            points_earned=int(data["points_earned"]),
        )


# ─── Session snapshot ─────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SessionState:
    settings: Settings
    current_hand: int
    score: int
    player_cards: tuple[Card, ...]
    dealer_card: Card
    available_actions: tuple[Action, ...]
    feedback: FeedbackResult | None = None
    history: tuple[HandResult, ...] = field(default_factory=tuple)
    game_over: bool = False

    @property
    def total_hands(self) -> int:
        return self.settings.total_hands

    @property
    def max_score(self) -> int:
        return self.settings.total_hands * MAX_POINTS_PER_HAND

    @property
    def awaiting_action(self) -> bool:
        return not self.game_over and self.feedback is None


# ─── Events ───────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ChooseAction:
    action: Action


@dataclass(frozen=True)
class NextHand:
    pass


@dataclass(frozen=True)
class Restart:
    settings: Settings | None = None


Event = Union[ChooseAction, NextHand, Restart]


# ─── Transitions ──────────────────────────────────────────────────────────────

def new_session(settings: Settings | None = None, rng: np.random.Generator | None = None) -> SessionState:
    """Start a session and deal hand 1."""
    settings = settings if settings is not None else Settings()
    dealt = deal_hand(rng)
    return SessionState(
        settings=settings,
        current_hand=1,
        score=0,
        player_cards=dealt.player_cards,
        dealer_card=dealt.dealer_card,
        available_actions=get_available_actions(dealt.player_cards, is_first_action=True),
    )


def _choose(state: SessionState, action: Action, rng: np.random.Generator | None) -> SessionState:
    if not state.awaiting_action:
        return state
    if action not in state.available_actions:
        raise ValueError(
            f"{action.label} is not available for hand {state.current_hand}; "
            f"choose one of {[a.label for a in state.available_actions]}"
        )

    optimal = get_optimal_actions(
        state.player_cards,
        state.dealer_card,
        can_double=Action.DOUBLE in state.available_actions,
        can_split=Action.SPLIT in state.available_actions,
    )
    feedback = generate_feedback(action, optimal, rng)
    result = HandResult(
        hand_number=state.current_hand,
        player_cards=state.player_cards,
        dealer_card=state.dealer_card,
        chosen=action,
        optimal=feedback.optimal_action,
        points_earned=feedback.points_earned,
    )
    return replace(
        state,
        score=state.score + feedback.points_earned,
        feedback=feedback,
        history=state.history + (result,),
    )


def _next_hand(state: SessionState, rng: np.random.Generator | None) -> SessionState:
    # The current hand must be graded before moving on.
    if state.game_over or state.feedback is None:
        return state
    if state.current_hand >= state.total_hands:
        return replace(state, game_over=True, feedback=None)

    dealt = deal_hand(rng)
    return replace(
        state,
        current_hand=state.current_hand + 1,
        player_cards=dealt.player_cards,
        dealer_card=dealt.dealer_card,
        available_actions=get_available_actions(dealt.player_cards, is_first_action=True),
        feedback=None,
    )


def reduce(state: SessionState, event: Event, rng: np.random.Generator | None = None) -> SessionState:
    """Apply *event* to *state* and return the resulting snapshot.

    Raises:
        ValueError: If ChooseAction names an action that is not available.
        TypeError: On an unknown event type.
    """
    if isinstance(event, ChooseAction):
        return _choose(state, event.action, rng)
    if isinstance(event, NextHand):
        return _next_hand(state, rng)
    if isinstance(event, Restart):
        return new_session(event.settings or state.settings, rng)
    raise TypeError(f"Unknown session event: {event!r}")
