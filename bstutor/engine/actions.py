"""
Player actions and which of them are legal at a decision point.

Double and Split are first-action-only: Double needs exactly two cards, Split
needs a pair. Hit and Stand are always available.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from .cards import Card
from .hand import is_pair


class Action(Enum):
    HIT = "HIT"
    STAND = "STAND"
    DOUBLE = "DOUBLE"
    SPLIT = "SPLIT"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def verb(self) -> str:
        """Lower-case phrase used inside feedback sentences."""
        return _VERBS[self]


_LABELS: dict[Action, str] = {
    Action.HIT: "Hit",
    Action.STAND: "Stand",
    Action.DOUBLE: "Double",
    Action.SPLIT: "Split",
}

_VERBS: dict[Action, str] = {
    Action.HIT: "hit",
    Action.STAND: "stand",
    Action.DOUBLE: "double down",
    Action.SPLIT: "split",
}


def get_available_actions(
    player_cards: Sequence[Card],
    is_first_action: bool = True,
) -> tuple[Action, ...]:
    """Return the legal actions in canonical order (HIT, STAND, DOUBLE, SPLIT).

    Examples:
        >>> get_available_actions(hand('8H', '8C'))
        (<Action.HIT: 'HIT'>, <Action.STAND: 'STAND'>, <Action.DOUBLE: 'DOUBLE'>, <Action.SPLIT: 'SPLIT'>)
        >>> get_available_actions(hand('8H', '8C'), is_first_action=False)
        (<Action.HIT: 'HIT'>, <Action.STAND: 'STAND'>)
    """
    actions = [Action.HIT, Action.STAND]
    if is_first_action and len(player_cards) == 2:
        actions.append(Action.DOUBLE)
    if is_first_action and is_pair(player_cards):
        actions.append(Action.SPLIT)
    return tuple(actions)
