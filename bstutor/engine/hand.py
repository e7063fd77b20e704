"""
Hand evaluation: totals, soft/hard classification, and the pair predicate.

Every Ace starts at 11. While the total is over 21 and an Ace is still
counted as 11, one such Ace drops to 1. A hand is soft when an Ace is still
counted as 11 after that adjustment.

All functions are pure and accept any sequence of Cards, including an empty one.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

from .cards import Card


class HandValue(NamedTuple):
    total: int
    is_soft: bool


def calculate_hand_value(cards: Sequence[Card]) -> HandValue:
    """Return the best total and softness of a hand.

    Examples:
        >>> calculate_hand_value(hand('AS', 'KH'))
        HandValue(total=21, is_soft=True)
        >>> calculate_hand_value(hand('AS', 'AH', '9D'))
        HandValue(total=21, is_soft=True)
        >>> calculate_hand_value(hand('AS', 'KH', '5D'))
        HandValue(total=16, is_soft=False)
        >>> calculate_hand_value(())
        HandValue(total=0, is_soft=False)
    """
    total = 0
    high_aces = 0
    for card in cards:
        total += card.value
        if card.is_ace:
            high_aces += 1

    while total > 21 and high_aces > 0:
        total -= 10
        high_aces -= 1

    return HandValue(total, high_aces > 0 and total <= 21)


def is_bust(total: int) -> bool:
    """Return True if a total exceeds 21."""
    return total > 21


def is_pair(cards: Sequence[Card]) -> bool:
    """Return True for exactly two cards of the same rank.

    Ten-value cards of different ranks (K-Q, J-10) are not a pair.
    """
    if len(cards) != 2:
        return False
    return cards[0].rank is cards[1].rank


def pair_value(cards: Sequence[Card]) -> int | None:
    """Return the blackjack value of a pair, or None if the hand is not a pair."""
    if not is_pair(cards):
        return None
    return cards[0].value
