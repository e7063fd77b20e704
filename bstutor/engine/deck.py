"""
Deck creation and card dealing.

Practice hands are dealt by uniform draws *with replacement* from a single
conceptual 52-card deck: there is no shoe, no penetration and no card
removal between draws.

Randomness comes from a caller-supplied ``numpy.random.Generator`` so that
tests and drills can be seeded. Passing ``None`` uses a fresh unseeded
generator.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

import numpy as np

from .cards import Card, Rank, Suit


class DealtHand(NamedTuple):
    player_cards: tuple[Card, ...]
    dealer_card: Card


_DECK: tuple[Card, ...] = tuple(Card(rank, suit) for suit in Suit for rank in Rank)


def _resolve_rng(rng: np.random.Generator | None) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


def create_deck() -> tuple[Card, ...]:
    """Return the 52 distinct cards, grouped by suit.

    Examples:
        >>> len(create_deck())
        52
    """
    return _DECK


def shuffle(cards: Sequence[Card], rng: np.random.Generator | None = None) -> tuple[Card, ...]:
    """Return a shuffled copy of *cards*; the input is left untouched."""
    order = _resolve_rng(rng).permutation(len(cards))
    return tuple(cards[int(i)] for i in order)


def deal_random_card(rng: np.random.Generator | None = None) -> Card:
    """Draw one card uniformly from the conceptual deck, with replacement.

    Examples:
        >>> card = deal_random_card(np.random.default_rng(7))
        >>> card in create_deck()
        True
    """
    return _DECK[int(_resolve_rng(rng).integers(len(_DECK)))]


def deal_hand(rng: np.random.Generator | None = None) -> DealtHand:
    """Deal two player cards and the dealer's up-card."""
    rng = _resolve_rng(rng)
    first = deal_random_card(rng)
    second = deal_random_card(rng)
    return DealtHand((first, second), deal_random_card(rng))
