"""
Shared pytest fixtures for Basic Strategy Tutor tests.

Provides convenience wrappers around str_to_card for building known hands
and a seeded random generator.
"""

from __future__ import annotations

import numpy as np
import pytest

from bstutor.engine.cards import Card, str_to_card


def hand(*card_strs: str) -> tuple[Card, ...]:
    """Build a hand tuple from human-readable card strings.

    Examples:
        >>> hand('AS', '7C')
        (Card(rank=<Rank.ACE: 'A'>, ...), Card(rank=<Rank.SEVEN: '7'>, ...))
    """
    return tuple(str_to_card(s) for s in card_strs)


def card(card_str: str) -> Card:
    return str_to_card(card_str)


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator so dealing and message choice are repeatable."""
    return np.random.default_rng(1234)


@pytest.fixture
def h():
    """Expose the hand() helper as a fixture for convenience."""
    return hand
