"""
Card types, blackjack values, and human-readable I/O helpers.

String encoding (I/O boundary only):
    <rank><suit>  e.g. 'AS', '10C', '7H'
    rank: 'A', '2'-'10', 'J', 'Q', 'K'
    suit: 'H', 'D', 'C', 'S'

A Card's blackjack value is derived from its rank on every access; it is never
stored on the card itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Suit(Enum):
    HEARTS = ("H", "♥")
    DIAMONDS = ("D", "♦")
    CLUBS = ("C", "♣")
    SPADES = ("S", "♠")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def symbol(self) -> str:
        return self.value[1]


class Rank(Enum):
    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    @property
    def label(self) -> str:
        return self.value


# Ace starts at 11; hand evaluation re-values it to 1 when the hand would bust.
RANK_VALUES: dict[Rank, int] = {
    Rank.ACE: 11,
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 10,
    Rank.QUEEN: 10,
    Rank.KING: 10,
}

TEN_VALUE_RANKS: frozenset[Rank] = frozenset({Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING})

_RANKS_BY_LABEL: dict[str, Rank] = {rank.label: rank for rank in Rank}
_SUITS_BY_CODE: dict[str, Suit] = {suit.code: suit for suit in Suit}


def rank_value(rank: Rank) -> int:
    """Return the blackjack value of a rank (Ace counts 11).

    Examples:
        >>> rank_value(Rank.ACE)
        11
        >>> rank_value(Rank.QUEEN)
        10
    """
    return RANK_VALUES[rank]


@dataclass(frozen=True)
class Card:
    """An immutable playing card."""

    rank: Rank
    suit: Suit

    @property
    def value(self) -> int:
        return RANK_VALUES[self.rank]

    @property
    def is_ace(self) -> bool:
        return self.rank is Rank.ACE

    def __str__(self) -> str:
        return card_to_str(self)


def card_to_str(card: Card) -> str:
    """Convert a card to its compact string form.

    Examples:
        >>> card_to_str(Card(Rank.ACE, Suit.SPADES))
        'AS'
        >>> card_to_str(Card(Rank.TEN, Suit.CLUBS))
        '10C'
    """
    return card.rank.label + card.suit.code


def card_label(card: Card) -> str:
    """Display form using the suit symbol, e.g. 'A♠'."""
    return card.rank.label + card.suit.symbol


def str_to_card(s: str) -> Card:
    """Parse a compact card string.

    The suit is the last character; everything before it is the rank.
    Lower-case input is accepted.

    Raises:
        ValueError: If the rank or suit is not recognised.

    Examples:
        >>> str_to_card('7H')
        Card(rank=<Rank.SEVEN: '7'>, suit=<Suit.HEARTS: ('H', '♥')>)
    """
    text = s.strip().upper()
    rank = _RANKS_BY_LABEL.get(text[:-1])
    suit = _SUITS_BY_CODE.get(text[-1:])
    if rank is None or suit is None:
        raise ValueError(f"Unrecognised card string: {s!r}")
    return Card(rank, suit)


def hand_to_str(cards: tuple[Card, ...] | list[Card]) -> str:
    """Convert a sequence of cards to a space-separated string.

    Examples:
        >>> hand_to_str((Card(Rank.ACE, Suit.CLUBS), Card(Rank.KING, Suit.SPADES)))
        'AC KS'
    """
    return " ".join(card_to_str(c) for c in cards)
