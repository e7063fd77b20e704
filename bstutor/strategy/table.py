"""
Basic-strategy decision table.

Rule variant: 6 decks, dealer stands on soft 17, double after split allowed.

The chart is a flat, ordered list of ``Rule`` rows evaluated top to bottom;
the first row whose conditions hold supplies the ranked actions. Row order
encodes precedence:

    1. Pair rows   — only when splitting is allowed and the hand is a pair
                     with a chart entry (10-10 and 5-5 have none and fall
                     through to the total rows).
    2. Soft rows   — hand total counts an Ace as 11.
    3. Hard rows   — everything else; the last row is a catch-all.

Rows flagged ``double_if_allowed`` drop DOUBLE when doubling is not possible
and renumber the remaining actions, so ranks always run 1..n without gaps.

The dealer's up-card is taken at its blackjack value (Ace = 11).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Sequence

from bstutor.engine.actions import Action
from bstutor.engine.cards import Card
from bstutor.engine.hand import calculate_hand_value, pair_value

RULE_VARIANT: dict[str, object] = {
    "decks": 6,
    "dealer_hits_soft17": False,
    "double_after_split": True,
}

H, S, D, P = Action.HIT, Action.STAND, Action.DOUBLE, Action.SPLIT


class Section(Enum):
    PAIR = "pair"
    SOFT = "soft"
    HARD = "hard"


class StrategyAction(NamedTuple):
    action: Action
    rank: int  # 1 = optimal


@dataclass(frozen=True)
class DecisionContext:
    """Everything the table looks at for a single decision."""

    total: int
    is_soft: bool
    pair_value: int | None
    dealer_value: int
    can_double: bool = True
    can_split: bool = True

    @classmethod
    def from_cards(
        cls,
        player_cards: Sequence[Card],
        dealer_card: Card,
        can_double: bool = True,
        can_split: bool = True,
    ) -> DecisionContext:
        total, soft = calculate_hand_value(player_cards)
        return cls(
            total=total,
            is_soft=soft,
            pair_value=pair_value(player_cards),
            dealer_value=dealer_card.value,
            can_double=can_double,
            can_split=can_split,
        )


@dataclass(frozen=True)
class Rule:
    """One chart row: a set of conditions and the actions it ranks, best first."""

    name: str
    section: Section
    actions: tuple[Action, ...]
    low: int | None = None
    high: int | None = None
    pair_values: frozenset[int] = frozenset()
    dealers: frozenset[int] | None = None
    needs_double: bool = False
    double_if_allowed: bool = False

    def applies(self, ctx: DecisionContext) -> bool:
        if self.section is Section.PAIR:
            if not ctx.can_split or ctx.pair_value not in self.pair_values:
                return False
        elif (self.section is Section.SOFT) != ctx.is_soft:
            return False
        if self.low is not None and ctx.total < self.low:
            return False
        if self.high is not None and ctx.total > self.high:
            return False
        if self.dealers is not None and ctx.dealer_value not in self.dealers:
            return False
        if self.needs_double and not ctx.can_double:
            return False
        return True

    def ranked(self, can_double: bool) -> list[StrategyAction]:
        actions = self.actions
        if self.double_if_allowed and not can_double:
            actions = tuple(a for a in actions if a is not Action.DOUBLE)
        return [StrategyAction(a, rank) for rank, a in enumerate(actions, start=1)]


def _dealers(low: int, high: int, *excluded: int) -> frozenset[int]:
    return frozenset(v for v in range(low, high + 1) if v not in excluded)


def _pair(name: str, values: tuple[int, ...], actions: tuple[Action, ...], dealers=None) -> Rule:
    return Rule(name, Section.PAIR, actions, pair_values=frozenset(values), dealers=dealers)


def _soft(name: str, low, high, actions, dealers=None, needs_double=False) -> Rule:
    return Rule(
        name,
        Section.SOFT,
        actions,
        low=low,
        high=high,
        dealers=dealers,
        needs_double=needs_double,
        double_if_allowed=True,
    )


def _hard(name: str, low, high, actions, dealers=None, needs_double=False, double_if_allowed=False) -> Rule:
    return Rule(
        name,
        Section.HARD,
        actions,
        low=low,
        high=high,
        dealers=dealers,
        needs_double=needs_double,
        double_if_allowed=double_if_allowed,
    )


# ─── The chart ────────────────────────────────────────────────────────────────

RULES: tuple[Rule, ...] = (
    # Pairs (value of one card). 10s and 5s have no row.
    _pair("pair A/8: always split", (11, 8), (P, H, S)),
    _pair("pair 9 vs 2-9 except 7: split", (9,), (P, S, H), _dealers(2, 9, 7)),
    _pair("pair 9 otherwise: stand", (9,), (S, P, H)),
    _pair("pair 7 vs 2-7: split", (7,), (P, H, S), _dealers(2, 7)),
    _pair("pair 7 otherwise: hit", (7,), (H, P, S)),
    _pair("pair 6 vs 2-6: split", (6,), (P, H, S), _dealers(2, 6)),
    _pair("pair 6 otherwise: hit", (6,), (H, P, S)),
    _pair("pair 4 vs 5-6: split", (4,), (P, H, S), _dealers(5, 6)),
    _pair("pair 4 otherwise: hit", (4,), (H, P, S)),
    _pair("pair 2/3 vs 2-7: split", (2, 3), (P, H, S), _dealers(2, 7)),
    _pair("pair 2/3 otherwise: hit", (2, 3), (H, P, S)),
    # Soft totals
    _soft("soft 19+: stand", 19, None, (S, H, D)),
    _soft("soft 18 vs 9-A: hit", 18, 18, (H, S, D), _dealers(9, 11)),
    _soft("soft 18 vs 3-6: double", 18, 18, (D, S, H), _dealers(3, 6), needs_double=True),
    _soft("soft 18 otherwise: stand", 18, 18, (S, H, D)),
    _soft("soft 17 vs 3-6: double", 17, 17, (D, H, S), _dealers(3, 6), needs_double=True),
    _soft("soft 17 otherwise: hit", 17, 17, (H, D, S)),
    _soft("soft 15-16 vs 4-6: double", 15, 16, (D, H, S), _dealers(4, 6), needs_double=True),
    _soft("soft 15-16 otherwise: hit", 15, 16, (H, D, S)),
    _soft("soft 13-14 vs 5-6: double", 13, 14, (D, H, S), _dealers(5, 6), needs_double=True),
    _soft("soft 13-14 otherwise: hit", 13, 14, (H, D, S)),
    _soft("soft 12 or less: hit", None, None, (H, S, D)),
    # Hard totals
    _hard("hard 17+: stand", 17, None, (S, H, D)),
    _hard("hard 13-16 vs 2-6: stand", 13, 16, (S, H, D), _dealers(2, 6)),
    _hard("hard 13-16 otherwise: hit", 13, 16, (H, S, D)),
    _hard("hard 12 vs 4-6: stand", 12, 12, (S, H, D), _dealers(4, 6)),
    _hard("hard 12 otherwise: hit", 12, 12, (H, S, D)),
    _hard("hard 11: double", 11, 11, (D, H, S), needs_double=True),
    _hard("hard 11 no double: hit", 11, 11, (H, S, D), double_if_allowed=True),
    _hard("hard 10 vs 2-9: double", 10, 10, (D, H, S), _dealers(2, 9), needs_double=True),
    _hard("hard 10 otherwise: hit", 10, 10, (H, D, S), double_if_allowed=True),
    _hard("hard 9 vs 3-6: double", 9, 9, (D, H, S), _dealers(3, 6), needs_double=True),
    _hard("hard 9 otherwise: hit", 9, 9, (H, D, S), double_if_allowed=True),
    _hard("hard 8 or less: hit", None, None, (H, D, S), double_if_allowed=True),
)


# ─── Lookup ───────────────────────────────────────────────────────────────────

def match_rule(ctx: DecisionContext) -> Rule:
    """Return the first chart row that applies to *ctx*.

    The soft and hard sections each end in an unconditional row, so every
    context matches something.
    """
    for rule in RULES:
        if rule.applies(ctx):
            return rule
    raise LookupError(f"No strategy rule matched {ctx}")


def rank_actions(ctx: DecisionContext) -> list[StrategyAction]:
    return match_rule(ctx).ranked(ctx.can_double)


def get_optimal_actions(
    player_cards: Sequence[Card],
    dealer_card: Card,
    can_double: bool = True,
    can_split: bool = True,
) -> list[StrategyAction]:
    """Return the ranked actions for a decision, best first.

    The list is never empty and its ranks run 1, 2, ... without gaps.

    Examples:
        >>> [a.action for a in get_optimal_actions(hand('10H', '6C'), str_to_card('10D'))]
        [<Action.HIT: 'HIT'>, <Action.STAND: 'STAND'>, <Action.DOUBLE: 'DOUBLE'>]
    """
    ctx = DecisionContext.from_cards(player_cards, dealer_card, can_double, can_split)
    return rank_actions(ctx)


def best_action(
    player_cards: Sequence[Card],
    dealer_card: Card,
    can_double: bool = True,
    can_split: bool = True,
) -> Action:
    return get_optimal_actions(player_cards, dealer_card, can_double, can_split)[0].action
