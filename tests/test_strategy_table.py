"""Tests for bstutor/strategy/table.py — ranked basic-strategy actions."""

from __future__ import annotations

import itertools

import pytest

from bstutor.engine.actions import Action
from bstutor.strategy.table import (
    RULES,
    DecisionContext,
    Rule,
    Section,
    StrategyAction,
    best_action,
    get_optimal_actions,
    match_rule,
    rank_actions,
)
from tests.conftest import card, hand

H, S, D, P = Action.HIT, Action.STAND, Action.DOUBLE, Action.SPLIT

DEALER_CARDS = ["2D", "3D", "4D", "5D", "6D", "7D", "8D", "9D", "10D", "AD"]


def actions_of(ranked: list[StrategyAction]) -> list[Action]:
    return [sa.action for sa in ranked]


def all_contexts():
    """Every chart-reachable context, with and without double/split."""
    dealers = range(2, 12)
    flags = list(itertools.product([True, False], repeat=2))
    for dv, (can_double, can_split) in itertools.product(dealers, flags):
        for total in range(4, 22):
            yield DecisionContext(total, False, None, dv, can_double, can_split)
        for total in range(12, 22):
            yield DecisionContext(total, True, None, dv, can_double, can_split)
        for pv in range(2, 11):
            yield DecisionContext(2 * pv, False, pv, dv, can_double, can_split)
        yield DecisionContext(12, True, 11, dv, can_double, can_split)


# ─── Structural properties ────────────────────────────────────────────────────

class TestRankedListShape:
    def test_never_empty_and_ranks_start_at_one(self):
        for ctx in all_contexts():
            ranked = rank_actions(ctx)
            assert ranked, ctx
            assert [sa.rank for sa in ranked] == list(range(1, len(ranked) + 1)), ctx

    def test_no_action_listed_twice(self):
        for ctx in all_contexts():
            acts = actions_of(rank_actions(ctx))
            assert len(acts) == len(set(acts)), ctx

    def test_split_only_when_allowed(self):
        for ctx in all_contexts():
            if not ctx.can_split:
                assert P not in actions_of(rank_actions(ctx)), ctx

    def test_no_double_in_soft_or_low_hard_rows_when_not_allowed(self):
        for ctx in all_contexts():
            if ctx.can_double:
                continue
            if ctx.pair_value is not None and ctx.can_split:
                continue
            if ctx.is_soft or ctx.total <= 11:
                assert D not in actions_of(rank_actions(ctx)), ctx

    def test_hard_twelve_and_up_keep_double_last(self):
        for total in range(12, 22):
            ranked = rank_actions(DecisionContext(total, False, None, 10, can_double=False))
            assert ranked[-1] == StrategyAction(D, 3)

    def test_every_rule_is_reachable(self):
        matched = {match_rule(ctx).name for ctx in all_contexts()}
        assert matched == {rule.name for rule in RULES}

    def test_sections_are_ordered_pair_soft_hard(self):
        order = [rule.section for rule in RULES]
        assert order == sorted(order, key=[Section.PAIR, Section.SOFT, Section.HARD].index)

    def test_last_soft_and_hard_rows_are_catch_alls(self):
        soft = [r for r in RULES if r.section is Section.SOFT][-1]
        hard = [r for r in RULES if r.section is Section.HARD][-1]
        for rule in (soft, hard):
            assert rule.low is None and rule.high is None and rule.dealers is None
            assert not rule.needs_double

    def test_rules_are_immutable(self):
        with pytest.raises(AttributeError):
            RULES[0].name = "changed"  # type: ignore[misc]


class TestRule:
    def test_ranked_drops_double_when_flagged(self):
        rule = Rule("x", Section.HARD, (H, D, S), double_if_allowed=True)
        assert rule.ranked(can_double=False) == [StrategyAction(H, 1), StrategyAction(S, 2)]

    def test_ranked_keeps_double_when_not_flagged(self):
        rule = Rule("x", Section.HARD, (S, H, D))
        assert actions_of(rule.ranked(can_double=False)) == [S, H, D]

    def test_pair_rule_needs_split(self):
        rule = Rule("x", Section.PAIR, (P, H, S), pair_values=frozenset({8}))
        assert rule.applies(DecisionContext(16, False, 8, 10))
        assert not rule.applies(DecisionContext(16, False, 8, 10, can_split=False))

    def test_soft_rule_ignores_hard_hands(self):
        rule = Rule("x", Section.SOFT, (S,), low=19)
        assert rule.applies(DecisionContext(19, True, None, 5))
        assert not rule.applies(DecisionContext(19, False, None, 5))


# ─── Pairs ────────────────────────────────────────────────────────────────────

class TestPairs:
    @pytest.mark.parametrize("dealer", DEALER_CARDS)
    def test_aces_always_split(self, dealer):
        assert actions_of(get_optimal_actions(hand("AS", "AH"), card(dealer))) == [P, H, S]

    @pytest.mark.parametrize("dealer", DEALER_CARDS)
    def test_eights_always_split(self, dealer):
        assert actions_of(get_optimal_actions(hand("8S", "8H"), card(dealer))) == [P, H, S]

    @pytest.mark.parametrize("dealer", DEALER_CARDS)
    def test_tens_never_split(self, dealer):
        ranked = get_optimal_actions(hand("KS", "KH"), card(dealer))
        assert ranked[0].action is S
        assert P not in actions_of(ranked)

    def test_fives_play_as_hard_ten(self):
        assert best_action(hand("5S", "5H"), card("6D")) is D
        assert best_action(hand("5S", "5H"), card("10D")) is H

    @pytest.mark.parametrize("dealer,expected", [
        ("2D", [P, S, H]), ("6D", [P, S, H]), ("7D", [S, P, H]),
        ("8D", [P, S, H]), ("9D", [P, S, H]), ("10D", [S, P, H]), ("AD", [S, P, H]),
    ])
    def test_nines(self, dealer, expected):
        assert actions_of(get_optimal_actions(hand("9S", "9H"), card(dealer))) == expected

    @pytest.mark.parametrize("dealer,expected", [("7D", P), ("8D", H)])
    def test_sevens(self, dealer, expected):
        assert best_action(hand("7S", "7H"), card(dealer)) is expected

    @pytest.mark.parametrize("dealer,expected", [("6D", P), ("7D", H)])
    def test_sixes(self, dealer, expected):
        assert best_action(hand("6S", "6H"), card(dealer)) is expected

    @pytest.mark.parametrize("dealer,expected", [("4D", H), ("5D", P), ("6D", P), ("7D", H)])
    def test_fours(self, dealer, expected):
        assert best_action(hand("4S", "4H"), card(dealer)) is expected

    @pytest.mark.parametrize("pair", [("2S", "2H"), ("3S", "3H")])
    def test_twos_and_threes(self, pair):
        assert best_action(hand(*pair), card("7D")) is P
        assert actions_of(get_optimal_actions(hand(*pair), card("8D"))) == [H, P, S]

    def test_pair_without_split_falls_through(self):
        assert best_action(hand("8S", "8H"), card("10D"), can_split=False) is H
        assert best_action(hand("AS", "AH"), card("6D"), can_split=False) is H

    def test_mixed_tens_are_hard_twenty(self):
        assert actions_of(get_optimal_actions(hand("KS", "QH"), card("6D"))) == [S, H, D]


# ─── Soft totals ──────────────────────────────────────────────────────────────

class TestSoftTotals:
    @pytest.mark.parametrize("cards", [("AS", "8H"), ("AS", "9H"), ("AS", "AH", "8D")])
    def test_soft_19_and_up_stand(self, cards):
        assert actions_of(get_optimal_actions(hand(*cards), card("6D"))) == [S, H, D]

    def test_soft_19_without_double(self):
        assert actions_of(get_optimal_actions(hand("AS", "8H"), card("6D"), can_double=False)) == [S, H]

    @pytest.mark.parametrize("dealer", ["9D", "10D", "AD"])
    def test_soft_18_hits_vs_strong_dealer(self, dealer):
        assert actions_of(get_optimal_actions(hand("AS", "7H"), card(dealer))) == [H, S, D]

    @pytest.mark.parametrize("dealer", ["3D", "4D", "5D", "6D"])
    def test_soft_18_doubles_vs_weak_dealer(self, dealer):
        assert actions_of(get_optimal_actions(hand("AS", "7H"), card(dealer))) == [D, S, H]

    def test_soft_18_no_double_stands(self):
        ranked = get_optimal_actions(hand("AS", "7H"), card("4D"), can_double=False)
        assert ranked == [StrategyAction(S, 1), StrategyAction(H, 2)]

    @pytest.mark.parametrize("dealer", ["2D", "7D", "8D"])
    def test_soft_18_stands_otherwise(self, dealer):
        assert actions_of(get_optimal_actions(hand("AS", "7H"), card(dealer))) == [S, H, D]

    def test_soft_17(self):
        assert actions_of(get_optimal_actions(hand("AS", "6H"), card("3D"))) == [D, H, S]
        assert actions_of(get_optimal_actions(hand("AS", "6H"), card("2D"))) == [H, D, S]
        assert actions_of(get_optimal_actions(hand("AS", "6H"), card("3D"), can_double=False)) == [H, S]

    @pytest.mark.parametrize("second", ["4H", "5H"])
    def test_soft_15_16(self, second):
        assert best_action(hand("AS", second), card("4D")) is D
        assert actions_of(get_optimal_actions(hand("AS", second), card("3D"))) == [H, D, S]

    @pytest.mark.parametrize("second", ["2H", "3H"])
    def test_soft_13_14(self, second):
        assert best_action(hand("AS", second), card("5D")) is D
        assert actions_of(get_optimal_actions(hand("AS", second), card("4D"))) == [H, D, S]

    def test_soft_12_without_split_hits(self):
        ranked = get_optimal_actions(hand("AS", "AH"), card("6D"), can_split=False)
        assert actions_of(ranked) == [H, S, D]

    def test_single_ace_is_degenerate_soft(self):
        assert actions_of(get_optimal_actions(hand("AS"), card("6D"), can_double=False)) == [H, S]


# ─── Hard totals ──────────────────────────────────────────────────────────────

class TestHardTotals:
    @pytest.mark.parametrize("dealer", DEALER_CARDS)
    def test_hard_17_and_up_stand(self, dealer):
        for cards in (("10S", "7H"), ("10S", "8H"), ("10S", "9H"), ("10S", "5H", "6D")):
            assert best_action(hand(*cards), card(dealer)) is S

    def test_hard_16_vs_ten_hits(self):
        assert actions_of(get_optimal_actions(hand("10H", "6C"), card("10D"))) == [H, S, D]

    @pytest.mark.parametrize("dealer", ["2D", "6D"])
    def test_hard_13_to_16_stand_vs_weak_dealer(self, dealer):
        for cards in (("10S", "3H"), ("10S", "6H")):
            assert best_action(hand(*cards), card(dealer)) is S

    @pytest.mark.parametrize("dealer,expected", [("3D", H), ("4D", S), ("6D", S), ("7D", H)])
    def test_hard_12(self, dealer, expected):
        assert best_action(hand("10S", "2H"), card(dealer)) is expected

    def test_hard_11_doubles(self):
        assert actions_of(get_optimal_actions(hand("6S", "5H"), card("6D"))) == [D, H, S]
        assert best_action(hand("6S", "5H"), card("AD")) is D

    def test_hard_11_without_double(self):
        ranked = get_optimal_actions(hand("6S", "5H"), card("6D"), can_double=False)
        assert ranked == [StrategyAction(H, 1), StrategyAction(S, 2)]

    @pytest.mark.parametrize("dealer,expected", [("2D", [D, H, S]), ("9D", [D, H, S]), ("10D", [H, D, S])])
    def test_hard_10(self, dealer, expected):
        assert actions_of(get_optimal_actions(hand("6S", "4H"), card(dealer))) == expected

    @pytest.mark.parametrize("dealer,expected", [("2D", H), ("3D", D), ("6D", D), ("7D", H)])
    def test_hard_9(self, dealer, expected):
        assert best_action(hand("6S", "3H"), card(dealer)) is expected

    def test_hard_9_three_cards_no_double(self):
        ranked = get_optimal_actions(hand("2H", "3C", "4D"), card("5D"), can_double=False)
        assert actions_of(ranked) == [H, S]

    def test_hard_8_or_less(self):
        assert actions_of(get_optimal_actions(hand("5S", "3H"), card("5D"))) == [H, D, S]
        assert actions_of(get_optimal_actions(hand("2S", "3H"), card("6D"), can_double=False)) == [H, S]


class TestDecisionContext:
    def test_from_cards(self):
        ctx = DecisionContext.from_cards(hand("AS", "AH"), card("AD"), can_double=False)
        assert ctx == DecisionContext(12, True, 11, 11, can_double=False, can_split=True)

    def test_dealer_ace_counts_eleven(self):
        assert DecisionContext.from_cards(hand("9S", "7H"), card("AD")).dealer_value == 11
