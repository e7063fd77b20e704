"""Tests for bstutor/engine/deck.py — deck creation and random dealing."""

from __future__ import annotations

from collections import Counter

import numpy as np

from bstutor.engine.cards import Card, Rank, Suit
from bstutor.engine.deck import DealtHand, create_deck, deal_hand, deal_random_card, shuffle


class TestCreateDeck:
    def test_has_52_cards(self):
        assert len(create_deck()) == 52

    def test_cards_are_distinct(self):
        assert len(set(create_deck())) == 52

    def test_four_of_each_rank(self):
        counts = Counter(c.rank for c in create_deck())
        assert all(counts[r] == 4 for r in Rank)

    def test_thirteen_of_each_suit(self):
        counts = Counter(c.suit for c in create_deck())
        assert all(counts[s] == 13 for s in Suit)


class TestShuffle:
    def test_is_a_permutation(self, rng):
        deck = create_deck()
        shuffled = shuffle(deck, rng)
        assert sorted(map(str, shuffled)) == sorted(map(str, deck))

    def test_input_untouched(self, rng):
        deck = list(create_deck())
        before = list(deck)
        shuffle(deck, rng)
        assert deck == before

    def test_seeded_shuffle_is_repeatable(self):
        a = shuffle(create_deck(), np.random.default_rng(3))
        b = shuffle(create_deck(), np.random.default_rng(3))
        assert a == b


class TestDealing:
    def test_random_card_is_from_the_deck(self, rng):
        deck = set(create_deck())
        for _ in range(200):
            assert deal_random_card(rng) in deck

    def test_deal_hand_shape(self, rng):
        dealt = deal_hand(rng)
        assert isinstance(dealt, DealtHand)
        assert len(dealt.player_cards) == 2
        assert isinstance(dealt.dealer_card, Card)

    def test_seeded_deal_is_repeatable(self):
        assert deal_hand(np.random.default_rng(11)) == deal_hand(np.random.default_rng(11))

    def test_unseeded_deal_works(self):
        assert len(deal_hand().player_cards) == 2

    def test_draws_are_with_replacement(self):
        # With replacement, the same card eventually appears twice in a hand.
        rng = np.random.default_rng(0)
        assert any(
            len(set(dealt.player_cards) | {dealt.dealer_card}) < 3
            for dealt in (deal_hand(rng) for _ in range(2_000))
        )

    def test_every_rank_is_dealt(self):
        rng = np.random.default_rng(5)
        seen = {deal_random_card(rng).rank for _ in range(2_000)}
        assert seen == set(Rank)
