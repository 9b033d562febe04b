"""Tests for the pairwise and tournament algorithms and their selector."""

import itertools
import random

import pytest

from pickr import (
    Algorithm,
    Card,
    Comparison,
    RankingSettings,
    select_algorithm,
)
from pickr.ranking import PAIRWISE, TOURNAMENT, pairwise, tournament


# ============================================================================
# Helpers
# ============================================================================


def make_cards(count: int) -> list[Card]:
    """Create cards with ids and contents A, B, C, ..."""
    return [Card(id=chr(ord("A") + i), content=chr(ord("A") + i)) for i in range(count)]


def resolve(cards: list[Card], winner: Card) -> Comparison:
    """Create a resolved comparison."""
    return Comparison(cards=cards, winner=winner)


def play_out(behavior, cards, settings, pick) -> list[Comparison]:
    """Drive a session to completion, picking winners with ``pick``."""
    history: list[Comparison] = []
    while (pair := behavior.next_pair(cards, history, settings)) is not None:
        history.append(resolve(pair, pick(pair)))
    return history


PAIRWISE_SETTINGS = RankingSettings(algorithm=Algorithm.PAIRWISE)
TOURNAMENT_SETTINGS = RankingSettings(algorithm=Algorithm.TOURNAMENT)


# ============================================================================
# Selector
# ============================================================================


class TestSelectAlgorithm:
    """Tests for select_algorithm."""

    def test_pairwise(self) -> None:
        """Test pairwise maps to the pairwise behavior."""
        assert select_algorithm(Algorithm.PAIRWISE) is PAIRWISE
        assert select_algorithm("pairwise") is PAIRWISE

    def test_tournament(self) -> None:
        """Test tournament maps to the tournament behavior."""
        assert select_algorithm(Algorithm.TOURNAMENT) is TOURNAMENT
        assert select_algorithm("tournament") is TOURNAMENT

    def test_swiss_aliases_pairwise(self) -> None:
        """Test swiss is an explicit alias for pairwise."""
        behavior = select_algorithm(Algorithm.SWISS)
        assert behavior is PAIRWISE
        assert behavior.name == Algorithm.PAIRWISE

    def test_unknown_falls_back_to_pairwise(self) -> None:
        """Test unknown names never raise."""
        assert select_algorithm("elo") is PAIRWISE
        assert select_algorithm("") is PAIRWISE
        assert select_algorithm(None) is PAIRWISE


# ============================================================================
# Pairwise
# ============================================================================


class TestPairwiseNextPair:
    """Tests for pairwise pair generation."""

    def test_too_few_cards(self) -> None:
        """Test fewer than two cards yields no pair."""
        assert pairwise.next_pair([], [], PAIRWISE_SETTINGS) is None
        assert pairwise.next_pair(make_cards(1), [], PAIRWISE_SETTINGS) is None

    def test_first_pair(self) -> None:
        """Test the first pair is the first two cards."""
        a, b, c = make_cards(3)
        assert pairwise.next_pair([a, b, c], [], PAIRWISE_SETTINGS) == [a, b]

    def test_nested_loop_order(self) -> None:
        """Test pairs come out in fixed i<j order."""
        cards = make_cards(4)
        history = play_out(PAIRWISE, cards, PAIRWISE_SETTINGS, lambda pair: pair[0])
        order = [(c.cards[0].id, c.cards[1].id) for c in history]
        assert order == [
            ("A", "B"),
            ("A", "C"),
            ("A", "D"),
            ("B", "C"),
            ("B", "D"),
            ("C", "D"),
        ]

    def test_presentation_order_does_not_matter(self) -> None:
        """Test a pair resolved as (B, A) still counts for (A, B)."""
        a, b, c = make_cards(3)
        history = [resolve([b, a], a)]
        assert pairwise.next_pair([a, b, c], history, PAIRWISE_SETTINGS) == [a, c]

    def test_unresolved_comparison_not_counted(self) -> None:
        """Test a comparison without a winner is still pending work."""
        a, b = make_cards(2)
        history = [Comparison(cards=[a, b])]
        assert pairwise.next_pair([a, b], history, PAIRWISE_SETTINGS) == [a, b]

    def test_no_duplicate_pairs(self) -> None:
        """Test no unordered pair is offered twice."""
        rng = random.Random(7)
        cards = make_cards(7)
        history = play_out(PAIRWISE, cards, PAIRWISE_SETTINGS, lambda pair: rng.choice(pair))
        keys = [c.pair_key for c in history]
        assert len(keys) == len(set(keys)) == 21

    def test_does_not_mutate_inputs(self) -> None:
        """Test inputs are left untouched."""
        cards = make_cards(3)
        history = [resolve(cards[:2], cards[0])]
        cards_before = list(cards)
        history_before = list(history)
        pairwise.next_pair(cards, history, PAIRWISE_SETTINGS)
        assert cards == cards_before
        assert history == history_before


class TestPairwiseCompletion:
    """Tests for pairwise completion."""

    @pytest.mark.parametrize("count", [2, 3, 4, 6])
    def test_complete_after_all_pairs(self, count: int) -> None:
        """Test completeness after every pair is resolved once."""
        cards = make_cards(count)
        history = [resolve(list(pair), pair[1]) for pair in itertools.combinations(cards, 2)]
        assert len(history) == count * (count - 1) // 2
        assert pairwise.is_complete(cards, history, PAIRWISE_SETTINGS)
        assert pairwise.next_pair(cards, history, PAIRWISE_SETTINGS) is None

    def test_two_cards_one_comparison(self) -> None:
        """Test two cards need exactly one comparison."""
        a, b = make_cards(2)
        assert not pairwise.is_complete([a, b], [], PAIRWISE_SETTINGS)
        assert pairwise.is_complete([a, b], [resolve([a, b], a)], PAIRWISE_SETTINGS)

    def test_repeated_pair_does_not_complete(self) -> None:
        """Test deciding one pair repeatedly does not finish the session."""
        a, b, c = make_cards(3)
        history = [resolve([a, b], a)] * 3
        assert not pairwise.is_complete([a, b, c], history, PAIRWISE_SETTINGS)
        assert pairwise.next_pair([a, b, c], history, PAIRWISE_SETTINGS) == [a, c]

    def test_estimated_total(self) -> None:
        """Test the expected comparison count."""
        assert pairwise.estimated_total(0) == 0
        assert pairwise.estimated_total(1) == 0
        assert pairwise.estimated_total(2) == 1
        assert pairwise.estimated_total(10) == 45


class TestPairwiseRankings:
    """Tests for pairwise rank calculation."""

    def test_two_card_example(self) -> None:
        """Test A beating B."""
        a, b = make_cards(2)
        rankings = pairwise.calculate_rankings([a, b], [resolve([a, b], a)])

        assert [(r.id, r.rank, r.wins, r.losses, r.score) for r in rankings] == [
            ("A", 1, 1, 0, 1.0),
            ("B", 2, 0, 1, 0.0),
        ]

    def test_three_card_example(self) -> None:
        """Test A > B, B > C, A > C."""
        a, b, c = make_cards(3)
        history = [resolve([a, b], a), resolve([b, c], b), resolve([a, c], a)]
        rankings = pairwise.calculate_rankings([a, b, c], history)

        assert [(r.id, r.rank, r.wins, r.losses) for r in rankings] == [
            ("A", 1, 2, 0),
            ("B", 2, 1, 1),
            ("C", 3, 0, 2),
        ]
        assert [r.score for r in rankings] == [1.0, 0.5, 0.0]
        assert pairwise.is_complete([a, b, c], history, PAIRWISE_SETTINGS)

    def test_ties_keep_original_order_with_distinct_ranks(self) -> None:
        """Test a perfect cycle keeps pack order and still ranks 1..N."""
        a, b, c = make_cards(3)
        history = [resolve([a, b], a), resolve([b, c], b), resolve([c, a], c)]
        rankings = pairwise.calculate_rankings([a, b, c], history)

        assert [r.id for r in rankings] == ["A", "B", "C"]
        assert [r.rank for r in rankings] == [1, 2, 3]
        assert all(r.score == 0.5 for r in rankings)

    def test_wins_break_score_ties(self) -> None:
        """Test more wins rank higher at equal score."""
        a, b, c, d = make_cards(4)
        # A: 1W/0L, C: 2W/0L
        history = [resolve([a, b], a), resolve([c, d], c), resolve([c, b], c)]
        rankings = pairwise.calculate_rankings([a, b, c, d], history)
        assert [r.id for r in rankings][:2] == ["C", "A"]

    def test_no_comparisons(self) -> None:
        """Test cards without comparisons score zero."""
        cards = make_cards(3)
        rankings = pairwise.calculate_rankings(cards, [])
        assert [r.id for r in rankings] == ["A", "B", "C"]
        assert all(r.score == 0 and r.wins == 0 and r.losses == 0 for r in rankings)

    def test_malformed_comparisons_ignored(self) -> None:
        """Test groups, pending and foreign-winner comparisons are skipped."""
        a, b, c = make_cards(3)
        stranger = Card(id="Z", content="Z")
        history = [
            resolve([a, b, c], c),
            Comparison(cards=[a, b]),
            resolve([a, b], stranger),
            resolve([a, stranger], stranger),
        ]
        rankings = pairwise.calculate_rankings([a, b, c], history)
        assert all(r.wins == 0 and r.losses == 0 for r in rankings)

    def test_rank_density_and_score_bounds(self) -> None:
        """Test ranks are exactly 1..N and scores lie in [0, 1]."""
        rng = random.Random(3)
        cards = make_cards(8)
        history = play_out(PAIRWISE, cards, PAIRWISE_SETTINGS, lambda pair: rng.choice(pair))
        rankings = pairwise.calculate_rankings(cards, history)

        assert sorted(r.rank for r in rankings) == list(range(1, 9))
        assert all(0.0 <= r.score <= 1.0 for r in rankings)
        assert sum(r.wins for r in rankings) == len(history)

    def test_idempotent(self) -> None:
        """Test repeated calls give identical output."""
        rng = random.Random(11)
        cards = make_cards(5)
        history = play_out(PAIRWISE, cards, PAIRWISE_SETTINGS, lambda pair: rng.choice(pair))
        first = pairwise.calculate_rankings(cards, history)
        second = pairwise.calculate_rankings(cards, history)
        assert first == second


# ============================================================================
# Tournament
# ============================================================================


class TestTournament:
    """Tests for single-elimination tournaments."""

    def test_first_two_survivors(self) -> None:
        """Test matches pair the first two cards still standing."""
        a, b, c, d = make_cards(4)
        assert tournament.next_pair([a, b, c, d], [], TOURNAMENT_SETTINGS) == [a, b]

        history = [resolve([a, b], b)]
        assert tournament.next_pair([a, b, c, d], history, TOURNAMENT_SETTINGS) == [b, c]

    def test_too_few_cards(self) -> None:
        """Test fewer than two cards yields no match."""
        assert tournament.next_pair(make_cards(1), [], TOURNAMENT_SETTINGS) is None
        assert tournament.is_complete(make_cards(1), [], TOURNAMENT_SETTINGS)

    @pytest.mark.parametrize("count", [2, 3, 5, 8])
    def test_n_minus_one_comparisons(self, count: int) -> None:
        """Test N-1 comparisons finish the tournament."""
        rng = random.Random(count)
        cards = make_cards(count)
        history = play_out(TOURNAMENT, cards, TOURNAMENT_SETTINGS, lambda pair: rng.choice(pair))

        assert len(history) == count - 1
        assert tournament.is_complete(cards, history, TOURNAMENT_SETTINGS)

        champion = tournament.remaining_cards(cards, history)
        assert len(champion) == 1
        rankings = tournament.calculate_rankings(cards, history)
        assert rankings[0].id == champion[0].id
        assert rankings[0].rank == 1

    def test_never_pairs_eliminated_card(self) -> None:
        """Test an eliminated card never appears again."""
        cards = make_cards(6)
        history = play_out(TOURNAMENT, cards, TOURNAMENT_SETTINGS, lambda pair: pair[1])
        eliminated: set[str] = set()
        for comparison in history:
            assert not eliminated & {card.id for card in comparison.cards}
            eliminated.add(comparison.loser.id)

    def test_ranked_by_survival(self) -> None:
        """Test later eliminations rank higher."""
        cards = make_cards(4)
        history = play_out(TOURNAMENT, cards, TOURNAMENT_SETTINGS, lambda pair: pair[1])
        # B beats A, C beats B, D beats C
        rankings = tournament.calculate_rankings(cards, history)
        assert [r.id for r in rankings] == ["D", "C", "B", "A"]
        assert [r.rank for r in rankings] == [1, 2, 3, 4]

    def test_champion_keeps_winning(self) -> None:
        """Test a dominant first card ends at rank 1."""
        cards = make_cards(4)
        history = play_out(TOURNAMENT, cards, TOURNAMENT_SETTINGS, lambda pair: pair[0])
        rankings = tournament.calculate_rankings(cards, history)

        assert [r.id for r in rankings] == ["A", "D", "C", "B"]
        assert rankings[0].wins == 3
        assert rankings[0].score == 1.0
        assert all(r.losses == 1 and r.score == 0.0 for r in rankings[1:])

    def test_estimated_total(self) -> None:
        """Test single elimination needs N-1 comparisons."""
        assert tournament.estimated_total(0) == 0
        assert tournament.estimated_total(1) == 0
        assert tournament.estimated_total(16) == 15


# ============================================================================
# Generator and completion agreement
# ============================================================================


class TestGeneratorOracleAgreement:
    """The generator yields a pair exactly when the session is incomplete."""

    @pytest.mark.parametrize("behavior", [PAIRWISE, TOURNAMENT])
    @pytest.mark.parametrize("count", [0, 1, 2, 3, 5, 7])
    def test_agree_at_every_step(self, behavior, count: int) -> None:
        """Test agreement before and after every comparison."""
        rng = random.Random(count)
        settings = RankingSettings(algorithm=behavior.name)
        cards = make_cards(count)
        history: list[Comparison] = []

        for _ in range(count * count + 1):
            pair = behavior.next_pair(cards, history, settings)
            assert (pair is None) == behavior.is_complete(cards, history, settings)
            if pair is None:
                break
            history.append(resolve(pair, rng.choice(pair)))

        assert behavior.is_complete(cards, history, settings)
        assert len(history) == behavior.estimated_total(count, settings)
