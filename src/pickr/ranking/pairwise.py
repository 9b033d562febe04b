"""Round-robin pairwise ranking.

Every unordered pair of cards is compared exactly once. Pairs are offered
in a fixed nested-loop order over the pack, so a session is fully
deterministic:

    (0, 1), (0, 2), ..., (0, n-1), (1, 2), ..., (n-2, n-1)
"""

from __future__ import annotations

import logging

from ..models import Card, Comparison, RankedCard, RankingSettings, pair_key
from .scoring import rank_cards, tally

logger = logging.getLogger(__name__)


def resolved_pairs(comparisons: list[Comparison]) -> set[str]:
    """Canonical keys of every pair that already has a winner."""
    return {
        comparison.pair_key
        for comparison in comparisons
        if comparison.is_resolved and comparison.pair_key is not None
    }


def next_pair(
    cards: list[Card],
    completed: list[Comparison],
    settings: RankingSettings | None = None,
) -> list[Card] | None:
    """Return the first pair not yet compared, or None when all are done."""
    if len(cards) < 2:
        return None

    done = resolved_pairs(completed)
    for i in range(len(cards)):
        for j in range(i + 1, len(cards)):
            if pair_key(cards[i].id, cards[j].id) not in done:
                logger.debug(f"Next pairwise comparison: {cards[i].id} vs {cards[j].id}")
                return [cards[i], cards[j]]

    return None


def estimated_total(card_count: int, settings: RankingSettings | None = None) -> int:
    """Number of unordered pairs among ``card_count`` cards."""
    return max(0, card_count * (card_count - 1) // 2)


def is_complete(
    cards: list[Card],
    completed: list[Comparison],
    settings: RankingSettings | None = None,
) -> bool:
    """True once every pair in the pack has a winner.

    Only distinct pairs of cards from the pack count, so a pair decided
    twice never stands in for one that was skipped.
    """
    pack_pairs = {
        pair_key(cards[i].id, cards[j].id)
        for i in range(len(cards))
        for j in range(i + 1, len(cards))
    }
    return pack_pairs <= resolved_pairs(completed)


def calculate_rankings(cards: list[Card], comparisons: list[Comparison]) -> list[RankedCard]:
    """Rank cards by win rate, then by raw wins."""
    tallies = tally(cards, comparisons)
    return rank_cards(cards, tallies, sort_key=lambda c: (-c.score, -c.wins))
