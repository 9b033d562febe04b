"""Single-elimination tournament ranking.

Any card that loses a comparison is out. The first two surviving cards
(in pack order) meet next, so a pack of N cards needs exactly N-1
comparisons to leave one champion.
"""

from __future__ import annotations

import logging

from ..models import Card, Comparison, RankedCard, RankingSettings
from .scoring import decisive_results, rank_cards, tally

logger = logging.getLogger(__name__)


def elimination_rounds(comparisons: list[Comparison]) -> dict[str, int]:
    """Map each eliminated card id to the round it was first knocked out in.

    Rounds count decisive results from 1 in history order.
    """
    eliminated: dict[str, int] = {}
    for round_number, (_, loser_id) in enumerate(decisive_results(comparisons), start=1):
        eliminated.setdefault(loser_id, round_number)
    return eliminated


def remaining_cards(cards: list[Card], comparisons: list[Comparison]) -> list[Card]:
    """Cards that have not lost yet, in pack order."""
    eliminated = elimination_rounds(comparisons)
    return [card for card in cards if card.id not in eliminated]


def next_pair(
    cards: list[Card],
    completed: list[Comparison],
    settings: RankingSettings | None = None,
) -> list[Card] | None:
    """Pair the first two survivors, or None once a champion is left."""
    survivors = remaining_cards(cards, completed)
    if len(survivors) < 2:
        return None

    logger.debug(
        f"Next tournament match: {survivors[0].id} vs {survivors[1].id} "
        f"({len(survivors)} remaining)"
    )
    return [survivors[0], survivors[1]]


def estimated_total(card_count: int, settings: RankingSettings | None = None) -> int:
    """Single elimination needs one comparison per eliminated card."""
    return max(0, card_count - 1)


def is_complete(
    cards: list[Card],
    completed: list[Comparison],
    settings: RankingSettings | None = None,
) -> bool:
    return len(remaining_cards(cards, completed)) <= 1


def calculate_rankings(cards: list[Card], comparisons: list[Comparison]) -> list[RankedCard]:
    """Rank cards by how long they survived.

    Survivors come first, then eliminated cards from the last knocked out
    to the first. Wins break ties within each group.
    """
    card_ids = {card.id for card in cards}
    in_pack = [
        comparison
        for comparison in comparisons
        if all(card.id in card_ids for card in comparison.cards)
    ]
    eliminated = elimination_rounds(in_pack)
    tallies = tally(cards, in_pack)

    def survival_key(entry: RankedCard) -> tuple[int, int, int]:
        if entry.id in eliminated:
            return (1, -eliminated[entry.id], -entry.wins)
        return (0, 0, -entry.wins)

    return rank_cards(cards, tallies, sort_key=survival_key)
