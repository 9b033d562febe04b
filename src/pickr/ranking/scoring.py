"""Shared tallying helpers for the ranking algorithms.

Both algorithms count wins and losses the same way; they differ only in
how the tallied cards are ordered.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from ..models import Card, Comparison, RankedCard


@dataclass
class Tally:
    """Mutable win/loss/tie counters for a single card."""

    wins: int = 0
    losses: int = 0
    ties: int = 0

    @property
    def games(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def score(self) -> float:
        """Win rate over all games, 0.0 for a card that never played."""
        return self.wins / self.games if self.games > 0 else 0.0


def decisive_results(
    comparisons: Iterable[Comparison],
    card_ids: set[str] | None = None,
) -> Iterator[tuple[str, str]]:
    """Yield ``(winner_id, loser_id)`` for every well-formed resolved pair.

    Comparisons with more than two cards, without a winner, or whose winner
    is not one of the compared cards are skipped. When ``card_ids`` is
    given, results involving cards outside it are skipped too.
    """
    for comparison in comparisons:
        loser = comparison.loser
        if loser is None or comparison.winner is None:
            continue
        winner_id = comparison.winner.id
        if card_ids is not None and (winner_id not in card_ids or loser.id not in card_ids):
            continue
        yield winner_id, loser.id


def tally(cards: list[Card], comparisons: Iterable[Comparison]) -> dict[str, Tally]:
    """Count wins and losses per card id from a comparison history."""
    tallies: dict[str, Tally] = {card.id: Tally() for card in cards}
    for winner_id, loser_id in decisive_results(comparisons, set(tallies)):
        tallies[winner_id].wins += 1
        tallies[loser_id].losses += 1
    return tallies


def rank_cards(
    cards: list[Card],
    tallies: dict[str, Tally],
    sort_key: Callable[[RankedCard], Any],
) -> list[RankedCard]:
    """Snapshot, sort and number cards.

    The sort is stable, so cards with equal keys keep their original
    order. Ranks follow sorted position: 1..N with no shared ranks.
    """
    ranked = [
        RankedCard.from_card(
            card,
            score=tallies[card.id].score,
            wins=tallies[card.id].wins,
            losses=tallies[card.id].losses,
            ties=tallies[card.id].ties,
        )
        for card in cards
    ]
    ranked.sort(key=sort_key)
    for position, entry in enumerate(ranked, start=1):
        entry.rank = position
    return ranked
