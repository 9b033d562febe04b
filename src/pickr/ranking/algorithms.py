"""Algorithm selection for ranking sessions.

Each algorithm is a fixed bundle of pure functions. ``select_algorithm``
maps a configured name to its bundle; unknown names and ``swiss`` (which
has no pairing logic of its own yet) get the pairwise bundle.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..models import Algorithm, Card, Comparison, RankedCard, RankingSettings
from . import pairwise, tournament

NextPairFn = Callable[[list[Card], list[Comparison], RankingSettings], list[Card] | None]
RankingsFn = Callable[[list[Card], list[Comparison]], list[RankedCard]]
CompleteFn = Callable[[list[Card], list[Comparison], RankingSettings], bool]
EstimateFn = Callable[[int, RankingSettings], int]


@dataclass(frozen=True)
class AlgorithmBehavior:
    """The operations one ranking algorithm provides.

    Attributes:
        name: Algorithm actually used (``swiss`` reports ``pairwise``).
        next_pair: Picks the next cards to compare, or None when done.
        calculate_rankings: Orders the cards from a comparison history.
        is_complete: Whether any informative comparison remains.
        estimated_total: Expected number of comparisons for a pack size.
    """

    name: Algorithm
    next_pair: NextPairFn
    calculate_rankings: RankingsFn
    is_complete: CompleteFn
    estimated_total: EstimateFn


PAIRWISE = AlgorithmBehavior(
    name=Algorithm.PAIRWISE,
    next_pair=pairwise.next_pair,
    calculate_rankings=pairwise.calculate_rankings,
    is_complete=pairwise.is_complete,
    estimated_total=pairwise.estimated_total,
)

TOURNAMENT = AlgorithmBehavior(
    name=Algorithm.TOURNAMENT,
    next_pair=tournament.next_pair,
    calculate_rankings=tournament.calculate_rankings,
    is_complete=tournament.is_complete,
    estimated_total=tournament.estimated_total,
)


def select_algorithm(name: Algorithm | str | None) -> AlgorithmBehavior:
    """Return the behavior for an algorithm name. Never raises.

    Args:
        name: An ``Algorithm`` or its string value.

    Returns:
        The tournament behavior for ``tournament``; the pairwise behavior
        for everything else, including ``swiss``.
    """
    value = name.value if isinstance(name, Algorithm) else str(name or "").lower()
    if value == Algorithm.TOURNAMENT.value:
        return TOURNAMENT
    # Swiss pairing falls back to round robin
    return PAIRWISE
