"""Agreement analysis across saved results.

Several people (or one person several times) may rank the same pack. This
module merges their results into a consensus order and points out the
cards they placed far apart.
"""

from __future__ import annotations

import logging
import math

from ..models import CardDisagreement, RankedCard, RankingResult, ResultComparison

logger = logging.getLogger(__name__)

# Placements further apart than this count as a disagreement
DISAGREEMENT_THRESHOLD = 2


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def compare_results(results: list[RankingResult]) -> ResultComparison | None:
    """Merge results for one pack into a consensus ranking.

    Only cards present in every result enter the consensus. Each consensus
    card takes the average rank (rounded half up) and average score, and
    the summed wins and losses. For every card whose placements span more
    than two ranks, each pair of placements more than two ranks apart is
    reported as a disagreement.

    Agreement is ``1 - disagreements / (C * (C - 1) / 2)`` for C distinct
    cards, floored at 0. With fewer than two cards there is nothing to
    disagree on and agreement is 1.

    Args:
        results: Results to compare, usually for the same pack.

    Returns:
        The analysis, or None when fewer than two results are given.
    """
    if len(results) < 2:
        return None

    placements: dict[str, list[RankedCard]] = {}
    for result in results:
        for ranked in result.rankings:
            placements.setdefault(ranked.id, []).append(ranked)

    consensus: list[RankedCard] = []
    disagreements: list[CardDisagreement] = []

    for ranked_list in placements.values():
        if len(ranked_list) != len(results):
            continue

        ranks = [ranked.rank for ranked in ranked_list]
        consensus.append(
            ranked_list[0].model_copy(
                update={
                    "rank": _round_half_up(sum(ranks) / len(ranks)),
                    "score": sum(ranked.score for ranked in ranked_list) / len(ranked_list),
                    "wins": sum(ranked.wins for ranked in ranked_list),
                    "losses": sum(ranked.losses for ranked in ranked_list),
                }
            )
        )

        if max(ranks) - min(ranks) <= DISAGREEMENT_THRESHOLD:
            continue
        for i, first in enumerate(ranked_list):
            for second in ranked_list[i + 1 :]:
                gap = abs(first.rank - second.rank)
                if gap > DISAGREEMENT_THRESHOLD:
                    disagreements.append(
                        CardDisagreement(card1=first, card2=second, conflict_count=gap)
                    )

    consensus.sort(key=lambda ranked: ranked.rank)

    card_count = len(placements)
    possible = card_count * (card_count - 1) / 2
    agreement = max(0.0, 1 - len(disagreements) / possible) if possible else 1.0

    logger.debug(
        f"Compared {len(results)} results: {len(consensus)} shared card(s), "
        f"{len(disagreements)} disagreement(s), agreement {agreement:.2f}"
    )
    return ResultComparison(
        agreement=agreement,
        disagreements=disagreements,
        consensus=consensus,
    )
