"""Session-level ranking operations.

These functions are what callers use: each one picks the algorithm named
in the settings and delegates to it. All of them are pure. They never
mutate their inputs or touch storage, and they never raise for
degenerate input.
"""

from __future__ import annotations

import random

from ..models import (
    Algorithm,
    Card,
    Comparison,
    RankedCard,
    RankingProgress,
    RankingSettings,
    SessionEstimate,
    SettingsValidation,
)
from .algorithms import select_algorithm

DEFAULT_COMPARISON_MS = 5000


def generate_next_comparison(
    cards: list[Card],
    completed: list[Comparison],
    settings: RankingSettings,
) -> list[Card] | None:
    """Return the cards to compare next, or None when ranking is finished."""
    return select_algorithm(settings.algorithm).next_pair(cards, completed, settings)


def is_ranking_complete(
    cards: list[Card],
    completed: list[Comparison],
    settings: RankingSettings,
) -> bool:
    """Check whether any informative comparison remains."""
    return select_algorithm(settings.algorithm).is_complete(cards, completed, settings)


def calculate_progress(
    cards: list[Card],
    completed: list[Comparison],
    settings: RankingSettings,
) -> RankingProgress:
    """Report how much of the expected work is done.

    Args:
        cards: The pack being ranked.
        completed: Comparison history so far.
        settings: Session settings.

    Returns:
        RankingProgress with the percentage capped at 100 and defined as 0
        when no comparisons are expected.
    """
    total = select_algorithm(settings.algorithm).estimated_total(len(cards), settings)
    done = sum(1 for comparison in completed if comparison.is_resolved)
    percent = min(done / total * 100, 100.0) if total > 0 else 0.0

    return RankingProgress(
        total_comparisons=total,
        completed_comparisons=done,
        percent_complete=percent,
    )


def calculate_final_rankings(
    cards: list[Card],
    comparisons: list[Comparison],
    settings: RankingSettings,
) -> list[RankedCard]:
    """Compute the ranked list from the full comparison history."""
    return select_algorithm(settings.algorithm).calculate_rankings(cards, comparisons)


def validate_ranking_settings(settings: RankingSettings, card_count: int) -> SettingsValidation:
    """Check settings against the size of the pack.

    Validation is advisory: the other engine functions do not call it.
    Run it before starting a session.
    """
    errors: list[str] = []

    if settings.comparison_size < 2:
        errors.append("Comparison size must be at least 2")

    if settings.comparison_size > card_count:
        errors.append("Comparison size cannot be larger than the number of cards")

    if card_count < 2:
        errors.append("At least 2 cards are required for ranking")

    return SettingsValidation(is_valid=not errors, errors=errors)


def default_ranking_settings() -> RankingSettings:
    return RankingSettings(comparison_size=2, algorithm=Algorithm.PAIRWISE)


def format_comparison(comparison: Comparison) -> str:
    """Render a comparison as ``"A vs B (Winner: A)"``."""
    names = " vs ".join(card.content for card in comparison.cards)
    winner = f" (Winner: {comparison.winner.content})" if comparison.winner else ""
    return f"{names}{winner}"


def estimate_session_time(
    card_count: int,
    settings: RankingSettings,
    average_comparison_ms: int = DEFAULT_COMPARISON_MS,
) -> SessionEstimate:
    """Estimate how long a session takes at a steady pace.

    Args:
        card_count: Cards in the pack.
        settings: Session settings.
        average_comparison_ms: Time a user spends per comparison.

    Returns:
        SessionEstimate, formatted as ``"<m>m <s>s"`` or ``"<s>s"``.

    Example:
        ```python
        estimate_session_time(5, default_ranking_settings())
        # 10 comparisons, 50000 ms, "50s"
        ```
    """
    comparisons = select_algorithm(settings.algorithm).estimated_total(card_count, settings)
    total_ms = comparisons * average_comparison_ms

    minutes = total_ms // 60000
    seconds = (total_ms % 60000) // 1000
    formatted = f"{minutes}m {seconds}s" if minutes > 0 else f"{seconds}s"

    return SessionEstimate(
        estimated_comparisons=comparisons,
        estimated_time_ms=total_ms,
        estimated_time_formatted=formatted,
    )


def shuffle_cards(cards: list[Card], rng: random.Random | None = None) -> list[Card]:
    """Return a shuffled copy of ``cards``; the input list is untouched."""
    shuffled = list(cards)
    (rng or random).shuffle(shuffled)
    return shuffled
