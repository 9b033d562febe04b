"""Ranking engine for Pickr.

This module decides which cards to compare next, tracks progress, and
turns a comparison history into a ranked list.

Components:
    - select_algorithm: Maps an algorithm name to its behavior bundle
    - pairwise: Round-robin comparison of every pair
    - tournament: Single elimination in N-1 comparisons
    - engine: Session-level functions dispatching on the settings
    - consensus: Agreement analysis across saved results

Example:
    ```python
    from pickr.ranking import generate_next_comparison, calculate_final_rankings

    pair = generate_next_comparison(cards, history, settings)
    if pair is None:
        rankings = calculate_final_rankings(cards, history, settings)
    ```
"""

from .algorithms import PAIRWISE, TOURNAMENT, AlgorithmBehavior, select_algorithm
from .consensus import compare_results
from .engine import (
    calculate_final_rankings,
    calculate_progress,
    default_ranking_settings,
    estimate_session_time,
    format_comparison,
    generate_next_comparison,
    is_ranking_complete,
    shuffle_cards,
    validate_ranking_settings,
)

__all__ = [
    "AlgorithmBehavior",
    "PAIRWISE",
    "TOURNAMENT",
    "select_algorithm",
    "generate_next_comparison",
    "is_ranking_complete",
    "calculate_progress",
    "calculate_final_rankings",
    "validate_ranking_settings",
    "default_ranking_settings",
    "format_comparison",
    "estimate_session_time",
    "shuffle_cards",
    "compare_results",
]
