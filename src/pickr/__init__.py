"""Pickr - Rank anything through head-to-head comparisons.

Build a pack of cards, pick a winner from one pair at a time, and get a
full ranking once every informative comparison has been made.

Example:
    ```python
    from pickr import Ranker

    ranker = Ranker()
    pack = ranker.add_pack("Pizza toppings", ["Basil", "Olives", "Pineapple"])
    session = ranker.start_session(pack.id)

    pair = ranker.current_pair(session.id)
    ranker.submit_winner(session.id, pair[0].id)
    print(ranker.progress(session.id).percent_complete)
    ```
"""

from .config import Config, PickrConfig
from .exceptions import (
    ConfigError,
    InvalidComparisonError,
    InvalidSettingsError,
    PackNotFoundError,
    PickrError,
    ResultNotFoundError,
    SessionCompleteError,
    SessionIncompleteError,
    SessionNotFoundError,
    StoreError,
)
from .models import (
    Algorithm,
    Card,
    CardDisagreement,
    Comparison,
    Pack,
    RankedCard,
    RankingProgress,
    RankingResult,
    RankingSession,
    RankingSettings,
    ResultComparison,
    ResultMetadata,
    SessionEstimate,
    SettingsValidation,
)
from .ranker import Ranker
from .ranking import (
    AlgorithmBehavior,
    calculate_final_rankings,
    calculate_progress,
    compare_results,
    default_ranking_settings,
    estimate_session_time,
    format_comparison,
    generate_next_comparison,
    is_ranking_complete,
    select_algorithm,
    shuffle_cards,
    validate_ranking_settings,
)
from .reporter import TextReporter, print_results
from .store import BaseRepository, InMemoryRepository, JsonFileRepository

__version__ = "0.1.0"

__all__ = [
    # Main entry point
    "Ranker",
    # Configuration
    "Config",
    "PickrConfig",
    # Core models
    "Algorithm",
    "Card",
    "Pack",
    "Comparison",
    "RankingSettings",
    "RankingSession",
    # Result models
    "RankedCard",
    "RankingProgress",
    "SettingsValidation",
    "SessionEstimate",
    # Saved results
    "RankingResult",
    "ResultMetadata",
    "ResultComparison",
    "CardDisagreement",
    # Ranking engine
    "AlgorithmBehavior",
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
    # Storage
    "BaseRepository",
    "InMemoryRepository",
    "JsonFileRepository",
    # Reporter
    "TextReporter",
    "print_results",
    # Exceptions
    "PickrError",
    "ConfigError",
    "InvalidSettingsError",
    "InvalidComparisonError",
    "SessionNotFoundError",
    "PackNotFoundError",
    "SessionCompleteError",
    "SessionIncompleteError",
    "ResultNotFoundError",
    "StoreError",
]
