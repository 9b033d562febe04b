"""Text reporter for Pickr results.

Provides human-readable formatting for rankings, progress, and sessions.
"""

from __future__ import annotations

from ..models import Pack, RankedCard, RankingProgress, RankingSession, ResultComparison
from ..ranking import format_comparison


class TextReporter:
    """Formats results as human-readable text.

    Example:
        ```python
        reporter = TextReporter()
        print(reporter.format_rankings(ranker.results(session.id)))
        ```
    """

    BAR_WIDTH = 30

    @staticmethod
    def _bar(fraction: float, width: int = 30) -> str:
        """Render a simple bar chart segment."""
        fraction = min(max(fraction, 0.0), 1.0)
        filled = round(fraction * width)
        return "█" * filled + "░" * (width - filled)

    def format_rankings(self, rankings: list[RankedCard]) -> str:
        """Format a ranked list as a leaderboard table.

        Args:
            rankings: Output of the ranking engine.

        Returns:
            Formatted string.
        """
        lines = [
            "Rankings",
            f"{'=' * 50}",
            f"  {'Rank':<6} {'Card':<30} {'W/L':<10} {'Score'}",
            f"  {'-' * 56}",
        ]

        for entry in rankings:
            content = entry.content if len(entry.content) <= 30 else entry.content[:27].rstrip() + "..."
            lines.append(
                f"  {entry.rank:<6} {content:<30} "
                f"{f'{entry.wins}W/{entry.losses}L':<10} {entry.score:.0%}"
            )

        return "\n".join(lines)

    def format_progress(self, progress: RankingProgress) -> str:
        """Format session progress as a single bar line."""
        return (
            f"Progress: {self._bar(progress.percent_complete / 100, self.BAR_WIDTH)} "
            f"{progress.completed_comparisons}/{progress.total_comparisons} "
            f"({progress.percent_complete:.0f}%)"
        )

    def format_session(self, session: RankingSession, pack: Pack) -> str:
        """Format a session summary with its comparison history.

        Args:
            session: The session to describe.
            pack: The pack the session ranks.

        Returns:
            Formatted string.
        """
        status = "complete" if session.is_complete else "in progress"
        lines = [
            f"Session: {pack.name}",
            f"{'=' * 50}",
            f"Algorithm: {session.settings.algorithm.value}",
            f"Status: {status}",
            f"Cards: {len(pack.cards)}",
            "",
            "History:",
        ]

        if not session.comparisons:
            lines.append("  (no comparisons yet)")
        for number, comparison in enumerate(session.comparisons, start=1):
            lines.append(f"  {number:>3}. {format_comparison(comparison)}")

        if session.current_comparison is not None:
            lines.append("")
            lines.append(f"Next: {format_comparison(session.current_comparison)}")

        return "\n".join(lines)

    def format_result_comparison(self, analysis: ResultComparison) -> str:
        """Format the consensus of several results and where they disagree."""
        lines = [
            f"Agreement: {self._bar(analysis.agreement, self.BAR_WIDTH)} {analysis.agreement:.0%}",
            "",
            self.format_rankings(analysis.consensus),
        ]

        if analysis.disagreements:
            lines.append("")
            lines.append("Disagreements:")
            for disagreement in analysis.disagreements:
                lines.append(
                    f"  {disagreement.card1.content}: ranked #{disagreement.card1.rank} "
                    f"and #{disagreement.card2.rank} ({disagreement.conflict_count} apart)"
                )

        return "\n".join(lines)


def print_results(result: list[RankedCard] | RankingProgress | ResultComparison) -> None:
    """Convenience function to print formatted results.

    Automatically detects the result type and prints the appropriate format.

    Args:
        result: A ranked list, a progress report, or a result comparison.

    Example:
        ```python
        from pickr import Ranker, print_results

        print_results(ranker.results(session.id))
        ```
    """
    reporter = TextReporter()

    if isinstance(result, RankingProgress):
        print(reporter.format_progress(result))
    elif isinstance(result, ResultComparison):
        print(reporter.format_result_comparison(result))
    elif isinstance(result, list) and all(isinstance(entry, RankedCard) for entry in result):
        print(reporter.format_rankings(result))
    else:
        raise TypeError(f"Unsupported result type: {type(result).__name__}")
