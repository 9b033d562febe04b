"""Main Ranker class for Pickr.

This module provides the primary entry point for running ranking sessions.
The Ranker loads packs and sessions from its stores, asks the ranking
engine for the next comparison, records winners, and reads results.
"""

from __future__ import annotations

import logging
import random
from pathlib import Path

from .config import Config, PickrConfig
from .exceptions import (
    InvalidComparisonError,
    InvalidSettingsError,
    PackNotFoundError,
    ResultNotFoundError,
    SessionCompleteError,
    SessionIncompleteError,
    SessionNotFoundError,
)
from .models import (
    Card,
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
    utc_now,
)
from .ranking import (
    calculate_final_rankings,
    calculate_progress,
    compare_results,
    estimate_session_time,
    generate_next_comparison,
    is_ranking_complete,
    shuffle_cards,
    validate_ranking_settings,
)
from .store import BaseRepository, pack_store, result_store, session_store

logger = logging.getLogger(__name__)


class Ranker:
    """Main entry point for Pickr.

    Each session is an append-only comparison log with a single writer:
    the Ranker appends one resolved comparison at a time and flips
    ``is_complete`` once the engine reports nothing left to compare.

    Example:
        ```python
        from pickr import Ranker

        ranker = Ranker()
        pack = ranker.add_pack("Snacks", ["Chips", "Cookies", "Fruit"])
        session = ranker.start_session(pack.id)

        while (pair := ranker.current_pair(session.id)) is not None:
            ranker.submit_winner(session.id, pair[0].id)

        for entry in ranker.results(session.id):
            print(entry.rank, entry.content)
        ```
    """

    def __init__(
        self,
        config: Config | None = None,
        sessions: BaseRepository[RankingSession] | None = None,
        packs: BaseRepository[Pack] | None = None,
        results: BaseRepository[RankingResult] | None = None,
        rng: random.Random | None = None,
    ):
        """Initialize the Ranker.

        Args:
            config: Optional configuration. Uses defaults if not provided.
            sessions: Session store. Built from ``config.storage_dir`` if omitted.
            packs: Pack store. Built from ``config.storage_dir`` if omitted.
            results: Saved result store. Built from ``config.storage_dir`` if omitted.
            rng: Random source for card shuffling.
        """
        self.config = config or Config()
        self.sessions = sessions if sessions is not None else session_store(self.config.storage_dir)
        self.packs = packs if packs is not None else pack_store(self.config.storage_dir)
        self.saved_results = (
            results if results is not None else result_store(self.config.storage_dir)
        )
        self._rng = rng
        if "log_level" in self.config.model_fields_set:
            logging.getLogger("pickr").setLevel(self.config.log_level)

    @classmethod
    def from_config(cls, path: str | Path) -> Ranker:
        """Create a Ranker from a YAML configuration file.

        Packs listed in the file are added unless a pack with the same
        name already exists in the store.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            Ranker instance configured from the file.
        """
        pickr_config = PickrConfig.from_yaml(path)
        ranker = cls(config=pickr_config.ranking)

        existing = {pack.name for pack in ranker.packs.list()}
        for entry in pickr_config.packs:
            if entry["name"] in existing:
                continue
            ranker.add_pack(entry["name"], entry.get("cards") or [], entry.get("description"))
            existing.add(entry["name"])

        return ranker

    # Packs

    def add_pack(
        self,
        name: str,
        contents: list[str],
        description: str | None = None,
    ) -> Pack:
        """Create and store a pack with one card per content string.

        Args:
            name: Pack title.
            contents: Display text for each card, in order.
            description: Optional pack description.

        Returns:
            The stored Pack.
        """
        cards = [Card(content=content) for content in contents]
        if self.config.shuffle_cards:
            cards = shuffle_cards(cards, self._rng)

        pack = Pack(name=name, description=description, cards=cards)
        self.packs.put(pack)
        logger.info(f"Added pack '{name}' ({pack.id}) with {len(cards)} card(s)")
        return pack

    def get_pack(self, pack_id: str) -> Pack:
        pack = self.packs.get(pack_id)
        if pack is None:
            raise PackNotFoundError(pack_id)
        return pack

    def update_pack(
        self,
        pack_id: str,
        name: str | None = None,
        description: str | None = None,
    ) -> Pack:
        """Rename a pack or change its description. None leaves a field as is."""
        pack = self.get_pack(pack_id)
        if name is not None:
            pack.name = name
        if description is not None:
            pack.description = description
        pack.updated_at = utc_now()
        self.packs.put(pack)
        return pack

    def delete_pack(self, pack_id: str) -> bool:
        """Remove a pack. Its sessions and saved results are kept."""
        deleted = self.packs.delete(pack_id)
        if deleted:
            logger.info(f"Deleted pack {pack_id}")
        return deleted

    def add_card_to_pack(
        self,
        pack_id: str,
        content: str,
        image_url: str | None = None,
    ) -> Card:
        """Append a new card to a pack.

        Sessions already running on the pack see the card on their next
        comparison.
        """
        pack = self.get_pack(pack_id)
        card = Card(content=content, image_url=image_url)
        pack.cards.append(card)
        pack.updated_at = utc_now()
        self.packs.put(pack)
        return card

    def update_card(
        self,
        pack_id: str,
        card_id: str,
        content: str | None = None,
        image_url: str | None = None,
    ) -> Card | None:
        """Replace a card's content or image, keeping its id.

        Returns:
            The updated card, or None if the pack has no such card.
        """
        pack = self.get_pack(pack_id)
        changes = {
            key: value
            for key, value in (("content", content), ("image_url", image_url))
            if value is not None
        }

        for index, card in enumerate(pack.cards):
            if card.id == card_id:
                pack.cards[index] = card.model_copy(update=changes)
                pack.updated_at = utc_now()
                self.packs.put(pack)
                return pack.cards[index]
        return None

    def remove_card_from_pack(self, pack_id: str, card_id: str) -> bool:
        """Remove a card from a pack. Returns False if it was not there."""
        pack = self.get_pack(pack_id)
        remaining = [card for card in pack.cards if card.id != card_id]
        if len(remaining) == len(pack.cards):
            return False

        pack.cards = remaining
        pack.updated_at = utc_now()
        self.packs.put(pack)
        return True

    # Sessions

    def get_session(self, session_id: str) -> RankingSession:
        session = self.sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def start_session(
        self,
        pack_id: str,
        settings: RankingSettings | None = None,
    ) -> RankingSession:
        """Begin ranking a pack.

        Args:
            pack_id: The pack to rank.
            settings: Session settings. Defaults to the configured ones.

        Returns:
            The new session, with its first comparison pending.

        Raises:
            PackNotFoundError: If the pack doesn't exist.
            InvalidSettingsError: If the settings don't fit the pack.
        """
        pack = self.get_pack(pack_id)
        settings = settings or self.config.ranking_settings()

        validation = validate_ranking_settings(settings, len(pack.cards))
        if not validation.is_valid:
            raise InvalidSettingsError(validation.errors, len(pack.cards))

        session = RankingSession(pack_id=pack.id, settings=settings)
        self._advance(session, pack.cards)
        self.sessions.put(session)

        logger.info(
            f"Started {settings.algorithm.value} session {session.id} "
            f"for pack '{pack.name}' ({len(pack.cards)} cards)"
        )
        return session

    def current_pair(self, session_id: str) -> list[Card] | None:
        """Cards awaiting a decision, or None once the session is complete."""
        session = self.get_session(session_id)
        if session.current_comparison is None:
            return None
        return list(session.current_comparison.cards)

    def submit_winner(self, session_id: str, winner_id: str) -> RankingSession:
        """Resolve the pending comparison and move to the next one.

        Args:
            session_id: The session being ranked.
            winner_id: Id of the chosen card.

        Returns:
            The updated session.

        Raises:
            SessionNotFoundError: If the session doesn't exist.
            SessionCompleteError: If the session has already finished.
            InvalidComparisonError: If nothing is pending or the winner
                was not part of the pending comparison.
        """
        session = self.get_session(session_id)
        if session.is_complete:
            raise SessionCompleteError(session_id)

        pending = session.current_comparison
        if pending is None:
            raise InvalidComparisonError("no comparison is pending", session_id=session_id)

        winner = next((card for card in pending.cards if card.id == winner_id), None)
        if winner is None:
            raise InvalidComparisonError(
                f"card '{winner_id}' is not part of the pending comparison",
                session_id=session_id,
            )

        session.comparisons.append(
            pending.model_copy(update={"winner": winner, "timestamp": utc_now()})
        )
        self._advance(session, self.get_pack(session.pack_id).cards)
        self.sessions.put(session)

        logger.debug(
            f"Session {session_id}: '{winner.content}' won comparison "
            f"{len(session.comparisons)}"
        )
        return session

    def progress(self, session_id: str) -> RankingProgress:
        session = self.get_session(session_id)
        cards = self.get_pack(session.pack_id).cards
        return calculate_progress(cards, session.comparisons, session.settings)

    def results(self, session_id: str) -> list[RankedCard]:
        """Rank the pack from the session's history so far.

        Works on incomplete sessions too; the ranking is simply provisional.
        """
        session = self.get_session(session_id)
        cards = self.get_pack(session.pack_id).cards
        return calculate_final_rankings(cards, session.comparisons, session.settings)

    def estimate(self, pack_id: str, settings: RankingSettings | None = None) -> SessionEstimate:
        """Estimate how long ranking a pack would take."""
        pack = self.get_pack(pack_id)
        return estimate_session_time(
            len(pack.cards),
            settings or self.config.ranking_settings(),
            self.config.average_comparison_ms(),
        )

    # Saved results

    def save_result(self, session_id: str) -> RankingResult:
        """Store the final rankings of a completed session.

        Saving the same session again returns the result already stored.

        Raises:
            SessionNotFoundError: If the session doesn't exist.
            SessionIncompleteError: If the session still has comparisons left.
        """
        session = self.get_session(session_id)
        if not session.is_complete:
            raise SessionIncompleteError(session_id)

        for saved in self.saved_results.list():
            if saved.session_id == session_id:
                return saved

        elapsed = session.updated_at - session.created_at
        result = RankingResult(
            session_id=session.id,
            pack_id=session.pack_id,
            rankings=self.results(session_id),
            created_at=session.updated_at,
            metadata=ResultMetadata(
                total_comparisons=len(session.comparisons),
                algorithm=session.settings.algorithm,
                completion_time_ms=round(elapsed.total_seconds() * 1000),
            ),
        )
        self.saved_results.put(result)
        logger.info(f"Saved result {result.id} for session {session_id}")
        return result

    def get_result(self, result_id: str) -> RankingResult:
        result = self.saved_results.get(result_id)
        if result is None:
            raise ResultNotFoundError(result_id)
        return result

    def get_results_by_pack_id(self, pack_id: str) -> list[RankingResult]:
        return [result for result in self.saved_results.list() if result.pack_id == pack_id]

    def delete_result(self, result_id: str) -> bool:
        return self.saved_results.delete(result_id)

    def compare_results(self, result_ids: list[str]) -> ResultComparison | None:
        """Analyze agreement between saved results.

        Unknown ids are skipped. Returns None when fewer than two of the
        ids name a saved result.
        """
        found = [self.saved_results.get(result_id) for result_id in result_ids]
        return compare_results([result for result in found if result is not None])

    def _advance(self, session: RankingSession, cards: list[Card]) -> None:
        """Set the next pending comparison, or mark the session complete."""
        session.updated_at = utc_now()

        if is_ranking_complete(cards, session.comparisons, session.settings):
            session.current_comparison = None
            session.is_complete = True
            logger.info(
                f"Session {session.id} complete after {len(session.comparisons)} comparison(s)"
            )
            return

        pair = generate_next_comparison(cards, session.comparisons, session.settings)
        session.current_comparison = Comparison(cards=pair) if pair is not None else None
