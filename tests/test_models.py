"""Tests for Pickr models."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from pickr import (
    Algorithm,
    Card,
    Comparison,
    Pack,
    RankedCard,
    RankingProgress,
    RankingSession,
    RankingSettings,
)
from pickr.models import pair_key


class TestCard:
    """Tests for Card model."""

    def test_create_minimal(self) -> None:
        """Test creating a card from content only."""
        card = Card(content="Tacos")
        assert card.content == "Tacos"
        assert card.image_url is None
        assert card.id
        assert isinstance(card.created_at, datetime)
        assert card.created_at.tzinfo is not None

    def test_unique_ids(self) -> None:
        """Test generated ids differ."""
        assert Card(content="a").id != Card(content="a").id

    def test_immutable(self) -> None:
        """Test cards cannot be changed after creation."""
        card = Card(content="Tacos")
        with pytest.raises(ValidationError):
            card.content = "Burritos"


class TestPack:
    """Tests for Pack model."""

    def test_create(self) -> None:
        """Test creating a pack."""
        pack = Pack(name="Food", cards=[Card(content="Tacos"), Card(content="Pizza")])
        assert pack.name == "Food"
        assert pack.description is None
        assert len(pack.cards) == 2


class TestComparison:
    """Tests for Comparison model."""

    def setup_method(self) -> None:
        self.a = Card(id="a", content="A")
        self.b = Card(id="b", content="B")
        self.c = Card(id="c", content="C")

    def test_pending(self) -> None:
        """Test a comparison without a winner."""
        comparison = Comparison(cards=[self.a, self.b])
        assert comparison.is_resolved is False
        assert comparison.is_pair is True
        assert comparison.loser is None
        assert comparison.timestamp is None

    def test_resolved_pair(self) -> None:
        """Test loser of a resolved pair."""
        comparison = Comparison(cards=[self.a, self.b], winner=self.b)
        assert comparison.is_resolved is True
        assert comparison.loser == self.a

    def test_pair_key_is_order_independent(self) -> None:
        """Test both presentation orders share a key."""
        forward = Comparison(cards=[self.a, self.b])
        backward = Comparison(cards=[self.b, self.a])
        assert forward.pair_key == backward.pair_key == "a-b"
        assert pair_key("b", "a") == "a-b"

    def test_group_has_no_pair_key(self) -> None:
        """Test comparisons of three cards."""
        comparison = Comparison(cards=[self.a, self.b, self.c], winner=self.a)
        assert comparison.is_pair is False
        assert comparison.pair_key is None
        assert comparison.loser is None

    def test_foreign_winner_has_no_loser(self) -> None:
        """Test a winner outside the compared cards is tolerated but ignored."""
        comparison = Comparison(cards=[self.a, self.b], winner=self.c)
        assert comparison.is_resolved is True
        assert comparison.loser is None


class TestRankingSettings:
    """Tests for RankingSettings model."""

    def test_defaults(self) -> None:
        """Test default settings."""
        settings = RankingSettings()
        assert settings.comparison_size == 2
        assert settings.algorithm == Algorithm.PAIRWISE

    def test_from_string(self) -> None:
        """Test algorithm strings are accepted."""
        assert RankingSettings(algorithm="tournament").algorithm == Algorithm.TOURNAMENT
        assert RankingSettings(algorithm="SWISS").algorithm == Algorithm.SWISS

    def test_unknown_algorithm_falls_back(self) -> None:
        """Test unknown algorithm names become pairwise."""
        assert RankingSettings(algorithm="bracket").algorithm == Algorithm.PAIRWISE


class TestRankingSession:
    """Tests for RankingSession model."""

    def test_defaults(self) -> None:
        """Test a fresh session."""
        session = RankingSession(pack_id="pack-1")
        assert session.comparisons == []
        assert session.current_comparison is None
        assert session.is_complete is False
        assert session.settings == RankingSettings()

    def test_json_round_trip_keeps_timestamps(self) -> None:
        """Test serialized sessions revive typed datetimes."""
        a, b = Card(content="A"), Card(content="B")
        session = RankingSession(
            pack_id="pack-1",
            comparisons=[Comparison(cards=[a, b], winner=a, timestamp=datetime.now().astimezone())],
        )
        restored = RankingSession.model_validate_json(session.model_dump_json())
        assert isinstance(restored.comparisons[0].timestamp, datetime)
        assert restored == session


class TestRankedCard:
    """Tests for RankedCard model."""

    def test_from_card(self) -> None:
        """Test snapshotting a card."""
        card = Card(id="x", content="X", image_url="https://example.com/x.png")
        ranked = RankedCard.from_card(card, rank=1, score=0.75, wins=3, losses=1)
        assert ranked.id == "x"
        assert ranked.image_url == "https://example.com/x.png"
        assert ranked.rank == 1
        assert ranked.score == 0.75
        assert ranked.ties == 0


class TestRankingProgress:
    """Tests for RankingProgress model."""

    def test_defaults(self) -> None:
        """Test default values."""
        progress = RankingProgress()
        assert progress.total_comparisons == 0
        assert progress.percent_complete == 0.0
