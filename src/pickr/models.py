"""Core data models for Pickr.

This module defines the primary data structures used throughout the package:
- Card and Pack: the things being ranked, authored before a session starts
- Comparison: one head-to-head presentation with an optional winner
- RankingSettings and RankingSession: a ranking run over one pack
- Result types: RankedCard, RankingProgress, SettingsValidation, SessionEstimate
- Saved results: RankingResult and the ResultComparison across results
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def generate_id() -> str:
    """Return a new opaque identifier."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class Algorithm(str, Enum):
    """Supported ranking algorithms."""

    PAIRWISE = "pairwise"
    TOURNAMENT = "tournament"
    SWISS = "swiss"


class Card(BaseModel):
    """One item being ranked.

    Cards are immutable: once a ranking session starts, the engine relies
    on their ids staying stable.

    Attributes:
        id: Unique identifier for the card.
        content: Display text.
        image_url: Optional image shown with the card.
        created_at: When the card was authored.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_id)
    content: str
    image_url: str | None = None
    created_at: datetime = Field(default_factory=utc_now)


class Pack(BaseModel):
    """A named collection of cards to be ranked.

    Attributes:
        id: Unique identifier for the pack.
        name: Pack title.
        description: Optional longer description.
        cards: The cards in authoring order.
        created_at: Creation time.
        updated_at: Last modification time.
    """

    id: str = Field(default_factory=generate_id)
    name: str
    description: str | None = None
    cards: list[Card] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Comparison(BaseModel):
    """A set of cards shown together, resolved once a winner is picked.

    A comparison with a winner is immutable history. The model does not
    check that the winner is one of ``cards``; the aggregator skips
    comparisons that break that rule.

    Attributes:
        id: Unique identifier for the comparison.
        cards: The compared cards (two or more).
        winner: The chosen card, or None while pending.
        timestamp: When the winner was chosen.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_id)
    cards: list[Card]
    winner: Card | None = None
    timestamp: datetime | None = None

    @property
    def is_resolved(self) -> bool:
        return self.winner is not None

    @property
    def is_pair(self) -> bool:
        return len(self.cards) == 2

    @property
    def pair_key(self) -> str | None:
        """Canonical key for an unordered pair, or None for groups."""
        if not self.is_pair:
            return None
        return pair_key(self.cards[0].id, self.cards[1].id)

    @property
    def loser(self) -> Card | None:
        """The other card of a resolved pair whose winner took part in it."""
        if not self.is_pair or self.winner is None:
            return None
        first, second = self.cards
        if self.winner.id == first.id:
            return second
        if self.winner.id == second.id:
            return first
        return None


def pair_key(first_id: str, second_id: str) -> str:
    """Build the order-independent key for a pair of card ids."""
    return "-".join(sorted((first_id, second_id)))


class RankingSettings(BaseModel):
    """Settings fixed for the lifetime of a ranking session.

    Attributes:
        comparison_size: Cards shown per comparison (at least 2).
        algorithm: Which comparison strategy drives the session.
    """

    model_config = ConfigDict(frozen=True)

    comparison_size: int = 2
    algorithm: Algorithm = Algorithm.PAIRWISE

    @field_validator("algorithm", mode="before")
    @classmethod
    def coerce_algorithm(cls, v: Any) -> Any:
        """Fall back to pairwise for names outside the known set."""
        if isinstance(v, Algorithm):
            return v
        try:
            return Algorithm(str(v).lower())
        except ValueError:
            return Algorithm.PAIRWISE


class RankingSession(BaseModel):
    """The ordered comparison history of one ranking run over one pack.

    Attributes:
        id: Unique identifier for the session.
        pack_id: The pack being ranked.
        comparisons: Completed comparisons, append-only.
        current_comparison: The pending comparison shown to the user.
        is_complete: Set once no informative comparison remains.
        settings: Settings chosen when the session started.
        created_at: Creation time.
        updated_at: Last modification time.
    """

    id: str = Field(default_factory=generate_id)
    pack_id: str
    comparisons: list[Comparison] = Field(default_factory=list)
    current_comparison: Comparison | None = None
    is_complete: bool = False
    settings: RankingSettings = Field(default_factory=RankingSettings)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class RankedCard(BaseModel):
    """A card annotated with its computed standing.

    Attributes:
        id: Card id.
        content: Card display text.
        image_url: Card image, if any.
        created_at: Card creation time.
        rank: Position in the final order (1-indexed, no gaps).
        score: Normalized win rate (0.0-1.0).
        wins: Comparisons won.
        losses: Comparisons lost.
        ties: Comparisons tied.
    """

    id: str
    content: str
    image_url: str | None = None
    created_at: datetime | None = None
    rank: int = 0
    score: float = 0.0
    wins: int = 0
    losses: int = 0
    ties: int = 0

    @classmethod
    def from_card(cls, card: Card, **stats: Any) -> RankedCard:
        """Snapshot a card together with its statistics."""
        return cls(
            id=card.id,
            content=card.content,
            image_url=card.image_url,
            created_at=card.created_at,
            **stats,
        )


class RankingProgress(BaseModel):
    """How far a session has progressed.

    Attributes:
        total_comparisons: Expected number of comparisons.
        completed_comparisons: Comparisons resolved so far.
        percent_complete: Completion percentage (0-100).
    """

    total_comparisons: int = 0
    completed_comparisons: int = 0
    percent_complete: float = 0.0


class SettingsValidation(BaseModel):
    """Outcome of validating settings against a pack size."""

    is_valid: bool = True
    errors: list[str] = Field(default_factory=list)


class SessionEstimate(BaseModel):
    """Rough time estimate for a ranking session.

    Attributes:
        estimated_comparisons: Comparisons the algorithm expects to need.
        estimated_time_ms: Total expected time in milliseconds.
        estimated_time_formatted: Human-readable form, e.g. "2m 30s".
    """

    estimated_comparisons: int
    estimated_time_ms: int
    estimated_time_formatted: str


class ResultMetadata(BaseModel):
    """How a saved result was produced.

    Attributes:
        total_comparisons: Comparisons answered in the session.
        algorithm: Algorithm the session ran.
        completion_time_ms: Time from session start to its last answer.
    """

    total_comparisons: int = 0
    algorithm: Algorithm = Algorithm.PAIRWISE
    completion_time_ms: int = 0


class RankingResult(BaseModel):
    """Final rankings of a completed session, kept after the session.

    Attributes:
        id: Unique identifier for the result.
        session_id: The session that produced it.
        pack_id: The ranked pack.
        rankings: Ranked cards, best first.
        created_at: When the session finished.
        metadata: Session statistics.
    """

    id: str = Field(default_factory=generate_id)
    session_id: str
    pack_id: str
    rankings: list[RankedCard] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    metadata: ResultMetadata = Field(default_factory=ResultMetadata)


class CardDisagreement(BaseModel):
    """Two results placing the same card far apart.

    Attributes:
        card1: The card as ranked in one result.
        card2: The card as ranked in another result.
        conflict_count: Absolute difference between the two ranks.
    """

    card1: RankedCard
    card2: RankedCard
    conflict_count: int


class ResultComparison(BaseModel):
    """Agreement analysis across several results for one pack.

    Attributes:
        agreement: 1.0 when no card is placed far apart, down to 0.0.
        disagreements: Card placements differing by more than two ranks.
        consensus: Cards with averaged rank and score, best first.
    """

    agreement: float = 1.0
    disagreements: list[CardDisagreement] = Field(default_factory=list)
    consensus: list[RankedCard] = Field(default_factory=list)
