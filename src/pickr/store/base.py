"""Base repository interface for persisted packs, sessions and results.

This module defines the abstract base class that all stores must implement.
The ranking engine never sees a store; only the Ranker does.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

from ..models import Pack, RankingResult, RankingSession

T = TypeVar("T", Pack, RankingSession, RankingResult)


class BaseRepository(ABC, Generic[T]):
    """Abstract base class for id-keyed stores of Pickr models.

    Stores hand out and accept typed models only. Serialization, including
    timestamps, stays inside the implementation.
    """

    def __init__(self, model_type: type[T]):
        self.model_type = model_type

    @abstractmethod
    def get(self, item_id: str) -> T | None:
        """Return the stored object with ``item_id``, or None."""
        pass

    @abstractmethod
    def put(self, item: T) -> None:
        """Insert or replace an object, keyed by its ``id``."""
        pass

    @abstractmethod
    def list(self) -> list[T]:
        """Return every stored object in insertion order."""
        pass

    @abstractmethod
    def delete(self, item_id: str) -> bool:
        """Remove an object. Returns False if it was not stored."""
        pass

    def __contains__(self, item_id: object) -> bool:
        return isinstance(item_id, str) and self.get(item_id) is not None

    @staticmethod
    def _copy(item: BaseModel) -> BaseModel:
        """Detach a stored object from the caller's instance."""
        return item.model_copy(deep=True)
