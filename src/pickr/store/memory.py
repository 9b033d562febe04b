"""In-memory repository, mainly for tests and short-lived processes."""

from __future__ import annotations

from .base import BaseRepository, T


class InMemoryRepository(BaseRepository[T]):
    """Keeps deep copies of stored objects in a dict.

    Example:
        ```python
        sessions = InMemoryRepository(RankingSession)
        sessions.put(session)
        sessions.get(session.id)
        ```
    """

    def __init__(self, model_type: type[T]):
        super().__init__(model_type)
        self._items: dict[str, T] = {}

    def get(self, item_id: str) -> T | None:
        item = self._items.get(item_id)
        return self._copy(item) if item is not None else None

    def put(self, item: T) -> None:
        self._items[item.id] = self._copy(item)

    def list(self) -> list[T]:
        return [self._copy(item) for item in self._items.values()]

    def delete(self, item_id: str) -> bool:
        return self._items.pop(item_id, None) is not None
