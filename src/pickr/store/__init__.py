"""Storage module.

Provides id-keyed repositories for packs, ranking sessions and saved results:
- InMemoryRepository: dict-backed, nothing persisted
- JsonFileRepository: one versioned JSON document per repository

Example:
    ```python
    from pickr.store import session_store

    sessions = session_store("./data")  # or session_store() for memory
    sessions.put(session)
    ```
"""

from __future__ import annotations

from pathlib import Path

from ..models import Pack, RankingResult, RankingSession
from .base import BaseRepository
from .json_file import JsonFileRepository
from .memory import InMemoryRepository


def pack_store(storage_dir: str | Path | None = None) -> BaseRepository[Pack]:
    """Create a pack repository, file-backed when a directory is given."""
    if storage_dir is None:
        return InMemoryRepository(Pack)
    return JsonFileRepository(Pack, Path(storage_dir) / "packs.json")


def session_store(storage_dir: str | Path | None = None) -> BaseRepository[RankingSession]:
    """Create a session repository, file-backed when a directory is given."""
    if storage_dir is None:
        return InMemoryRepository(RankingSession)
    return JsonFileRepository(RankingSession, Path(storage_dir) / "sessions.json")


def result_store(storage_dir: str | Path | None = None) -> BaseRepository[RankingResult]:
    """Create a result repository, file-backed when a directory is given."""
    if storage_dir is None:
        return InMemoryRepository(RankingResult)
    return JsonFileRepository(RankingResult, Path(storage_dir) / "results.json")


__all__ = [
    "BaseRepository",
    "InMemoryRepository",
    "JsonFileRepository",
    "pack_store",
    "result_store",
    "session_store",
]
