"""JSON file repository.

Each repository owns one file holding a versioned document:

    {
      "schema_version": 1,
      "kind": "RankingSession",
      "items": [ {...}, ... ]
    }

Timestamps are written as ISO-8601 strings and revived into aware
``datetime`` objects by the pydantic models on load.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from ..exceptions import StoreError
from .base import BaseRepository, T

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


class JsonFileRepository(BaseRepository[T]):
    """Persists objects to a single JSON file.

    The whole file is read on every access and rewritten on every change,
    which is plenty for a user's handful of packs and sessions.
    """

    def __init__(self, model_type: type[T], path: str | Path):
        super().__init__(model_type)
        self.path = Path(path)

    def get(self, item_id: str) -> T | None:
        return self._load().get(item_id)

    def put(self, item: T) -> None:
        items = self._load()
        items[item.id] = item
        self._save(items)

    def list(self) -> list[T]:
        return [*self._load().values()]

    def delete(self, item_id: str) -> bool:
        items = self._load()
        if item_id not in items:
            return False
        del items[item_id]
        self._save(items)
        return True

    def _load(self) -> dict[str, T]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                document = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise StoreError(f"File is not valid JSON: {e}", path=str(self.path)) from e

        if not isinstance(document, dict) or "items" not in document:
            raise StoreError("Missing 'items' in store document", path=str(self.path))
        if not isinstance(document["items"], list):
            raise StoreError(
                f"'items' must be a list, got {type(document['items']).__name__}",
                path=str(self.path),
            )

        version = document.get("schema_version")
        if version != SCHEMA_VERSION:
            raise StoreError(
                f"Unsupported schema version {version!r} (expected {SCHEMA_VERSION})",
                path=str(self.path),
            )

        kind = document.get("kind")
        if kind != self.model_type.__name__:
            raise StoreError(
                f"Store holds '{kind}' records, not '{self.model_type.__name__}'",
                path=str(self.path),
            )

        try:
            items = [self.model_type.model_validate(raw) for raw in document["items"]]
        except ValidationError as e:
            raise StoreError(f"Invalid record: {e}", path=str(self.path)) from e

        return {item.id: item for item in items}

    def _save(self, items: dict[str, T]) -> None:
        document = {
            "schema_version": SCHEMA_VERSION,
            "kind": self.model_type.__name__,
            "items": [item.model_dump(mode="json") for item in items.values()],
        }

        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write to a sibling temp file, then swap it in
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise StoreError(f"Could not write store: {e}", path=str(self.path)) from e

        logger.debug(f"Saved {len(items)} {self.model_type.__name__} record(s) to {self.path}")
