"""Custom exceptions for Pickr.

The ranking engine itself never raises: it falls back to well-defined
results for degenerate input. These exceptions belong to the layers around
it (configuration, session orchestration, storage) and carry actionable
messages.
"""

from __future__ import annotations


class PickrError(Exception):
    """Base exception for all Pickr errors."""

    pass


class ConfigError(PickrError):
    """Error in configuration.

    Raised when configuration is invalid or missing required fields.
    """

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        full_message = message
        if field:
            full_message = f"Configuration error in '{field}': {message}"
        super().__init__(full_message)


class InvalidSettingsError(PickrError):
    """Ranking settings failed validation for a pack.

    Raised when a session is started with settings that
    ``validate_ranking_settings`` rejects.
    """

    def __init__(self, errors: list[str], card_count: int):
        self.errors = errors
        self.card_count = card_count
        message = (
            f"Cannot rank a pack of {card_count} card(s):\n"
            + "\n".join(f"  - {error}" for error in errors)
        )
        super().__init__(message)


class InvalidComparisonError(PickrError):
    """A comparison result does not fit the comparison it resolves.

    Raised when the submitted winner is not one of the compared cards, or
    when there is no pending comparison to resolve.
    """

    def __init__(self, message: str, session_id: str | None = None):
        self.session_id = session_id
        full_message = f"Invalid comparison: {message}"
        if session_id:
            full_message += f"\nSession ID: {session_id}"
        super().__init__(full_message)


class SessionNotFoundError(PickrError):
    """No ranking session exists with the given id."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Ranking session '{session_id}' not found.")


class PackNotFoundError(PickrError):
    """No pack exists with the given id."""

    def __init__(self, pack_id: str):
        self.pack_id = pack_id
        super().__init__(
            f"Pack '{pack_id}' not found.\n"
            "Create it with Ranker.add_pack() before starting a session."
        )


class SessionCompleteError(PickrError):
    """A finished session was asked to record another comparison.

    Sessions are append-only until they complete; after that only the
    results can be read.
    """

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(
            f"Ranking session '{session_id}' is already complete.\n"
            "Read its results or start a new session."
        )


class SessionIncompleteError(PickrError):
    """A session was asked for a saved result before it finished."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(
            f"Ranking session '{session_id}' is not complete yet.\n"
            "Answer its remaining comparisons before saving a result."
        )


class ResultNotFoundError(PickrError):
    """No saved result exists with the given id."""

    def __init__(self, result_id: str):
        self.result_id = result_id
        super().__init__(f"Ranking result '{result_id}' not found.")


class StoreError(PickrError):
    """Error reading or writing persisted data."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        full_message = message
        if path:
            full_message = f"Store error at '{path}': {message}"
        super().__init__(full_message)
