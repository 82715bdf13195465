"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Identity
  2xxx: Listing
  3xxx: Persistence
  4xxx: Moderation
"""

from typing import Any


class AppError(Exception):
    """Base application error."""

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


# --- 1xxx: Identity ---

class NotAuthenticatedError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "You must be signed in to perform this action")


# --- 2xxx: Listing ---

class ValidationError(AppError):
    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(2001, f"Invalid {field}: {reason}")


class NotFoundError(AppError):
    def __init__(self, listing_id: str) -> None:
        self.listing_id = listing_id
        super().__init__(2002, f"Listing not found: {listing_id}")


# --- 3xxx: Persistence ---

class PersistenceError(AppError):
    """Snapshot load/save failed.

    ``result`` carries the outcome of the command whose save failed; the
    in-memory mutation is kept.
    """

    def __init__(self, detail: str, result: Any = None) -> None:
        self.result = result
        super().__init__(3001, f"Persistence failed: {detail}")


# --- 4xxx: Moderation ---

class ModerationUnavailableError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4001, f"Moderation service unavailable: {detail}")
