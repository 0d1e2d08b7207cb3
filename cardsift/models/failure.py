"""
Failure classification for card sync and rating operations.

Fetch-phase errors (NetworkError, ApiError) abort a sync. PersistenceError is
raised per record and tolerated by the reconciler. InputValidationError
rejects bad caller input before the store is touched.

Service functions catch these and return result models with a success flag;
none of them crosses the service boundary.
"""

from enum import Enum


class FailureKind(str, Enum):
    """Classification of failure types."""

    NETWORK_ERROR = "network_error"
    EXTERNAL_API_ERROR = "external_api_error"
    PERSISTENCE_ERROR = "persistence_error"
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"


class CardSiftError(Exception):
    """
    Base class for known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    kind: FailureKind = FailureKind.INVALID_INPUT

    def __init__(self, message: str, detail: str | None = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class NetworkError(CardSiftError):
    """The remote card API could not be reached."""

    kind = FailureKind.NETWORK_ERROR


class ApiError(CardSiftError):
    """
    The remote card API answered with an error or an unusable body.

    upstream_status holds the HTTP status Scryfall answered with, if any.
    """

    kind = FailureKind.EXTERNAL_API_ERROR

    def __init__(self, message: str, status_code: int | None = None, detail: str | None = None):
        super().__init__(message, detail)
        self.upstream_status = status_code


class PersistenceError(CardSiftError):
    """A single record could not be written to the store."""

    kind = FailureKind.PERSISTENCE_ERROR

    def __init__(self, card_id: str, message: str, detail: str | None = None):
        super().__init__(message, detail)
        self.card_id = card_id


class InputValidationError(CardSiftError):
    """Caller supplied an invalid rating or a missing identifier."""

    kind = FailureKind.INVALID_INPUT
