"""Exception taxonomy for tourquery."""

from typing import Any

GENERIC_TRANSPORT_MESSAGE = "An error occurred while contacting the remote service"


class TourQueryError(Exception):
    """Base class for all tourquery errors."""


class KeyBuildError(TourQueryError):
    """Raised when query parameters cannot be normalized into a key."""


class ValidationError(TourQueryError):
    """Raised for invalid input detected before any remote call."""


class QueryError(TourQueryError):
    """A remote read or write did not produce a usable result.

    Instances are not raised by the orchestrator; they are stored on
    ``QueryState.error`` and ``MutationResult.error``.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DomainError(QueryError):
    """The remote service answered with ``success=False``."""

    def __init__(self, message: str, data: Any = None) -> None:
        super().__init__(message)
        self.data = data


class TransportError(QueryError):
    """The remote call raised; the original exception is ``__cause__``."""

    def __init__(self, message: str = GENERIC_TRANSPORT_MESSAGE) -> None:
        super().__init__(message)
