"""Exceptions raised by the walkalytics client."""

from __future__ import annotations


class WalkalyticsError(Exception):
    """Base exception for all walkalytics errors."""


class MissingRequiredField(WalkalyticsError, ValueError):
    """Raised before any network call when x, y or the key is absent."""


class UnexpectedStatus(WalkalyticsError):
    """Raised when the API answered with something other than 200."""

    def __init__(self, status_code: int, url: str | None = None) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"status code {status_code}")


class WrongEndpoint(WalkalyticsError):
    """Raised when a response did not come from the expected API path."""


class MalformedPayload(WalkalyticsError, ValueError):
    """Raised when a payload lacks its magic marker or cannot be decoded."""


class InvalidGridHeader(MalformedPayload):
    """Raised when an Esri ASCII grid header is incomplete or inconsistent."""


class DimensionMismatch(WalkalyticsError, ValueError):
    """Raised when the number of grid cells does not match the header."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"dimensions of map do not match that of header: expected {expected} cells, got {actual}"
        )


class EmptyResult(WalkalyticsError):
    """Raised when the API returned no points-of-interest."""
