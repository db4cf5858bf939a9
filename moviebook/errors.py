"""Errors surfaced by Moviebook."""

from typing import Callable


class MoviebookError(Exception):
    """Base class for Moviebook errors."""


class WebServiceError(MoviebookError):
    """
    A screen failed to load.

    This is the only failure shown to users. It carries the call that
    reproduces the load so the user can retry it.
    """

    def __init__(self, error: BaseException, retry: Callable):
        super().__init__(str(error) or error.__class__.__name__)
        self.underlying_error = error
        self.retry = retry

    @classmethod
    def failed_to_load(cls, error: BaseException, retry: Callable) -> "WebServiceError":
        return cls(error, retry)

    @property
    def id(self) -> str:
        return str(self.underlying_error)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WebServiceError):
            return NotImplemented
        return str(self.underlying_error) == str(other.underlying_error)

    def __hash__(self) -> int:
        return hash(str(self.underlying_error))


class DecodingError(MoviebookError):
    """A payload did not have the expected shape."""


class MissingApiKeyError(MoviebookError):
    """No TMDB API key is configured."""


class NotificationsNotAuthorized(MoviebookError):
    """The user has not allowed release notifications."""


class DeeplinkError(MoviebookError, ValueError):
    """A URL is not a Moviebook deep link."""
