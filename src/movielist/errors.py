"""Exception hierarchy for the movie list service."""

from pathlib import Path

from .models import LookupCause


class MovieListError(Exception):
    """Base exception for all movie list errors."""


class ConfigError(MovieListError):
    """Invalid or missing configuration. Fatal at startup."""


class TitleSourceError(MovieListError):
    """The title list could not be loaded."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Unable to load titles from {path}: {reason}")
        self.path = path
        self.reason = reason


class MovieLookupError(MovieListError):
    """A single title lookup failed. Collected per title, never fatal."""

    cause: LookupCause = LookupCause.UNEXPECTED

    def __init__(
        self,
        title: str,
        reason: str,
        cause: LookupCause | None = None,
    ) -> None:
        super().__init__(f"{title!r}: {reason}")
        self.title = title
        self.reason = reason
        if cause is not None:
            self.cause = cause


class TransportError(MovieLookupError):
    """Network or transport failure talking to the provider."""

    cause = LookupCause.TRANSPORT


class NotFoundError(MovieLookupError):
    """The provider answered with its not-found sentinel."""

    cause = LookupCause.NOT_FOUND


class MalformedResponseError(MovieLookupError):
    """The provider body could not be decoded into a record."""

    cause = LookupCause.MALFORMED
