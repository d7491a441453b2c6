"""Core enums, constants, and type definitions for the movie list service.

Enums:
    LookupCause   -- Why a single title lookup failed (transport, not_found,
                     malformed, unexpected).
    ResponseKind  -- Tagged outcome of classifying a provider response body
                     (empty, record, not_found, malformed).

Dataclasses:
    MovieRecord        -- One resolved movie, serialized with provider field names.
    ClassifiedResponse -- Result of the decode-and-classify step.
    AggregateResult    -- Records and errors collected from one fan-out batch.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .errors import MovieLookupError


class LookupCause(StrEnum):
    TRANSPORT = "transport"
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"
    UNEXPECTED = "unexpected"


class ResponseKind(StrEnum):
    EMPTY = "empty"
    RECORD = "record"
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"


# Concurrent in-flight lookups per batch
DEFAULT_MAX_CONCURRENCY = 10

# Error message the provider returns instead of a record
NOT_FOUND_SENTINEL = "Movie not found!"


@dataclass(frozen=True)
class MovieRecord:
    """A movie resolved from the metadata provider.

    imdb_id is the marker field: a response that really described a movie
    carries it, so an empty value means the expected fields were not populated.
    """

    title: str
    year: str = ""
    director: str = ""
    imdb_id: str = ""

    @property
    def is_populated(self) -> bool:
        return bool(self.imdb_id)

    @classmethod
    def from_provider(cls, data: dict[str, Any]) -> "MovieRecord":
        """Build a record from a provider JSON object, ignoring unknown keys."""
        return cls(
            title=_as_str(data.get("Title")),
            year=_as_str(data.get("Year")),
            director=_as_str(data.get("Director")),
            imdb_id=_as_str(data.get("imdbID")),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "Title": self.title,
            "Year": self.year,
            "Director": self.director,
            "imdbID": self.imdb_id,
        }


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"expected string field, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class ClassifiedResponse:
    """Tagged outcome of one provider response body.

    payload is set for RECORD, reason for NOT_FOUND and MALFORMED.
    """

    kind: ResponseKind
    payload: dict[str, Any] | None = None
    reason: str = ""


@dataclass
class AggregateResult:
    """Result of a fan-out batch: successes and failures, in no particular order."""

    records: list[MovieRecord] = field(default_factory=list)
    errors: list["MovieLookupError"] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return len(self.records)

    @property
    def failed(self) -> int:
        return len(self.errors)

    @property
    def total(self) -> int:
        return self.succeeded + self.failed
