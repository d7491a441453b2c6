"""Tests for models.py -- MovieRecord, AggregateResult, enums."""

import pytest

from movielist.errors import NotFoundError
from movielist.models import (
    DEFAULT_MAX_CONCURRENCY,
    NOT_FOUND_SENTINEL,
    AggregateResult,
    LookupCause,
    MovieRecord,
    ResponseKind,
)


class TestEnums:
    def test_lookup_cause_values(self):
        assert LookupCause.TRANSPORT == "transport"
        assert LookupCause.NOT_FOUND == "not_found"
        assert LookupCause.MALFORMED == "malformed"

    def test_response_kinds(self):
        assert {k.value for k in ResponseKind} == {"empty", "record", "not_found", "malformed"}

    def test_constants(self):
        assert DEFAULT_MAX_CONCURRENCY == 10
        assert NOT_FOUND_SENTINEL == "Movie not found!"


class TestMovieRecord:
    def test_from_provider_ignores_unknown_keys(self):
        record = MovieRecord.from_provider(
            {
                "Title": "Inception",
                "Year": "2010",
                "Director": "Christopher Nolan",
                "imdbID": "tt1375666",
                "Plot": "A thief who steals corporate secrets...",
                "Response": "True",
            }
        )
        assert record == MovieRecord("Inception", "2010", "Christopher Nolan", "tt1375666")
        assert record.is_populated is True

    def test_missing_fields_default_empty(self):
        record = MovieRecord.from_provider({"Title": "Inception"})
        assert record.year == ""
        assert record.director == ""
        assert record.is_populated is False

    def test_null_field_is_empty(self):
        assert MovieRecord.from_provider({"Title": None}).title == ""

    def test_non_string_field_rejected(self):
        with pytest.raises(TypeError, match="expected string"):
            MovieRecord.from_provider({"Title": "X", "Year": 2010})

    def test_to_dict_uses_provider_names(self):
        record = MovieRecord("Alien", "1979", "Ridley Scott", "tt0078748")
        assert record.to_dict() == {
            "Title": "Alien",
            "Year": "1979",
            "Director": "Ridley Scott",
            "imdbID": "tt0078748",
        }

    def test_title_only_record(self):
        record = MovieRecord(title="Solaris")
        assert record.to_dict()["Title"] == "Solaris"
        assert record.to_dict()["Year"] == ""

    def test_frozen(self):
        record = MovieRecord(title="Alien")
        with pytest.raises(AttributeError):
            record.title = "Aliens"  # type: ignore[misc]

    def test_field_equality(self):
        assert MovieRecord("Alien", "1979") == MovieRecord("Alien", "1979")


class TestAggregateResult:
    def test_empty(self):
        result = AggregateResult()
        assert result.total == 0
        assert result.succeeded == 0
        assert result.failed == 0

    def test_counts(self):
        result = AggregateResult(
            records=[MovieRecord("A"), MovieRecord("B")],
            errors=[NotFoundError("C", "not found")],
        )
        assert result.succeeded == 2
        assert result.failed == 1
        assert result.total == 3
