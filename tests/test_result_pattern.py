"""Tests for the Result pattern implementation.

This module tests the Result type that filters, lookups and rating
aggregates return instead of None or NaN sentinels.
"""

import pytest

from media_catalog.domain.result import (
    DomainError,
    Failure,
    FormatError,
    MissingReferenceError,
    NoDataError,
    NotFoundError,
    Success,
    UnknownPropertyError,
    failure,
    success,
    try_catch,
)
from media_catalog.exceptions import MediaCatalogError


class TestSuccess:
    """Test the Success result type."""

    def test_success_creation(self):
        """Test creating a Success result."""
        result = Success(42)
        assert result.is_success() is True
        assert result.is_failure() is False
        assert result.value() == 42

    def test_success_repr(self):
        """Test Success string representation."""
        assert repr(Success("test")) == "Success('test')"

    def test_success_error_raises(self):
        """Test that accessing error on Success raises."""
        with pytest.raises(ValueError, match="Cannot get error from Success result"):
            Success(42).error()

    def test_success_map(self):
        """Test mapping over Success."""
        mapped = Success(5).map(lambda x: x * 2)
        assert isinstance(mapped, Success)
        assert mapped.value() == 10


class TestFailure:
    """Test the Failure result type."""

    def test_failure_creation(self):
        """Test creating a Failure result."""
        error = NotFoundError("missing")
        result = Failure(error)
        assert result.is_failure() is True
        assert result.is_success() is False
        assert result.error() is error

    def test_failure_value_raises(self):
        """Test that accessing value on Failure raises."""
        with pytest.raises(ValueError, match="Cannot get value from Failure result"):
            Failure(NoDataError("nothing")).value()

    def test_failure_map_is_noop(self):
        """Mapping a Failure keeps the original error."""
        result = Failure(FormatError("bad"))
        assert result.map(lambda x: x * 2) is result


class TestHelpers:
    """Test the helper functions and pattern matching."""

    def test_success_and_failure_constructors(self):
        """Test the lower-case factory functions."""
        assert isinstance(success(1), Success)
        assert isinstance(failure(FormatError("x")), Failure)

    def test_match_success(self):
        """Test match dispatches to the success branch."""
        result = success(3).match(success=lambda v: v + 1, failure=lambda e: -1)
        assert result == 4

    def test_match_failure(self):
        """Test match dispatches to the failure branch."""
        result = failure(NoDataError("x")).match(success=lambda v: v, failure=lambda e: type(e))
        assert result is NoDataError

    def test_match_without_handler_returns_none(self):
        """Test match with only the other branch given."""
        assert failure(NoDataError("x")).match(success=lambda v: v) is None

    def test_try_catch_success(self):
        """Test try_catch wrapping a value."""
        assert try_catch(lambda: int("7"), ValueError).value() == 7

    def test_try_catch_failure(self):
        """Test try_catch wrapping the raised exception."""
        result = try_catch(lambda: int("x"), ValueError)
        assert isinstance(result.error(), ValueError)

    def test_try_catch_other_exceptions_propagate(self):
        """Exceptions outside the given class are not caught."""
        with pytest.raises(ZeroDivisionError):
            try_catch(lambda: 1 / 0, ValueError)


class TestDomainErrors:
    """Test the domain error hierarchy."""

    @pytest.mark.parametrize("error_class", [FormatError, NotFoundError, NoDataError])
    def test_errors_are_domain_errors(self, error_class):
        """Every domain error derives from the package base error."""
        error = error_class("message")
        assert isinstance(error, DomainError)
        assert isinstance(error, MediaCatalogError)

    def test_unknown_property_message(self):
        """Test the unknown property error carries kind and name."""
        error = UnknownPropertyError("book", "colour")
        assert error.kind == "book"
        assert error.name == "colour"
        assert str(error) == "book has no filterable property 'colour'"

    def test_missing_reference_message(self):
        """Test the missing reference error names album and song."""
        error = MissingReferenceError(3, 99)
        assert error.album_id == 3
        assert error.song_id == 99
        assert "99" in str(error)
