"""Result pattern and domain errors for the catalog.

Lookups, filters and aggregates return a ``Result`` so that callers can
tell "nothing matched" apart from "the request itself was wrong" without
relying on ``None`` or NaN sentinels.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, cast, overload

from ..exceptions import MediaCatalogError

T = TypeVar('T')  # Success type
E = TypeVar('E', bound=Exception)  # Error type


class Result(ABC, Generic[T, E]):
    """Either a successful value or an error."""

    @abstractmethod
    def is_success(self) -> bool:
        """Check if the result is a success."""
        ...

    @abstractmethod
    def is_failure(self) -> bool:
        """Check if the result is a failure."""
        ...

    @abstractmethod
    def value(self) -> T:
        """Get the success value.

        Raises:
            ValueError: If the result is a failure.
        """
        ...

    @abstractmethod
    def error(self) -> E:
        """Get the error.

        Raises:
            ValueError: If the result is a success.
        """
        ...

    @abstractmethod
    def map(self, fn: Callable[[T], Any]) -> Result[Any, E]:
        """Map the success value through a function."""
        ...

    @overload
    def match(self, *, success: Callable[[T], Any]) -> Any: ...

    @overload
    def match(self, *, failure: Callable[[E], Any]) -> Any: ...

    @overload
    def match(self, *, success: Callable[[T], Any], failure: Callable[[E], Any]) -> Any: ...

    def match(self, *, success: Callable[[T], Any] | None = None,
              failure: Callable[[E], Any] | None = None) -> Any:
        """Pattern match on the result."""
        if self.is_success() and success:
            return success(self.value())
        elif self.is_failure() and failure:
            return failure(self.error())
        return None


@dataclass(frozen=True, slots=True)
class Success(Result[T, E]):
    """Represents a successful operation with a value."""
    _value: T

    def __repr__(self) -> str:
        return f"Success({self._value!r})"

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def value(self) -> T:
        return self._value

    def error(self) -> E:
        raise ValueError("Cannot get error from Success result")

    def map(self, fn: Callable[[T], Any]) -> Result[Any, E]:
        return Success(fn(self._value))


@dataclass(frozen=True, slots=True)
class Failure(Result[T, E]):
    """Represents a failed operation with an error."""
    _error: E

    def __repr__(self) -> str:
        return f"Failure({self._error!r})"

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def value(self) -> T:
        raise ValueError(f"Cannot get value from Failure result: {self._error}")

    def error(self) -> E:
        return self._error

    def map(self, fn: Callable[[T], Any]) -> Result[Any, E]:
        return self


def success(value: T) -> Result[T, Any]:
    """Create a Success result."""
    return Success(value)


def failure(error: E) -> Result[Any, E]:
    """Create a Failure result."""
    return Failure(error)


def try_catch(fn: Callable[[], T], error_class: type[E] | tuple[type[E], ...] = Exception) -> Result[T, E]:
    """Run ``fn`` and wrap exceptions of the given type(s) in a Failure."""
    try:
        return Success(fn())
    except error_class as e:
        return Failure(cast(E, e))


class DomainError(MediaCatalogError):
    """Base class for domain-specific errors."""
    pass


class FormatError(DomainError):
    """Raised when CSV or JSON text, a date or a number cannot be parsed."""
    pass


class NotFoundError(DomainError):
    """Raised when an entity is not found by its identifier."""
    pass


class UnknownPropertyError(DomainError):
    """Raised when a filter names a property the entity kind does not expose."""

    def __init__(self, kind: str, name: str):
        super().__init__(f"{kind} has no filterable property {name!r}")
        self.kind = kind
        self.name = name


class MissingReferenceError(DomainError):
    """Raised when an album refers to a song id that does not resolve."""

    def __init__(self, album_id: Any, song_id: int):
        super().__init__(f"Album {album_id} refers to unknown song {song_id}")
        self.album_id = album_id
        self.song_id = song_id


class NoDataError(DomainError):
    """Raised when an aggregate is requested over no reviews."""
    pass
