"""
Domain layer for Media Catalog.

Holds the entity records, the persistence port and the services that
filter, aggregate and manage catalog entries.
"""

from .result import (
    Result,
    Success,
    Failure,
    success,
    failure,
    DomainError,
    FormatError,
    NotFoundError,
    UnknownPropertyError,
    MissingReferenceError,
    NoDataError,
)

__all__ = [
    "Result",
    "Success",
    "Failure",
    "success",
    "failure",
    "DomainError",
    "FormatError",
    "NotFoundError",
    "UnknownPropertyError",
    "MissingReferenceError",
    "NoDataError",
]
