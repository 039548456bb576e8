"""Exception types raised by ``transaction_analysis``.

Loader failures (:class:`ResourceNotFoundError`, :class:`MalformedDataError`)
are fatal to building a query engine from a file. :class:`EmptyDatasetError`
is raised only by queries that have no defined answer over zero records.
Name lookups that match nothing never raise; they return neutral values.
"""

from __future__ import annotations

from os import PathLike


class TransactionAnalysisError(Exception):
    """Base class for all package errors."""


class ResourceNotFoundError(TransactionAnalysisError, FileNotFoundError):
    """The transaction data resource does not exist."""

    def __init__(self, path: str | PathLike[str]) -> None:
        self.path = str(path)
        super().__init__(f"Transaction data file not found: {self.path}")


class MalformedDataError(TransactionAnalysisError, ValueError):
    """The transaction data resource exists but cannot be decoded or validated."""


class EmptyDatasetError(TransactionAnalysisError, ValueError):
    """A query has no defined result because the dataset holds no records."""


__all__ = [
    "TransactionAnalysisError",
    "ResourceNotFoundError",
    "MalformedDataError",
    "EmptyDatasetError",
]
