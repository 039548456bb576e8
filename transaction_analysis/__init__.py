"""Public interface for the ``transaction_analysis`` package.

This module exposes the query engine, the loader, the record models, and the
error types as the stable import surface. There is no runtime logic here, only
symbol re-exports.
"""

from .errors import (
    EmptyDatasetError,
    MalformedDataError,
    ResourceNotFoundError,
    TransactionAnalysisError,
)
from .ingest import load_transactions
from .models import Transaction, TransactionPayload, Transactions
from .queries import TransactionQueries, distinct_by_key

__all__ = [
    # Engine / loader
    "TransactionQueries",
    "distinct_by_key",
    "load_transactions",
    # Models / types
    "Transaction",
    "TransactionPayload",
    "Transactions",
    # Errors
    "TransactionAnalysisError",
    "ResourceNotFoundError",
    "MalformedDataError",
    "EmptyDatasetError",
]
