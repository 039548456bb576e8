"""Ingest utilities shared by the query engine and the CLI.

Exposes a single helper that reads a JSON dataset file and returns the
validated ``Transaction`` records in file order.
"""

from __future__ import annotations

import json
from os import PathLike
from pathlib import Path

from ..errors import MalformedDataError, ResourceNotFoundError
from ..logging_setup import get_logger
from ..models import Transaction
from .adapters.json_transactions import to_transactions

_logger = get_logger("transaction_analysis.ingest")


def load_transactions(path: str | PathLike[str]) -> tuple[Transaction, ...]:
    """Read a JSON array of transactions and return immutable records.

    Failure modes:
    - the file does not exist: :class:`ResourceNotFoundError`;
    - the bytes are not UTF-8, the content is not valid JSON, the top-level
      value is not an array, or an element fails validation:
      :class:`MalformedDataError`.

    Other I/O errors (``PermissionError``, ``IsADirectoryError``) propagate
    unchanged.
    """

    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ResourceNotFoundError(p) from e
    except UnicodeDecodeError as e:
        raise MalformedDataError(f"{p} is not valid UTF-8: {e}") from e

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedDataError(f"Failed to parse JSON in {p}: {e}") from e

    if not isinstance(raw, list):
        raise MalformedDataError(
            f"Expected a JSON array of transactions in {p}, got {type(raw).__name__}"
        )

    try:
        transactions = tuple(to_transactions(raw))
    except MalformedDataError as e:
        raise MalformedDataError(f"{p}: {e}") from e

    _logger.info("loaded %d transactions from %s", len(transactions), p)
    for tx in transactions:
        _logger.debug("loaded %s", tx)
    return transactions


__all__ = ["load_transactions"]
