"""Adapter for mapping decoded JSON transaction objects to ``Transaction``.

Input shape (one object per transaction; unknown keys are ignored)::

    {
      "amount": 430.2,
      "senderFullName": "Tom Shelby",
      "beneficiaryFullName": "Alfie Solomons",
      "issueId": 1,
      "issueSolved": false,
      "issueMessage": "Looks like money laundering"
    }

Names are kept exactly as written. Query-time matching decides whether case
matters, so the adapter performs no normalization.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from pydantic import ValidationError

from ...errors import MalformedDataError
from ...models import Transaction, TransactionPayload


def to_transactions(items: Iterable[Any]) -> Iterator[Transaction]:
    """Validate decoded JSON objects and yield ``Transaction`` records in order.

    Raises :class:`~transaction_analysis.errors.MalformedDataError` naming the
    zero-based position of the first object that fails validation.
    """

    for idx, item in enumerate(items):
        if not isinstance(item, dict):
            raise MalformedDataError(
                f"transaction #{idx} must be a JSON object, got {type(item).__name__}"
            )
        try:
            payload = TransactionPayload.model_validate(item)
        except ValidationError as e:
            raise MalformedDataError(f"transaction #{idx} is invalid: {e}") from e
        yield payload.to_transaction()
