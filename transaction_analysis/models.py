"""Data models and type aliases for ``transaction_analysis``.

``Transaction`` is the immutable in-memory record every query operates on.
``TransactionPayload`` is the validated JSON shape accepted by the loader; it
uses the camelCase keys of the source file and converts to ``Transaction``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TypeAlias

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Core record and collections
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single transfer between two clients plus compliance-issue metadata.

    Attributes
    ----------
    amount:
        Transaction value. May be fractional or negative.
    sender_full_name:
        Name of the sending client. ``None`` when missing from the source.
    beneficiary_full_name:
        Name of the receiving client. ``None`` when missing from the source.
    issue_id:
        Identifier of the compliance issue raised on this transaction, if any.
    issue_solved:
        Whether the issue is solved. Records without an issue are stored as
        solved.
    issue_message:
        Optional human-readable description of the issue.

    Equality and hashing are structural over all fields, so two records with
    identical values are interchangeable as mapping keys or set members.
    """

    amount: float
    sender_full_name: str | None
    beneficiary_full_name: str | None
    issue_id: int | None = None
    issue_solved: bool = True
    issue_message: str | None = None


# Generic collections
Transactions: TypeAlias = Iterable[Transaction]
"""Any iterable of transaction records; the engine materializes it once."""


# ---------------------------------------------------------------------------
# DTOs for typed file I/O
# ---------------------------------------------------------------------------


class TransactionPayload(BaseModel):
    """Typed, validated model of one transaction object in the JSON dataset.

    Unknown keys are ignored so richer exports (account numbers, ages) load
    without changes. ``issueSolved`` defaults to ``True`` when absent or null.
    Types are strict: amounts must be finite JSON numbers, not strings,
    booleans, ``NaN`` or ``Infinity``.
    """

    model_config = ConfigDict(strict=True, extra="ignore", populate_by_name=True)

    amount: float = Field(allow_inf_nan=False)
    sender_full_name: str | None = Field(default=None, alias="senderFullName")
    beneficiary_full_name: str | None = Field(default=None, alias="beneficiaryFullName")
    issue_id: int | None = Field(default=None, alias="issueId")
    issue_solved: bool = Field(default=True, alias="issueSolved")
    issue_message: str | None = Field(default=None, alias="issueMessage")

    @field_validator("issue_solved", mode="before")
    @classmethod
    def _null_means_solved(cls, v: object) -> object:
        return True if v is None else v

    def to_transaction(self) -> Transaction:
        return Transaction(
            amount=float(self.amount),
            sender_full_name=self.sender_full_name,
            beneficiary_full_name=self.beneficiary_full_name,
            issue_id=self.issue_id,
            issue_solved=self.issue_solved,
            issue_message=self.issue_message,
        )
