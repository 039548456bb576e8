"""Query engine over an in-memory, read-only collection of transactions.

All queries are pure: they read the tuple captured at construction and never
mutate it, so a single :class:`TransactionQueries` instance can answer any
number of calls in any order.

Name lookups with no match return neutral values (``0.0``, ``False``, empty
collections). Only :meth:`TransactionQueries.max_amount` raises, and only on
an empty dataset.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Iterator
from os import PathLike
from typing import TypeVar

from .errors import EmptyDatasetError
from .ingest import load_transactions
from .logging_setup import get_logger
from .models import Transaction, Transactions

_logger = get_logger("transaction_analysis.queries")

T = TypeVar("T")

TOP_N_DEFAULT = 3


def distinct_by_key(items: Iterable[T], key: Callable[[T], Hashable]) -> Iterator[T]:
    """Yield only the first element seen for each ``key(element)``.

    Order-stable. The seen set lives for a single call, so concurrent or
    repeated invocations never share state.
    """

    seen: set[Hashable] = set()
    for item in items:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        yield item


def _same_name(candidate: str | None, wanted: str) -> bool:
    # Missing names never match; comparison ignores case.
    return candidate is not None and candidate.casefold() == wanted.casefold()


class TransactionQueries:
    """Analytical queries over a fixed sequence of :class:`Transaction` records."""

    def __init__(self, transactions: Transactions) -> None:
        self._transactions: tuple[Transaction, ...] = tuple(transactions)
        _logger.debug("query engine ready over %d transactions", len(self._transactions))

    @classmethod
    def from_file(cls, path: str | PathLike[str]) -> TransactionQueries:
        """Build an engine from a JSON dataset file.

        Loader errors (:class:`~transaction_analysis.errors.ResourceNotFoundError`,
        :class:`~transaction_analysis.errors.MalformedDataError`) propagate; no
        engine is created over a dataset that failed to load.
        """

        return cls(load_transactions(path))

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return self._transactions

    def __len__(self) -> int:
        return len(self._transactions)

    # ---- Sums and extremes ---------------------------------------------------

    def total_amount(self) -> float:
        """Return the sum of the amounts of all transactions."""

        return sum((tx.amount for tx in self._transactions), 0.0)

    def total_amount_sent_by(self, sender_full_name: str) -> float:
        """Return the sum of amounts sent by ``sender_full_name`` (case-insensitive)."""

        return sum(
            (
                tx.amount
                for tx in self._transactions
                if _same_name(tx.sender_full_name, sender_full_name)
            ),
            0.0,
        )

    def max_amount(self) -> float:
        """Return the highest transaction amount.

        Raises :class:`EmptyDatasetError` when there are no transactions.
        """

        if not self._transactions:
            raise EmptyDatasetError("cannot compute the maximum amount of an empty dataset")
        return max(tx.amount for tx in self._transactions)

    # ---- Clients and compliance ---------------------------------------------

    def count_unique_clients(self) -> int:
        """Count distinct names appearing as sender or beneficiary.

        Names are compared exactly (case-sensitive, no trimming). Records with
        a missing name contribute nothing for that side.
        """

        names = {
            tx.sender_full_name
            for tx in distinct_by_key(self._transactions, lambda tx: tx.sender_full_name)
        }
        names.update(
            tx.beneficiary_full_name
            for tx in distinct_by_key(self._transactions, lambda tx: tx.beneficiary_full_name)
        )
        names.discard(None)
        return len(names)

    def has_open_compliance_issues(self, client_full_name: str) -> bool:
        """Return whether the client has at least one unsolved compliance issue.

        The client may appear as sender or beneficiary; matching ignores case.
        Unknown clients yield ``False``.
        """

        return any(
            not tx.issue_solved
            for tx in self._transactions
            if _same_name(tx.sender_full_name, client_full_name)
            or _same_name(tx.beneficiary_full_name, client_full_name)
        )

    def transactions_by_beneficiary_name(self) -> dict[str | None, Transaction]:
        """Index transactions by beneficiary name.

        Only the first transaction per beneficiary (in dataset order) is kept;
        later transactions to the same beneficiary are dropped from the index.
        """

        return {
            tx.beneficiary_full_name: tx
            for tx in distinct_by_key(self._transactions, lambda tx: tx.beneficiary_full_name)
        }

    def unsolved_issue_ids(self) -> set[int]:
        """Return the identifiers of all open compliance issues."""

        return {
            tx.issue_id
            for tx in self._transactions
            if not tx.issue_solved and tx.issue_id is not None
        }

    def solved_issue_messages(self) -> list[str]:
        """Return messages of solved issues in dataset order, duplicates kept."""

        return [
            tx.issue_message
            for tx in self._transactions
            if tx.issue_solved and tx.issue_message is not None
        ]

    # ---- Rankings ------------------------------------------------------------

    def top_transactions_by_amount(self, limit: int = TOP_N_DEFAULT) -> list[Transaction]:
        """Return up to ``limit`` transactions sorted by amount, highest first.

        Equal amounts keep their dataset order.
        """

        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        ranked = sorted(self._transactions, key=lambda tx: tx.amount, reverse=True)
        return ranked[:limit]

    def top3_transactions_by_amount(self) -> list[Transaction]:
        """Return the 3 transactions with the highest amount, highest first."""

        return self.top_transactions_by_amount(3)

    def top_sender(self) -> str | None:
        """Return the sender with the largest total sent amount.

        Ties resolve to the lexicographically smallest name. Returns ``None``
        when no transaction has a sender.
        """

        totals: dict[str, float] = {}
        for tx in self._transactions:
            if tx.sender_full_name is None:
                continue
            totals[tx.sender_full_name] = totals.get(tx.sender_full_name, 0.0) + tx.amount
        if not totals:
            return None
        name, _total = min(totals.items(), key=lambda kv: (-kv[1], kv[0]))
        return name


__all__ = [
    "TOP_N_DEFAULT",
    "TransactionQueries",
    "distinct_by_key",
]
