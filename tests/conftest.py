"""Pytest configuration and shared fixtures.

Every test runs from its own temporary working directory with the package's
environment variables cleared, so a developer's ``.env`` or exported settings
never leak into assertions. Logging configuration is reset after each test
because the CLI configures it once per process.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path
from typing import Any

import pytest

from transaction_analysis import Transaction
from transaction_analysis.logging_setup import _reset_logging

# The three-record dataset used across the suite, in source-file shape.
_FIXTURE_PAYLOAD: list[dict[str, Any]] = [
    {
        "amount": 100.0,
        "senderFullName": "Tom Shelby",
        "beneficiaryFullName": "Alfie Solomons",
        "issueId": 1,
        "issueSolved": False,
        "issueMessage": "missing ID",
    },
    {
        "amount": 50.0,
        "senderFullName": "Tom Shelby",
        "beneficiaryFullName": "Arthur Shelby",
        "issueId": None,
        "issueSolved": True,
        "issueMessage": None,
    },
    {
        "amount": 200.0,
        "senderFullName": "Alfie Solomons",
        "beneficiaryFullName": "Tom Shelby",
        "issueId": 2,
        "issueSolved": True,
        "issueMessage": "resolved late",
    },
]


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    for var in ("TRANSACTION_ANALYSIS_DATA", "TRANSACTION_ANALYSIS_LOG_LEVEL"):
        # setenv first so teardown also removes values a test loads from .env
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)
    yield
    _reset_logging()


@pytest.fixture
def fixture_transactions() -> list[Transaction]:
    return [
        Transaction(100.0, "Tom Shelby", "Alfie Solomons", 1, False, "missing ID"),
        Transaction(50.0, "Tom Shelby", "Arthur Shelby", None, True, None),
        Transaction(200.0, "Alfie Solomons", "Tom Shelby", 2, True, "resolved late"),
    ]


@pytest.fixture
def write_dataset(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes records as a JSON dataset file."""

    def _write(records: Sequence[Any] | Any, name: str = "transactions.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(records), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def fixture_payload() -> list[dict[str, Any]]:
    return [dict(item) for item in _FIXTURE_PAYLOAD]
