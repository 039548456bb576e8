from __future__ import annotations

import dataclasses

import pytest
from pydantic import ValidationError

from transaction_analysis import Transaction, TransactionPayload


def test_transaction_is_immutable():
    tx = Transaction(1.0, "Tom Shelby", "Ada Thorne")
    with pytest.raises(dataclasses.FrozenInstanceError):
        tx.amount = 2.0  # type: ignore[misc]


def test_transaction_equality_and_hash_are_structural():
    a = Transaction(1.0, "Tom Shelby", "Ada Thorne", 7, False, "flagged")
    b = Transaction(1.0, "Tom Shelby", "Ada Thorne", 7, False, "flagged")
    c = Transaction(1.0, "Tom Shelby", "Ada Thorne", 7, True, "flagged")

    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert len({a, b, c}) == 2


def test_transaction_defaults_without_issue():
    tx = Transaction(5.0, "Tom Shelby", "Ada Thorne")
    assert tx.issue_id is None
    assert tx.issue_solved is True
    assert tx.issue_message is None


def test_payload_reads_camel_case_keys_and_ignores_extras():
    payload = TransactionPayload.model_validate(
        {
            "mtn": 663458,
            "amount": 430.2,
            "senderFullName": "Tom Shelby",
            "senderAge": 22,
            "beneficiaryFullName": "Alfie Solomons",
            "beneficiaryAge": 33,
            "issueId": 1,
            "issueSolved": False,
            "issueMessage": "Looks like money laundering",
        }
    )

    assert payload.to_transaction() == Transaction(
        430.2, "Tom Shelby", "Alfie Solomons", 1, False, "Looks like money laundering"
    )


@pytest.mark.parametrize("raw", [{}, {"issueSolved": None}])
def test_payload_missing_or_null_issue_solved_means_solved(raw):
    payload = TransactionPayload.model_validate({"amount": 1.0, **raw})
    assert payload.issue_solved is True


def test_payload_tolerates_missing_names():
    tx = TransactionPayload.model_validate({"amount": 2}).to_transaction()
    assert tx.sender_full_name is None
    assert tx.beneficiary_full_name is None
    assert tx.amount == 2.0


def test_payload_requires_amount():
    with pytest.raises(ValidationError):
        TransactionPayload.model_validate({"senderFullName": "Tom Shelby"})


@pytest.mark.parametrize(
    "raw",
    [
        {"amount": float("nan")},
        {"amount": "12.5"},
        {"amount": 1.0, "issueId": "3"},
        {"amount": 1.0, "issueSolved": "false"},
    ],
)
def test_payload_validates_types_strictly(raw):
    with pytest.raises(ValidationError):
        TransactionPayload.model_validate(raw)
