from __future__ import annotations

import pytest

from core.domain.operation import Operation
from core.errors import CommitMismatchError, InvalidOperationError, MalformedInputError
from core.services.tax_validator import (
    escape_apostrophes,
    parse_operation,
    validate,
    validate_committed,
)


@pytest.mark.parametrize("raw", ["refund_tax", "GET_TAX", "", None, 3])
def test_unknown_operation(raw: object) -> None:
    with pytest.raises(InvalidOperationError) as excinfo:
        parse_operation(raw)
    assert excinfo.value.valid_operations == ["get_tax", "post_tax", "cancel_tax"]


def test_parse_operation() -> None:
    assert parse_operation("post_tax") is Operation.CALCULATE_AND_COMMIT
    assert parse_operation(Operation.CANCEL_TRANSACTION) is Operation.CANCEL_TRANSACTION


def test_get_tax_requires_committed_false() -> None:
    validate_committed(Operation.CALCULATE_ONLY, {"Committed": False})
    with pytest.raises(CommitMismatchError) as excinfo:
        validate_committed(Operation.CALCULATE_ONLY, {"Committed": True})
    assert excinfo.value.expected is False


def test_post_tax_requires_committed_true() -> None:
    validate_committed(Operation.CALCULATE_AND_COMMIT, {"Committed": True})
    with pytest.raises(CommitMismatchError):
        validate_committed(Operation.CALCULATE_AND_COMMIT, {"Committed": False})


@pytest.mark.parametrize("payload", [{}, {"Committed": 0}, {"Committed": "false"}, {"Committed": None}])
def test_committed_must_be_a_real_boolean(payload: dict) -> None:
    with pytest.raises(CommitMismatchError):
        validate_committed(Operation.CALCULATE_ONLY, payload)


@pytest.mark.parametrize("payload", [{}, {"Committed": True}, {"Committed": False}, {"Committed": "x"}])
def test_cancel_ignores_committed(payload: dict) -> None:
    assert validate("cancel_tax", payload) is payload


def test_operation_is_checked_before_payload() -> None:
    with pytest.raises(InvalidOperationError):
        validate("bogus", ["not", "an", "object"])


def test_payload_must_be_an_object() -> None:
    with pytest.raises(MalformedInputError):
        validate("cancel_tax", ["not", "an", "object"])


def test_validate_returns_payload_unchanged() -> None:
    payload = {"Committed": False, "Customer": "O'Brien"}
    assert validate("get_tax", payload) is payload
    assert payload["Customer"] == "O'Brien"


def test_sanitize_returns_escaped_copy() -> None:
    payload = {
        "Committed": True,
        "Customer": "O'Brien",
        "Lines": [{"Item": "Kid's toy", "Qty": 2}],
        "Owner's": "key stays",
    }

    result = validate("post_tax", payload, sanitize=True)

    assert result == {
        "Committed": True,
        "Customer": "O''Brien",
        "Lines": [{"Item": "Kid''s toy", "Qty": 2}],
        "Owner's": "key stays",
    }
    assert payload["Customer"] == "O'Brien"
    assert payload["Lines"][0]["Item"] == "Kid's toy"


def test_escape_apostrophes_leaves_non_strings() -> None:
    assert escape_apostrophes(12.5) == 12.5
    assert escape_apostrophes(None) is None
    assert escape_apostrophes(True) is True
