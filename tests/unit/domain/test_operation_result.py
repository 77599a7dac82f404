"""Tests for OperationResult."""

import pytest

from src.domain.models.results import OperationResult


def test_success_exposes_value():
    result = OperationResult.success(42)
    assert result.is_success
    assert result.value == 42


def test_success_without_value():
    result = OperationResult.success()
    assert result.is_success
    assert result.value is None


def test_failure_carries_error():
    result = OperationResult.failure("not found")
    assert result.is_failure
    assert result.error == "not found"


def test_failure_value_access_raises():
    with pytest.raises(RuntimeError, match="not found"):
        OperationResult.failure("not found").value
