"""Tests for SearchCriteria."""

import pytest

from src.domain.errors import InvalidArgumentError
from src.domain.models.criteria import SearchCriteria, split_include_paths


def test_criteria_defaults_are_empty():
    criteria = SearchCriteria()
    assert criteria.filter is None
    assert criteria.order_by is None
    assert criteria.include_paths == []
    assert criteria.as_no_tracking is False


def test_criteria_rejects_negative_skip():
    with pytest.raises(InvalidArgumentError):
        SearchCriteria(skip=-1)


def test_criteria_rejects_negative_take():
    with pytest.raises(InvalidArgumentError):
        SearchCriteria(take=-5)


def test_criteria_accepts_zero_take():
    assert SearchCriteria(take=0).take == 0


def test_invalid_argument_error_is_a_value_error():
    with pytest.raises(ValueError):
        SearchCriteria(skip=-1)


def test_include_paths_are_split_and_stripped():
    criteria = SearchCriteria(include=" images , category.sub_categories ,,")
    assert criteria.include_paths == ["images", "category.sub_categories"]


def test_split_include_paths_handles_none():
    assert split_include_paths(None) == []
