"""Tests for PaginationRequest and PaginatedResult."""

import pytest
from pydantic import ValidationError

from src.domain.models.pagination import PaginatedResult, PaginationRequest


# --- PaginationRequest ---

def test_request_defaults_to_first_page_of_ten():
    request = PaginationRequest()
    assert (request.page, request.page_size) == (1, 10)


def test_request_rejects_page_zero():
    with pytest.raises(ValidationError):
        PaginationRequest(page=0, page_size=10)


def test_request_rejects_page_size_zero():
    with pytest.raises(ValidationError):
        PaginationRequest(page=1, page_size=0)


def test_request_validation_error_is_a_value_error():
    with pytest.raises(ValueError):
        PaginationRequest(page=-1)


def test_request_offset_skips_previous_pages():
    assert PaginationRequest(page=3, page_size=25).offset == 50


def test_request_sort_defaults_to_ascending_without_field():
    request = PaginationRequest()
    assert request.sort_field is None
    assert request.sort_descending is False


# --- PaginatedResult ---

def test_result_total_pages_rounds_up():
    result = PaginatedResult(items=[4, 5, 6], total_count=7, page=2, page_size=3)
    assert result.total_pages == 3


def test_result_has_next_and_previous_in_the_middle():
    result = PaginatedResult(items=[4, 5, 6], total_count=7, page=2, page_size=3)
    assert result.has_next is True
    assert result.has_previous is True


def test_result_last_page_has_no_next():
    result = PaginatedResult(items=[7], total_count=7, page=3, page_size=3)
    assert result.has_next is False


def test_result_empty_set_has_zero_pages():
    result = PaginatedResult(items=[], total_count=0, page=1, page_size=10)
    assert result.total_pages == 0
    assert result.has_next is False


def test_result_rejects_more_items_than_page_size():
    with pytest.raises(ValidationError):
        PaginatedResult(items=[1, 2, 3], total_count=3, page=1, page_size=2)


def test_result_rejects_negative_total():
    with pytest.raises(ValidationError):
        PaginatedResult(items=[], total_count=-1, page=1, page_size=2)


def test_result_holds_arbitrary_objects():
    class _Row:
        pass

    row = _Row()
    result = PaginatedResult(items=[row], total_count=1, page=1, page_size=1)
    assert result.items[0] is row
