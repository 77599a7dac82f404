"""Tests for SqlGenericRepository: stamping and session interaction.

These use a mocked AsyncSession; behaviour against a real database is
covered in test_generic_repository_sqlite.py.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

import src.infrastructure.persistence  # noqa: F401
from src.domain.errors import InvalidArgumentError
from src.domain.models.criteria import SearchCriteria
from src.domain.models.pagination import PaginationRequest
from src.infrastructure.persistence.models.catalog import Product, ProductAttribute, Tag
from src.infrastructure.persistence.repositories.generic import SqlGenericRepository

FIXED = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _mock_session(get_result=None):
    session = AsyncMock()
    session.add = MagicMock()
    session.add_all = MagicMock()
    session.get.return_value = get_result
    session.__contains__ = MagicMock(return_value=True)
    return session


def _repo(entity_type=Tag, session=None, **kwargs):
    kwargs.setdefault("clock", lambda: FIXED)
    return SqlGenericRepository(session or _mock_session(), entity_type, **kwargs)


# --- add ---

async def test_add_stamps_created_at_from_clock():
    tag = Tag(name="sale")
    await _repo().add(tag)
    assert tag.created_at == FIXED


async def test_add_stages_entity_on_session():
    session = _mock_session()
    tag = Tag(name="sale")
    returned = await _repo(session=session).add(tag)
    session.add.assert_called_once_with(tag)
    assert returned is tag


async def test_add_does_not_flush_or_commit():
    session = _mock_session()
    await _repo(session=session).add(Tag(name="sale"))
    session.flush.assert_not_awaited()
    session.commit.assert_not_awaited()


async def test_add_records_actor_on_audited_entity():
    tag = Tag(name="sale")
    await _repo(actor="alice").add(tag)
    assert tag.created_by == "alice"


async def test_add_stamps_creation_only_entity():
    attribute = ProductAttribute(attribute_name="Weight", attribute_value="1kg")
    await _repo(ProductAttribute, actor="alice").add(attribute)
    assert attribute.created_at == FIXED


async def test_add_range_stamps_every_entity():
    session = _mock_session()
    tags = [Tag(name="a"), Tag(name="b")]
    await _repo(session=session).add_range(tags)
    assert all(tag.created_at == FIXED for tag in tags)
    session.add_all.assert_called_once_with(tags)


# --- update ---

async def test_update_stamps_updated_at():
    tag = Tag(name="sale")
    await _repo().update(tag)
    assert tag.updated_at == FIXED


async def test_update_keeps_created_at():
    created = datetime(2020, 1, 1, tzinfo=timezone.utc)
    tag = Tag(name="sale", created_at=created)
    await _repo().update(tag)
    assert tag.created_at == created


async def test_update_records_actor():
    tag = Tag(name="sale")
    await _repo(actor="bob").update(tag)
    assert tag.updated_by == "bob"


async def test_update_merges_detached_entity():
    session = _mock_session()
    session.__contains__ = MagicMock(return_value=False)
    merged = Tag(name="merged")
    session.merge.return_value = merged
    assert await _repo(session=session).update(Tag(name="sale")) is merged


# --- delete / soft delete ---

async def test_delete_missing_id_is_a_no_op():
    session = _mock_session(get_result=None)
    await _repo(session=session).delete(123)
    session.delete.assert_not_awaited()


async def test_delete_existing_marks_for_removal():
    tag = Tag(name="sale")
    session = _mock_session(get_result=tag)
    await _repo(session=session).delete(1)
    session.delete.assert_awaited_once_with(tag)


async def test_soft_delete_sets_flag_and_updated_at():
    tag = Tag(name="sale")
    session = _mock_session(get_result=tag)
    await _repo(session=session).soft_delete(1)
    assert tag.is_deleted is True
    assert tag.updated_at == FIXED
    session.delete.assert_not_awaited()


async def test_soft_delete_missing_id_is_a_no_op():
    session = _mock_session(get_result=None)
    await _repo(session=session).soft_delete(1)
    session.merge.assert_not_awaited()


async def test_soft_delete_rejects_unaudited_entity_type():
    session = _mock_session()
    with pytest.raises(InvalidArgumentError, match="ProductAttribute"):
        await _repo(ProductAttribute, session=session).soft_delete(1)
    session.get.assert_not_awaited()


# --- fail-fast validation ---

async def test_unknown_sort_field_fails_before_any_query():
    session = _mock_session()
    request = PaginationRequest(page=1, page_size=10, sort_field="NoSuchField")
    with pytest.raises(InvalidArgumentError):
        await _repo(Product, session=session).get_paginated(request)
    session.execute.assert_not_awaited()
    session.scalar.assert_not_awaited()


async def test_unknown_include_fails_before_any_query():
    session = _mock_session()
    with pytest.raises(InvalidArgumentError):
        await _repo(Product, session=session).find_all(SearchCriteria(include="nope"))
    session.execute.assert_not_awaited()


async def test_get_by_id_without_include_uses_identity_map():
    tag = Tag(name="sale")
    session = _mock_session(get_result=tag)
    key = uuid4()
    assert await _repo(Product, session=session).get_by_id(key) is tag
    session.get.assert_awaited_once_with(Product, key)
    session.execute.assert_not_awaited()


async def test_count_returns_zero_when_store_returns_none():
    session = _mock_session()
    session.scalar.return_value = None
    assert await _repo(session=session).count() == 0


async def test_entity_type_is_exposed():
    assert _repo(Product).entity_type is Product
