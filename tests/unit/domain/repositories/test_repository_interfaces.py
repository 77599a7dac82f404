"""Tests for src/domain/repositories interfaces."""

import pytest

from src.domain.repositories.base import ReadRepository, Repository
from src.domain.repositories.unit_of_work import TransactionState, UnitOfWork


def test_repository_cannot_be_instantiated_directly():
    with pytest.raises(TypeError):
        Repository()  # type: ignore[abstract]


def test_read_repository_partial_subclass_cannot_instantiate():
    class _Partial(ReadRepository):
        async def get_by_id(self, id, include=None): return None
        # everything else missing

    with pytest.raises(TypeError):
        _Partial()  # type: ignore[abstract]


def test_read_repository_full_subclass_instantiates():
    class _Full(ReadRepository):
        async def get_by_id(self, id, include=None): return None
        async def first_matching(self, where, include=None): return None
        async def get_all(self, include=None): return []
        async def find_all(self, where_or_criteria): return []
        async def get_paginated(self, request, where_or_criteria=None): return None
        async def count(self, where=None): return 0
        async def exists(self, id): return False
        async def exists_where(self, where): return False

    assert _Full() is not None


def test_unit_of_work_cannot_be_instantiated_directly():
    with pytest.raises(TypeError):
        UnitOfWork()  # type: ignore[abstract]


class _RecordingUnitOfWork(UnitOfWork):
    def __init__(self):
        self.closed = False
        self.state = TransactionState.NONE

    def get_repository(self, entity_type, key_type=None): return None

    @property
    def transaction_state(self): return self.state

    async def save_changes(self): return 0
    async def begin_transaction(self): self.state = TransactionState.OPEN
    async def commit_transaction(self): self.state = TransactionState.NONE
    async def rollback_transaction(self): self.state = TransactionState.NONE
    async def execute_sql_raw(self, sql, *params): return 0
    async def execute_stored_procedure(self, procedure_name, *params, result_type=None): return []
    async def execute_non_query_stored_procedure(self, procedure_name, *params): return 0
    async def close(self): self.closed = True


async def test_unit_of_work_context_manager_closes():
    uow = _RecordingUnitOfWork()
    async with uow as entered:
        assert entered is uow
    assert uow.closed is True


async def test_has_active_transaction_follows_state():
    uow = _RecordingUnitOfWork()
    assert uow.has_active_transaction is False
    await uow.begin_transaction()
    assert uow.has_active_transaction is True
