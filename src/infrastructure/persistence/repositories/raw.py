"""Raw-statement and stored-procedure escape hatches.

Positional parameters bind to :p0, :p1, ... .  Procedures are called with
PostgreSQL syntax: row-returning ones as ``SELECT * FROM name(...)``,
side-effect ones as ``CALL name(...)``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any

from sqlalchemy import TextClause, inspect, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

_PROCEDURE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


def positional_params(params: Sequence[Any]) -> dict[str, Any]:
    return {f"p{index}": value for index, value in enumerate(params)}


def _argument_list(count: int) -> str:
    return ", ".join(f":p{index}" for index in range(count))


def _checked_name(procedure_name: str) -> str:
    if not _PROCEDURE_NAME.match(procedure_name):
        raise InvalidArgumentError(f"Invalid procedure name {procedure_name!r}")
    return procedure_name


def procedure_select(procedure_name: str, count: int) -> TextClause:
    return text(f"SELECT * FROM {_checked_name(procedure_name)}({_argument_list(count)})")


def procedure_call(procedure_name: str, count: int) -> TextClause:
    return text(f"CALL {_checked_name(procedure_name)}({_argument_list(count)})")


def _is_mapped(result_type: type) -> bool:
    return inspect(result_type, raiseerr=False) is not None


async def run_statement(session: AsyncSession, sql: str, params: Sequence[Any]) -> int:
    logger.debug("Executing raw statement with %d parameter(s)", len(params))
    result = await session.execute(text(sql), positional_params(params))
    return result.rowcount


async def run_entity_query(
    session: AsyncSession, entity_type: type, sql: str, params: Sequence[Any]
) -> list[Any]:
    logger.debug("Mapping raw query onto %s", entity_type.__name__)
    stmt = select(entity_type).from_statement(text(sql))
    result = await session.execute(stmt, positional_params(params))
    return list(result.scalars().all())


async def run_procedure(
    session: AsyncSession,
    procedure_name: str,
    params: Sequence[Any],
    result_type: type | None = None,
) -> list[Any]:
    """Run a row-returning procedure.

    Rows map onto result_type when it is a mapped entity; any other
    result_type is called with each row's columns as keyword arguments.
    Without result_type rows come back as plain dicts.
    """
    stmt = procedure_select(procedure_name, len(params))
    logger.debug("Executing stored procedure %s with %d parameter(s)", procedure_name, len(params))
    if result_type is not None and _is_mapped(result_type):
        result = await session.execute(
            select(result_type).from_statement(stmt), positional_params(params)
        )
        return list(result.scalars().all())
    result = await session.execute(stmt, positional_params(params))
    rows = [dict(row) for row in result.mappings().all()]
    if result_type is None:
        return rows
    return [result_type(**row) for row in rows]


async def run_non_query_procedure(
    session: AsyncSession, procedure_name: str, params: Sequence[Any]
) -> int:
    stmt = procedure_call(procedure_name, len(params))
    logger.debug("Calling stored procedure %s with %d parameter(s)", procedure_name, len(params))
    result = await session.execute(stmt, positional_params(params))
    return result.rowcount
