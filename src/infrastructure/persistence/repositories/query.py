"""Translate predicates and include paths into SQLAlchemy constructs.

Everything here runs at query-build time, before the session is touched,
so a bad include path fails without a round trip.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import inspect
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.elements import ClauseElement

from src.domain.errors import InvalidArgumentError
from src.domain.models.criteria import split_include_paths

from .sorting import to_snake_case


def resolve_predicate(entity_type: type, where: Any) -> Any:
    """Return a boolean clause for ``where``.

    Accepts a clause (``Product.sku == "A"``), a mapped boolean attribute
    (``Product.is_featured``) or a callable taking the entity class.
    """
    if where is None:
        return None
    if isinstance(where, ClauseElement) or hasattr(where, "__clause_element__"):
        return where
    if callable(where):
        return where(entity_type)
    raise InvalidArgumentError(
        f"Unsupported predicate for {entity_type.__name__}: {type(where).__name__}"
    )


def include_options(entity_type: type, include: str | None) -> list[Any]:
    """Build one selectinload chain per include path.

    "images,category.sub_categories" loads Product.images and
    Product.category -> Category.sub_categories.
    """
    options: list[Any] = []
    for path in split_include_paths(include):
        current = entity_type
        loader: Any = None
        for segment in path.split("."):
            relationships = inspect(current).relationships
            name = segment.strip()
            if name not in relationships:
                name = to_snake_case(name)
            if name not in relationships:
                raise InvalidArgumentError(
                    f"Unknown include path {path!r}: {current.__name__} has no "
                    f"relationship {segment.strip()!r}"
                )
            attribute = getattr(current, name)
            loader = selectinload(attribute) if loader is None else loader.selectinload(attribute)
            current = relationships[name].mapper.class_
        if loader is not None:
            options.append(loader)
    return options
