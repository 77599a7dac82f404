"""Dynamic sort resolution: field-name string -> ORDER BY clause.

Sortable fields are registered once per entity type at startup, either
explicitly or by reading the mapper's column attributes:

    sort_registry.register_columns(Product, exclude=("description",))
    sort_registry.register(Product, category_name=Category.name)

Resolution accepts the attribute name or its camelCase / PascalCase
spelling ("basePrice", "BasePrice" -> "base_price").  No secondary sort key
is added; ties keep whatever order the store returns.
"""

from __future__ import annotations

import re
import threading
from collections.abc import Iterable
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.sql.elements import ColumnElement

from src.domain.errors import InvalidArgumentError

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def to_snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


class SortRegistry:
    def __init__(self) -> None:
        self._fields: dict[type, dict[str, ColumnElement[Any]]] = {}
        self._lock = threading.Lock()

    def register(self, entity_type: type, **accessors: Any) -> None:
        """Register named sort accessors (mapped attributes or SQL expressions)."""
        with self._lock:
            fields = dict(self._fields.get(entity_type, {}))
            for name, accessor in accessors.items():
                fields[name] = accessor
            self._fields[entity_type] = fields

    def register_columns(self, entity_type: type, exclude: Iterable[str] = ()) -> None:
        """Register every mapped column attribute of entity_type as sortable."""
        skipped = set(exclude)
        mapper = inspect(entity_type)
        self.register(
            entity_type,
            **{
                attr.key: getattr(entity_type, attr.key)
                for attr in mapper.column_attrs
                if attr.key not in skipped
            },
        )

    def is_registered(self, entity_type: type) -> bool:
        return entity_type in self._fields

    def fields_for(self, entity_type: type) -> list[str]:
        return sorted(self._fields.get(entity_type, {}))

    def accessor(self, entity_type: type, field: str) -> ColumnElement[Any]:
        fields = self._fields.get(entity_type)
        if not fields:
            raise InvalidArgumentError(
                f"No sortable fields registered for {entity_type.__name__}"
            )
        accessor = fields.get(field)
        if accessor is None:
            accessor = fields.get(to_snake_case(field))
        if accessor is None:
            raise InvalidArgumentError(
                f"Unknown sort field {field!r} for {entity_type.__name__}; "
                f"expected one of: {', '.join(sorted(fields))}"
            )
        return accessor

    def resolve(self, entity_type: type, field: str, descending: bool = False) -> ColumnElement[Any]:
        accessor = self.accessor(entity_type, field)
        return accessor.desc() if descending else accessor.asc()


sort_registry = SortRegistry()
