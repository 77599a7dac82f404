"""Type-indexed registry of repository classes.

The unit of work asks the registry which class to instantiate for an entity
type.  Entities without a registration get SqlGenericRepository, so no
per-entity factory is needed; entities with extra queries register their
subclass once at import time.
"""

from __future__ import annotations

import threading

from .generic import SqlGenericRepository


class RepositoryRegistry:
    def __init__(self, default: type[SqlGenericRepository] = SqlGenericRepository) -> None:
        self._default = default
        self._types: dict[type, type[SqlGenericRepository]] = {}
        self._lock = threading.Lock()

    def register(self, entity_type: type, repository_type: type[SqlGenericRepository]) -> None:
        if not issubclass(repository_type, SqlGenericRepository):
            raise TypeError(
                f"{repository_type.__name__} must subclass SqlGenericRepository"
            )
        with self._lock:
            self._types[entity_type] = repository_type

    def repository_type_for(self, entity_type: type) -> type[SqlGenericRepository]:
        return self._types.get(entity_type, self._default)


repository_registry = RepositoryRegistry()
