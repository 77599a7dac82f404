"""Entity contract shared by every persisted record."""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

K = TypeVar("K")


@runtime_checkable
class Entity(Protocol[K]):
    """Any record exposing a unique ``id`` of key type K.

    Audit fields are not part of this contract; records opt into them
    explicitly through the persistence mixins.
    """

    id: K
