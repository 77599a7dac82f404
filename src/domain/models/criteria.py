"""SearchCriteria: which rows, in what order, with what related data.

The criteria object is store-agnostic.  ``filter`` is either a boolean
clause built from mapped attributes (``Product.base_price > 10``) or a
callable receiving the entity class and returning one
(``lambda p: p.is_featured``).  ``order_by`` receives the statement being
built and returns it ordered, e.g. ``lambda q: q.order_by(Product.name)``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from src.domain.errors import InvalidArgumentError

T = TypeVar("T")


@dataclass
class SearchCriteria(Generic[T]):
    filter: Any | None = None
    order_by: Callable[[Any], Any] | None = None
    include: str | None = None
    as_no_tracking: bool = False
    skip: int | None = None
    take: int | None = None

    def __post_init__(self) -> None:
        if self.skip is not None and self.skip < 0:
            raise InvalidArgumentError(f"skip must be non-negative, got {self.skip}")
        if self.take is not None and self.take < 0:
            raise InvalidArgumentError(f"take must be non-negative, got {self.take}")

    @property
    def include_paths(self) -> list[str]:
        """Non-empty, stripped include paths in declaration order."""
        return split_include_paths(self.include)


def split_include_paths(include: str | None) -> list[str]:
    if not include:
        return []
    return [path.strip() for path in include.split(",") if path.strip()]
