"""Pagination request and result value objects."""

from __future__ import annotations

from math import ceil
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

T = TypeVar("T")


class PaginationRequest(BaseModel):
    """One page of a sorted query.

    sort_field is resolved against the entity's registered sortable fields
    at query-build time; an unknown name is rejected before the store is hit.
    """

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1)
    sort_field: str | None = None
    sort_descending: bool = False

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class PaginatedResult(BaseModel, Generic[T]):
    """Items for one page plus the size of the whole filtered set.

    total_count is computed before skip/take so callers can report an
    X-Total-Count independent of the slice.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    items: list[T] = Field(default_factory=list)
    total_count: int = Field(ge=0)
    page: int = Field(ge=1)
    page_size: int = Field(ge=1)

    @model_validator(mode="after")
    def _page_not_larger_than_page_size(self) -> PaginatedResult[Any]:
        if len(self.items) > self.page_size:
            raise ValueError(
                f"page holds {len(self.items)} items but page_size is {self.page_size}"
            )
        return self

    @property
    def total_pages(self) -> int:
        return ceil(self.total_count / self.page_size)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1
