"""Audit capabilities that entities opt into explicitly.

An entity class lists the mixin among its bases; the generic repository
checks for the mixin with isinstance() and never looks for same-named
attributes.

    class Tag(AuditMixin, Base): ...              # full audit + soft delete
    class ProductAttribute(CreationStampedMixin, Base): ...   # created_at only
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import Boolean, DateTime, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CreationStampedMixin:
    """created_at, stamped again by the repository when the row is added."""

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("created_at", utcnow())
        super().__init__(**kwargs)


class AuditMixin(CreationStampedMixin):
    """The full audited-entity shape.

    external_id is a correlation identifier independent of the primary key,
    generated when the instance is constructed.  is_deleted is only ever set
    by soft deletes; reads do not filter on it.
    """

    external_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, unique=True)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_by: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    updated_by: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    last_sync_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("external_id", uuid.uuid4())
        kwargs.setdefault("is_deleted", False)
        kwargs.setdefault("is_active", False)
        super().__init__(**kwargs)
