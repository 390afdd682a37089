"""
Base class and AuditMixin for all SQLAlchemy ORM models.

Rows are plain storage records; aggregate behaviour lives in
costing_api.domain and the repositories map between the two.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class AuditMixin:
    """
    Mixin providing identity, audit trail, version and soft delete columns.

    Fields added:
    - id: UUID string primary key
    - created_at, created_by: Creation audit
    - last_modified_at, last_modified_by: Modification audit
    - version: Optimistic concurrency counter, bumped on every save
    - deleted_at: Soft delete timestamp (NULL = active)
    """

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    last_modified_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_modified_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        state = "deleted" if self.deleted_at is not None else "active"
        return f"<{class_name}(id={self.id}, v{self.version}, {state})>"
