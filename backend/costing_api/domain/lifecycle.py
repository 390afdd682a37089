"""
Audit, version and soft-delete fields shared by both aggregates.

The version counter is owned by the store: 0 means "never saved", and every
successful save moves it forward by exactly one.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from shared.utils.clock import utcnow


def new_id() -> str:
    """Opaque, stable identity for aggregates and their children."""
    return str(uuid.uuid4())


@dataclass(kw_only=True)
class AuditableAggregate:
    """Base for aggregate roots: identity, audit trail, version, soft delete."""

    id: str = field(default_factory=new_id)
    created_at: datetime | None = None
    created_by: str | None = None
    last_modified_at: datetime | None = None
    last_modified_by: str | None = None
    version: int = 0
    deleted_at: datetime | None = None

    @property
    def is_new(self) -> bool:
        return self.version == 0

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def set_created_by(self, user_id: str, now: datetime | None = None) -> None:
        """Stamp creation audit fields on a new aggregate."""
        now = now or utcnow()
        self.created_at = now
        self.created_by = user_id
        self.last_modified_at = now
        self.last_modified_by = user_id

    def set_updated_by(self, user_id: str, now: datetime | None = None) -> None:
        """Stamp modification audit fields before a save."""
        self.last_modified_at = now or utcnow()
        self.last_modified_by = user_id
