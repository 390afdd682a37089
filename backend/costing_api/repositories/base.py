"""
Base Repository implementation.

Maps aggregates to rows and enforces the lifecycle rules shared by every
aggregate: soft-deleted rows are invisible unless asked for, and a save only
applies when the stored version still matches the aggregate's version.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import Select, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from shared.config.constants import Limits
from shared.config.logging import get_logger
from shared.utils.clock import ensure_utc, utcnow
from shared.utils.exceptions import (
    DependencyFailureError,
    DuplicateEntityError,
    NotFoundError,
    VersionConflictError,
)

from costing_api.domain.lifecycle import AuditableAggregate
from costing_api.models.base import AuditMixin

logger = get_logger(__name__)

AggregateT = TypeVar("AggregateT", bound=AuditableAggregate)
RecordT = TypeVar("RecordT", bound=AuditMixin)


class AggregateRepository(ABC, Generic[AggregateT, RecordT]):
    """
    Abstract base repository for aggregate roots.

    Subclasses must implement:
    - model: The root SQLAlchemy model class
    - _root_values(): Column values of the root row owned by the aggregate
    - _save_children(): Persist owned child rows inside the save transaction
    - _to_domain(): Rebuild aggregates from root rows (children batch-loaded)
    """

    entity_name: str = "Entidad"

    def __init__(self, db: Session):
        self._db = db

    @property
    @abstractmethod
    def model(self) -> type[RecordT]:
        """Return the SQLAlchemy model class."""
        ...

    @abstractmethod
    def _root_values(self, aggregate: AggregateT) -> dict[str, Any]:
        ...

    @abstractmethod
    def _save_children(self, aggregate: AggregateT) -> None:
        ...

    @abstractmethod
    def _to_domain(self, records: Sequence[RecordT]) -> list[AggregateT]:
        ...

    def _base_query(self, include_deleted: bool = False) -> Select:
        query = select(self.model)
        if not include_deleted:
            query = query.where(self.model.deleted_at.is_(None))
        return query

    def _duplicate_error(self, aggregate: AggregateT, error: IntegrityError) -> Exception:
        """Translate a unique violation raised while saving or restoring."""
        return DuplicateEntityError(self.entity_name, aggregate.id)

    # =========================================================================
    # Error translation
    # =========================================================================

    @contextmanager
    def _store_errors(self, operation: str, entity_id: str | None = None) -> Iterator[None]:
        """
        Roll back and translate driver failures into DependencyFailureError.

        IntegrityError passes through untouched; callers map it to a duplicate.
        """
        try:
            yield
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            self._db.rollback()
            orig = getattr(e, "orig", None)
            raise DependencyFailureError(
                "database",
                reason=str(orig) if orig is not None else str(e),
                operation=operation,
                entity_id=entity_id,
            ) from e

    # =========================================================================
    # Queries
    # =========================================================================

    def find_by_id(self, entity_id: str, include_deleted: bool = False) -> AggregateT | None:
        """
        Find aggregate by ID.

        Args:
            entity_id: Aggregate ID
            include_deleted: Include soft-deleted aggregates

        Returns:
            Aggregate or None
        """
        with self._store_errors("find_by_id", entity_id):
            record = self._db.scalar(
                self._base_query(include_deleted).where(self.model.id == entity_id)
            )
            if record is None:
                return None
            return self._to_domain([record])[0]

    def find_by_ids(self, entity_ids: Sequence[str]) -> list[AggregateT]:
        """
        Find active aggregates by IDs.

        Unknown and soft-deleted ids are skipped; order is not guaranteed.
        """
        if not entity_ids:
            return []
        with self._store_errors("find_by_ids"):
            records = self._db.scalars(
                self._base_query().where(self.model.id.in_(list(entity_ids)))
            ).all()
            return self._to_domain(records)

    def find_page(self, limit: int, offset: int) -> tuple[list[AggregateT], int]:
        """
        One page of active aggregates, newest first, plus the total count.
        """
        limit = min(max(1, limit), Limits.MAX_PAGE_SIZE)
        offset = max(0, offset)
        with self._store_errors("find_page"):
            total = self._db.scalar(
                select(func.count())
                .select_from(self.model)
                .where(self.model.deleted_at.is_(None))
            ) or 0
            records = self._db.scalars(
                self._base_query()
                .order_by(self.model.created_at.desc(), self.model.id)
                .offset(offset)
                .limit(limit)
            ).all()
            return self._to_domain(records), total

    # =========================================================================
    # Save (optimistic concurrency)
    # =========================================================================

    def save(self, aggregate: AggregateT) -> AggregateT:
        """
        Persist the aggregate and its children in one transaction.

        A new aggregate (version 0) is inserted at version 1. An existing one
        is written only if the stored version still equals aggregate.version;
        the stored version then moves forward by one.

        Raises:
            VersionConflictError: Stored version differs. Nothing is written.
            NotFoundError: The stored row is gone or soft-deleted.
            DuplicateEntityError: A unique constraint rejected the write.
            DependencyFailureError: The database is unreachable.
        """
        now = utcnow()
        if aggregate.created_at is None:
            aggregate.created_at = now
        if aggregate.last_modified_at is None:
            aggregate.last_modified_at = aggregate.created_at

        with self._store_errors("save", aggregate.id):
            try:
                if aggregate.is_new:
                    self._insert_root(aggregate)
                else:
                    self._update_root(aggregate)
                self._save_children(aggregate)
                self._db.commit()
            except IntegrityError as e:
                self._db.rollback()
                raise self._duplicate_error(aggregate, e) from e

        aggregate.version += 1
        logger.debug(
            "Aggregate saved",
            entity=self.entity_name,
            entity_id=aggregate.id,
            version=aggregate.version,
        )
        return aggregate

    def _insert_root(self, aggregate: AggregateT) -> None:
        record = self.model(
            id=aggregate.id,
            created_at=aggregate.created_at,
            created_by=aggregate.created_by,
            last_modified_at=aggregate.last_modified_at,
            last_modified_by=aggregate.last_modified_by,
            version=1,
            deleted_at=None,
            **self._root_values(aggregate),
        )
        self._db.add(record)
        self._db.flush()

    def _update_root(self, aggregate: AggregateT) -> None:
        result = self._db.execute(
            update(self.model)
            .where(
                self.model.id == aggregate.id,
                self.model.version == aggregate.version,
                self.model.deleted_at.is_(None),
            )
            .values(
                version=self.model.version + 1,
                last_modified_at=aggregate.last_modified_at,
                last_modified_by=aggregate.last_modified_by,
                **self._root_values(aggregate),
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self._db.rollback()
            raise self._stale_write_error(aggregate)

    def _stale_write_error(self, aggregate: AggregateT) -> Exception:
        row = self._db.execute(
            select(self.model.version, self.model.deleted_at).where(self.model.id == aggregate.id)
        ).first()
        if row is None or row.deleted_at is not None:
            return NotFoundError(self.entity_name, aggregate.id)
        return VersionConflictError(
            self.entity_name,
            aggregate.id,
            expected=aggregate.version,
            actual=row.version,
        )

    # =========================================================================
    # Soft delete / restore
    # =========================================================================

    def soft_delete(self, entity_id: str, now: datetime | None = None) -> bool:
        """
        Mark an active aggregate as deleted.

        Audit fields and version are left untouched.

        Returns:
            False if the aggregate does not exist or is already deleted
        """
        with self._store_errors("soft_delete", entity_id):
            result = self._db.execute(
                update(self.model)
                .where(self.model.id == entity_id, self.model.deleted_at.is_(None))
                .values(deleted_at=now or utcnow())
                .execution_options(synchronize_session=False)
            )
            changed = result.rowcount > 0
            self._db.commit()
        return changed

    def restore(self, entity_id: str) -> bool:
        """
        Clear the delete timestamp of a soft-deleted aggregate.

        Returns:
            False if the aggregate does not exist or is not deleted

        Raises:
            DuplicateEntityError: Restoring would break a uniqueness rule
        """
        with self._store_errors("restore", entity_id):
            try:
                result = self._db.execute(
                    update(self.model)
                    .where(self.model.id == entity_id, self.model.deleted_at.is_not(None))
                    .values(deleted_at=None)
                    .execution_options(synchronize_session=False)
                )
                changed = result.rowcount > 0
                self._db.commit()
            except IntegrityError as e:
                self._db.rollback()
                aggregate = self.find_by_id(entity_id, include_deleted=True)
                raise self._duplicate_error(aggregate, e) from e
        return changed

    # =========================================================================
    # Mapping helpers
    # =========================================================================

    @staticmethod
    def _audit_fields(record: AuditMixin) -> dict[str, Any]:
        return {
            "id": record.id,
            "created_at": ensure_utc(record.created_at),
            "created_by": record.created_by,
            "last_modified_at": ensure_utc(record.last_modified_at),
            "last_modified_by": record.last_modified_by,
            "version": record.version,
            "deleted_at": ensure_utc(record.deleted_at) if record.deleted_at else None,
        }
