# devicehub/repositories/base.py
import logging
from typing import Any, Generic, Protocol, TypeVar

from sqlalchemy import delete, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from devicehub.core import validation
from devicehub.core.errors import (
    NoFieldsProvidedError,
    ReferenceMissingError,
    normalize_storage_error,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)


class EntityLookup(Protocol):
    """Anything that can answer "does entity X with this id exist?"."""

    def get_by_id(self, entity_id: int) -> Any | None: ...


def ensure_exists(lookup: EntityLookup, entity_id: int, field: str, entity: str) -> None:
    """
    Foreign key existence check done before any write.

    The store enforces the same constraint; a row deleted between this
    check and the write surfaces as a StorageFailureError instead.
    """
    if lookup.get_by_id(entity_id) is None:
        raise ReferenceMissingError(field, entity)


class Repository(Generic[ModelT]):
    """
    Write plumbing shared by every repository.

    Each write is issued and committed in one place, and storage errors
    are normalized there (DuplicateError / StorageFailureError).
    """

    model: type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    @property
    def table(self) -> str:
        return self.model.__tablename__

    def _insert(self, row: ModelT) -> ModelT:
        try:
            self.session.add(row)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise normalize_storage_error(exc) from exc
        self.session.refresh(row)
        logger.info("Created %s row", self.table)
        return row

    def _execute_write(self, stmt) -> int:
        """Run an UPDATE/DELETE and return the affected row count."""
        try:
            result = self.session.exec(stmt)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise normalize_storage_error(exc) from exc
        return result.rowcount or 0

    def reset(self) -> None:
        """
        Remove all rows (dev/test helper), then try to restart the
        auto-increment counter. The counter reset is MySQL-only syntax,
        so a failure there is logged and never propagated.
        """
        self._execute_write(delete(self.model))
        try:
            self.session.exec(text(f"ALTER TABLE {self.table} AUTO_INCREMENT = 1"))
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.info("Auto-increment reset skipped for %s: %s", self.table, exc)


class EntityRepository(Repository[ModelT]):
    """
    CRUD for entities keyed by a single integer `id`.

    Contract:
      - get_by_id / unique lookups return None on a miss, never raise
      - list() is ordered by id ascending, limit clamped to [1, 100]
      - update_by_id / delete_by_id return affected rows; 0 means not found
    """

    def get_by_id(self, entity_id: Any) -> ModelT | None:
        """Return a row by primary key, or None if not found / not a valid id."""
        if isinstance(entity_id, bool) or not isinstance(entity_id, int) or entity_id <= 0:
            return None
        if not validation.in_id_range(entity_id):
            return None
        return self.session.get(self.model, entity_id)

    def _get_by(self, column, value: Any) -> ModelT | None:
        if not value:
            return None
        stmt = select(self.model).where(column == value).limit(1)
        return self.session.exec(stmt).first()

    def list(self, limit: Any = validation.DEFAULT_LIMIT, offset: Any = 0) -> list[ModelT]:
        stmt = (
            select(self.model)
            .order_by(self.model.id)
            .offset(validation.clamp_offset(offset))
            .limit(validation.clamp_limit(limit))
        )
        return list(self.session.exec(stmt).all())

    def _update(self, entity_id: Any, values: dict[str, Any]) -> int:
        if not values:
            raise NoFieldsProvidedError()
        entity_id = validation.positive_int(entity_id, "id")
        if not validation.in_id_range(entity_id):
            return 0
        stmt = update(self.model).where(self.model.id == entity_id).values(**values)
        affected = self._execute_write(stmt)
        logger.info("Updated %s id=%s affected=%d", self.table, entity_id, affected)
        return affected

    def delete_by_id(self, entity_id: Any) -> int:
        entity_id = validation.positive_int(entity_id, "id")
        if not validation.in_id_range(entity_id):
            return 0
        affected = self._execute_write(
            delete(self.model).where(self.model.id == entity_id)
        )
        logger.info("Deleted %s id=%s affected=%d", self.table, entity_id, affected)
        return affected
