"""SQLAlchemy-backed record stores.

A store is the innermost layer of a service chain: it turns entity
operations into session queries and does no validation of its own.

Lookups that match nothing raise ``NotFoundError``. Every other failure is
the store's own SQLAlchemy exception, propagated unchanged.
"""

import logging
from typing import Any, Generic, TypeVar

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from picturebook.errors import NotFoundError
from picturebook.models.mixins import copy_columns

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


def commit(db: Session) -> None:
    """Commit the session, rolling back before re-raising if the store refuses."""
    try:
        db.commit()
    except SQLAlchemyError as e:
        logger.warning(f"Commit failed, rolling back: {e}")
        db.rollback()
        raise


class SQLStore(Generic[ModelT]):
    """Single-record CRUD for one mapped model."""

    model: type[ModelT]

    def __init__(self, db: Session):
        self.db = db

    def by_id(self, id: Any) -> ModelT:
        return self.first(self.model.id == id)

    def create(self, record: ModelT) -> None:
        """Insert the record, backfilling its id and timestamps."""
        self.db.add(record)
        commit(self.db)
        self.db.refresh(record)
        logger.debug(f"Created {record!r}")

    def update(self, record: ModelT) -> None:
        """Overwrite the stored record with every column of ``record``."""
        existing = self.by_id(record.id)
        if existing is not record:
            copy_columns(record, existing)
        self.mark_modified(existing)
        existing.touch()
        commit(self.db)
        self.db.refresh(existing)
        if existing is not record:
            record.created_at = existing.created_at
            record.updated_at = existing.updated_at
        logger.debug(f"Updated {existing!r}")

    def delete(self, id: Any) -> None:
        record = self.by_id(id)
        self.db.delete(record)
        commit(self.db)
        logger.debug(f"Deleted {self.model.__name__} {id}")

    def first(self, *criteria) -> ModelT:
        """Return the first record matching ``criteria`` or raise NotFoundError."""
        record = self.db.query(self.model).filter(*criteria).first()
        if record is None:
            raise NotFoundError()
        return record

    def all(self, *criteria) -> list[ModelT]:
        return self.db.query(self.model).filter(*criteria).all()

    def discard(self, record: ModelT) -> None:
        """Reload ``record`` from the database so a later commit cannot write rejected values."""
        state = inspect(record)
        if state.persistent and state.session is self.db:
            self.db.refresh(record)

    def mark_modified(self, record: ModelT) -> None:
        """Hook for flagging columns whose in-place mutations SQLAlchemy cannot see."""
