"""Mixins for SQLAlchemy models."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, func, inspect


class TimestampMixin:
    """Mixin to add created_at and updated_at timestamp columns."""

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def touch(self) -> None:
        """Mark the record as updated now."""
        self.updated_at = datetime.now(UTC)


# Columns owned by the store rather than by callers
MANAGED_COLUMNS = frozenset({"id", "created_at", "updated_at"})


def copy_columns(source, target) -> None:
    """Copy every caller-owned column value from ``source`` onto ``target``."""
    for attr in inspect(type(target)).column_attrs:
        if attr.key not in MANAGED_COLUMNS:
            setattr(target, attr.key, getattr(source, attr.key))
