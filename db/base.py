"""
db/base.py

Declarative base for the waste tracker tables.

Every ``Mapped[datetime]`` column is stored as ``timestamptz``; timestamps
are filled in by PostgreSQL rather than by the application.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    type_annotation_map = {
        datetime: DateTime(timezone=True),
    }


class CreatedAtMixin:
    """Insert time, set by the database."""

    created_at: Mapped[datetime] = mapped_column(nullable=False, server_default=func.now())


class TimestampMixin(CreatedAtMixin):
    """
    Adds updated_at for tables whose rows change after insert (batches are
    soft-deleted in place).
    """

    updated_at: Mapped[datetime] = mapped_column(
        nullable=False,
        server_default=func.now(),
        onupdate=lambda: datetime.now(timezone.utc),
    )
