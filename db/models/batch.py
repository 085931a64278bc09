"""
db/models/batch.py

Batch model: one completed CSV import and the waste records it owns.
"""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, CreatedAtMixin, TimestampMixin

if TYPE_CHECKING:
    from db.models.dictionary import Location, WasteType


class BatchStatus:
    """Lifecycle states of a batch. Imports always create ACTIVE batches."""

    ACTIVE = "active"
    DELETED = "deleted"


class Batch(Base, TimestampMixin):
    """
    Represents one uploaded CSV file.

    A batch and all of its waste records are written in a single
    transaction; deleting a batch only flips its status.
    """

    __tablename__ = "batches"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Identity of the uploading user",
    )
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=BatchStatus.ACTIVE,
        comment="active | deleted",
    )

    # ── Relationships ──────────────────────────────────────────────────────────

    records: Mapped[list["WasteRecord"]] = relationship(
        "WasteRecord",
        back_populates="batch",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("status IN ('active', 'deleted')", name="ck_batches_status"),
        Index("ix_batches_user_status_created", "user_id", "status", "created_at"),
    )


class WasteRecord(Base, CreatedAtMixin):
    """
    One validated CSV row: a quantity of a waste type at a location on a date.
    """

    __tablename__ = "waste_data"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    batch_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("batches.id", ondelete="CASCADE"),
        nullable=False,
    )
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    waste_type_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("waste_types.id"),
        nullable=False,
    )
    location_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("locations.id"),
        nullable=False,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    batch: Mapped["Batch"] = relationship("Batch", back_populates="records")
    waste_type: Mapped["WasteType"] = relationship("WasteType")
    location: Mapped["Location"] = relationship("Location")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_waste_data_quantity_positive"),
        Index("ix_waste_data_batch_id", "batch_id"),
        Index("ix_waste_data_date", "date"),
    )
