"""
app/repositories/batch_repository.py

Persistence layer for batches and their waste records.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date
from typing import Any

from sqlalchemy import func, insert, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.orm import Session

from app.domain.waste_batch import BatchSummary, ImportedBatch
from db.models.batch import Batch, BatchStatus, WasteRecord
from db.models.dictionary import Location, WasteType

_LOCATION_NAME_CONSTRAINT = "uq_locations_name"


class BatchRepository:
    """
    Repository for batch creation, listing, and soft deletion.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def import_batch_data(
        self,
        *,
        user_id: str,
        filename: str,
        rows: Sequence[dict[str, Any]],
    ) -> ImportedBatch:
        """
        Create one active batch and all of its records in a single transaction.

        Each row is ``{"date": "YYYY-MM-DD", "waste_type", "location",
        "quantity"}``. Waste types must already exist; locations are created
        on first use. Any failure rolls back the batch and every record.
        """

        try:
            batch_row = self._session.execute(
                insert(Batch)
                .values(user_id=user_id, filename=filename, status=BatchStatus.ACTIVE)
                .returning(Batch.id, Batch.filename, Batch.created_at)
            ).one()

            waste_type_ids = self._resolve_waste_type_ids(row["waste_type"] for row in rows)
            location_ids = self._ensure_location_ids(row["location"] for row in rows)

            payloads = [
                {
                    "batch_id": batch_row.id,
                    "date": date.fromisoformat(row["date"]),
                    "waste_type_id": waste_type_ids[row["waste_type"]],
                    "location_id": location_ids[row["location"]],
                    "quantity": row["quantity"],
                }
                for row in rows
            ]
            if payloads:
                self._session.execute(insert(WasteRecord), payloads)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        return ImportedBatch(
            batch_id=batch_row.id,
            filename=batch_row.filename,
            record_count=len(payloads),
            created_at=batch_row.created_at,
        )

    def count_active(self, user_id: str) -> int:
        stmt = (
            select(func.count())
            .select_from(Batch)
            .where(Batch.user_id == user_id, Batch.status == BatchStatus.ACTIVE)
        )
        return self._session.execute(stmt).scalar_one()

    def list_active(self, user_id: str, *, offset: int, limit: int) -> list[BatchSummary]:
        """
        Return active batches for one user, newest first, with record counts.
        """

        record_count = func.count(WasteRecord.id).label("record_count")
        stmt = (
            select(Batch.id, Batch.filename, Batch.status, Batch.created_at, record_count)
            .outerjoin(WasteRecord, WasteRecord.batch_id == Batch.id)
            .where(Batch.user_id == user_id, Batch.status == BatchStatus.ACTIVE)
            .group_by(Batch.id)
            .order_by(Batch.created_at.desc(), Batch.id.desc())
            .offset(max(0, offset))
            .limit(max(1, limit))
        )
        return [
            BatchSummary(
                id=row.id,
                filename=row.filename,
                status=row.status,
                record_count=row.record_count or 0,
                created_at=row.created_at,
            )
            for row in self._session.execute(stmt)
        ]

    def soft_delete(self, batch_id: int, user_id: str) -> bool:
        """
        Mark an active batch owned by ``user_id`` as deleted.

        Returns False when no such active batch exists for that user.
        """

        stmt = (
            update(Batch)
            .where(
                Batch.id == batch_id,
                Batch.user_id == user_id,
                Batch.status == BatchStatus.ACTIVE,
            )
            .values(status=BatchStatus.DELETED)
        )
        try:
            result = self._session.execute(stmt)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        return result.rowcount > 0

    def _resolve_waste_type_ids(self, names: Iterable[str]) -> dict[str, int]:
        wanted = set(names)
        if not wanted:
            return {}

        lowered = func.lower(WasteType.name)
        stmt = select(WasteType.id, lowered.label("name")).where(lowered.in_(wanted))
        resolved = {row.name: row.id for row in self._session.execute(stmt)}

        unknown = sorted(wanted - resolved.keys())
        if unknown:
            raise LookupError(f"Unknown waste types: {', '.join(unknown)}")
        return resolved

    def _ensure_location_ids(self, names: Iterable[str]) -> dict[str, int]:
        wanted = sorted(set(names))
        if not wanted:
            return {}

        self._session.execute(
            pg_insert(Location)
            .values([{"name": name} for name in wanted])
            .on_conflict_do_nothing(constraint=_LOCATION_NAME_CONSTRAINT)
        )
        stmt = select(Location.id, Location.name).where(Location.name.in_(wanted))
        return {row.name: row.id for row in self._session.execute(stmt)}
