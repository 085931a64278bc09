"""
tests/conftest.py

In-memory stand-ins for the storage layer. No database is touched.
"""

from __future__ import annotations

import io
from collections.abc import Callable, Sequence
from datetime import date, datetime, timedelta, timezone
from typing import Any

import pytest
from fastapi import UploadFile

from app.domain.waste_batch import BatchSummary, DictionaryEntry, ImportedBatch
from app.services.batch_import_service import BatchImportService
from app.validators.waste_row_validator import WasteRowValidator

FIXED_TODAY = date(2024, 6, 30)
CREATED_AT = datetime(2023, 1, 1, 10, 0, tzinfo=timezone.utc)


class FakeWasteTypeSource:
    def __init__(self, names: Sequence[str] = ("plastic", "paper"), error: Exception | None = None) -> None:
        self.entries = [DictionaryEntry(id=index, name=name) for index, name in enumerate(names, start=1)]
        self.error = error
        self.calls = 0

    def list_waste_types(self) -> list[DictionaryEntry]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.entries)


class FakeBatchStore:
    """
    Records every import call and hands out increasing batch ids.
    """

    def __init__(self, error: Exception | None = None, first_id: int = 123) -> None:
        self.error = error
        self.next_id = first_id
        self.calls: list[dict[str, Any]] = []

    def import_batch_data(
        self,
        *,
        user_id: str,
        filename: str,
        rows: Sequence[dict[str, Any]],
    ) -> ImportedBatch:
        self.calls.append({"user_id": user_id, "filename": filename, "rows": list(rows)})
        if self.error is not None:
            raise self.error
        batch_id = self.next_id
        self.next_id += 1
        return ImportedBatch(
            batch_id=batch_id,
            filename=filename,
            record_count=len(rows),
            created_at=CREATED_AT,
        )


class FakeBatchRepository:
    """
    List/soft-delete surface of BatchRepository backed by a list.
    """

    def __init__(self, batches: Sequence[tuple[str, BatchSummary]] = (), error: Exception | None = None) -> None:
        self.batches = list(batches)
        self.error = error

    def _active(self, user_id: str) -> list[BatchSummary]:
        if self.error is not None:
            raise self.error
        owned = [summary for owner, summary in self.batches if owner == user_id and summary.status == "active"]
        return sorted(owned, key=lambda summary: (summary.created_at, summary.id), reverse=True)

    def count_active(self, user_id: str) -> int:
        return len(self._active(user_id))

    def list_active(self, user_id: str, *, offset: int, limit: int) -> list[BatchSummary]:
        return self._active(user_id)[offset : offset + limit]

    def soft_delete(self, batch_id: int, user_id: str) -> bool:
        if self.error is not None:
            raise self.error
        for index, (owner, summary) in enumerate(self.batches):
            if summary.id == batch_id and owner == user_id and summary.status == "active":
                self.batches[index] = (
                    owner,
                    BatchSummary(
                        id=summary.id,
                        filename=summary.filename,
                        status="deleted",
                        record_count=summary.record_count,
                        created_at=summary.created_at,
                    ),
                )
                return True
        return False


def make_summary(batch_id: int, *, filename: str = "waste.csv", record_count: int = 2, age_days: int = 0) -> BatchSummary:
    return BatchSummary(
        id=batch_id,
        filename=filename,
        status="active",
        record_count=record_count,
        created_at=CREATED_AT - timedelta(days=age_days),
    )


def make_upload(content: str | bytes, filename: str = "test.csv") -> UploadFile:
    raw = content.encode("utf-8") if isinstance(content, str) else content
    return UploadFile(file=io.BytesIO(raw), filename=filename)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def waste_types() -> FakeWasteTypeSource:
    return FakeWasteTypeSource()


@pytest.fixture()
def batch_store() -> FakeBatchStore:
    return FakeBatchStore()


@pytest.fixture()
def service_factory(
    waste_types: FakeWasteTypeSource,
    batch_store: FakeBatchStore,
) -> Callable[..., BatchImportService]:
    """Build an import service over the fakes with a fixed "today"."""

    def _build(**overrides: Any) -> BatchImportService:
        options: dict[str, Any] = {
            "waste_type_source": waste_types,
            "batch_store": batch_store,
            "validator": WasteRowValidator(today=lambda: FIXED_TODAY),
        }
        options.update(overrides)
        return BatchImportService(**options)

    return _build


@pytest.fixture()
def service(service_factory: Callable[..., BatchImportService]) -> BatchImportService:
    return service_factory()


@pytest.fixture()
def upload() -> Callable[..., UploadFile]:
    return make_upload


@pytest.fixture()
def batch_repository() -> FakeBatchRepository:
    """Three active batches for user-1 (newest id 3) and one for user-2."""
    return FakeBatchRepository(
        [
            ("user-1", make_summary(1, filename="january.csv", age_days=2)),
            ("user-1", make_summary(2, filename="february.csv", age_days=1)),
            ("user-1", make_summary(3, filename="march.csv", record_count=5)),
            ("user-2", make_summary(4, filename="other.csv")),
        ]
    )
