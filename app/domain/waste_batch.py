"""
app/domain/waste_batch.py

Domain models used by the batch import and batch listing flows.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any


@dataclass(frozen=True)
class ValidatedWasteRecord:
    """
    Typed waste record that passed every row rule and is ready to persist.
    """

    date: date
    waste_type: str
    location: str
    quantity: int

    def to_payload(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "waste_type": self.waste_type,
            "location": self.location,
            "quantity": self.quantity,
        }


@dataclass(frozen=True)
class DictionaryEntry:
    """
    One `{id, name}` item of the waste-type or location dictionary.
    """

    id: int
    name: str


@dataclass(frozen=True)
class ImportedBatch:
    """
    Identifiers returned by the storage layer after an atomic import.
    """

    batch_id: int
    filename: str
    record_count: int
    created_at: datetime


@dataclass(frozen=True)
class BatchSummary:
    id: int
    filename: str
    status: str
    record_count: int
    created_at: datetime


@dataclass(frozen=True)
class BatchImportResult:
    message: str
    batch: BatchSummary


@dataclass(frozen=True)
class BatchPage:
    """
    One page of a user's active batches, newest first.
    """

    page: int
    limit: int
    total: int
    data: list[BatchSummary] = field(default_factory=list)
