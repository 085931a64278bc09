"""
app/domain package marker.
"""

from app.domain.waste_batch import (
    BatchImportResult,
    BatchPage,
    BatchSummary,
    DictionaryEntry,
    ImportedBatch,
    ValidatedWasteRecord,
)

__all__ = [
    "BatchImportResult",
    "BatchPage",
    "BatchSummary",
    "DictionaryEntry",
    "ImportedBatch",
    "ValidatedWasteRecord",
]
