"""
app/services package marker.
"""

from app.services.batch_import_service import (
    BatchImportError,
    BatchImportService,
    BatchPersistenceError,
    BatchValidationError,
    WasteTypeLookupError,
    build_batch_import_service,
)
from app.services.batch_service import BatchQueryError, BatchService, build_batch_service

__all__ = [
    "BatchImportError",
    "BatchImportService",
    "BatchPersistenceError",
    "BatchQueryError",
    "BatchService",
    "BatchValidationError",
    "WasteTypeLookupError",
    "build_batch_import_service",
    "build_batch_service",
]
