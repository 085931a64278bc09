"""
app/schemas package marker.
"""

from app.schemas.batches import (
    BatchImportResponse,
    BatchResponse,
    ListBatchesResponse,
    PaginationResponse,
)
from app.schemas.dictionaries import DictionaryEntryResponse

__all__ = [
    "BatchImportResponse",
    "BatchResponse",
    "DictionaryEntryResponse",
    "ListBatchesResponse",
    "PaginationResponse",
]
