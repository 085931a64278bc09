"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.batch import Batch, BatchStatus, WasteRecord
from db.models.dictionary import Location, WasteType

__all__ = [
    "Batch",
    "BatchStatus",
    "Location",
    "WasteRecord",
    "WasteType",
]
