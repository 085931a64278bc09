"""
app/repositories package marker.
"""

from app.repositories.batch_repository import BatchRepository
from app.repositories.dictionary_repository import DictionaryRepository

__all__ = [
    "BatchRepository",
    "DictionaryRepository",
]
