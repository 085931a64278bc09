"""
app/repositories/dictionary_repository.py

Read access to the waste-type and location dictionaries.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.domain.waste_batch import DictionaryEntry
from db.models.dictionary import Location, WasteType


class DictionaryRepository:
    """
    Repository for reference dictionaries, ordered by id.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_waste_types(self) -> list[DictionaryEntry]:
        stmt = select(WasteType.id, WasteType.name).order_by(WasteType.id)
        return [DictionaryEntry(id=row.id, name=row.name) for row in self._session.execute(stmt)]

    def list_locations(self) -> list[DictionaryEntry]:
        stmt = select(Location.id, Location.name).order_by(Location.id)
        return [DictionaryEntry(id=row.id, name=row.name) for row in self._session.execute(stmt)]
