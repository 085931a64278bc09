"""
db/models/dictionary.py

Reference dictionaries: known waste types and known locations.
"""

from __future__ import annotations

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, CreatedAtMixin


class WasteType(Base, CreatedAtMixin):
    """
    One entry of the waste-type vocabulary used to validate imports.
    """

    __tablename__ = "waste_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Stored lower-case; matched case-insensitively on import",
    )

    __table_args__ = (UniqueConstraint("name", name="uq_waste_types_name"),)


class Location(Base, CreatedAtMixin):
    """
    A free-form collection point. Unknown names are created during import.
    """

    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (UniqueConstraint("name", name="uq_locations_name"),)
