"""
app/schemas/dictionaries.py

Response schemas for dictionary endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel


class DictionaryEntryResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
