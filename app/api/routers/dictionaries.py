"""
app/api/routers/dictionaries.py

Read-only endpoints for the waste-type and location dictionaries.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.repositories.dictionary_repository import DictionaryRepository
from app.schemas.dictionaries import DictionaryEntryResponse
from db.session import get_db

router = APIRouter(prefix="/api", tags=["dictionaries"])


@router.get("/waste-types", response_model=list[DictionaryEntryResponse])
def list_waste_types(db: Session = Depends(get_db)) -> list[DictionaryEntryResponse]:
    try:
        entries = DictionaryRepository(db).list_waste_types()
    except SQLAlchemyError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch waste types: {exc}",
        ) from exc
    return [DictionaryEntryResponse.model_validate(entry) for entry in entries]


@router.get("/locations", response_model=list[DictionaryEntryResponse])
def list_locations(db: Session = Depends(get_db)) -> list[DictionaryEntryResponse]:
    try:
        entries = DictionaryRepository(db).list_locations()
    except SQLAlchemyError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch locations: {exc}",
        ) from exc
    return [DictionaryEntryResponse.model_validate(entry) for entry in entries]
