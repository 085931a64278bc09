"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation and service wiring.
"""

from __future__ import annotations

from fastapi import Depends, File, Header, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from app.config import get_auth_settings
from app.services.batch_import_service import BatchImportService, build_batch_import_service
from app.services.batch_service import BatchService, build_batch_service
from db.session import get_db

CSV_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
}


def get_csv_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the uploaded file is a CSV by extension or MIME type.
    """

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").split(";", 1)[0].strip().lower()

    if not filename.endswith(".csv") and content_type not in CSV_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid file type. Only CSV files are allowed.",
        )

    return file


def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """
    Resolve the caller identity from the X-User-Id header.

    Falls back to DEFAULT_USER_ID so single-user deployments work without an
    identity proxy in front of the API.
    """

    user_id = (x_user_id or "").strip() or get_auth_settings().default_user_id
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required.",
        )
    return user_id


def get_batch_import_service(db: Session = Depends(get_db)) -> BatchImportService:
    return build_batch_import_service(db)


def get_batch_service(db: Session = Depends(get_db)) -> BatchService:
    return build_batch_service(db)
