"""
app/api/routers/batches.py

Batch import, listing, and soft-delete HTTP endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, UploadFile, status

from app.api.dependencies import (
    get_batch_import_service,
    get_batch_service,
    get_csv_upload,
    get_current_user_id,
)
from app.schemas.batches import BatchImportResponse, ListBatchesResponse
from app.services.batch_import_service import (
    BatchImportError,
    BatchImportService,
    BatchValidationError,
)
from app.services.batch_service import BatchQueryError, BatchService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["batches"])


@router.post(
    "/batches/import",
    response_model=BatchImportResponse,
    status_code=status.HTTP_201_CREATED,
)
def import_batch(
    file: UploadFile = Depends(get_csv_upload),
    user_id: str = Depends(get_current_user_id),
    import_service: BatchImportService = Depends(get_batch_import_service),
) -> BatchImportResponse:
    """
    Validate one CSV upload and store it as a new batch.
    """

    try:
        result = import_service.import_batch(upload_file=file, user_id=user_id)
    except BatchValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except BatchImportError as exc:
        logger.error("Batch import failed filename=%r: %s", file.filename, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc
    except Exception as exc:
        logger.exception("Unexpected batch import failure filename=%r", file.filename)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error",
        ) from exc
    finally:
        file.file.close()

    return BatchImportResponse.from_result(result)


@router.get("/batches", response_model=ListBatchesResponse)
def list_batches(
    page: int = Query(default=1, ge=1, description="Page number, 1-based"),
    limit: int = Query(default=10, ge=1, le=100, description="Items per page"),
    user_id: str = Depends(get_current_user_id),
    batch_service: BatchService = Depends(get_batch_service),
) -> ListBatchesResponse:
    try:
        batch_page = batch_service.list_batches(user_id, page, limit)
    except BatchQueryError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc

    return ListBatchesResponse.from_page(batch_page)


@router.delete("/batches/{batch_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_batch(
    batch_id: int = Path(..., ge=1),
    user_id: str = Depends(get_current_user_id),
    batch_service: BatchService = Depends(get_batch_service),
) -> Response:
    """
    Soft-delete one of the caller's active batches.
    """

    try:
        deleted = batch_service.delete_batch(batch_id, user_id)
    except BatchQueryError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Batch not found or access denied",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
