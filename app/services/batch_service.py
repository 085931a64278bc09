"""
app/services/batch_service.py

Listing and soft deletion of a user's batches.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.waste_batch import BatchPage
from app.repositories.batch_repository import BatchRepository

logger = logging.getLogger(__name__)


class BatchQueryError(RuntimeError):
    """
    Raised when batches cannot be read or updated.
    """


class BatchService:
    def __init__(self, repository: BatchRepository) -> None:
        self._repository = repository

    def list_batches(self, user_id: str, page: int, limit: int) -> BatchPage:
        """
        Return one page (1-based) of the user's active batches.
        """

        offset = (page - 1) * limit
        try:
            total = self._repository.count_active(user_id)
            data = self._repository.list_active(user_id, offset=offset, limit=limit)
        except SQLAlchemyError as exc:
            raise BatchQueryError(f"Failed to fetch batches: {exc}") from exc

        return BatchPage(page=page, limit=limit, total=total, data=data)

    def delete_batch(self, batch_id: int, user_id: str) -> bool:
        try:
            deleted = self._repository.soft_delete(batch_id, user_id)
        except SQLAlchemyError as exc:
            raise BatchQueryError(f"Failed to delete batch: {exc}") from exc

        if deleted:
            logger.info("Batch soft-deleted batch_id=%s user_id=%s", batch_id, user_id)
        return deleted


def build_batch_service(db: Session) -> BatchService:
    return BatchService(BatchRepository(db))
