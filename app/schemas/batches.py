"""
app/schemas/batches.py

Response schemas for batch endpoints. Field names are camelCase on the wire.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from app.domain.waste_batch import BatchImportResult, BatchPage, BatchSummary


class BatchResponse(BaseModel):
    """
    API response model for one batch.
    """

    model_config = {"populate_by_name": True}

    id: int
    filename: str
    status: str
    record_count: int = Field(..., ge=0, alias="recordCount")
    created_at: datetime = Field(..., alias="createdAt")

    @classmethod
    def from_summary(cls, summary: BatchSummary) -> BatchResponse:
        return cls(
            id=summary.id,
            filename=summary.filename,
            status=summary.status,
            record_count=summary.record_count,
            created_at=summary.created_at,
        )


class BatchImportResponse(BaseModel):
    message: str
    batch: BatchResponse

    @classmethod
    def from_result(cls, result: BatchImportResult) -> BatchImportResponse:
        return cls(message=result.message, batch=BatchResponse.from_summary(result.batch))


class PaginationResponse(BaseModel):
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total: int = Field(..., ge=0)


class ListBatchesResponse(BaseModel):
    """
    API response model for one page of active batches.
    """

    data: list[BatchResponse] = Field(default_factory=list)
    pagination: PaginationResponse

    @classmethod
    def from_page(cls, page: BatchPage) -> ListBatchesResponse:
        return cls(
            data=[BatchResponse.from_summary(summary) for summary in page.data],
            pagination=PaginationResponse(page=page.page, limit=page.limit, total=page.total),
        )
