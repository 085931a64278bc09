"""
app/services/batch_import_service.py

Service layer for the CSV batch import workflow.

One call runs strictly in order:

    1. decode and parse the upload          (CSVParseError)
    2. record-count bound                   (RecordLimitError)
    3. empty-file check                     (EmptyFileError)
    4. required header check                (MissingColumnsError)
    5. waste-type vocabulary fetch          (WasteTypeLookupError)
    6. per-row validation, first error wins (RowRejectedError)
    7. one atomic storage call              (BatchPersistenceError)

Nothing is written unless every row passes; the storage call either commits
the batch and all of its records or leaves nothing behind.
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Callable, Collection, Sequence
from datetime import date, datetime
from typing import Any, Protocol
from zoneinfo import ZoneInfo

from fastapi import UploadFile
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from app.config import get_batch_import_settings
from app.domain.waste_batch import (
    BatchImportResult,
    BatchSummary,
    DictionaryEntry,
    ImportedBatch,
    ValidatedWasteRecord,
)
from app.repositories.batch_repository import BatchRepository
from app.repositories.dictionary_repository import DictionaryRepository
from app.validators.waste_row_validator import RowValidationError, WasteRowValidator
from db.models.batch import BatchStatus

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: tuple[str, ...] = ("date", "waste_type", "location", "quantity")
IMPORT_SUCCESS_MESSAGE = "Import successful"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class BatchImportError(Exception):
    """Base exception for batch import failures."""


class BatchValidationError(BatchImportError, ValueError):
    """
    Raised when the uploaded file itself is rejected.
    """


class CSVParseError(BatchValidationError):
    """Malformed CSV structure. ``line_number`` is the physical line, when known."""

    def __init__(self, message: str, *, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number


class RecordLimitError(BatchValidationError):
    """Too many data rows."""


class EmptyFileError(BatchValidationError):
    """No data rows."""


class MissingColumnsError(BatchValidationError):
    def __init__(self, missing: Sequence[str]) -> None:
        super().__init__(f"Missing required columns: {', '.join(missing)}.")
        self.missing = tuple(missing)


class RowRejectedError(BatchValidationError):
    """
    Raised for the first row that breaks a row rule.
    """

    def __init__(self, error: RowValidationError) -> None:
        super().__init__(str(error))
        self.row_number = error.row_number
        self.column = error.column
        self.value = error.value


class WasteTypeLookupError(BatchImportError, RuntimeError):
    """Raised when the waste-type vocabulary cannot be read."""


class BatchPersistenceError(BatchImportError, RuntimeError):
    """Raised when the atomic batch insert fails."""


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------


class WasteTypeSource(Protocol):
    def list_waste_types(self) -> Sequence[DictionaryEntry]:
        ...


class BatchStore(Protocol):
    """
    Storage entrypoint that creates a batch and its records atomically.
    """

    def import_batch_data(
        self,
        *,
        user_id: str,
        filename: str,
        rows: Sequence[dict[str, Any]],
    ) -> ImportedBatch:
        ...


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class BatchImportService:
    """
    Coordinates CSV parsing, validation, and the single persistence call.
    """

    def __init__(
        self,
        *,
        waste_type_source: WasteTypeSource,
        batch_store: BatchStore,
        max_records: int = 1000,
        log_validation_errors: bool = True,
        validator: WasteRowValidator | None = None,
    ) -> None:
        self._waste_type_source = waste_type_source
        self._batch_store = batch_store
        self._max_records = max(1, max_records)
        self._log_validation_errors = log_validation_errors
        self._validator = validator or WasteRowValidator()

    def import_batch(self, *, upload_file: UploadFile, user_id: str) -> BatchImportResult:
        """
        Validate one uploaded CSV file and store it as a new active batch.

        Args:
            upload_file: CSV upload; its content type is checked by the caller.
            user_id:     Identity that will own the batch.

        Raises:
            BatchValidationError: the file or one of its rows was rejected.
            WasteTypeLookupError: the vocabulary could not be fetched.
            BatchPersistenceError: the atomic insert failed.
        """

        filename = upload_file.filename or ""
        logger.info("Batch import started filename=%r user_id=%s", filename, user_id)

        try:
            rows = self._read_rows(upload_file)
            self._check_shape(rows)
            vocabulary = self._fetch_vocabulary()
            records = self._validate_rows(rows, vocabulary)
        except BatchValidationError as exc:
            if self._log_validation_errors:
                logger.warning("Batch import rejected filename=%r: %s", filename, exc)
            raise

        try:
            imported = self._batch_store.import_batch_data(
                user_id=user_id,
                filename=filename,
                rows=[record.to_payload() for record in records],
            )
        except Exception as exc:  # noqa: BLE001
            raise BatchPersistenceError(f"Failed to import batch: {_describe(exc)}") from exc

        logger.info(
            "Batch import completed batch_id=%s filename=%r record_count=%s",
            imported.batch_id,
            imported.filename,
            imported.record_count,
        )
        return BatchImportResult(
            message=IMPORT_SUCCESS_MESSAGE,
            batch=BatchSummary(
                id=imported.batch_id,
                filename=imported.filename,
                status=BatchStatus.ACTIVE,
                record_count=imported.record_count,
                created_at=imported.created_at,
            ),
        )

    # ------------------------------------------------------------------
    # Import internals
    # ------------------------------------------------------------------

    def _read_rows(self, upload_file: UploadFile) -> list[dict[str, str]]:
        """
        Parse the whole upload into header-keyed rows.

        Header names are trimmed and lower-cased; empty lines are skipped. A
        data line whose field count differs from the header is a parse error.
        """

        raw_file = upload_file.file
        raw_file.seek(0)
        try:
            text = raw_file.read().decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise CSVParseError("CSV parsing failed: file is not valid UTF-8 text.") from exc

        reader = csv.reader(io.StringIO(text, newline=""), strict=True)
        header: list[str] | None = None
        rows: list[dict[str, str]] = []
        try:
            for fields in reader:
                if not fields:
                    continue
                if header is None:
                    header = [name.strip().lower() for name in fields]
                    continue
                if len(fields) != len(header):
                    kind = "few" if len(fields) < len(header) else "many"
                    raise CSVParseError(
                        f"CSV parsing failed: Too {kind} fields: expected {len(header)} "
                        f"fields but parsed {len(fields)}",
                        line_number=reader.line_num,
                    )
                rows.append(dict(zip(header, fields)))
        except csv.Error as exc:
            raise CSVParseError(f"CSV parsing failed: {exc}", line_number=reader.line_num) from exc

        return rows

    def _check_shape(self, rows: list[dict[str, str]]) -> None:
        if len(rows) > self._max_records:
            raise RecordLimitError(f"File exceeds the {self._max_records} record limit.")

        if not rows:
            raise EmptyFileError("File contains no valid records.")

        headers = rows[0].keys()
        missing = [column for column in REQUIRED_COLUMNS if column not in headers]
        if missing:
            raise MissingColumnsError(missing)

    def _fetch_vocabulary(self) -> Collection[str]:
        """
        Read the waste-type vocabulary for this call only.

        Names are lower-cased and de-duplicated, keeping storage order.
        """

        try:
            entries = self._waste_type_source.list_waste_types()
        except Exception as exc:  # noqa: BLE001
            raise WasteTypeLookupError(f"Failed to fetch waste types: {_describe(exc)}") from exc

        return dict.fromkeys(entry.name.lower() for entry in entries).keys()

    def _validate_rows(
        self,
        rows: list[dict[str, str]],
        vocabulary: Collection[str],
    ) -> list[ValidatedWasteRecord]:
        records: list[ValidatedWasteRecord] = []
        for row_number, row in enumerate(rows, start=2):
            try:
                records.append(
                    self._validator.validate_row(
                        row=row,
                        row_number=row_number,
                        vocabulary=vocabulary,
                    )
                )
            except RowValidationError as exc:
                raise RowRejectedError(exc) from exc
        return records


def _describe(exc: Exception) -> str:
    # DBAPIError.__str__ carries the SQL statement; the driver message is enough.
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig).strip()
    return str(exc)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


def today_in(zone_name: str) -> Callable[[], date]:
    """
    Return a clock giving the current calendar date in ``zone_name``.
    """

    zone = ZoneInfo(zone_name)
    return lambda: datetime.now(tz=zone).date()


def build_batch_import_service(db: Session) -> BatchImportService:
    """
    Build an import service bound to one request-scoped session.
    """

    settings = get_batch_import_settings()
    return BatchImportService(
        waste_type_source=DictionaryRepository(db),
        batch_store=BatchRepository(db),
        max_records=settings.max_records,
        log_validation_errors=settings.log_validation_errors,
        validator=WasteRowValidator(today=today_in(settings.timezone)),
    )
