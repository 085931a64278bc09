"""
app/validators/waste_row_validator.py

Row-level validation and type parsing for waste batch imports.

Rules run in a fixed order and the first failure is raised immediately, so a
caller only ever sees one problem per row.

Quantities are parsed strictly: the whole field must be an ASCII integer.
Values such as "10.5" or "12kg" are rejected instead of being truncated to
their leading digits, and non-ASCII digits such as "٣" are rejected too.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Collection, Mapping
from datetime import date, datetime

from app.domain.waste_batch import ValidatedWasteRecord

DATE_FORMAT = "%Y-%m-%d"

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class RowValidationError(ValueError):
    """
    Raised when one CSV row breaks a validation rule.
    """

    def __init__(
        self,
        message: str,
        *,
        row_number: int,
        column: str,
        value: str | None = None,
    ) -> None:
        super().__init__(message)
        self.row_number = row_number
        self.column = column
        self.value = value


class RowFormatError(RowValidationError):
    """
    A date or quantity is missing, malformed, or out of range.
    """


class RowValueError(RowValidationError):
    """
    A value is well-formed but not part of the reference vocabulary.
    """


class WasteRowValidator:
    """
    Validates and normalizes one raw CSV row into a ValidatedWasteRecord.
    """

    def __init__(self, *, today: Callable[[], date] | None = None) -> None:
        self._today = today or date.today

    def validate_row(
        self,
        *,
        row: Mapping[str, str | None],
        row_number: int,
        vocabulary: Collection[str],
    ) -> ValidatedWasteRecord:
        """
        Return the normalized record or raise the first rule violation.

        ``vocabulary`` holds lower-case waste-type names; its iteration order
        is the order used when listing valid types in error messages.
        """

        raw_date = self._clean(row.get("date"))
        waste_type = self._clean(row.get("waste_type")).lower()
        location = self._clean(row.get("location")).lower()
        raw_quantity = self._clean(row.get("quantity"))

        parsed_date = self._parse_date(raw_date, row_number)

        if not waste_type or waste_type not in vocabulary:
            valid_types = ", ".join(vocabulary)
            raise RowValueError(
                f'Invalid value in row {row_number}: unknown waste type "{waste_type}". '
                f"Valid types: {valid_types}.",
                row_number=row_number,
                column="waste_type",
                value=waste_type,
            )

        quantity = self._parse_quantity(raw_quantity, row_number)

        return ValidatedWasteRecord(
            date=parsed_date,
            waste_type=waste_type,
            location=location,
            quantity=quantity,
        )

    def _parse_date(self, raw: str, row_number: int) -> date:
        if not raw:
            raise RowFormatError(
                f"Invalid data format in row {row_number}: date is required.",
                row_number=row_number,
                column="date",
                value=raw,
            )

        try:
            parsed = datetime.strptime(raw, DATE_FORMAT).date()
        except ValueError as exc:
            raise RowFormatError(
                f"Invalid data format in row {row_number}: invalid date format. Use YYYY-MM-DD.",
                row_number=row_number,
                column="date",
                value=raw,
            ) from exc

        if parsed > self._today():
            raise RowFormatError(
                f"Invalid data format in row {row_number}: date cannot be in the future.",
                row_number=row_number,
                column="date",
                value=raw,
            )
        return parsed

    def _parse_quantity(self, raw: str, row_number: int) -> int:
        if not raw:
            raise RowFormatError(
                f"Invalid data format in row {row_number}: quantity is required.",
                row_number=row_number,
                column="quantity",
                value=raw,
            )

        quantity: int | None = None
        if _INTEGER_PATTERN.fullmatch(raw):
            try:
                quantity = int(raw)
            except ValueError:
                # int() refuses strings past sys.get_int_max_str_digits().
                quantity = None
        if quantity is None or quantity <= 0:
            raise RowFormatError(
                f"Invalid data format in row {row_number}: quantity must be a positive integer.",
                row_number=row_number,
                column="quantity",
                value=raw,
            )
        return quantity

    @staticmethod
    def _clean(value: str | None) -> str:
        if value is None:
            return ""
        return str(value).strip()
