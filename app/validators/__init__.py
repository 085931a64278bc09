"""
app/validators package marker.
"""

from app.validators.waste_row_validator import (
    RowFormatError,
    RowValidationError,
    RowValueError,
    WasteRowValidator,
)

__all__ = [
    "RowFormatError",
    "RowValidationError",
    "RowValueError",
    "WasteRowValidator",
]
