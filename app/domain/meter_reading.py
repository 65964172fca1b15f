"""
app/domain/meter_reading.py

Domain models used by the meter reading ingestion flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

NO_CSV_DATA_MESSAGE = "No csv data found in upload request"
NO_VALID_DATA_MESSAGE = "No valid data found to upload into database"
PROCESSED_MESSAGE = "Data has been processed"


@dataclass(frozen=True)
class MeterReadingInput:
    """
    One typed CSV row, not yet deduplicated or validated.

    Equality covers the duplicate key only; ``row_number`` is carried for
    error reporting.
    """

    account_id: int
    read_at: datetime
    read_value: str
    row_number: int | None = field(default=None, compare=False)


@dataclass(frozen=True)
class ConversionError:
    """
    One row that failed to parse or failed validation.
    """

    text: str | None
    column: str | None = None
    row_number: int | None = None


@dataclass(frozen=True)
class ConversionResult:
    """
    Parser output. ``valid`` and ``invalid`` are None when ``error`` is a
    stream-level failure.
    """

    valid: tuple[MeterReadingInput, ...] | None = None
    invalid: tuple[ConversionError, ...] | None = None
    error: str | None = None

    @property
    def is_fatal(self) -> bool:
        return self.error is not None

    @property
    def malformed_count(self) -> int:
        return len(self.invalid) if self.invalid is not None else 0


@dataclass(frozen=True)
class IngestionOutcome:
    """
    End-of-batch ingestion outcome.
    """

    successful_count: int
    failed_count: int
    is_successful: bool
    message: str
    errors: tuple[ConversionError, ...] = ()
