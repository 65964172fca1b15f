"""
app/validators/meter_reading_parser.py

CSV stream parsing and row-level type conversion for meter readings.

Rows are converted independently: a row that cannot be typed becomes a
ConversionError and parsing moves on. Only conditions that make the whole
stream unreadable (missing header, missing required column, a truncated
row, bad encoding) end parsing early, and those are reported through
``ConversionResult.error`` rather than raised.
"""

from __future__ import annotations

import csv
import io
import logging
import re
from datetime import datetime, timezone
from typing import BinaryIO, Sequence

from app.domain.meter_reading import ConversionError, ConversionResult, MeterReadingInput

logger = logging.getLogger(__name__)

ACCOUNT_ID_COLUMN = "AccountId"
READ_AT_COLUMN = "MeterReadingDateTime"
READ_VALUE_COLUMN = "MeterReadValue"
REQUIRED_COLUMNS: tuple[str, ...] = (ACCOUNT_ID_COLUMN, READ_AT_COLUMN, READ_VALUE_COLUMN)

# strptime accepts one or two digits for %d, %m and %H, so these cover both
# "22/04/2019 09:24" and "2/4/2019 9:24".
READ_AT_FORMATS: tuple[str, ...] = (
    "%d/%m/%Y %H:%M",
    "%d/%m/%Y %H:%M:%S",
)

EMPTY_ROW_MESSAGE = "Completely empty rows are not allowed."

_INTEGER_PATTERN = re.compile(r"^\s*[+-]?[0-9]+\s*$")

# Account ids are stored in a signed 32-bit INTEGER column.
ACCOUNT_ID_MIN = -(2**31)
ACCOUNT_ID_MAX = 2**31 - 1


class CSVFormatError(ValueError):
    """
    Raised internally when the stream itself cannot be read as meter reading CSV.
    """


def parse_read_at(raw: str | None) -> datetime | None:
    """
    Parse a reading timestamp, truncated to whole seconds.

    Returns None when no accepted format matches. Timezone-aware ISO values
    are converted to UTC and made naive.
    """

    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None

    for fmt in READ_AT_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    normalized = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed.replace(microsecond=0)


def parse_account_id(raw: str | None) -> int | None:
    if raw is None or not _INTEGER_PATTERN.match(raw):
        return None
    value = int(raw)
    if not ACCOUNT_ID_MIN <= value <= ACCOUNT_ID_MAX:
        return None
    return value


class MeterReadingCSVParser:
    """
    Converts an uploaded CSV byte stream into typed meter reading candidates.
    """

    def parse(self, stream: BinaryIO) -> ConversionResult:
        text_stream: io.TextIOWrapper | None = None
        valid: list[MeterReadingInput] = []
        invalid: list[ConversionError] = []

        try:
            text_stream = io.TextIOWrapper(stream, encoding="utf-8-sig", newline="")
            reader = csv.reader(text_stream)

            header = next(reader, None)
            if header is None or all(self._is_blank(value) for value in header):
                raise CSVFormatError("CSV header row is missing.")

            positions = self._locate_columns(header)
            required_width = max(positions.values()) + 1

            for row in reader:
                row_number = reader.line_num
                if not row:
                    continue
                if all(self._is_blank(value) for value in row):
                    invalid.append(
                        ConversionError(text=EMPTY_ROW_MESSAGE, row_number=row_number)
                    )
                    continue
                if len(row) < required_width:
                    raise CSVFormatError(
                        f"Row {row_number} has {len(row)} field(s); "
                        f"expected at least {required_width}."
                    )

                record, error = self._convert_row(row, positions, row_number)
                if error is not None:
                    invalid.append(error)
                    continue
                valid.append(record)

        except CSVFormatError as exc:
            logger.warning("Meter reading CSV is unreadable: %s", exc)
            return ConversionResult(error=str(exc))
        except UnicodeDecodeError:
            logger.warning("Meter reading CSV is not UTF-8 encoded")
            return ConversionResult(error="CSV must be UTF-8 encoded.")
        except csv.Error as exc:
            logger.warning("Meter reading CSV reader failed: %s", exc)
            return ConversionResult(error=f"Invalid CSV format: {exc}")
        finally:
            if text_stream is not None:
                try:
                    text_stream.detach()
                except ValueError:
                    pass

        return ConversionResult(valid=tuple(valid), invalid=tuple(invalid))

    def _locate_columns(self, header: Sequence[str]) -> dict[str, int]:
        normalized = [value.strip().lower() for value in header]
        positions: dict[str, int] = {}
        missing: list[str] = []
        for column in REQUIRED_COLUMNS:
            try:
                positions[column] = normalized.index(column.lower())
            except ValueError:
                missing.append(column)
        if missing:
            raise CSVFormatError(f"CSV header is missing required column(s): {', '.join(missing)}.")
        return positions

    def _convert_row(
        self,
        row: Sequence[str],
        positions: dict[str, int],
        row_number: int,
    ) -> tuple[MeterReadingInput | None, ConversionError | None]:
        raw_account_id = row[positions[ACCOUNT_ID_COLUMN]]
        account_id = parse_account_id(raw_account_id)
        if account_id is None:
            return None, ConversionError(
                text=raw_account_id,
                column=ACCOUNT_ID_COLUMN,
                row_number=row_number,
            )

        raw_read_at = row[positions[READ_AT_COLUMN]]
        read_at = parse_read_at(raw_read_at)
        if read_at is None:
            return None, ConversionError(
                text=raw_read_at,
                column=READ_AT_COLUMN,
                row_number=row_number,
            )

        # Kept verbatim; the five-digit rule is enforced by the validator.
        read_value = row[positions[READ_VALUE_COLUMN]]

        return (
            MeterReadingInput(
                account_id=account_id,
                read_at=read_at,
                read_value=read_value,
                row_number=row_number,
            ),
            None,
        )

    @staticmethod
    def _is_blank(value: str | None) -> bool:
        return value is None or value.strip() == ""
