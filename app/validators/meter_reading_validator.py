"""
app/validators/meter_reading_validator.py

Format and account checks for parsed, non-duplicate meter readings.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from app.domain.meter_reading import ConversionError, MeterReadingInput
from app.repositories.base import AccountLookup
from app.validators.meter_reading_parser import ACCOUNT_ID_COLUMN, READ_VALUE_COLUMN

INVALID_METERING_DATA = "invalid metering data"
INVALID_ACCOUNT = "invalid account"

READ_VALUE_PATTERN = re.compile(r"[0-9]{5}")


def is_valid_read_value(value: str) -> bool:
    """
    Return True when the reading is exactly five ASCII digits (NNNNN).
    """

    return READ_VALUE_PATTERN.fullmatch(value) is not None


@dataclass(frozen=True)
class ValidationResult:
    accepted: tuple[MeterReadingInput, ...]
    rejected: tuple[ConversionError, ...]


class MeterReadingValidator:
    """
    Splits readings into accepted and rejected, preserving input order.

    The reading format is checked first; the account is only looked up for
    readings whose format is valid.
    """

    def __init__(self, accounts: AccountLookup) -> None:
        self._accounts = accounts

    def validate(self, readings: Sequence[MeterReadingInput]) -> ValidationResult:
        accepted: list[MeterReadingInput] = []
        rejected: list[ConversionError] = []

        for reading in readings:
            if not is_valid_read_value(reading.read_value):
                rejected.append(
                    ConversionError(
                        text=INVALID_METERING_DATA,
                        column=READ_VALUE_COLUMN,
                        row_number=reading.row_number,
                    )
                )
                continue

            if self._accounts.get_account(reading.account_id) is None:
                rejected.append(
                    ConversionError(
                        text=INVALID_ACCOUNT,
                        column=ACCOUNT_ID_COLUMN,
                        row_number=reading.row_number,
                    )
                )
                continue

            accepted.append(reading)

        return ValidationResult(accepted=tuple(accepted), rejected=tuple(rejected))
