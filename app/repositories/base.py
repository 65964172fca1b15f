"""
app/repositories/base.py

Collaborator contracts consumed by the meter reading ingestion pipeline.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from app.domain.meter_reading import MeterReadingInput
from db.models.customer_account import CustomerAccount


class AccountLookup(Protocol):
    """
    Read-only account existence check.
    """

    def get_account(self, account_id: int) -> CustomerAccount | None:
        ...


class MeterReadingStore(Protocol):
    """
    Duplicate check and durable write for meter readings.
    """

    def find_non_duplicates(
        self,
        readings: Sequence[MeterReadingInput],
    ) -> list[MeterReadingInput]:
        """
        Return the readings with no persisted (account, time, value) match.
        """
        ...

    def save(self, readings: Sequence[MeterReadingInput]) -> int:
        """
        Persist all readings in one transaction and return the count written.
        """
        ...
