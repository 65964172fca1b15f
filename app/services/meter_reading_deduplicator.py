"""
app/services/meter_reading_deduplicator.py

Removes readings that already exist in storage, or that repeat an earlier
reading of the same batch.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from app.domain.meter_reading import MeterReadingInput
from app.repositories.base import MeterReadingStore


@dataclass(frozen=True)
class DeduplicationResult:
    unique: tuple[MeterReadingInput, ...]
    duplicate_count: int


class MeterReadingDeduplicator:
    """
    Drops readings that match a stored reading, then drops repeats within the batch.

    A reading repeated inside one upload is kept once; every further copy is
    counted as a duplicate and so lowers the successful count. The
    (account_id, read_at, read_value) unique constraint on meter_readings
    would reject the repeat at save time and roll back the whole batch.
    """

    def __init__(self, store: MeterReadingStore) -> None:
        self._store = store

    def remove_duplicates(self, readings: Sequence[MeterReadingInput]) -> DeduplicationResult:
        """
        Keep readings with no stored (account, time, value) match, in input order.

        Equality is MeterReadingInput equality, which ignores row numbers.
        """

        if not readings:
            return DeduplicationResult(unique=(), duplicate_count=0)

        not_stored = self._store.find_non_duplicates(readings)

        seen: set[MeterReadingInput] = set()
        unique: list[MeterReadingInput] = []
        for reading in not_stored:
            if reading in seen:
                continue
            seen.add(reading)
            unique.append(reading)

        return DeduplicationResult(
            unique=tuple(unique),
            duplicate_count=len(readings) - len(unique),
        )
