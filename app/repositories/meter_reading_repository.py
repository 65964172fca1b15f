"""
app/repositories/meter_reading_repository.py

Persistence layer for meter readings.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.meter_reading import MeterReadingInput
from app.repositories.errors import MeterReadingPersistenceError
from db.models.meter_reading import MeterReading

logger = logging.getLogger(__name__)


def _stored_read_at(value: datetime) -> datetime:
    # Stored readings carry whole seconds only.
    return value.replace(microsecond=0)


class MeterReadingRepository:
    """
    Repository for duplicate checks and batch persistence of meter readings.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def find_non_duplicates(
        self,
        readings: Sequence[MeterReadingInput],
    ) -> list[MeterReadingInput]:
        """
        Return readings with no persisted row matching account, time and value.

        One lookup per reading, in input order.
        """

        non_duplicates: list[MeterReadingInput] = []
        for reading in readings:
            stmt = (
                select(MeterReading.id)
                .where(
                    MeterReading.account_id == reading.account_id,
                    MeterReading.read_at == _stored_read_at(reading.read_at),
                    MeterReading.read_value == reading.read_value,
                )
                .limit(1)
            )
            if self._session.scalar(stmt) is None:
                non_duplicates.append(reading)
        return non_duplicates

    def save(self, readings: Sequence[MeterReadingInput]) -> int:
        """
        Insert all readings in a single transaction.

        Raises MeterReadingPersistenceError after rolling back if any row fails.
        """

        if not readings:
            return 0

        rows = [
            MeterReading(
                account_id=reading.account_id,
                read_at=_stored_read_at(reading.read_at),
                read_value=reading.read_value,
            )
            for reading in readings
        ]
        try:
            self._session.add_all(rows)
            self._session.flush()
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.error("Meter reading batch rolled back rows=%d: %s", len(rows), exc)
            raise MeterReadingPersistenceError("Failed to persist meter readings.") from exc
        return len(rows)
