"""
app/services/meter_reading_ingestion_service.py

Service layer for meter reading upload orchestration.

One batch runs through four stages in order:

    1. MeterReadingCSVParser        - rows to typed candidates, malformed rows collected
    2. MeterReadingDeduplicator     - drops readings already stored
    3. MeterReadingValidator        - five-digit reading and known account
    4. MeterReadingStore.save()     - one transaction for the accepted set

Malformed, duplicate and rejected rows are all folded into one failure
count. Data problems never raise; storage faults propagate to the caller.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable
from typing import BinaryIO

from sqlalchemy.orm import Session

from app.config import get_meter_reading_ingestion_settings
from app.domain.meter_reading import (
    NO_CSV_DATA_MESSAGE,
    NO_VALID_DATA_MESSAGE,
    PROCESSED_MESSAGE,
    ConversionError,
    IngestionOutcome,
)
from app.repositories.base import AccountLookup, MeterReadingStore
from app.repositories.customer_account_repository import CustomerAccountRepository
from app.repositories.meter_reading_repository import MeterReadingRepository
from app.services.meter_reading_deduplicator import MeterReadingDeduplicator
from app.validators.meter_reading_parser import MeterReadingCSVParser
from app.validators.meter_reading_validator import MeterReadingValidator

logger = logging.getLogger(__name__)


class MeterReadingIngestionService:
    """
    Coordinates parsing, deduplication, validation, and persistence of one upload.
    """

    def __init__(
        self,
        *,
        accounts: AccountLookup,
        readings: MeterReadingStore,
        max_validation_errors: int = 500,
        log_validation_errors: bool = True,
        parser: MeterReadingCSVParser | None = None,
    ) -> None:
        self._store = readings
        self._parser = parser or MeterReadingCSVParser()
        self._deduplicator = MeterReadingDeduplicator(readings)
        self._validator = MeterReadingValidator(accounts)
        self._max_validation_errors = max(1, max_validation_errors)
        self._log_validation_errors = log_validation_errors

    def process_batch(self, stream: BinaryIO | bytes | None) -> IngestionOutcome:
        """
        Ingest one uploaded CSV batch and summarise what happened to its rows.

        Args:
            stream: Raw CSV bytes or a binary file object. None or an empty
                    payload yields an unsuccessful outcome.

        Raises:
            MeterReadingPersistenceError: the accepted readings could not be saved.
        """
        payload = self._read_payload(stream)
        if not payload.strip():
            logger.info("Meter reading upload rejected: no CSV data")
            return IngestionOutcome(
                successful_count=0,
                failed_count=0,
                is_successful=False,
                message=NO_CSV_DATA_MESSAGE,
            )

        captured_errors: list[ConversionError] = []
        conversion = self._parser.parse(io.BytesIO(payload))
        self._record_errors(captured_errors, conversion.invalid or ())
        failed_count = conversion.malformed_count

        if conversion.is_fatal:
            logger.warning("Meter reading upload not processed: %s", conversion.error)
            return self._no_valid_data(failed_count, captured_errors)

        if not conversion.valid:
            logger.info("Meter reading upload has no valid rows malformed=%d", failed_count)
            return self._no_valid_data(failed_count, captured_errors)

        deduplication = self._deduplicator.remove_duplicates(conversion.valid)
        failed_count += deduplication.duplicate_count
        if not deduplication.unique:
            logger.info(
                "Meter reading upload contained only duplicates malformed=%d duplicates=%d",
                conversion.malformed_count,
                deduplication.duplicate_count,
            )
            return self._no_valid_data(failed_count, captured_errors)

        validation = self._validator.validate(deduplication.unique)
        self._record_errors(captured_errors, validation.rejected)
        failed_count += len(validation.rejected)

        successful_count = 0
        if validation.accepted:
            successful_count = self._store.save(validation.accepted)

        logger.info(
            "Meter reading upload processed persisted=%d malformed=%d duplicates=%d rejected=%d",
            successful_count,
            conversion.malformed_count,
            deduplication.duplicate_count,
            len(validation.rejected),
        )
        return IngestionOutcome(
            successful_count=successful_count,
            failed_count=failed_count,
            is_successful=True,
            message=PROCESSED_MESSAGE,
            errors=tuple(captured_errors),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _read_payload(stream: BinaryIO | bytes | None) -> bytes:
        if stream is None:
            return b""
        if isinstance(stream, (bytes, bytearray)):
            return bytes(stream)
        return stream.read() or b""

    @staticmethod
    def _no_valid_data(
        failed_count: int,
        captured_errors: list[ConversionError],
    ) -> IngestionOutcome:
        return IngestionOutcome(
            successful_count=0,
            failed_count=failed_count,
            is_successful=True,
            message=NO_VALID_DATA_MESSAGE,
            errors=tuple(captured_errors),
        )

    def _record_errors(
        self,
        captured_errors: list[ConversionError],
        errors: Iterable[ConversionError],
    ) -> None:
        for error in errors:
            if self._log_validation_errors:
                logger.warning(
                    "Meter reading rejected row=%s column=%s text=%r",
                    error.row_number,
                    error.column,
                    error.text,
                )
            if len(captured_errors) < self._max_validation_errors:
                captured_errors.append(error)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


def build_meter_reading_ingestion_service(db: Session) -> MeterReadingIngestionService:
    """
    Build a service bound to one SQLAlchemy session with env-driven settings.
    """
    settings = get_meter_reading_ingestion_settings()
    return MeterReadingIngestionService(
        accounts=CustomerAccountRepository(db),
        readings=MeterReadingRepository(db),
        max_validation_errors=settings.max_validation_errors,
        log_validation_errors=settings.log_validation_errors,
    )
