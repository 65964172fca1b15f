"""
app/domain package marker.
"""

from app.domain.meter_reading import (
    NO_CSV_DATA_MESSAGE,
    NO_VALID_DATA_MESSAGE,
    PROCESSED_MESSAGE,
    ConversionError,
    ConversionResult,
    IngestionOutcome,
    MeterReadingInput,
)

__all__ = [
    "NO_CSV_DATA_MESSAGE",
    "NO_VALID_DATA_MESSAGE",
    "PROCESSED_MESSAGE",
    "ConversionError",
    "ConversionResult",
    "IngestionOutcome",
    "MeterReadingInput",
]
