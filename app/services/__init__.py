"""
app/services package marker.
"""

from app.services.meter_reading_deduplicator import DeduplicationResult, MeterReadingDeduplicator
from app.services.meter_reading_ingestion_service import (
    MeterReadingIngestionService,
    build_meter_reading_ingestion_service,
)

__all__ = [
    "DeduplicationResult",
    "MeterReadingDeduplicator",
    "MeterReadingIngestionService",
    "build_meter_reading_ingestion_service",
]
