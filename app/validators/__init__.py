"""
app/validators package marker.
"""

from app.validators.meter_reading_parser import MeterReadingCSVParser, parse_read_at
from app.validators.meter_reading_validator import (
    MeterReadingValidator,
    ValidationResult,
    is_valid_read_value,
)

__all__ = [
    "MeterReadingCSVParser",
    "MeterReadingValidator",
    "ValidationResult",
    "is_valid_read_value",
    "parse_read_at",
]
