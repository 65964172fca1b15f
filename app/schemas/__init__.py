"""
app/schemas package marker.
"""

from app.schemas.meter_reading_upload import ConversionErrorResponse, MeterReadingUploadResponse

__all__ = [
    "ConversionErrorResponse",
    "MeterReadingUploadResponse",
]
