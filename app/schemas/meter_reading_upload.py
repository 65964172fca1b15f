"""
app/schemas/meter_reading_upload.py

Response schemas for the meter reading upload endpoint.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from app.domain.meter_reading import IngestionOutcome


class ConversionErrorResponse(BaseModel):
    """
    API response model for one rejected row.
    """

    text: str | None = None
    column: str | None = None
    row_number: int | None = Field(default=None, ge=1)


class MeterReadingUploadResponse(BaseModel):
    """
    API response model for one processed upload.
    """

    message: str
    successful_count: int = Field(..., ge=0)
    failed_count: int = Field(..., ge=0)
    errors: list[ConversionErrorResponse] = Field(default_factory=list)

    @classmethod
    def from_outcome(cls, outcome: IngestionOutcome) -> "MeterReadingUploadResponse":
        return cls(
            message=outcome.message,
            successful_count=outcome.successful_count,
            failed_count=outcome.failed_count,
            errors=[
                ConversionErrorResponse(
                    text=error.text,
                    column=error.column,
                    row_number=error.row_number,
                )
                for error in outcome.errors
            ],
        )
