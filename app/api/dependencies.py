"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation and service wiring.
"""

from __future__ import annotations

from fastapi import Depends, File, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from app.services.meter_reading_ingestion_service import (
    MeterReadingIngestionService,
    build_meter_reading_ingestion_service,
)
from db.session import get_db

CSV_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
}


def get_optional_csv_upload(file: UploadFile | None = File(default=None)) -> UploadFile | None:
    """
    Validate that an uploaded file, when present, is a CSV by extension or MIME type.

    A missing file is passed through so the service can report it.
    """

    if file is None:
        return None

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").split(";", 1)[0].strip().lower()

    is_csv_filename = filename.endswith(".csv")
    is_csv_content_type = content_type in CSV_CONTENT_TYPES

    if not is_csv_filename and not is_csv_content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only CSV files are allowed.",
        )

    return file


def get_meter_reading_ingestion_service(
    db: Session = Depends(get_db),
) -> MeterReadingIngestionService:
    return build_meter_reading_ingestion_service(db)
