"""
app/api/routers/meter_reading_uploads.py

Meter reading upload HTTP endpoint.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.dependencies import get_meter_reading_ingestion_service, get_optional_csv_upload
from app.repositories.errors import MeterReadingPersistenceError
from app.schemas.meter_reading_upload import MeterReadingUploadResponse
from app.services.meter_reading_ingestion_service import MeterReadingIngestionService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["meter-readings"])


@router.post(
    "/meter-reading-uploads",
    response_model=MeterReadingUploadResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"model": MeterReadingUploadResponse}},
)
def upload_meter_readings(
    file: UploadFile | None = Depends(get_optional_csv_upload),
    ingestion_service: MeterReadingIngestionService = Depends(get_meter_reading_ingestion_service),
) -> JSONResponse:
    """
    Ingest one CSV file of meter readings.

    Returns 200 when the upload was handled (even if every row failed) and
    400 when no CSV data was supplied.
    """

    logger.info("Meter reading upload received filename=%r", file.filename if file is not None else None)
    try:
        outcome = ingestion_service.process_batch(file.file if file is not None else None)
    except (MeterReadingPersistenceError, SQLAlchemyError) as exc:
        logger.exception("Meter reading upload failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to process meter readings.",
        ) from exc
    finally:
        if file is not None:
            file.file.close()

    body = MeterReadingUploadResponse.from_outcome(outcome)
    status_code = status.HTTP_200_OK if outcome.is_successful else status.HTTP_400_BAD_REQUEST
    return JSONResponse(status_code=status_code, content=body.model_dump())
