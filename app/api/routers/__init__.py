"""
app/api/routers package marker.
"""

from app.api.routers.meter_reading_uploads import router as meter_reading_uploads_router

__all__ = ["meter_reading_uploads_router"]
