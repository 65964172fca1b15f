"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.customer_account import CustomerAccount
from db.models.meter_reading import MeterReading

__all__ = [
    "CustomerAccount",
    "MeterReading",
]
