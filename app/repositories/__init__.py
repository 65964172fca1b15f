"""
app/repositories package marker.
"""

from app.repositories.base import AccountLookup, MeterReadingStore
from app.repositories.customer_account_repository import CustomerAccountRepository
from app.repositories.errors import (
    AccountSeedError,
    MeterReadingPersistenceError,
    MeterReadingRepositoryError,
)
from app.repositories.meter_reading_repository import MeterReadingRepository

__all__ = [
    "AccountLookup",
    "AccountSeedError",
    "CustomerAccountRepository",
    "MeterReadingPersistenceError",
    "MeterReadingRepository",
    "MeterReadingRepositoryError",
    "MeterReadingStore",
]
