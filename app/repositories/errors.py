"""
Repository-layer exceptions for meter reading storage flows.
"""

from __future__ import annotations


class MeterReadingRepositoryError(Exception):
    """Base exception for meter reading repository failures."""


class MeterReadingPersistenceError(MeterReadingRepositoryError):
    """Raised when a batch of meter readings cannot be persisted."""


class AccountSeedError(MeterReadingRepositoryError):
    """Raised when the customer account seed file cannot be loaded."""
