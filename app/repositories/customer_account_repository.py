"""
app/repositories/customer_account_repository.py

Read access to customer accounts.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from db.models.customer_account import CustomerAccount


class CustomerAccountRepository:
    """
    Repository for customer account lookups.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_account(self, account_id: int) -> CustomerAccount | None:
        return self._session.get(CustomerAccount, account_id)
