"""
db/models/customer_account.py

Customer account model. Meter readings may only be stored against an
existing account.
"""

from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class CustomerAccount(Base, TimestampMixin):
    """
    A customer account, keyed by the externally issued account number.
    """

    __tablename__ = "customer_accounts"

    account_id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=False,
        comment="Externally issued account number",
    )

    first_name: Mapped[str] = mapped_column(String(120), nullable=False)

    last_name: Mapped[str] = mapped_column(String(120), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<CustomerAccount account_id={self.account_id} "
            f"name={self.first_name!r} {self.last_name!r}>"
        )
