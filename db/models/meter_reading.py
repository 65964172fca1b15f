"""
db/models/meter_reading.py

Persisted meter reading. The (account_id, read_at, read_value) triple is
unique: a reading identical on all three is a duplicate.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base

DEDUPE_CONSTRAINT = "uq_meter_readings_dedupe"


class MeterReading(Base):
    __tablename__ = "meter_readings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("customer_accounts.account_id", ondelete="CASCADE"),
        nullable=False,
    )
    read_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        comment="Reading wall-clock time, whole seconds",
    )
    read_value: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        comment="Reading as submitted, e.g. '01002'",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (
        UniqueConstraint("account_id", "read_at", "read_value", name=DEDUPE_CONSTRAINT),
        Index("ix_meter_readings_account_id_read_at", "account_id", "read_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<MeterReading id={self.id} account_id={self.account_id} "
            f"read_at={self.read_at.isoformat()} read_value={self.read_value!r}>"
        )
