"""
Shared fixtures: in-memory SQLite storage and collaborator fakes.
"""

from __future__ import annotations

from collections.abc import Generator, Sequence

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import db.models  # noqa: F401 - registers ORM models on Base.metadata
from app.domain.meter_reading import MeterReadingInput
from db.base import Base
from db.models.customer_account import CustomerAccount
from db.models.meter_reading import MeterReading
from db.seed import seed_customer_accounts
from db.session import build_session_factory

CSV_HEADER = "AccountId,MeterReadingDateTime,MeterReadValue,"


def make_csv(*rows: str, header: str = CSV_HEADER) -> bytes:
    return "\n".join((header, *rows)).encode("utf-8")


def count_meter_readings(session: Session) -> int:
    return session.scalar(select(func.count(MeterReading.id))) or 0


class FakeAccounts:
    """Account lookup backed by a set of ids; records every lookup."""

    def __init__(self, account_ids: Sequence[int] = ()) -> None:
        self._account_ids = set(account_ids)
        self.lookups: list[int] = []

    def get_account(self, account_id: int) -> CustomerAccount | None:
        self.lookups.append(account_id)
        if account_id not in self._account_ids:
            return None
        return CustomerAccount(account_id=account_id, first_name="Test", last_name="Account")


class FakeReadingStore:
    """In-memory meter reading store."""

    def __init__(self, stored: Sequence[MeterReadingInput] = ()) -> None:
        self.stored: list[MeterReadingInput] = list(stored)
        self.save_calls: list[list[MeterReadingInput]] = []
        self.fail_on_save: Exception | None = None

    def find_non_duplicates(
        self,
        readings: Sequence[MeterReadingInput],
    ) -> list[MeterReadingInput]:
        return [reading for reading in readings if reading not in self.stored]

    def save(self, readings: Sequence[MeterReadingInput]) -> int:
        self.save_calls.append(list(readings))
        if self.fail_on_save is not None:
            raise self.fail_on_save
        self.stored.extend(readings)
        return len(readings)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker:
    return build_session_factory(engine)


@pytest.fixture()
def db_session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    with session_factory() as session:
        yield session


@pytest.fixture()
def seeded_session(db_session: Session) -> Session:
    seed_customer_accounts(db_session)
    return db_session
