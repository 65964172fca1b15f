"""
db/seed.py

Load customer accounts from a CSV file (AccountId,FirstName,LastName).
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.repositories.errors import AccountSeedError
from db.models.customer_account import CustomerAccount

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNTS_CSV = Path(__file__).resolve().parent / "seed_data" / "test_accounts.csv"


def read_account_rows(csv_path: str | Path) -> list[CustomerAccount]:
    path = Path(csv_path)
    try:
        with path.open(encoding="utf-8-sig", newline="") as handle:
            reader = csv.DictReader(handle)
            accounts: list[CustomerAccount] = []
            for raw_row in reader:
                try:
                    account_id = int((raw_row.get("AccountId") or "").strip())
                except ValueError as exc:
                    raise AccountSeedError(
                        f"Invalid AccountId on line {reader.line_num} of {path}."
                    ) from exc
                accounts.append(
                    CustomerAccount(
                        account_id=account_id,
                        first_name=(raw_row.get("FirstName") or "").strip(),
                        last_name=(raw_row.get("LastName") or "").strip(),
                    )
                )
    except OSError as exc:
        raise AccountSeedError(f"Unable to read account seed file {path}.") from exc
    return accounts


def seed_customer_accounts(
    session: Session,
    csv_path: str | Path = DEFAULT_ACCOUNTS_CSV,
) -> int:
    """
    Insert accounts not already present and return the number inserted.

    Safe to re-run; existing account ids are left untouched.
    """

    accounts = read_account_rows(csv_path)
    existing = set(session.scalars(select(CustomerAccount.account_id)).all())

    to_insert: list[CustomerAccount] = []
    for account in accounts:
        if account.account_id in existing:
            continue
        existing.add(account.account_id)
        to_insert.append(account)

    if not to_insert:
        logger.info("Account seed skipped: all %d account(s) already present", len(accounts))
        return 0

    try:
        session.add_all(to_insert)
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise AccountSeedError("Failed to persist seed accounts.") from exc

    logger.info("Seeded %d customer account(s) from %s", len(to_insert), csv_path)
    return len(to_insert)
