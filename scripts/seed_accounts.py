"""
Seed customer accounts from CSV.
"""

from __future__ import annotations

import argparse
import json
import logging

from db.seed import DEFAULT_ACCOUNTS_CSV, seed_customer_accounts
from db.session import SessionLocal


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed customer accounts from a CSV file.")
    parser.add_argument(
        "--csv",
        dest="csv_path",
        default=str(DEFAULT_ACCOUNTS_CSV),
        help="Path to an AccountId,FirstName,LastName CSV file.",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    with SessionLocal() as db:
        inserted = seed_customer_accounts(db, args.csv_path)

    print(json.dumps({"csv": args.csv_path, "accounts_inserted": inserted}, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
