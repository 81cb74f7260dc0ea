"""
List login usernames with their account type and employee name.

Usage:
    python scripts/list_usernames.py
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from pymongo.errors import PyMongoError

from api.database import Database
from utils.config import AppConfig
from utils.roles import role_for_account_type

_logger = logging.getLogger("list_usernames")
logging.basicConfig(
    format="%(asctime)s %(levelname)s %(message)s",
    level=logging.INFO,
)


def list_usernames(db: Any) -> list[dict[str, Any]]:
    """Return one row per account: username, acc_type_id, role, emp_name."""
    names = {
        doc.get("emp_id"): doc.get("emp_name")
        for doc in db["employee"].find({}, {"emp_id": 1, "emp_name": 1})
    }
    rows = []
    for doc in db["account"].find({}):
        account = doc.get("account") or {}
        role = role_for_account_type(account.get("acc_type_id"))
        rows.append({
            "username": account.get("username"),
            "acc_type_id": account.get("acc_type_id"),
            "role": role.value if role else None,
            "emp_name": names.get(doc.get("emp_id")),
        })
    return rows


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="List account usernames.")
    parser.add_argument("--uri", default=None, help="MongoDB URI (default: MONGODB_URI env var)")
    parser.add_argument("--db-name", default=None, help="Database name (default: DB_NAME env var)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    cfg = AppConfig.from_env()
    if args.uri:
        cfg.mongodb_uri = args.uri
    if args.db_name:
        cfg.db_name = args.db_name

    database = Database.from_config(cfg)
    try:
        rows = list_usernames(database.db)
    except PyMongoError as exc:
        _logger.error("Listing failed: %s", exc)
        return 1
    finally:
        database.close()

    print("User Accounts")
    print("=============")
    for i, row in enumerate(rows, start=1):
        print(f"{i}. {row['username']}  (type: {row['acc_type_id']}, "
              f"{row['role'] or 'unknown role'})  {row['emp_name'] or '-'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
