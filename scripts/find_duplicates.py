"""
Report duplicate identifiers in the ``account`` collection.

Checks ``account.username``, ``emp_id`` and ``account.account_id``; each
duplicated value is reported once, in the order its first repeat is seen.

Usage:
    python scripts/find_duplicates.py
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

_logger = logging.getLogger("find_duplicates")
logging.basicConfig(
    format="%(asctime)s %(levelname)s %(message)s",
    level=logging.INFO,
)

# Report key -> how to read the value from an account document.
_KEYS = {
    "username": lambda doc: (doc.get("account") or {}).get("username"),
    "emp_id": lambda doc: doc.get("emp_id"),
    "account_id": lambda doc: (doc.get("account") or {}).get("account_id"),
}


def find_duplicates(db: Any) -> dict[str, list]:
    """Return ``{key: [duplicated values]}`` for every key in ``_KEYS``.

    Documents missing a value are skipped for that key.
    """
    seen: dict[str, set] = {key: set() for key in _KEYS}
    dupes: dict[str, list] = {key: [] for key in _KEYS}
    for doc in db["account"].find({}):
        for key, getter in _KEYS.items():
            value = getter(doc)
            if value is None:
                continue
            if value in seen[key]:
                if value not in dupes[key]:
                    dupes[key].append(value)
            else:
                seen[key].add(value)
    return dupes


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find duplicate account identifiers.")
    parser.add_argument("--uri", default=None, help="MongoDB URI (default: MONGODB_URI env var)")
    parser.add_argument("--db-name", default=None, help="Database name (default: DB_NAME env var)")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point.

    Returns:
        0 when no duplicates were found, 1 when some were or the query failed.
    """
    args = _build_parser().parse_args(argv)
    cfg = AppConfig.from_env()
    if args.uri:
        cfg.mongodb_uri = args.uri
    if args.db_name:
        cfg.db_name = args.db_name

    database = Database.from_config(cfg)
    try:
        dupes = find_duplicates(database.db)
    except PyMongoError as exc:
        _logger.error("Duplicate check failed: %s", exc)
        return 1
    finally:
        database.close()

    found = 0
    for key, values in dupes.items():
        for value in values:
            print(f"Duplicate {key}: {value}")
            found += 1
    _logger.info("Duplicate check complete: %d duplicate value(s)", found)
    return 1 if found else 0


if __name__ == "__main__":
    sys.exit(main())
