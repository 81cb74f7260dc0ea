"""
MongoDB connectivity check.

Pings the configured server and lists every collection with its document
count, so a fresh deployment can be verified before the API is started.

Usage:
    python scripts/check_db.py
    python scripts/check_db.py --uri mongodb://db:27017 --db-name rcm
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

_logger = logging.getLogger("check_db")
logging.basicConfig(
    format="%(asctime)s %(levelname)s %(message)s",
    level=logging.INFO,
)


# ── Core functions ────────────────────────────────────────────────────────────

def check_database(database: Database) -> dict[str, Any]:
    """Ping *database* and count the documents in each collection.

    Returns:
        ``{"ok": bool, "database": name, "collections": {name: count}}``.
        ``collections`` is empty when the ping fails.
    """
    report: dict[str, Any] = {"ok": False, "database": database.name, "collections": {}}
    if not database.ping():
        return report
    report["ok"] = True
    db = database.db
    for name in sorted(db.list_collection_names()):
        report["collections"][name] = db[name].count_documents({})
    return report


# ── CLI ───────────────────────────────────────────────────────────────────────

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Ping MongoDB and list collections with document counts.",
    )
    parser.add_argument("--uri", default=None, help="MongoDB URI (default: MONGODB_URI env var)")
    parser.add_argument("--db-name", default=None, help="Database name (default: DB_NAME env var)")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point.

    Returns:
        0 when the server answered, 1 otherwise.
    """
    args = _build_parser().parse_args(argv)
    cfg = AppConfig.from_env()
    if args.uri:
        cfg.mongodb_uri = args.uri
    if args.db_name:
        cfg.db_name = args.db_name

    database = Database.from_config(cfg)
    try:
        report = check_database(database)
    except PyMongoError as exc:
        _logger.error("DB check failed: %s", exc)
        return 1
    finally:
        database.close()

    if not report["ok"]:
        _logger.error("Ping failed for database %s", report["database"])
        return 1

    _logger.info("Ping successful: %s", report["database"])
    for name, count in report["collections"].items():
        print(f"  {name:<20} {count:>8,}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
