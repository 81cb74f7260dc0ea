"""
Validate the structure of ``account`` documents.

Errors: a missing ``emp_id``, ``account`` object, or any of
``username`` / ``password`` / ``acc_type_id`` / ``account_id``.
Warnings: an ``acc_type_id`` with no known role, or an ``emp_id`` with no
matching employee.

Usage:
    python scripts/validate_accounts.py
    python scripts/validate_accounts.py --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from pymongo.errors import PyMongoError

from api.database import Database
from utils.config import AppConfig
from utils.roles import role_for_account_type
from utils.validation import ValidationResult, is_blank

_logger = logging.getLogger("validate_accounts")
logging.basicConfig(
    format="%(asctime)s %(levelname)s %(message)s",
    level=logging.INFO,
)

ACCOUNT_FIELDS = ("username", "password", "acc_type_id", "account_id")


def validate_accounts(db: Any) -> ValidationResult:
    """Check every account document and collect the issues found.

    Issue samples are 1-based positions of the offending document in
    collection order.
    """
    result = ValidationResult()
    employee_ids = {doc.get("emp_id") for doc in db["employee"].find({}, {"emp_id": 1})}

    for position, doc in enumerate(db["account"].find({}), start=1):
        if is_blank(doc.get("emp_id")):
            result.add_issue("missing_emp_id", "error", "Missing emp_id", sample=position)
        elif doc.get("emp_id") not in employee_ids:
            result.add_issue(
                "orphan_account", "warning",
                f"emp_id {doc.get('emp_id')!r} has no employee record", sample=position,
            )

        account = doc.get("account")
        if not account:
            result.add_issue("missing_account", "error", "Missing account object", sample=position)
            continue
        for field in ACCOUNT_FIELDS:
            if is_blank(account.get(field)):
                result.add_issue(f"missing_{field}", "error", f"Missing {field}", sample=position)
        acc_type_id = account.get("acc_type_id")
        if not is_blank(acc_type_id) and role_for_account_type(acc_type_id) is None:
            result.add_issue(
                "unknown_account_type", "warning",
                f"acc_type_id {acc_type_id!r} does not map to a role", sample=position,
            )
    return result


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Validate account document structure.")
    parser.add_argument("--uri", default=None, help="MongoDB URI (default: MONGODB_URI env var)")
    parser.add_argument("--db-name", default=None, help="Database name (default: DB_NAME env var)")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point.

    Returns:
        0 when no errors were found, 1 otherwise.
    """
    args = _build_parser().parse_args(argv)
    cfg = AppConfig.from_env()
    if args.uri:
        cfg.mongodb_uri = args.uri
    if args.db_name:
        cfg.db_name = args.db_name

    database = Database.from_config(cfg)
    try:
        result = validate_accounts(database.db)
    except PyMongoError as exc:
        _logger.error("Validation failed: %s", exc)
        return 1
    finally:
        database.close()

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        for issue in result.issues:
            print(f"  [{issue.severity.upper()}] account #{issue.sample}: {issue.detail}")
        print(result.summary_text())
    return 0 if result.is_valid() else 1


if __name__ == "__main__":
    sys.exit(main())
