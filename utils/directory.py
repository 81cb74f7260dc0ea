"""Account / employee / department lookups.

The directory lives in four collections linked by foreign keys:

    account.emp_id        -> employee.emp_id
    employee.dept_no      -> department.dept_no
    account.account.acc_type_id -> account_type.acc_type_id

"My initiatives" filters resolve a login username through this chain to an
employee name and then match ``assignment.leader`` on that exact string.
Two employees sharing a name are indistinguishable to that filter.
"""

from __future__ import annotations

from typing import Any

from utils.roles import UserRecord, user_from_documents


def find_account(db: Any, username: str | None) -> dict | None:
    """Return the account document for *username* (trimmed, exact match)."""
    if not username or not username.strip():
        return None
    return db["account"].find_one({"account.username": username.strip()})


def find_employee(db: Any, emp_id: Any) -> dict | None:
    return db["employee"].find_one({"emp_id": emp_id})


def find_employee_by_name(db: Any, name: str) -> dict | None:
    return db["employee"].find_one({"emp_name": name})


def department_name(db: Any, dept_no: Any) -> str:
    """Return the department name for *dept_no*, or ``""`` when unknown."""
    if dept_no is None:
        return ""
    dept = db["department"].find_one({"dept_no": dept_no})
    return (dept or {}).get("dept_name") or ""


def resolve_employee_name(db: Any, username: str | None) -> str | None:
    """Follow username -> account -> employee and return ``emp_name``."""
    account = find_account(db, username)
    if not account:
        return None
    employee = find_employee(db, account.get("emp_id"))
    if not employee:
        return None
    return employee.get("emp_name")


def _account_employee_pipeline(acc_types: list[int]) -> list[dict[str, Any]]:
    return [
        {"$match": {"account.acc_type_id": {"$in": acc_types}}},
        {"$lookup": {
            "from": "employee",
            "localField": "emp_id",
            "foreignField": "emp_id",
            "as": "employee_info",
        }},
        {"$unwind": "$employee_info"},
    ]


def accounts_with_employees(db: Any, acc_types: list[int]) -> list[dict]:
    """Return account documents of *acc_types* joined with ``employee_info``."""
    return list(db["account"].aggregate(_account_employee_pipeline(acc_types)))


def users_with_account_types(db: Any, acc_types: list[int]) -> list[UserRecord]:
    """Return every employee whose account type is in *acc_types*."""
    rows = accounts_with_employees(db, acc_types)
    return [user_from_documents(row, row["employee_info"]) for row in rows]


def find_user(db: Any, name: str, acc_types: list[int]) -> UserRecord | None:
    """Return the first employee called *name* with one of *acc_types*."""
    pipeline = _account_employee_pipeline(acc_types)
    pipeline.append({"$match": {"employee_info.emp_name": name}})
    for row in db["account"].aggregate(pipeline):
        return user_from_documents(row, row["employee_info"])
    return None


def build_profile(db: Any, username: str) -> dict[str, Any] | None:
    """Combine account, employee, department and role into a profile.

    Returns None when no account matches *username*.  Missing employee,
    department or account-type records leave the corresponding fields empty.
    """
    account = find_account(db, username)
    if not account:
        return None
    employee = find_employee(db, account.get("emp_id"))
    acc_type_id = (account.get("account") or {}).get("acc_type_id")
    account_type = db["account_type"].find_one({"acc_type_id": acc_type_id})
    return {
        "name": (employee or {}).get("emp_name") or "",
        "title": (employee or {}).get("emp_title") or "",
        "department": department_name(db, (employee or {}).get("dept_no")),
        "role": (account_type or {}).get("acc_type") or "",
        "id": (employee or {}).get("emp_id") or "",
    }
