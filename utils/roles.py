"""User roles and what each role may do.

Accounts carry an ``acc_type_id``; each maps to one role with a fixed
capability set.  A :class:`UserRecord` is a plain record pairing an
employee with its role, and permission checks are free functions over it.

    acc_type_id 1  ResourceManager  leads and requests initiatives, views reports
    acc_type_id 2  StakeHolder      requests initiatives, views reports
    acc_type_id 3  TeamMember       reports own time
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Mapping


class Role(str, enum.Enum):
    RESOURCE_MANAGER = "ResourceManager"
    STAKEHOLDER = "StakeHolder"
    TEAM_MEMBER = "TeamMember"


class Capability(str, enum.Enum):
    LEAD_INITIATIVES = "lead_initiatives"
    REQUEST_INITIATIVES = "request_initiatives"
    VIEW_REPORTS = "view_reports"
    REPORT_TIME = "report_time"


ACCOUNT_TYPE_ROLES: dict[int, Role] = {
    1: Role.RESOURCE_MANAGER,
    2: Role.STAKEHOLDER,
    3: Role.TEAM_MEMBER,
}

ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.RESOURCE_MANAGER: frozenset({
        Capability.LEAD_INITIATIVES,
        Capability.REQUEST_INITIATIVES,
        Capability.VIEW_REPORTS,
    }),
    Role.STAKEHOLDER: frozenset({
        Capability.REQUEST_INITIATIVES,
        Capability.VIEW_REPORTS,
    }),
    Role.TEAM_MEMBER: frozenset({Capability.REPORT_TIME}),
}


@dataclass(frozen=True)
class UserRecord:
    """An employee resolved through its account, tagged with a role."""

    emp_id: Any
    emp_name: str
    role: Role | None
    dept_no: Any = None
    title: str = ""


def role_for_account_type(acc_type_id: Any) -> Role | None:
    """Return the role for an ``acc_type_id``, or None if it is unknown."""
    try:
        return ACCOUNT_TYPE_ROLES.get(int(acc_type_id))
    except (TypeError, ValueError):
        return None


def account_types_with(capability: Capability) -> list[int]:
    """Return the ``acc_type_id`` values whose role grants *capability*."""
    return sorted(
        type_id for type_id, role in ACCOUNT_TYPE_ROLES.items()
        if capability in ROLE_CAPABILITIES[role]
    )


def can(user: UserRecord | None, capability: Capability) -> bool:
    """True if *user* has a role granting *capability*."""
    if user is None or user.role is None:
        return False
    return capability in ROLE_CAPABILITIES[user.role]


def user_from_documents(
    account: Mapping[str, Any] | None,
    employee: Mapping[str, Any],
) -> UserRecord:
    """Build a UserRecord from an ``employee`` document and its ``account``."""
    acc_type_id = ((account or {}).get("account") or {}).get("acc_type_id")
    return UserRecord(
        emp_id=employee.get("emp_id"),
        emp_name=employee.get("emp_name") or "",
        role=role_for_account_type(acc_type_id),
        dept_no=employee.get("dept_no"),
        title=employee.get("emp_title") or "",
    )
