"""
Tests for utils/roles.py: account types, roles and capabilities.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from utils.roles import (
    Capability,
    Role,
    UserRecord,
    account_types_with,
    can,
    role_for_account_type,
    user_from_documents,
)


class TestRoleMapping:
    def test_known_types(self):
        assert role_for_account_type(1) is Role.RESOURCE_MANAGER
        assert role_for_account_type(2) is Role.STAKEHOLDER
        assert role_for_account_type("3") is Role.TEAM_MEMBER

    def test_unknown_types(self):
        assert role_for_account_type(9) is None
        assert role_for_account_type(None) is None
        assert role_for_account_type("admin") is None


class TestCapabilities:
    def test_only_resource_managers_lead(self):
        assert account_types_with(Capability.LEAD_INITIATIVES) == [1]

    def test_managers_and_stakeholders_request(self):
        assert account_types_with(Capability.REQUEST_INITIATIVES) == [1, 2]
        assert account_types_with(Capability.VIEW_REPORTS) == [1, 2]

    def test_team_members_report_time(self):
        assert account_types_with(Capability.REPORT_TIME) == [3]

    def test_can(self):
        manager = UserRecord(emp_id=1, emp_name="A", role=Role.RESOURCE_MANAGER)
        member = UserRecord(emp_id=2, emp_name="B", role=Role.TEAM_MEMBER)
        assert can(manager, Capability.LEAD_INITIATIVES)
        assert not can(member, Capability.LEAD_INITIATIVES)
        assert can(member, Capability.REPORT_TIME)
        assert not can(None, Capability.REPORT_TIME)
        assert not can(UserRecord(emp_id=3, emp_name="C", role=None), Capability.REPORT_TIME)


class TestUserFromDocuments:
    def test_builds_record(self):
        user = user_from_documents(
            {"emp_id": 7, "account": {"acc_type_id": 2}},
            {"emp_id": 7, "emp_name": "Dana VP", "emp_title": "VP", "dept_no": 20},
        )
        assert user == UserRecord(
            emp_id=7, emp_name="Dana VP", role=Role.STAKEHOLDER, dept_no=20, title="VP",
        )

    def test_missing_account(self):
        user = user_from_documents(None, {"emp_id": 1, "emp_name": "X"})
        assert user.role is None
        assert user.title == ""
