"""
Pytest fixtures for the resource and capacity API tests.

Provides an in-memory MongoDB (mongomock) seeded with a small directory,
three months of allocation/capacity data and a handful of initiatives, plus
a TestClient bound to an app that uses it.  The wall clock is pinned to
September 2025 in every route module that reads it.
"""

import sys
from pathlib import Path

import mongomock
import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from api.app import create_app
from api.database import Database
from api.routes import calendar as calendar_routes
from api.routes import capacity as capacity_routes
from utils.config import AppConfig

CURRENT_MONTH = 202509


# ── Seed data ─────────────────────────────────────────────────────────────────

def _allocation(emp_id, date, activity, category, amount):
    return {"emp_id": emp_id, "date": date, "activity": activity,
            "category": category, "amount": amount}


ALLOCATIONS = [
    _allocation(1, 202507, "Quarterly close", "Baseline", 40),
    _allocation(2, 202507, "Summer leave", "Vacation", 16),
    _allocation(1, 202507, "Roadmap", "Strategic", 24),
    _allocation(1, 202508, "Quarterly close", "Baseline", 30),
    _allocation(2, 202508, "Quarterly close", "Baseline", 10),
    _allocation(3, 202508, "Hackathon", "Discretionary", 8),
    _allocation(3, 202508, "Team offsite", "Training", 5),
    _allocation(1, 202509, "Roadmap", "Strategic", 50),
    _allocation(1, 202409, "Old work", "Baseline", 5),
    _allocation(1, 202408, "Ancient work", "Baseline", 5),
    _allocation(1, 202512, "Planning", "Baseline", 20),
]

CAPACITY = [
    {"emp_id": 1, "date": 202507, "amount": 80},
    {"emp_id": 2, "date": 202507, "amount": 80},
    {"emp_id": 1, "date": 202508, "amount": 80},
    {"emp_id": 2, "date": 202508, "amount": 80},
    {"emp_id": 1, "date": 202509, "amount": 40},
    {"emp_id": 1, "date": 202510, "amount": 160},
    {"emp_id": 1, "date": 202406, "amount": 80},
]

EMPLOYEES = [
    {"emp_id": 1, "emp_name": "Alice Manager", "emp_title": "Resource Manager", "dept_no": 10},
    {"emp_id": 2, "emp_name": "Bob Stake", "emp_title": "Product Owner", "dept_no": 20},
    {"emp_id": 3, "emp_name": "Carol Member", "emp_title": "Engineer", "dept_no": 10},
    {"emp_id": 4, "emp_name": "Dana VP", "emp_title": "Vice President", "dept_no": 20},
]

DEPARTMENTS = [
    {"dept_no": 10, "dept_name": "Engineering"},
    {"dept_no": 20, "dept_name": "Finance"},
]


def _account(emp_id, username, acc_type_id):
    return {"emp_id": emp_id, "account": {
        "username": username, "password": "secret",
        "acc_type_id": acc_type_id, "account_id": 100 + emp_id,
    }}


ACCOUNTS = [
    _account(1, "alice", 1),
    _account(2, "bob", 2),
    _account(3, "carol", 3),
    _account(4, "dana", 2),
]

ACCOUNT_TYPES = [
    {"acc_type_id": 1, "acc_type": "ResourceManager"},
    {"acc_type_id": 2, "acc_type": "StakeHolder"},
    {"acc_type_id": 3, "acc_type": "TeamMember"},
]


def _initiative(project, leader, status, requestor_vp="Dana VP", **extra):
    doc = {
        "project_name": project, "category": "Strategic", "leader": leader,
        "status": status, "requestor": "Bob Stake", "requestor_vp": requestor_vp,
        "requesting_dept": "", "target_period": "Q4 2025",
        "completion_date": None, "description": f"{project} work",
        "resource_notes": "",
    }
    doc.update(extra)
    return doc


INITIATIVES = [
    _initiative("Data Platform", "Alice Manager", "In Progress"),
    _initiative("Cost Review", "Alice Manager", "Completed", completion_date="2025-06-30"),
    _initiative("Portal Refresh", "Alice Manager", "Backlog",
                requestor_vp="Unknown VP", requesting_dept="Legacy Dept"),
    _initiative("Office Move", "Bob Stake", "On Hold"),
    _initiative("Hiring Plan", "Alice Manager", "Planned"),
    _initiative("Audit", "Bob Stake", "On Going"),
]


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture()
def mongo_db():
    """Return a mongomock database seeded with the sample documents."""
    db = mongomock.MongoClient()["rcm_test"]
    db["allocation"].insert_many([dict(d) for d in ALLOCATIONS])
    db["capacity"].insert_many([dict(d) for d in CAPACITY])
    db["employee"].insert_many([dict(d) for d in EMPLOYEES])
    db["department"].insert_many([dict(d) for d in DEPARTMENTS])
    db["account"].insert_many([
        {"emp_id": a["emp_id"], "account": dict(a["account"])} for a in ACCOUNTS
    ])
    db["account_type"].insert_many([dict(d) for d in ACCOUNT_TYPES])
    db["assignment"].insert_many([dict(d) for d in INITIATIVES])
    return db


@pytest.fixture()
def app_config():
    cfg = AppConfig()
    cfg.capacity_window = 6
    return cfg


@pytest.fixture()
def client(mongo_db, app_config, monkeypatch):
    """TestClient for an app backed by the seeded mongomock database."""
    monkeypatch.setattr(calendar_routes, "current_month", lambda: CURRENT_MONTH)
    monkeypatch.setattr(capacity_routes, "current_month", lambda: CURRENT_MONTH)
    app = create_app(database=Database(mongo_db), config=app_config)
    with TestClient(app) as c:
        yield c
