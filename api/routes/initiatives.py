"""
Initiative (``assignment`` collection) endpoints.

GET  /api/v1/initiatives               → all initiatives + the caller's open ones
GET  /api/v1/initiatives/dropdowns     → eligible leads / requestors for the forms
GET  /api/v1/initiatives/department    → department of an employee, by name
GET  /api/v1/initiatives/{id}          → one initiative
POST /api/v1/initiatives               → create
PUT  /api/v1/initiatives/{id}          → update

Leads must hold a role that can lead initiatives; requestors and requestor
VPs must hold a role that can request them (utils/roles.py).  The requesting
department is always derived from the requestor VP's employee record.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import APIRouter, Depends, HTTPException
from fastapi import Query as FQuery

from api.database import get_db
from api.models import (
    DepartmentOut,
    DropdownsResponse,
    InitiativeCreated,
    InitiativeIn,
    InitiativeListResponse,
    InitiativeOut,
)
from utils.directory import (
    accounts_with_employees,
    department_name,
    find_employee_by_name,
    find_user,
    resolve_employee_name,
    users_with_account_types,
)
from utils.roles import Capability, account_types_with
from utils.validation import COMPLETED_STATUS, check_initiative_fields

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/initiatives", tags=["initiatives"])

_INITIATIVE_FIELDS = (
    "project_name", "category", "leader", "status", "requestor",
    "requestor_vp", "requesting_dept", "target_period", "completion_date",
    "description", "resource_notes",
)

# Joins requestor_vp -> employee (by name) -> department (by dept_no).
_LIST_PIPELINE: list[dict[str, Any]] = [
    {"$lookup": {
        "from": "employee",
        "localField": "requestor_vp",
        "foreignField": "emp_name",
        "as": "vp_employee",
    }},
    {"$unwind": {"path": "$vp_employee", "preserveNullAndEmptyArrays": True}},
    {"$lookup": {
        "from": "department",
        "localField": "vp_employee.dept_no",
        "foreignField": "dept_no",
        "as": "vp_department",
    }},
    {"$unwind": {"path": "$vp_department", "preserveNullAndEmptyArrays": True}},
]


def _parse_object_id(value: str) -> ObjectId:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as exc:
        raise HTTPException(status_code=400, detail=f"Invalid initiative id {value!r}") from exc


def _serialize(doc: dict) -> dict:
    """Turn a stored document into an InitiativeOut-compatible dict."""
    out = {k: v for k, v in doc.items() if k not in ("_id", "vp_employee", "vp_department")}
    out["id"] = str(doc["_id"])
    return out


def _list_row(doc: dict) -> dict:
    row = {"id": str(doc["_id"])}
    for name in _INITIATIVE_FIELDS:
        row[name] = doc.get(name)
    dept = (doc.get("vp_department") or {}).get("dept_name")
    if dept:
        row["requesting_dept"] = dept
    return row


def _initiative_document(body: InitiativeIn, dept: str) -> dict[str, Any]:
    return {
        "project_name": body.project,
        "category": body.category,
        "leader": body.lead,
        "status": body.status,
        "requestor": body.requestor,
        "requestor_vp": body.requestor_vp,
        "requesting_dept": dept,
        "target_period": body.target_period,
        "completion_date": body.completion_date or None,
        "description": body.description,
        "resource_notes": body.resource_consideration or "",
    }


def _check_fields(body: InitiativeIn) -> None:
    try:
        check_initiative_fields(body.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get(
    "",
    response_model=InitiativeListResponse,
    summary="List initiatives",
)
def list_initiatives(
    username: str | None = FQuery(None, description="Login name used to resolve 'my initiatives'"),
    db: Any = Depends(get_db),
) -> dict:
    """Return every initiative with its requesting department resolved.

    When ``username`` resolves to an employee, ``myInitiatives`` holds the
    initiatives led by that employee that are not Completed.  The match is on
    the leader's exact name.
    """
    all_rows = [_list_row(doc) for doc in db["assignment"].aggregate(_LIST_PIPELINE)]

    mine: list[dict] = []
    if username:
        emp_name = resolve_employee_name(db, username)
        if emp_name:
            mine = [
                row for row in all_rows
                if row["leader"] == emp_name and row["status"] != COMPLETED_STATUS
            ]
    return {"allAssignments": all_rows, "myInitiatives": mine}


@router.get(
    "/dropdowns",
    response_model=DropdownsResponse,
    summary="Lead and requestor options for initiative forms",
)
def initiative_dropdowns(db: Any = Depends(get_db)) -> dict:
    """Return employees eligible to lead and to request initiatives."""
    leads = users_with_account_types(db, account_types_with(Capability.LEAD_INITIATIVES))
    requestors = accounts_with_employees(db, account_types_with(Capability.REQUEST_INITIATIVES))
    return {
        "employees": [{"emp_name": u.emp_name} for u in leads],
        "requestors": [
            {
                "emp_name": row["employee_info"].get("emp_name") or "",
                "acc_type_id": (row.get("account") or {}).get("acc_type_id"),
            }
            for row in requestors
        ],
    }


@router.get(
    "/department",
    response_model=DepartmentOut,
    summary="Department of an employee",
)
def employee_department(
    name: str | None = FQuery(None, description="Exact employee name"),
    db: Any = Depends(get_db),
) -> dict:
    """Return ``{dept_no, dept_name}`` for the employee called ``name``."""
    if not name:
        raise HTTPException(status_code=400, detail="Name is required")
    employee = find_employee_by_name(db, name)
    if not employee:
        raise HTTPException(status_code=404, detail=f'Employee "{name}" not found')
    return {
        "dept_no": employee.get("dept_no"),
        "dept_name": department_name(db, employee.get("dept_no")),
    }


@router.get(
    "/{initiative_id}",
    response_model=InitiativeOut,
    summary="Get one initiative",
)
def get_initiative(initiative_id: str, db: Any = Depends(get_db)) -> dict:
    """Return the stored initiative, e.g. to pre-fill the edit form."""
    doc = db["assignment"].find_one({"_id": _parse_object_id(initiative_id)})
    if not doc:
        raise HTTPException(status_code=404, detail="Initiative not found")
    return _serialize(doc)


@router.post(
    "",
    response_model=InitiativeCreated,
    summary="Create an initiative",
)
def create_initiative(body: InitiativeIn, db: Any = Depends(get_db)) -> dict:
    """Validate and insert a new initiative.

    The lead must be able to lead initiatives; requestor and requestor VP
    must be able to request them.  The requesting department comes from the
    VP's department, then the submitted value, then ``""``.
    """
    _check_fields(body)

    lead = find_user(db, body.lead, account_types_with(Capability.LEAD_INITIATIVES))
    if lead is None:
        raise HTTPException(status_code=400, detail=f'Lead "{body.lead}" is not a valid Resource Manager.')

    requestor_types = account_types_with(Capability.REQUEST_INITIATIVES)
    if find_user(db, body.requestor, requestor_types) is None:
        raise HTTPException(status_code=400, detail=f'Requestor "{body.requestor}" is not authorized.')
    vp = find_user(db, body.requestor_vp, requestor_types)
    if vp is None:
        raise HTTPException(status_code=400, detail=f'Requestor VP "{body.requestor_vp}" is not authorized.')

    dept = department_name(db, vp.dept_no) or body.requesting_dept or ""
    doc = _initiative_document(body, dept)
    doc["created_at"] = datetime.now(timezone.utc)

    result = db["assignment"].insert_one(doc)
    logger.info("Created initiative %s (%s)", result.inserted_id, body.project)
    return {"success": True, "insertedId": str(result.inserted_id)}


@router.put(
    "/{initiative_id}",
    summary="Update an initiative",
)
def update_initiative(initiative_id: str, body: InitiativeIn, db: Any = Depends(get_db)) -> dict:
    """Validate and overwrite an existing initiative.

    Requestor and requestor VP must exist as employees; the requesting
    department is re-derived from the VP.
    """
    oid = _parse_object_id(initiative_id)
    _check_fields(body)

    if not find_employee_by_name(db, body.requestor):
        raise HTTPException(status_code=400, detail=f'Requestor "{body.requestor}" does not exist.')
    vp = find_employee_by_name(db, body.requestor_vp)
    if not vp:
        raise HTTPException(status_code=400, detail=f'Requestor VP "{body.requestor_vp}" does not exist.')

    doc = _initiative_document(body, department_name(db, vp.get("dept_no")))
    doc["updated_at"] = datetime.now(timezone.utc)

    result = db["assignment"].update_one({"_id": oid}, {"$set": doc})
    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="Initiative not found")
    logger.info("Updated initiative %s", initiative_id)
    return {"success": True}
