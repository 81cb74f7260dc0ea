"""
Pydantic request/response models for the API.

Optional fields default to None so that documents missing a field still
serialise.  Field() descriptions and examples feed the OpenAPI docs.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ── Calendar models ───────────────────────────────────────────────────────────

class FormattedMonth(BaseModel):
    """A YYYYMM month with its display label."""
    yyyymm: int = Field(..., description="Month as YYYYMM", examples=[202501])
    label: str = Field(..., description="Display label", examples=["Jan-25"])


class CalendarMonthsResponse(BaseModel):
    """Response body for GET /api/v1/calendar/months."""
    months: list[int] = Field(..., description="Months with allocation data in the trailing year")
    formatted: list[FormattedMonth] = Field(..., description="Same months with display labels")


class ActivitiesRequest(BaseModel):
    """Request body for POST /api/v1/calendar/activities."""
    months: list[int] | None = Field(None, description="YYYYMM months to load", examples=[[202501, 202502]])
    emp_id: str | int | None = Field(None, description="Restrict to one employee's allocations")


class ActivityOut(BaseModel):
    """One unique activity/category pair within a month."""
    activity: str | None = Field(None, description="Activity name", examples=["Quarterly close"])
    category: str | None = Field(None, description="Category name", examples=["Baseline"])


class ActivityGroup(BaseModel):
    """Activity names bucketed under one category."""
    category: str = Field(..., examples=["Baseline"])
    activities: list[str | None] = Field(..., description="Activity names in first-seen order")


class MonthActivities(BaseModel):
    """Activities for one requested month."""
    yyyymm: int = Field(..., examples=[202501])
    label: str = Field(..., examples=["Jan-25"])
    activities: list[ActivityOut] = Field(..., description="Unique (activity, category) pairs")
    groups: list[ActivityGroup] = Field(..., description="Non-empty category buckets in display order")


class ActivitiesResponse(BaseModel):
    """Response body for POST /api/v1/calendar/activities."""
    activitiesByMonth: list[MonthActivities]


# ── Capacity models ───────────────────────────────────────────────────────────

class MonthOption(BaseModel):
    """Dropdown entry for a month."""
    label: str = Field(..., examples=["Sep-25"])
    value: int = Field(..., examples=[202509])


class CapacityMonthsResponse(BaseModel):
    """Response body for GET /api/v1/capacity-summary/months."""
    months: list[MonthOption]


class CategorySeries(BaseModel):
    """Allocation totals for one bucket, aligned with the month labels."""
    label: str = Field(..., examples=["Vacation"])
    values: list[float]


class CapacitySummaryResponse(BaseModel):
    """Response body for GET /api/v1/capacity-summary.  All arrays share one length."""
    months: list[str] = Field(..., description="Month labels in window order", examples=[["Jan-25", "Feb-25"]])
    categories: list[CategorySeries]
    totals: list[float] = Field(..., description="Total allocated per month")
    peopleCapacity: list[float] = Field(..., description="Total people capacity per month")
    remainingCapacity: list[float] = Field(..., description="Capacity minus allocation; negative when over-allocated")


# ── Initiative models ─────────────────────────────────────────────────────────

class InitiativeIn(BaseModel):
    """Request body for creating or updating an initiative.

    Required-field checks run in the route so the error names the first
    missing field.
    """
    project: str | None = None
    category: str | None = None
    lead: str | None = None
    status: str | None = None
    requestor: str | None = None
    requestor_vp: str | None = None
    requesting_dept: str | None = None
    completion_date: str | None = None
    target_period: str | None = None
    description: str | None = None
    resource_consideration: str | None = None


class InitiativeOut(BaseModel):
    """An initiative (``assignment`` document) as returned to clients."""
    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Document id", examples=["65a1f0c2e4b0a1b2c3d4e5f6"])
    project_name: str | None = None
    category: str | None = None
    leader: str | None = None
    status: str | None = None
    requestor: str | None = None
    requestor_vp: str | None = None
    requesting_dept: str | None = None
    target_period: str | None = None
    completion_date: Any = None
    description: str | None = None
    resource_notes: str | None = None


class InitiativeListResponse(BaseModel):
    """Response body for GET /api/v1/initiatives."""
    allAssignments: list[InitiativeOut]
    myInitiatives: list[InitiativeOut]


class InitiativeCreated(BaseModel):
    success: bool = True
    insertedId: str


class EmployeeName(BaseModel):
    emp_name: str


class RequestorOption(BaseModel):
    emp_name: str
    acc_type_id: int | None = None


class DropdownsResponse(BaseModel):
    """Response body for GET /api/v1/initiatives/dropdowns."""
    employees: list[EmployeeName] = Field(..., description="Eligible leads (resource managers)")
    requestors: list[RequestorOption] = Field(..., description="Eligible requestors and requestor VPs")


class DepartmentOut(BaseModel):
    dept_no: Any = Field(None, examples=[10])
    dept_name: str = Field("", examples=["Finance"])


# ── Summary / profile models ──────────────────────────────────────────────────

class InitiativeCounts(BaseModel):
    """Initiative counts for the dashboard summary cards."""
    backlog: int = 0
    active: int = 0
    planned: int = 0
    hold: int = 0


class ProfileOut(BaseModel):
    name: str = ""
    title: str = ""
    department: str = ""
    role: str = ""
    id: str | int = ""


# ── Error model ───────────────────────────────────────────────────────────────

class ErrorResponse(BaseModel):
    """Standard error response body."""
    error: str = Field(..., description="Short error category", examples=["Bad request"])
    detail: str | None = Field(None, description="Extended error detail")
    status_code: int = Field(..., ge=400, le=599, description="HTTP status code", examples=[400])
