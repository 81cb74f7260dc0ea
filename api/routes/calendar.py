"""
Calendar view endpoints.

GET  /api/v1/calendar/months      → months with allocation data in the trailing year
POST /api/v1/calendar/activities  → unique activities per requested month,
                                    grouped by category

The month picker on the calendar page keeps its selection contiguous and at
most three months long (see utils/selection.py); this endpoint only trusts
that the request names the months to load.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from api.database import get_db
from api.models import ActivitiesRequest, ActivitiesResponse, CalendarMonthsResponse
from utils.categories import group_by_category, unique_activities
from utils.months import current_month, format_month_label, parse_month, recent_months

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get(
    "/months",
    response_model=CalendarMonthsResponse,
    summary="Months available to the calendar view",
)
def list_calendar_months(db: Any = Depends(get_db)) -> dict:
    """Return allocation months from one year ago through the current month."""
    months = recent_months(db["allocation"].distinct("date"), current_month())
    return {
        "months": months,
        "formatted": [{"yyyymm": m, "label": format_month_label(m)} for m in months],
    }


@router.post(
    "/activities",
    response_model=ActivitiesResponse,
    summary="Activities grouped by month",
    responses={
        400: {"description": "Missing or invalid months", "content": {"application/json": {"example": {"error": "Bad request", "detail": "Months array is required", "status_code": 400}}}},
    },
)
def activities_by_month(body: ActivitiesRequest, db: Any = Depends(get_db)) -> dict:
    """Return unique ``{activity, category}`` pairs for each requested month.

    Months are returned in request order.  Pass ``emp_id`` to restrict the
    result to one employee's allocations.
    """
    if not body.months:
        raise HTTPException(status_code=400, detail="Months array is required")
    try:
        months = [parse_month(m) for m in body.months]
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    query: dict[str, Any] = {"date": {"$in": months}}
    if body.emp_id:
        query["emp_id"] = body.emp_id

    rows_by_month: dict[int, list[dict]] = {m: [] for m in months}
    for row in db["allocation"].find(query, {"_id": 0, "date": 1, "activity": 1, "category": 1}):
        try:
            rows_by_month.setdefault(int(row.get("date")), []).append(row)
        except (TypeError, ValueError):
            logger.debug("Skipping allocation row with bad date %r", row.get("date"))

    result = []
    for month in months:
        activities = unique_activities(rows_by_month.get(month, []))
        result.append({
            "yyyymm": month,
            "label": format_month_label(month),
            "activities": activities,
            "groups": group_by_category(activities),
        })
    return {"activitiesByMonth": result}
