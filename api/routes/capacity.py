"""
Capacity summary endpoints.

GET /api/v1/capacity-summary/months  → months present in allocation or capacity data
GET /api/v1/capacity-summary         → allocation vs. capacity over a month window

The summary window starts at ``start`` (YYYYMM) or, when omitted, at the
latest stored month not after the current month.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi import Query as FQuery

from api.models import CapacityMonthsResponse, CapacitySummaryResponse
from api.database import get_db
from utils.capacity import DEFAULT_WINDOW, build_capacity_summary, stored_months
from utils.months import current_month, format_month_label, parse_month, recent_months

router = APIRouter(prefix="/capacity-summary", tags=["capacity"])

_MAX_WINDOW = 36


@router.get(
    "/months",
    response_model=CapacityMonthsResponse,
    summary="Months available to the capacity summary",
)
def list_capacity_months(db: Any = Depends(get_db)) -> dict:
    """Return months found in either collection within the trailing year."""
    months = recent_months(stored_months(db), current_month())
    return {"months": [{"label": format_month_label(m), "value": m} for m in months]}


@router.get(
    "",
    response_model=CapacitySummaryResponse,
    summary="Allocation and remaining capacity by month",
    responses={
        400: {"description": "Invalid start month", "content": {"application/json": {"example": {"error": "Bad request", "detail": "Invalid month '2025'; expected YYYYMM", "status_code": 400}}}},
    },
)
def capacity_summary(
    request: Request,
    start: str | None = FQuery(None, description="First month of the window (YYYYMM)"),
    months: int | None = FQuery(
        None, ge=1, le=_MAX_WINDOW,
        description="Number of months in the window (default: CAPACITY_WINDOW_MONTHS, 6)",
    ),
    db: Any = Depends(get_db),
) -> dict:
    """Sum allocations per category and capacity per month for the window.

    Every month of the window is present; months without data are zero.
    ``remainingCapacity`` is capacity minus allocation and may be negative.
    """
    if months is None:
        cfg = getattr(request.app.state, "config", None)
        months = cfg.capacity_window if cfg is not None else DEFAULT_WINDOW
    start_month = None
    if start:
        try:
            start_month = parse_month(start)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
    return build_capacity_summary(
        db, start=start_month, window_size=months, current=current_month(),
    )
