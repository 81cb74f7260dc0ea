"""Initiative status counts for the dashboard summary cards."""

from typing import Any

from fastapi import APIRouter, Depends
from fastapi import Query as FQuery

from api.database import get_db
from api.models import InitiativeCounts
from utils.directory import resolve_employee_name

router = APIRouter(prefix="/summary", tags=["summary"])

# Card name -> statuses counted under it.
STATUS_BUCKETS: dict[str, tuple[str, ...]] = {
    "backlog": ("Backlog",),
    "active": ("On Going", "In Progress"),
    "planned": ("Planned",),
    "hold": ("On Hold",),
}


def count_by_status(db: Any, base_query: dict[str, Any]) -> dict[str, int]:
    """Count ``assignment`` documents matching *base_query* per card."""
    counts = {}
    for card, statuses in STATUS_BUCKETS.items():
        query = dict(base_query)
        query["status"] = statuses[0] if len(statuses) == 1 else {"$in": list(statuses)}
        counts[card] = db["assignment"].count_documents(query)
    return counts


@router.get("", response_model=InitiativeCounts, summary="Initiative counts by status")
def initiative_summary(
    filter: str = FQuery("all", pattern="^(all|mine)$", description="'all' or 'mine'"),
    username: str | None = FQuery(None, description="Login name; required for 'mine' to narrow the counts"),
    db: Any = Depends(get_db),
) -> dict:
    """Return backlog / active / planned / on-hold counts.

    With ``filter=mine`` and a username, only initiatives led by that user's
    employee name are counted; an unresolvable username yields all zeros.
    """
    base_query: dict[str, Any] = {}
    if filter == "mine" and username:
        emp_name = resolve_employee_name(db, username)
        if not emp_name:
            return {card: 0 for card in STATUS_BUCKETS}
        base_query["leader"] = emp_name
    return count_by_status(db, base_query)
