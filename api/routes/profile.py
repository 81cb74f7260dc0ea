"""
Profile endpoint.

GET /api/v1/profile?username=  → name, title, department, role and employee id
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi import Query as FQuery

from api.database import get_db
from api.models import ProfileOut
from utils.directory import build_profile

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get(
    "",
    response_model=ProfileOut,
    summary="Profile of the signed-in user",
    responses={
        404: {"description": "No account for the username"},
    },
)
def get_profile(
    username: str | None = FQuery(None, description="Login name"),
    db: Any = Depends(get_db),
) -> dict:
    if not username or not username.strip():
        raise HTTPException(status_code=400, detail="Username is required")
    profile = build_profile(db, username)
    if profile is None:
        raise HTTPException(status_code=404, detail="User not found")
    return profile
