"""
Staff-only endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies
from auth.security import Claims
from core.db import Database, get_db

from . import service

router = APIRouter(prefix="/api/staff")


@router.get("/dashboard")
async def get_dashboard(
    db: Database = Depends(get_db),
    claims: Claims = Depends(auth_dependencies.require_staff),
) -> dict:
    """
    Assigned locations, their recent feedback and the caller's latest grade.
    Scoped strictly to the authenticated staff member.
    """
    dashboard = await service.build_dashboard(db, claims.subject_id)
    return dashboard.to_dict()
