"""
Admin endpoints: performance summary, grading and the feedback feed.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from auth import dependencies as auth_dependencies
from auth.security import Claims
from core.db import Database, get_db
from feedback import service as feedback_service

from . import schemas, service

router = APIRouter(prefix="/api/admin")


@router.get("/summary")
async def get_summary(
    db: Database = Depends(get_db),
    _: Claims = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.summary(db)


@router.post("/grade", status_code=status.HTTP_201_CREATED)
async def grade_staff(
    request: schemas.GradeRequest,
    db: Database = Depends(get_db),
    _: Claims = Depends(auth_dependencies.require_admin),
) -> dict:
    result = await service.grade_staff(db, request)
    return result.model_dump()


@router.get("/feedback")
async def list_feedback(
    db: Database = Depends(get_db),
    _: Claims = Depends(auth_dependencies.require_admin),
) -> list[dict]:
    """
    The 100 most recent feedback entries with their location names.
    """
    return await feedback_service.recent_feedback(db)


@router.get("/grades")
async def list_grades(
    staff_id: int | None = Query(default=None, alias="staffId"),
    db: Database = Depends(get_db),
    _: Claims = Depends(auth_dependencies.require_admin),
) -> list[dict]:
    return await service.grade_history(db, staff_id)


@router.get("/grades/latest")
async def get_latest_grade(
    staff_id: int | None = Query(default=None, alias="staffId"),
    db: Database = Depends(get_db),
    _: Claims = Depends(auth_dependencies.require_admin),
) -> dict | None:
    return await service.latest_grade(db, staff_id)
