"""
Public feedback submission endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from core.db import Database, get_db

from . import schemas, service

router = APIRouter(prefix="/api")


@router.post("/feedback", status_code=status.HTTP_201_CREATED)
async def submit_feedback(
    request: schemas.FeedbackCreateRequest,
    db: Database = Depends(get_db),
) -> dict:
    result = await service.submit_feedback(db, request)
    return result.model_dump()
