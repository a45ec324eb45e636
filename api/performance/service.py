"""
Staff performance business logic.

Scope:
- system-wide feedback count + per-staff average rating
- append-only grade history (A-E) per staff member
"""

from __future__ import annotations

import logging

from core.db import Database
from core.errors import InvalidInput
from feedback import repository as feedback_repository

from . import repository, schemas

logger = logging.getLogger(__name__)


def _to_performance_item(row: dict) -> dict:
    return {
        "id": int(row["id"]),
        "name": str(row["name"]),
        "avg_rating": float(row["avg_rating"] or 0),
    }


async def summary(db: Database) -> dict:
    total = await feedback_repository.count_feedback(db)
    rows = await repository.staff_performance(db)
    return {
        "totalFeedback": total,
        "staffPerformance": [_to_performance_item(row) for row in rows],
    }


async def grade_staff(db: Database, payload: schemas.GradeRequest) -> schemas.GradeCreatedResponse:
    grade = (payload.grade or "").strip()
    if not payload.staff_id or grade not in schemas.GRADES:
        raise InvalidInput("Invalid staffId or grade")

    note = (payload.note or "").strip() or None
    grade_id = await repository.insert_grade(db, staff_id=int(payload.staff_id), grade=grade, note=note)
    logger.info("grade_recorded id=%s staff_id=%s grade=%s", grade_id, payload.staff_id, grade)
    return schemas.GradeCreatedResponse(id=grade_id)


def _require_staff_id(staff_id: int | None) -> int:
    if not staff_id:
        raise InvalidInput("Missing staffId")
    return int(staff_id)


async def grade_history(db: Database, staff_id: int | None) -> list[dict]:
    return await repository.list_grades(db, staff_id=_require_staff_id(staff_id))


async def latest_grade(db: Database, staff_id: int | None) -> dict | None:
    return await repository.get_latest_grade(db, staff_id=_require_staff_id(staff_id))
