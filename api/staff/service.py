"""
Staff dashboard.

The dashboard is a small pipeline of query steps:

1. assigned locations for the staff member
2. the newest feedback for exactly those location ids (empty when none)
3. the staff member's latest grade (independent of 1 and 2)

Steps run one after another on the shared storage handle. They are not
wrapped in a transaction, so an assignment change mid-request is not
isolated.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.db import Database
from feedback import repository as feedback_repository
from locations import repository as locations_repository
from performance import repository as performance_repository

DASHBOARD_FEED_LIMIT = 50


@dataclass(frozen=True)
class Dashboard:
    locations: list[dict]
    feedback: list[dict]
    latest_grade: dict | None

    def to_dict(self) -> dict:
        return {
            "locations": self.locations,
            "feedback": self.feedback,
            "latestGrade": self.latest_grade,
        }


async def assigned_locations(db: Database, staff_id: int) -> list[dict]:
    return await locations_repository.list_locations_for_staff(db, staff_id=staff_id)


async def feedback_for_locations(db: Database, locations: list[dict]) -> list[dict]:
    location_ids = [int(loc["id"]) for loc in locations]
    return await feedback_repository.list_feedback_for_locations(
        db,
        location_ids=location_ids,
        limit=DASHBOARD_FEED_LIMIT,
    )


async def latest_grade(db: Database, staff_id: int) -> dict | None:
    return await performance_repository.get_latest_grade(db, staff_id=staff_id)


async def build_dashboard(db: Database, staff_id: int) -> Dashboard:
    locations = await assigned_locations(db, staff_id)
    feedback = await feedback_for_locations(db, locations)
    grade = await latest_grade(db, staff_id)
    return Dashboard(locations=locations, feedback=feedback, latest_grade=grade)
