"""
Feedback business logic.
"""

from __future__ import annotations

import logging

from core.db import Database
from core.errors import InvalidInput

from . import repository, schemas

logger = logging.getLogger(__name__)

ADMIN_FEED_LIMIT = 100


async def submit_feedback(
    db: Database,
    payload: schemas.FeedbackCreateRequest,
) -> schemas.FeedbackCreatedResponse:
    required = (
        payload.location_id,
        payload.cleanliness,
        payload.water_soap,
        payload.hygiene,
        payload.odor,
    )
    # A rating of 0 is rejected along with missing values.
    if not all(required):
        raise InvalidInput("Missing ratings or locationId")

    comment = (payload.comment or "").strip() or None
    feedback_id = await repository.insert_feedback(
        db,
        location_id=int(payload.location_id),
        cleanliness=int(payload.cleanliness),
        water_soap=int(payload.water_soap),
        hygiene=int(payload.hygiene),
        odor=int(payload.odor),
        comment=comment,
    )
    logger.info("feedback_created id=%s location_id=%s", feedback_id, payload.location_id)
    return schemas.FeedbackCreatedResponse(id=feedback_id)


async def recent_feedback(db: Database) -> list[dict]:
    return await repository.list_recent_feedback(db, limit=ADMIN_FEED_LIMIT)
