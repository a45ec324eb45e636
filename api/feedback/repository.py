"""
Feedback persistence (raw SQL).
"""

from __future__ import annotations

from core.db import Database


async def insert_feedback(
    db: Database,
    *,
    location_id: int,
    cleanliness: int,
    water_soap: int,
    hygiene: int,
    odor: int,
    comment: str | None,
) -> int:
    row = await db.fetch_one(
        """
        INSERT INTO feedback (location_id, cleanliness, water_soap, hygiene, odor, comment)
        VALUES ($1, $2, $3, $4, $5, $6)
        RETURNING id
        """,
        location_id,
        cleanliness,
        water_soap,
        hygiene,
        odor,
        comment,
    )
    if row is None:
        raise RuntimeError("Failed to insert feedback.")
    return int(row["id"])


async def count_feedback(db: Database) -> int:
    total = await db.fetch_value("SELECT COUNT(*) FROM feedback")
    return int(total or 0)


async def list_recent_feedback(db: Database, *, limit: int = 100) -> list[dict]:
    """
    Newest feedback across all locations, each row joined with its location name.
    """
    return await db.fetch_all(
        """
        SELECT f.*, l.name AS location
        FROM feedback f
        JOIN locations l ON l.id = f.location_id
        ORDER BY f.created_at DESC, f.id DESC
        LIMIT $1
        """,
        limit,
    )


async def list_feedback_for_locations(
    db: Database,
    *,
    location_ids: list[int],
    limit: int = 50,
) -> list[dict]:
    if not location_ids:
        return []
    return await db.fetch_all(
        """
        SELECT f.*, l.name AS location
        FROM feedback f
        JOIN locations l ON l.id = f.location_id
        WHERE f.location_id = ANY($1::int[])
        ORDER BY f.created_at DESC, f.id DESC
        LIMIT $2
        """,
        location_ids,
        limit,
    )
