"""
Aggregation and grade persistence (raw SQL).
"""

from __future__ import annotations

from core.db import Database


async def staff_performance(db: Database) -> list[dict]:
    """
    Average rating per staff member over feedback for their assigned
    locations. Staff with no assignments or no feedback get 0.
    """
    return await db.fetch_all(
        """
        SELECT s.id,
               s.name,
               COALESCE(AVG((f.cleanliness + f.water_soap + f.hygiene + f.odor) / 4.0), 0)::float8
                   AS avg_rating
        FROM staff s
        LEFT JOIN assignments a ON a.staff_id = s.id
        LEFT JOIN feedback f ON f.location_id = a.location_id
        GROUP BY s.id, s.name
        ORDER BY s.id
        """
    )


async def insert_grade(db: Database, *, staff_id: int, grade: str, note: str | None) -> int:
    row = await db.fetch_one(
        """
        INSERT INTO grades (staff_id, grade, note)
        VALUES ($1, $2, $3)
        RETURNING id
        """,
        staff_id,
        grade,
        note,
    )
    if row is None:
        raise RuntimeError("Failed to insert grade.")
    return int(row["id"])


async def list_grades(db: Database, *, staff_id: int) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT grade, note, created_at
        FROM grades
        WHERE staff_id = $1
        ORDER BY created_at DESC, id DESC
        """,
        staff_id,
    )


async def get_latest_grade(db: Database, *, staff_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT grade, note, created_at
        FROM grades
        WHERE staff_id = $1
        ORDER BY created_at DESC, id DESC
        LIMIT 1
        """,
        staff_id,
    )
