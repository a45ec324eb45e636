"""
Location persistence (raw SQL).
"""

from __future__ import annotations

from core.db import Database


async def list_locations(db: Database) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, name
        FROM locations
        """
    )


async def list_locations_for_staff(db: Database, *, staff_id: int) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT l.id, l.name
        FROM assignments a
        JOIN locations l ON l.id = a.location_id
        WHERE a.staff_id = $1
        """,
        staff_id,
    )
