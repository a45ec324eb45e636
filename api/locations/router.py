"""
Public location listing used by the feedback form.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.db import Database, get_db

from . import repository

router = APIRouter(prefix="/api")


@router.get("/locations")
async def list_locations(db: Database = Depends(get_db)) -> list[dict]:
    rows = await repository.list_locations(db)
    return [{"id": int(row["id"]), "name": str(row["name"])} for row in rows]
