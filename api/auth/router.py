"""
Login endpoints for admins and staff.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.config import Settings, get_settings
from core.db import Database, get_db

from . import schemas, security, service

router = APIRouter(prefix="/api")


@router.post("/admin/login")
async def admin_login(
    request: schemas.LoginRequest,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> dict:
    result = await service.login(db, settings, role=security.ROLE_ADMIN, payload=request)
    return result.model_dump()


@router.post("/staff/login")
async def staff_login(
    request: schemas.LoginRequest,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> dict:
    result = await service.login(db, settings, role=security.ROLE_STAFF, payload=request)
    return result.model_dump()
