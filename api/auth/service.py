"""
Auth business logic.
"""

from __future__ import annotations

import logging

from fastapi.concurrency import run_in_threadpool

from core.config import Settings
from core.db import Database
from core.errors import Unauthenticated

from . import repository, schemas, security

logger = logging.getLogger(__name__)


async def login(
    db: Database,
    settings: Settings,
    *,
    role: str,
    payload: schemas.LoginRequest,
) -> schemas.TokenResponse:
    email = (payload.email or "").strip()
    password = payload.password or ""
    if not email or not password:
        raise Unauthenticated("Invalid credentials")

    account = await repository.get_account_by_email(db, role=role, email=email)
    if account is None:
        logger.info("login_failed role=%s email=%s reason=unknown_email", role, email)
        raise Unauthenticated("Invalid credentials")

    # bcrypt is CPU-bound; keep it off the event loop.
    is_valid = await run_in_threadpool(
        security.verify_password,
        password,
        str(account.get("password_hash") or ""),
    )
    if not is_valid:
        logger.info("login_failed role=%s email=%s reason=bad_password", role, email)
        raise Unauthenticated("Invalid credentials")

    token = security.build_access_token(
        subject_id=int(account["id"]),
        role=role,
        settings=settings,
    )
    logger.info("login_ok role=%s subject_id=%s", role, account["id"])
    return schemas.TokenResponse(token=token)
