"""
Account lookups for login (raw SQL).
"""

from __future__ import annotations

from core.db import Database

from .security import ROLE_ADMIN, ROLE_STAFF

# Table names are fixed per role; never interpolate caller input here.
_ACCOUNT_TABLES = {
    ROLE_ADMIN: "admin",
    ROLE_STAFF: "staff",
}


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


async def get_account_by_email(db: Database, *, role: str, email: str) -> dict | None:
    table = _ACCOUNT_TABLES[role]
    return await db.fetch_one(
        f"""
        SELECT id, name, email, password_hash
        FROM {table}
        WHERE lower(email) = $1
        """,
        normalize_email(email),
    )
