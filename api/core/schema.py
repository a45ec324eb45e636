"""
Schema provisioning and demo seed data.

Both run once per process from the app lifespan. Every statement is
idempotent, so restarting against an existing database is safe.
"""

from __future__ import annotations

import logging

from .db import Database

logger = logging.getLogger(__name__)

SCHEMA_STATEMENTS: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS locations (
        id SERIAL PRIMARY KEY,
        name TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS feedback (
        id SERIAL PRIMARY KEY,
        location_id INTEGER NOT NULL REFERENCES locations (id),
        cleanliness INTEGER NOT NULL,
        water_soap INTEGER NOT NULL,
        hygiene INTEGER NOT NULL,
        odor INTEGER NOT NULL,
        comment TEXT,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS admin (
        id SERIAL PRIMARY KEY,
        name TEXT NOT NULL,
        email TEXT NOT NULL UNIQUE,
        password_hash TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS staff (
        id SERIAL PRIMARY KEY,
        name TEXT NOT NULL,
        email TEXT NOT NULL UNIQUE,
        password_hash TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS assignments (
        id SERIAL PRIMARY KEY,
        staff_id INTEGER NOT NULL REFERENCES staff (id),
        location_id INTEGER NOT NULL REFERENCES locations (id),
        UNIQUE (staff_id, location_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS grades (
        id SERIAL PRIMARY KEY,
        staff_id INTEGER NOT NULL REFERENCES staff (id),
        grade TEXT NOT NULL CHECK (grade IN ('A', 'B', 'C', 'D', 'E')),
        note TEXT,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    "CREATE INDEX IF NOT EXISTS feedback_location_created_idx ON feedback (location_id, created_at DESC)",
    "CREATE INDEX IF NOT EXISTS grades_staff_created_idx ON grades (staff_id, created_at DESC)",
)

# Seeded rows use explicit ids; these tables need their sequences moved past them.
_SEEDED_TABLES = ("admin", "locations", "staff", "assignments")

DEMO_ADMIN = {"id": 1, "name": "Site Admin", "email": "admin@example.com", "password": "admin123"}
DEMO_STAFF = {"id": 1, "name": "S. Kulkarni", "email": "staff1@example.com", "password": "staff123"}
DEMO_LOCATION = {"id": 1, "name": "Shaniwar Wada - Main Gate Toilet"}


async def create_schema(db: Database) -> None:
    for statement in SCHEMA_STATEMENTS:
        await db.execute(statement)
    logger.info("schema_ready statements=%d", len(SCHEMA_STATEMENTS))


async def seed_demo_data(
    db: Database,
    *,
    admin_password_hash: str,
    staff_password_hash: str,
) -> None:
    """
    Insert one admin, one location, one staff member and their assignment.
    Existing rows are left untouched.
    """
    await db.execute(
        """
        INSERT INTO admin (id, name, email, password_hash)
        VALUES ($1, $2, $3, $4)
        ON CONFLICT DO NOTHING
        """,
        DEMO_ADMIN["id"],
        DEMO_ADMIN["name"],
        DEMO_ADMIN["email"],
        admin_password_hash,
    )
    await db.execute(
        """
        INSERT INTO locations (id, name)
        VALUES ($1, $2)
        ON CONFLICT DO NOTHING
        """,
        DEMO_LOCATION["id"],
        DEMO_LOCATION["name"],
    )
    await db.execute(
        """
        INSERT INTO staff (id, name, email, password_hash)
        VALUES ($1, $2, $3, $4)
        ON CONFLICT DO NOTHING
        """,
        DEMO_STAFF["id"],
        DEMO_STAFF["name"],
        DEMO_STAFF["email"],
        staff_password_hash,
    )
    await db.execute(
        """
        INSERT INTO assignments (id, staff_id, location_id)
        VALUES (1, $1, $2)
        ON CONFLICT DO NOTHING
        """,
        DEMO_STAFF["id"],
        DEMO_LOCATION["id"],
    )

    for table in _SEEDED_TABLES:
        await db.execute(
            f"""
            SELECT setval(
                pg_get_serial_sequence('{table}', 'id'),
                GREATEST((SELECT COALESCE(MAX(id), 0) FROM {table}), 1)
            )
            """
        )
    logger.info("seed_done admin_email=%s staff_email=%s", DEMO_ADMIN["email"], DEMO_STAFF["email"])
