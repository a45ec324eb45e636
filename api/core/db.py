"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns the connection pool. The FastAPI lifespan opens it on startup,
stores it on `app.state.db` and closes it on shutdown (see `api/main.py`).
Handlers receive it through `Depends(get_db)`.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Driver errors are re-raised as `StorageFailure` so every handler fails the
same way on a storage problem.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg
from fastapi import Request

from .errors import StorageFailure

logger = logging.getLogger(__name__)

_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError)


def sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    @classmethod
    async def connect(
        cls,
        dsn: str,
        *,
        max_size: int = 1,
        command_timeout: float = 30,
    ) -> Database:
        pool = await asyncpg.create_pool(
            dsn=sanitize_database_url(dsn),
            min_size=1,
            max_size=max(1, max_size),
            command_timeout=command_timeout,
        )
        return cls(pool)

    async def close(self) -> None:
        await self._pool.close()

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        try:
            row = await self._pool.fetchrow(sql, *args)
        except _DRIVER_ERRORS as exc:
            logger.exception("storage_failure op=fetch_one")
            raise StorageFailure(str(exc)) from exc
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        try:
            rows = await self._pool.fetch(sql, *args)
        except _DRIVER_ERRORS as exc:
            logger.exception("storage_failure op=fetch_all")
            raise StorageFailure(str(exc)) from exc
        return [_record_to_dict(r) for r in rows]

    async def fetch_value(self, sql: str, *args: Any) -> Any:
        try:
            return await self._pool.fetchval(sql, *args)
        except _DRIVER_ERRORS as exc:
            logger.exception("storage_failure op=fetch_value")
            raise StorageFailure(str(exc)) from exc

    async def execute(self, sql: str, *args: Any) -> None:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
        """
        try:
            await self._pool.execute(sql, *args)
        except _DRIVER_ERRORS as exc:
            logger.exception("storage_failure op=execute")
            raise StorageFailure(str(exc)) from exc


def get_db(request: Request) -> Database:
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("Database is not initialized. Open it in the app lifespan.")
    return db
