"""
Application error taxonomy.

Every failure a handler can report maps to one of these kinds. `main.py`
registers a single handler that renders them as `{"error": "<message>"}`.
"""

from __future__ import annotations

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN


# Wraps the storage driver message verbatim.
class StorageFailure(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
