"""
Auth security helpers.

Password hashing uses bcrypt. Access tokens are HS256 JWTs carrying the
subject id (`sub`, as a string) and the subject role (`admin` or `staff`).
"""

from __future__ import annotations

import time
from dataclasses import dataclass

import bcrypt
import jwt

from core.config import Settings

ROLE_ADMIN = "admin"
ROLE_STAFF = "staff"
ROLES = frozenset({ROLE_ADMIN, ROLE_STAFF})


@dataclass(frozen=True)
class Claims:
    subject_id: int
    role: str
    expires_at: int


@dataclass(frozen=True)
class AuthFailure:
    reason: str


def now_epoch_s() -> int:
    return int(time.time())


def hash_password(plain_password: str) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise ValueError("Password is empty.")
    return bcrypt.hashpw(password, bcrypt.gensalt(rounds=10)).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def build_access_token(*, subject_id: int, role: str, settings: Settings) -> str:
    if role not in ROLES:
        raise ValueError(f"Unknown role: {role!r}")

    issued_at = now_epoch_s()
    expires_at = issued_at + (settings.access_token_expire_hours * 3600)

    payload = {
        "sub": str(subject_id),
        "role": role,
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> Claims | AuthFailure:
    """
    Verify `token` and return its claims, or an `AuthFailure` describing why
    it was rejected. Never raises for a bad token.
    """
    raw = (token or "").strip()
    if not raw:
        return AuthFailure("Missing token")

    try:
        payload = jwt.decode(
            raw,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        return AuthFailure("Token expired")
    except jwt.InvalidTokenError:
        return AuthFailure("Invalid token")

    role = str(payload.get("role") or "").strip().lower()
    if role not in ROLES:
        return AuthFailure("Invalid token role")

    subject = str(payload.get("sub") or "").strip()
    if not subject.isdigit():
        return AuthFailure("Invalid token subject")

    return Claims(subject_id=int(subject), role=role, expires_at=int(payload["exp"]))
