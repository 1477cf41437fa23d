from __future__ import annotations

from typing import Any

import bcrypt

ROLE_CLIENT = "client"
ROLE_PROFESSIONAL = "professional"
ROLE_ADMIN = "admin"

_users: dict[str, dict[str, Any]] = {}


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _add_user(username: str, password: str, role: str, subject_id: str | None = None) -> None:
    _users[username] = {
        "password_hash": _hash_password(password),
        "role": role,
        "subject_id": subject_id,
    }


def _seed_users() -> None:
    """Pre-seed demo users on import."""
    _add_user("user", "user123", ROLE_CLIENT)
    _add_user("admin", "admin123", ROLE_ADMIN)
    # Professional account behind the p1 profile
    _add_user("valentina", "valentina123", ROLE_PROFESSIONAL, subject_id="p1")


def authenticate(username: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns ``{username, role, subject_id}`` or ``None``."""
    record = _users.get(username)
    if record and _verify_password(password, record["password_hash"]):
        return {
            "username": username,
            "role": record["role"],
            "subject_id": record["subject_id"],
        }
    return None


def viewer_id(user: dict[str, Any] | None) -> str | None:
    """Identity used for entitlements: the linked profile id, else the username."""
    if not user:
        return None
    return user.get("subject_id") or user.get("username")


_seed_users()
