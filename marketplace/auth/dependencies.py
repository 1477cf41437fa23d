from __future__ import annotations

from fastapi import HTTPException, Request

from .users import ROLE_ADMIN, ROLE_PROFESSIONAL


def get_current_user(request: Request) -> dict | None:
    """Return the user dict from the session, or ``None``."""
    return request.session.get("user")


def require_user(request: Request) -> dict:
    """Raise 401 if no user is logged in."""
    user = request.session.get("user")
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_professional(request: Request) -> dict:
    """Raise 401 if not logged in, 403 if the account has no professional profile."""
    user = require_user(request)
    if user.get("role") != ROLE_PROFESSIONAL or not user.get("subject_id"):
        raise HTTPException(status_code=403, detail="Professional account required")
    return user


def require_admin(request: Request) -> dict:
    """Raise 401 if not logged in, 403 if not admin."""
    user = require_user(request)
    if user.get("role") != ROLE_ADMIN:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
