from __future__ import annotations

import time
from typing import Any

# username -> professional id -> favorite record
_favorites: dict[str, dict[str, dict[str, Any]]] = {}


def add_favorite(user_id: str, professional_id: str) -> dict[str, Any]:
    """Bookmark a professional; adding an existing favorite returns it unchanged."""
    user_favorites = _favorites.setdefault(user_id, {})
    if professional_id not in user_favorites:
        user_favorites[professional_id] = {
            "id": f"{user_id}:{professional_id}",
            "user_id": user_id,
            "professional_id": professional_id,
            "timestamp": time.time(),
        }
    return user_favorites[professional_id]


def remove_favorite(user_id: str, professional_id: str) -> bool:
    """Return ``True`` if a favorite was removed."""
    return _favorites.get(user_id, {}).pop(professional_id, None) is not None


def get_favorites(user_id: str) -> list[dict[str, Any]]:
    return list(_favorites.get(user_id, {}).values())


def clear_favorites() -> None:
    _favorites.clear()
