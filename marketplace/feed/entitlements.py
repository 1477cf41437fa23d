from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)

# viewer id -> author ids the viewer subscribes to
_subscriptions: dict[str, set[str]] = {}
_lock = threading.Lock()


def subscribe(viewer: str, author: str) -> None:
    with _lock:
        _subscriptions.setdefault(viewer, set()).add(author)


def unsubscribe(viewer: str, author: str) -> None:
    with _lock:
        _subscriptions.get(viewer, set()).discard(author)


def get_subscriptions(viewer: str) -> list[str]:
    with _lock:
        authors = frozenset(_subscriptions.get(viewer, ()))
    return sorted(authors)


def clear_subscriptions() -> None:
    with _lock:
        _subscriptions.clear()


def has_access(viewer: str | None, author: str) -> bool:
    """True when *viewer* may see *author*'s paywalled media."""
    if viewer is None:
        return False
    if viewer == author:
        return True
    with _lock:
        return author in _subscriptions.get(viewer, ())


def fail_closed(check: Callable[[str, str], bool]) -> Callable[[str, str], bool]:
    """Wrap an entitlement check so that a failing lookup means no access."""

    def guarded(viewer: str, author: str) -> bool:
        try:
            return bool(check(viewer, author))
        except Exception:
            logger.warning(
                "Entitlement lookup failed for viewer %s on author %s, treating as locked",
                viewer, author, exc_info=True,
            )
            return False

    return guarded
