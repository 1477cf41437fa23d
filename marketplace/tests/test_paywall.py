from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

from marketplace.feed.entitlements import (
    clear_subscriptions,
    fail_closed,
    get_subscriptions,
    has_access,
    subscribe,
    unsubscribe,
)
from marketplace.feed.models import Author, FeedItem
from marketplace.feed.paywall import resolve_media
from marketplace.media import Media, MediaType

AUTHOR = Author(id="p1", username="valentina")
FULL = (Media("a.jpg"), Media("b.mp4", MediaType.VIDEO))
PREVIEW = Media("p.jpg")


def _item(is_paywalled, media=FULL, preview=None):
    return FeedItem(id="post", author=AUTHOR, media=media, preview=preview, is_paywalled=is_paywalled)


def _allow(viewer, author):
    return True


def _deny(viewer, author):
    return False


def test_free_item_is_visible_to_everyone():
    for viewer, check in [(None, _deny), ("user", _deny), ("user", _allow)]:
        resolved = resolve_media(_item(False), viewer, check)
        assert resolved.locked is False
        assert resolved.visible_media == FULL


def test_free_item_never_checks_entitlement():
    check = MagicMock(return_value=False)
    resolve_media(_item(False), "user", check)
    check.assert_not_called()


def test_paywalled_item_for_entitled_viewer():
    check = MagicMock(return_value=True)
    resolved = resolve_media(_item(True), "user", check)
    assert resolved.locked is False
    assert resolved.visible_media == FULL
    check.assert_called_once_with("user", "p1")


def test_paywalled_item_for_unentitled_viewer_shows_preview():
    resolved = resolve_media(_item(True, preview=PREVIEW), "user", _deny)
    assert resolved.locked is True
    assert resolved.visible_media == (PREVIEW,)


def test_paywalled_item_without_preview_shows_nothing():
    resolved = resolve_media(_item(True), "user", _deny)
    assert resolved.locked is True
    assert resolved.visible_media == ()


def test_anonymous_viewer_scenario():
    check = MagicMock(return_value=True)
    resolved = resolve_media(_item(True, media=(), preview=Media("p.jpg")), None, check)
    assert resolved.locked is True
    assert [m.url for m in resolved.visible_media] == ["p.jpg"]
    check.assert_not_called()


def test_fail_closed_on_lookup_error():
    broken = MagicMock(side_effect=RuntimeError("entitlement service down"))
    resolved = resolve_media(_item(True, preview=PREVIEW), "user", fail_closed(broken))
    assert resolved.locked is True
    assert resolved.visible_media == (PREVIEW,)


def test_has_access_rules():
    clear_subscriptions()
    assert has_access(None, "p1") is False
    assert has_access("user", "p1") is False
    assert has_access("p1", "p1") is True
    subscribe("user", "p1")
    assert has_access("user", "p1") is True
    assert has_access("user", "p2") is False
    unsubscribe("user", "p1")
    assert has_access("user", "p1") is False


def test_subscriptions_survive_concurrent_updates():
    clear_subscriptions()

    def churn(i):
        subscribe("user", f"a{i}")
        return get_subscriptions("user")

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(churn, range(400)))

    assert len(get_subscriptions("user")) == 400
    clear_subscriptions()
