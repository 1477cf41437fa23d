from __future__ import annotations

from ..discovery.models import SubjectKind
from ..discovery.repository import SubjectRepository, get_repository
from .entitlements import fail_closed, has_access
from .models import AuthorOut, FeedItem, FeedItemOut, MediaOut
from .paywall import EntitlementCheck, resolve_media
from .store import list_feed_items


def to_feed_item_out(item: FeedItem, viewer: str | None, check: EntitlementCheck) -> FeedItemOut:
    resolved = resolve_media(item, viewer, check)
    return FeedItemOut(
        id=item.id,
        author=AuthorOut(
            id=item.author.id,
            username=item.author.username,
            display_name=item.author.display_name,
            avatar_url=item.author.avatar_url,
        ),
        title=item.title,
        body=item.body,
        media=[MediaOut(url=m.url, type=m.type) for m in resolved.visible_media],
        is_paywalled=item.is_paywalled,
        locked=resolved.locked,
        like_count=item.like_count,
        comment_count=item.comment_count,
        share_count=item.share_count,
        created_at=item.created_at,
    )


def build_feed(
    viewer: str | None,
    check: EntitlementCheck = has_access,
    repository: SubjectRepository | None = None,
) -> list[FeedItemOut]:
    """Feed for *viewer* with paywalled media resolved per item."""
    repo = repository or get_repository()
    authors = {p.id: p for p in repo.list_subjects(SubjectKind.PROFESSIONAL)}
    guarded = fail_closed(check)
    return [to_feed_item_out(item, viewer, guarded) for item in list_feed_items(authors)]
