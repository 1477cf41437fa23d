from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from ..discovery.data_store import get_frame
from ..discovery.models import Professional
from ..media import Media, MediaType, media_from_url, split_urls
from .models import Author, FeedItem

logger = logging.getLogger(__name__)

_DEFAULT_TITLES = {MediaType.IMAGE: "New post", MediaType.VIDEO: "New reel"}
_DEFAULT_BODY = "Shared on the marketplace."

_posts: list[dict] | None = None


def _load() -> list[dict]:
    df = get_frame("posts")
    posts = []
    for _, row in df.iterrows():
        posts.append({
            "id": str(row["id"]),
            "author_id": str(row["author_id"]),
            "title": row["title"],
            "body": row["body"],
            "media": [media_from_url(u) for u in split_urls(row["media_urls"])],
            "preview": media_from_url(row["preview_url"]) if row["preview_url"] else None,
            "is_public": str(row["is_public"]).strip().lower() == "true",
            "like_count": int(row["like_count"] or 0),
            "comment_count": int(row["comment_count"] or 0),
            "share_count": int(row["share_count"] or 0),
            "created_at": row["created_at"],
        })
    return posts


def _get_posts() -> list[dict]:
    global _posts
    if _posts is None:
        _posts = _load()
    return _posts


def clear_posts() -> None:
    """Drop created posts and reload the seed data on next access."""
    global _posts
    _posts = None


def create_post(
    author_id: str,
    media: list[Media],
    title: str = "",
    body: str = "",
    is_public: bool = False,
    preview: Media | None = None,
) -> dict:
    kind = media[0].type if media else MediaType.IMAGE
    post = {
        "id": uuid.uuid4().hex,
        "author_id": author_id,
        "title": title.strip() or _DEFAULT_TITLES[kind],
        "body": body.strip() or _DEFAULT_BODY,
        "media": list(media),
        "preview": preview,
        "is_public": is_public,
        "like_count": 0,
        "comment_count": 0,
        "share_count": 0,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    _get_posts().append(post)
    logger.info("Author %s created post %s (public=%s)", author_id, post["id"], is_public)
    return post


def list_feed_items(authors: dict[str, Professional]) -> list[FeedItem]:
    """All posts whose author is known, newest first."""
    items: list[FeedItem] = []
    for post in _get_posts():
        professional = authors.get(post["author_id"])
        if professional is None:
            continue
        items.append(FeedItem(
            id=post["id"],
            author=Author(
                id=professional.id,
                username=professional.username,
                display_name=professional.display_name,
                avatar_url=professional.avatar_url,
            ),
            media=tuple(post["media"]),
            preview=post["preview"],
            is_paywalled=not post["is_public"],
            title=post["title"],
            body=post["body"],
            like_count=post["like_count"],
            comment_count=post["comment_count"],
            share_count=post["share_count"],
            created_at=post["created_at"],
        ))
    items.sort(key=lambda i: i.created_at or "", reverse=True)
    return items
