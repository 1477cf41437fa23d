from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from ..media import Media, MediaType


@dataclass(frozen=True)
class Author:
    id: str
    username: str
    display_name: str | None = None
    avatar_url: str | None = None


@dataclass(frozen=True)
class FeedItem:
    id: str
    author: Author
    media: tuple[Media, ...] = field(default_factory=tuple)
    preview: Media | None = None
    is_paywalled: bool = False
    title: str | None = None
    body: str | None = None
    like_count: int = 0
    comment_count: int = 0
    share_count: int = 0
    created_at: str | None = None


@dataclass(frozen=True)
class ResolvedMedia:
    visible_media: tuple[Media, ...]
    locked: bool


# ── API schemas ──────────────────────────────────────────────────────────


class MediaIn(BaseModel):
    url: str = Field(..., min_length=1)
    type: MediaType | None = None


class CreatePostRequest(BaseModel):
    title: str = ""
    body: str = ""
    is_public: bool = False
    media: list[MediaIn] = Field(..., min_length=1)
    preview_url: str | None = None


class AuthorOut(BaseModel):
    id: str
    username: str
    display_name: str | None
    avatar_url: str | None


class MediaOut(BaseModel):
    url: str
    type: MediaType


class FeedItemOut(BaseModel):
    id: str
    author: AuthorOut
    title: str | None
    body: str | None
    media: list[MediaOut]
    is_paywalled: bool
    locked: bool
    like_count: int
    comment_count: int
    share_count: int
    created_at: str | None
