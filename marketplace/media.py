from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

_VIDEO_SUFFIXES = (".mp4", ".mov")


class MediaType(str, Enum):
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"


class InvalidMedia(ValueError):
    """Raised when the media attached to a new post breaks the upload rules."""


@dataclass(frozen=True)
class Media:
    url: str
    type: MediaType = MediaType.IMAGE


def media_from_url(url: str) -> Media:
    """Infer the media type from the file extension of *url*."""
    kind = MediaType.VIDEO if url.lower().endswith(_VIDEO_SUFFIXES) else MediaType.IMAGE
    return Media(url=url, type=kind)


def post_media(entries: Iterable[tuple[str, MediaType | None]]) -> list[Media]:
    """Build the media of a new post from ``(url, declared type)`` pairs.

    The type always comes from the url. A declared VIDEO must be MP4 or MOV,
    and all items of one post must share a type.
    """
    media: list[Media] = []
    for url, declared in entries:
        item = media_from_url(url)
        if declared is MediaType.VIDEO and item.type is not MediaType.VIDEO:
            raise InvalidMedia(f"videos must be MP4 or MOV, got {url!r}")
        media.append(item)
    if len({m.type for m in media}) > 1:
        raise InvalidMedia("a post cannot mix images and videos")
    return media


def split_urls(value: object) -> list[str]:
    """Split a ``|``-separated url column into a list of urls."""
    if not isinstance(value, str):
        return []
    return [u.strip() for u in value.split("|") if u.strip()]
