from __future__ import annotations

from typing import Callable

from .models import FeedItem, ResolvedMedia

EntitlementCheck = Callable[[str, str], bool]


def resolve_media(
    item: FeedItem,
    viewer: str | None,
    has_access: EntitlementCheck,
) -> ResolvedMedia:
    """Decide which media of *item* the viewer may see.

    Free items show everything. Paywalled items show everything only to an
    entitled viewer; anyone else gets the preview (if the item has one) and
    ``locked=True``. *has_access* is called at most once and never for an
    anonymous viewer.
    """
    if not item.is_paywalled:
        return ResolvedMedia(visible_media=item.media, locked=False)

    if viewer is not None and has_access(viewer, item.author.id):
        return ResolvedMedia(visible_media=item.media, locked=False)

    teaser = (item.preview,) if item.preview is not None else ()
    return ResolvedMedia(visible_media=teaser, locked=True)
