from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from .graphql import user_field
from .objects import Bookmark

if TYPE_CHECKING:  # pragma: no cover
    from .session import Firefly

__all__ = ["Bookmarks"]

BOOKMARK_FIELDS = (
    "simple_url, deletable, position, read, from { guid, name }, type, title, "
    "is_form, form_answered, breadcrumb, guid, created"
)


class Bookmarks:
    """Pages the user bookmarked (or was sent) on the portal's dashboard."""

    def __init__(self, firefly: Firefly):
        firefly.ensure_authenticated()
        firefly.ensure_device_id()
        self.firefly = firefly

    def __iter__(self) -> Iterator[Bookmark]:
        for bookmark in user_field(self.firefly, "bookmarks", BOOKMARK_FIELDS):
            yield Bookmark.from_dict(bookmark)
