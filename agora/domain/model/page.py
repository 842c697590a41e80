"""Listing page models."""

from typing import Optional

from .common import DomainModel
from .comment import Comment
from .post import Post


class RankedSubject(DomainModel):
    """A listed post or comment together with its net score."""

    subject: Post | Comment
    score: int


class CursorPage(DomainModel):
    """One page of a keyset-paginated listing."""

    items: list[RankedSubject]
    has_next: bool
    next_cursor: Optional[str] = None


class Pagination(DomainModel):
    """Offset pagination metadata."""

    current: int
    limit: int
    records: int
    pages: int


class OffsetPage(DomainModel):
    """One page of an offset-paginated listing.

    Offset pages are not stable under concurrent writes: items can be
    skipped or repeated between requests.
    """

    items: list[RankedSubject]
    pagination: Pagination
    stable: bool = False
