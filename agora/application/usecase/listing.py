"""Shared pieces of the listing use cases."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from agora.domain.error import ValidationError
from agora.domain.model import RankedSubject
from agora.domain.service import PaginationOrchestrator
from agora.domain.value import Contains, FilterExpr, Or, Range, SortMode

# Shorter search text is ignored
MIN_QUERY_LENGTH = 2


class PaginationInfo(BaseModel):
    """Offset pagination metadata in responses."""

    current: int
    limit: int
    records: int
    pages: int


class ListingRequest(BaseModel):
    """Sorting, paging and common filters of a listing request.

    ``cursor`` selects keyset pagination and ``page`` selects offset
    pagination; they cannot be combined. With neither, the first keyset
    page is returned.
    """

    sort: SortMode = SortMode.NEWEST
    cursor: str | None = None
    page: int | None = None
    limit: int | None = None
    q: str | None = None
    since: datetime | None = None
    until: datetime | None = None


class ListingResult(BaseModel):
    """Ranked items plus whichever continuation metadata applies."""

    items: list[RankedSubject]
    next_cursor: str | None = None
    pagination: PaginationInfo | None = None

    @property
    def is_offset(self) -> bool:
        return self.pagination is not None


def text_filter(q: str | None, *fields: str) -> Optional[FilterExpr]:
    """Free-text match over ``fields``, or None when the query is too short."""
    if q is None:
        return None
    text = q.strip()
    if len(text) < MIN_QUERY_LENGTH:
        return None
    return Or(predicates=tuple(Contains(field=field, text=text) for field in fields))


def _naive_local(value: datetime | None) -> datetime | None:
    # Stored timestamps are naive local time
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def created_between(
    since: datetime | None, until: datetime | None
) -> Optional[FilterExpr]:
    """Inclusive creation-time window, or None when unbounded."""
    since, until = _naive_local(since), _naive_local(until)
    if since is None and until is None:
        return None
    if since is not None and until is not None and since > until:
        raise ValidationError("since must not be later than until")
    return Range(field="created_at", lower=since, upper=until)


async def run_listing(
    orchestrator: PaginationOrchestrator,
    criteria: FilterExpr,
    request: ListingRequest,
) -> ListingResult:
    """Run a listing in keyset or offset mode.

    Raises:
        ValidationError: Both cursor and page given, or paging out of range
        CursorError: Malformed or mismatched cursor
    """
    if request.cursor is not None and request.page is not None:
        raise ValidationError("cursor and page cannot be combined")

    if request.page is not None:
        offset_page = await orchestrator.list_page(
            criteria, request.sort, page=request.page, limit=request.limit
        )
        return ListingResult(
            items=offset_page.items,
            pagination=PaginationInfo(**offset_page.pagination.model_dump()),
        )

    cursor_page = await orchestrator.list_subjects(
        criteria, request.sort, cursor=request.cursor, limit=request.limit
    )
    return ListingResult(items=cursor_page.items, next_cursor=cursor_page.next_cursor)
