"""Listing and pagination of ranked subjects."""

from typing import Optional, Sequence
from uuid import UUID

import logfire

from agora.domain.error import ValidationError
from agora.domain.model import (
    CursorPage,
    OffsetPage,
    Pagination,
    RankedSubject,
    Subject,
)
from agora.domain.repository import CandidateRepository
from agora.domain.value import FilterExpr, SortMode, VotableType

from .base import Service
from .cursor import CursorCodec
from .ranking import RankingComparator, SortKey
from .vote_aggregator import VoteAggregator

DEFAULT_PAGE_LIMIT = 20
MAX_PAGE_LIMIT = 100


class PaginationOrchestrator(Service):
    """Produces ranked pages of posts or comments.

    Candidates matching the filter are fetched, ranked with
    ``RankingComparator`` and sliced. Keyset pages resume strictly after
    the cursor key, so a walk over a stable collection returns every
    candidate exactly once. When the cursor's item has disappeared the
    walk resumes at the first item ranked after the cursor key.
    """

    def __init__(
        self,
        repository: CandidateRepository,
        vote_aggregator: VoteAggregator,
        votable_type: VotableType,
        cursor_codec: Optional[CursorCodec] = None,
        default_limit: int = DEFAULT_PAGE_LIMIT,
        max_limit: int = MAX_PAGE_LIMIT,
    ) -> None:
        """Initialize pagination orchestrator.

        Args:
            repository: Source of candidate subjects
            vote_aggregator: Score source
            votable_type: Kind of subject the repository yields
            cursor_codec: Cursor encoder/decoder
            default_limit: Page size when the caller gives none
            max_limit: Largest accepted page size
        """
        self.repository = repository
        self.vote_aggregator = vote_aggregator
        self.votable_type = votable_type
        self.cursor_codec = cursor_codec or CursorCodec()
        self.default_limit = default_limit
        self.max_limit = max_limit

    def _resolve_limit(self, limit: Optional[int]) -> int:
        if limit is None:
            return self.default_limit
        if limit < 1 or limit > self.max_limit:
            raise ValidationError(f"limit must be between 1 and {self.max_limit}")
        return limit

    async def _rank(
        self, criteria: FilterExpr, comparator: RankingComparator
    ) -> tuple[list[Subject], Optional[dict[UUID, int]]]:
        candidates = list(await self.repository.find_matching(criteria))
        scores = None
        if comparator.sort_mode is SortMode.TOP:
            # Top ordering needs every candidate's score before slicing
            scores = await self.vote_aggregator.compute_scores(
                self.votable_type, [candidate.id for candidate in candidates]
            )
        return comparator.sort(candidates, scores), scores

    async def _attach_scores(
        self, window: Sequence[Subject], scores: Optional[dict[UUID, int]]
    ) -> list[RankedSubject]:
        if scores is None:
            scores = await self.vote_aggregator.compute_scores(
                self.votable_type, [subject.id for subject in window]
            )
        return [
            RankedSubject(subject=subject, score=scores[subject.id])
            for subject in window
        ]

    @staticmethod
    def _resume_index(
        ordered: Sequence[Subject],
        scores: Optional[dict[UUID, int]],
        comparator: RankingComparator,
        cursor_key: SortKey,
    ) -> tuple[int, bool]:
        found = False
        for index, subject in enumerate(ordered):
            score = scores[subject.id] if scores is not None else None
            key = comparator.sort_key(subject, score)
            if key < cursor_key:
                return index, found
            found = key == cursor_key
        return len(ordered), found

    async def list_subjects(
        self,
        criteria: FilterExpr,
        sort_mode: SortMode,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> CursorPage:
        """Return one keyset page.

        Args:
            criteria: Filter over candidates
            sort_mode: Newest or Top
            cursor: Cursor from a previous page, None for the first page
            limit: Page size

        Returns:
            Page of ranked subjects with the cursor for the next page

        Raises:
            ValidationError: Limit out of range
            CursorError: Malformed or mismatched cursor
        """
        limit = self._resolve_limit(limit)
        cursor_key = (
            self.cursor_codec.decode(cursor, sort_mode) if cursor is not None else None
        )

        with logfire.span(
            "pagination.list_subjects",
            votable_type=self.votable_type.value,
            sort_mode=sort_mode.value,
            limit=limit,
            has_cursor=cursor_key is not None,
        ):
            comparator = RankingComparator(sort_mode)
            ordered, scores = await self._rank(criteria, comparator)

            start = 0
            if cursor_key is not None:
                start, found = self._resume_index(
                    ordered, scores, comparator, cursor_key
                )
                if found:
                    logfire.debug("Cursor resumed on exact match", start=start)
                else:
                    logfire.info(
                        "Cursor item not found, resuming after cursor key",
                        votable_type=self.votable_type.value,
                        sort_mode=sort_mode.value,
                    )

            window = ordered[start : start + limit]
            has_next = start + limit < len(ordered)
            items = await self._attach_scores(window, scores)

            next_cursor = None
            if has_next:
                last = items[-1]
                next_cursor = self.cursor_codec.encode(
                    last.subject, sort_mode, last.score
                )

            logfire.debug(
                "Page listed",
                candidates=len(ordered),
                returned=len(items),
                has_next=has_next,
            )
            return CursorPage(items=items, has_next=has_next, next_cursor=next_cursor)

    async def list_page(
        self,
        criteria: FilterExpr,
        sort_mode: SortMode,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> OffsetPage:
        """Return one offset page over the same ranking.

        Args:
            criteria: Filter over candidates
            sort_mode: Newest or Top
            page: 1-based page number
            limit: Page size

        Returns:
            Page of ranked subjects with offset metadata

        Raises:
            ValidationError: Page or limit out of range
        """
        limit = self._resolve_limit(limit)
        if page < 1:
            raise ValidationError("page must be at least 1")

        with logfire.span(
            "pagination.list_page",
            votable_type=self.votable_type.value,
            sort_mode=sort_mode.value,
            page=page,
            limit=limit,
        ):
            comparator = RankingComparator(sort_mode)
            ordered, scores = await self._rank(criteria, comparator)

            records = len(ordered)
            skip = (page - 1) * limit
            items = await self._attach_scores(ordered[skip : skip + limit], scores)

            return OffsetPage(
                items=items,
                pagination=Pagination(
                    current=page,
                    limit=limit,
                    records=records,
                    pages=-(-records // limit),
                ),
            )
