"""List posts use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from agora.application.usecase.listing import (
    ListingRequest,
    PaginationInfo,
    created_between,
    run_listing,
    text_filter,
)
from agora.config import PaginationSettings
from agora.domain.repository import PostRepository
from agora.domain.service import PaginationOrchestrator, VoteAggregator
from agora.domain.value import Eq, VotableType, all_of

from .item import PostItem


class ListPostsRequest(ListingRequest):
    """List posts request."""

    community_id: str | None = None  # Filter by community
    author_id: str | None = None  # Filter by author


class ListPostsResponse(BaseModel):
    """List posts response.

    Keyset listings carry ``next_cursor``; offset listings carry
    ``pagination``.
    """

    data: list[PostItem]
    next_cursor: str | None = None
    pagination: PaginationInfo | None = None


class ListPostsUseCase:
    """Use case for listing posts with filtering, ranking and pagination."""

    def __init__(
        self,
        post_repository: PostRepository,
        vote_aggregator: VoteAggregator,
        pagination_settings: PaginationSettings,
    ) -> None:
        """Initialize list posts use case.

        Args:
            post_repository: Post repository
            vote_aggregator: Score source
            pagination_settings: Page size limits
        """
        self.orchestrator = PaginationOrchestrator(
            repository=post_repository,
            vote_aggregator=vote_aggregator,
            votable_type=VotableType.POST,
            default_limit=pagination_settings.default_limit,
            max_limit=pagination_settings.max_limit,
        )

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Args:
            request: List posts request with filters and pagination

        Returns:
            One page of posts
        """
        with logfire.span(
            "list_posts.execute",
            sort=request.sort.value,
            limit=request.limit,
            page=request.page,
            community_id=request.community_id,
        ):
            criteria = all_of(
                Eq(field="community_id", value=UUID(request.community_id))
                if request.community_id
                else None,
                Eq(field="author_id", value=UUID(request.author_id))
                if request.author_id
                else None,
                text_filter(request.q, "title", "body"),
                created_between(request.since, request.until),
            )

            result = await run_listing(self.orchestrator, criteria, request)
            data = [
                PostItem.from_post(ranked.subject, ranked.score)
                for ranked in result.items
            ]

            logfire.info("Posts listed", count=len(data))

            if result.is_offset:
                return ListPostsResponse(data=data, pagination=result.pagination)
            return ListPostsResponse(data=data, next_cursor=result.next_cursor)
