"""List comments use cases."""

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
from agora.domain.error import NotFoundError
from agora.domain.repository import CommentRepository
from agora.domain.service import (
    CommentService,
    PaginationOrchestrator,
    PostService,
    VoteAggregator,
)
from agora.domain.value import CommentId, Eq, IsNull, PostId, VotableType, all_of

from .item import CommentItem


class ListCommentsRequest(ListingRequest):
    """List a post's comments."""

    post_id: str  # UUID string
    top_level_only: bool = False


class ListRepliesRequest(ListingRequest):
    """List the direct replies to a comment."""

    comment_id: str  # UUID string


class ListCommentsResponse(BaseModel):
    """List comments response.

    Keyset listings carry ``next_cursor``; offset listings carry
    ``pagination``.
    """

    data: list[CommentItem]
    next_cursor: str | None = None
    pagination: PaginationInfo | None = None


def _orchestrator(
    comment_repository: CommentRepository,
    vote_aggregator: VoteAggregator,
    pagination_settings: PaginationSettings,
) -> PaginationOrchestrator:
    return PaginationOrchestrator(
        repository=comment_repository,
        vote_aggregator=vote_aggregator,
        votable_type=VotableType.COMMENT,
        default_limit=pagination_settings.default_limit,
        max_limit=pagination_settings.max_limit,
    )


async def _respond(
    orchestrator: PaginationOrchestrator, criteria, request: ListingRequest
) -> ListCommentsResponse:
    result = await run_listing(orchestrator, criteria, request)
    data = [
        CommentItem.from_comment(ranked.subject, ranked.score)
        for ranked in result.items
    ]
    logfire.info("Comments listed", count=len(data))

    if result.is_offset:
        return ListCommentsResponse(data=data, pagination=result.pagination)
    return ListCommentsResponse(data=data, next_cursor=result.next_cursor)


class ListCommentsUseCase:
    """Use case for listing the comments of a post."""

    def __init__(
        self,
        post_service: PostService,
        comment_repository: CommentRepository,
        vote_aggregator: VoteAggregator,
        pagination_settings: PaginationSettings,
    ) -> None:
        """Initialize list comments use case.

        Args:
            post_service: Post domain service
            comment_repository: Comment repository
            vote_aggregator: Score source
            pagination_settings: Page size limits
        """
        self.post_service = post_service
        self.orchestrator = _orchestrator(
            comment_repository, vote_aggregator, pagination_settings
        )

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        """Execute list comments flow.

        Raises:
            NotFoundError: If the post does not exist
        """
        post_id = PostId(UUID(request.post_id))
        with logfire.span(
            "list_comments.execute",
            post_id=request.post_id,
            sort=request.sort.value,
            top_level_only=request.top_level_only,
        ):
            if await self.post_service.get_post_by_id(post_id) is None:
                raise NotFoundError("Post", request.post_id)

            criteria = all_of(
                Eq(field="post_id", value=post_id),
                IsNull(field="parent_id") if request.top_level_only else None,
                text_filter(request.q, "text"),
                created_between(request.since, request.until),
            )
            return await _respond(self.orchestrator, criteria, request)


class ListRepliesUseCase:
    """Use case for listing the direct replies to a comment."""

    def __init__(
        self,
        comment_service: CommentService,
        comment_repository: CommentRepository,
        vote_aggregator: VoteAggregator,
        pagination_settings: PaginationSettings,
    ) -> None:
        self.comment_service = comment_service
        self.orchestrator = _orchestrator(
            comment_repository, vote_aggregator, pagination_settings
        )

    async def execute(self, request: ListRepliesRequest) -> ListCommentsResponse:
        """Execute list replies flow.

        Raises:
            NotFoundError: If the parent comment does not exist
        """
        comment_id = CommentId(UUID(request.comment_id))
        with logfire.span(
            "list_replies.execute",
            comment_id=request.comment_id,
            sort=request.sort.value,
        ):
            parent = await self.comment_service.get_comment_by_id(comment_id)
            if parent is None:
                raise NotFoundError("Comment", request.comment_id)

            criteria = all_of(
                Eq(field="post_id", value=parent.post_id),
                Eq(field="parent_id", value=comment_id),
                text_filter(request.q, "text"),
                created_between(request.since, request.until),
            )
            return await _respond(self.orchestrator, criteria, request)
