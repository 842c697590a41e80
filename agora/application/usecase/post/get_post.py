"""Get post use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from agora.domain.error import NotFoundError
from agora.domain.repository import VoteRepository
from agora.domain.service import PostService, VoteAggregator
from agora.domain.value import PostId, UserId, VotableType, VoteState

from .item import PostItem


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str  # UUID string
    user_id: str | None = None  # Current user ID (if authenticated)


class GetPostResponse(PostItem):
    """Get post response."""

    my_vote: VoteState = VoteState.NONE


class GetPostUseCase:
    """Use case for retrieving a post with its score."""

    def __init__(
        self,
        post_service: PostService,
        vote_aggregator: VoteAggregator,
        vote_repository: VoteRepository,
    ) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            vote_aggregator: Score source
            vote_repository: Vote repository, for the caller's own vote
        """
        self.post_service = post_service
        self.vote_aggregator = vote_aggregator
        self.vote_repository = vote_repository

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        Args:
            request: Get post request

        Returns:
            Post details, score and the caller's vote

        Raises:
            NotFoundError: If post not found or deleted
        """
        post_id = PostId(UUID(request.post_id))
        with logfire.span("get_post.execute", post_id=request.post_id):
            post = await self.post_service.get_post_by_id(post_id)
            if post is None:
                raise NotFoundError("Post", request.post_id)

            score = await self.vote_aggregator.compute_score(VotableType.POST, post.id)

            my_vote = VoteState.NONE
            if request.user_id:
                vote = await self.vote_repository.find_active_by_user_and_votable(
                    user_id=UserId(UUID(request.user_id)),
                    votable_type=VotableType.POST,
                    votable_id=post.id,
                )
                my_vote = VoteState.from_value(vote.value if vote else None)

            return GetPostResponse(
                **PostItem.from_post(post, score).model_dump(), my_vote=my_vote
            )
