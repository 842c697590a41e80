"""Get comment use case."""

from uuid import UUID

from pydantic import BaseModel

from agora.domain.error import NotFoundError
from agora.domain.repository import VoteRepository
from agora.domain.service import CommentService, VoteAggregator
from agora.domain.value import CommentId, UserId, VotableType, VoteState

from .item import CommentItem


class GetCommentRequest(BaseModel):
    """Get comment request."""

    comment_id: str  # UUID string
    user_id: str | None = None  # Current user ID (if authenticated)


class GetCommentResponse(CommentItem):
    """Get comment response."""

    my_vote: VoteState = VoteState.NONE


class GetCommentUseCase:
    """Use case for retrieving a comment with its score."""

    def __init__(
        self,
        comment_service: CommentService,
        vote_aggregator: VoteAggregator,
        vote_repository: VoteRepository,
    ) -> None:
        self.comment_service = comment_service
        self.vote_aggregator = vote_aggregator
        self.vote_repository = vote_repository

    async def execute(self, request: GetCommentRequest) -> GetCommentResponse:
        """Execute get comment flow.

        Raises:
            NotFoundError: If comment not found or deleted
        """
        comment = await self.comment_service.get_comment_by_id(
            CommentId(UUID(request.comment_id))
        )
        if comment is None:
            raise NotFoundError("Comment", request.comment_id)

        score = await self.vote_aggregator.compute_score(
            VotableType.COMMENT, comment.id
        )

        my_vote = VoteState.NONE
        if request.user_id:
            vote = await self.vote_repository.find_active_by_user_and_votable(
                user_id=UserId(UUID(request.user_id)),
                votable_type=VotableType.COMMENT,
                votable_id=comment.id,
            )
            my_vote = VoteState.from_value(vote.value if vote else None)

        return GetCommentResponse(
            **CommentItem.from_comment(comment, score).model_dump(), my_vote=my_vote
        )
