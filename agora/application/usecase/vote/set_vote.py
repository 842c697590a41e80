"""Set vote use case."""

from uuid import UUID

from pydantic import BaseModel

from agora.domain.service import VoteService
from agora.domain.value import UserId, VotableType, VoteState


class SetVoteRequest(BaseModel):
    """Set vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    state: VoteState


class VoteResponse(BaseModel):
    """Vote change response: the item's fresh score and the caller's vote."""

    votable_type: VotableType
    votable_id: str
    score: int
    my_vote: VoteState


class SetVoteUseCase:
    """Use case for upvoting or downvoting a post or comment."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize set vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: SetVoteRequest) -> VoteResponse:
        """Execute set vote flow.

        Args:
            request: Set vote request

        Returns:
            Score after the change and the caller's vote

        Raises:
            NotFoundError: If the item is not found
            SelfVoteError: If the caller authored the item
        """
        outcome = await self.vote_service.set_vote(
            votable_type=request.votable_type,
            votable_id=UUID(request.votable_id),
            user_id=UserId(UUID(request.user_id)),
            state=request.state,
        )
        return VoteResponse(
            votable_type=outcome.votable_type,
            votable_id=str(outcome.votable_id),
            score=outcome.score,
            my_vote=outcome.my_vote,
        )
