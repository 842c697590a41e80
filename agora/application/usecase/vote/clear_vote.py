"""Clear vote use case."""

from uuid import UUID

from pydantic import BaseModel

from agora.domain.service import VoteService
from agora.domain.value import UserId, VotableType

from .set_vote import VoteResponse


class ClearVoteRequest(BaseModel):
    """Clear vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class ClearVoteUseCase:
    """Use case for withdrawing a vote."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: ClearVoteRequest) -> VoteResponse:
        """Execute clear vote flow.

        Raises:
            NotFoundError: If the item is not found
        """
        outcome = await self.vote_service.clear_vote(
            votable_type=request.votable_type,
            votable_id=UUID(request.votable_id),
            user_id=UserId(UUID(request.user_id)),
        )
        return VoteResponse(
            votable_type=outcome.votable_type,
            votable_id=str(outcome.votable_id),
            score=outcome.score,
            my_vote=outcome.my_vote,
        )
