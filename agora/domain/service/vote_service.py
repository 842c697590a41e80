"""Vote domain service."""

from datetime import datetime
from uuid import UUID, uuid4

import logfire

from agora.domain.error import NotFoundError, SelfVoteError
from agora.domain.model.common import DomainModel
from agora.domain.model.vote import Vote
from agora.domain.repository import VoteRepository
from agora.domain.value import UserId, VotableType, VoteId, VoteState

from .base import Service
from .comment_service import CommentService
from .post_service import PostService
from .vote_aggregator import VoteAggregator


class VoteOutcome(DomainModel):
    """Result of a vote change: fresh score and the voter's state."""

    votable_type: VotableType
    votable_id: UUID
    score: int
    my_vote: VoteState


class VoteService(Service):
    """Domain service for vote operations."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        vote_aggregator: VoteAggregator,
        post_service: PostService,
        comment_service: CommentService,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            vote_aggregator: Score source
            post_service: Post domain service
            comment_service: Comment domain service
        """
        self.vote_repository = vote_repository
        self.vote_aggregator = vote_aggregator
        self.post_service = post_service
        self.comment_service = comment_service

    async def _get_author_id(
        self, votable_type: VotableType, votable_id: UUID
    ) -> UserId:
        if votable_type is VotableType.POST:
            post = await self.post_service.get_post_by_id(votable_id)
            if post is None:
                raise NotFoundError("Post", str(votable_id))
            return post.author_id

        comment = await self.comment_service.get_comment_by_id(votable_id)
        if comment is None:
            raise NotFoundError("Comment", str(votable_id))
        return comment.author_id

    async def set_vote(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        user_id: UserId,
        state: VoteState,
    ) -> VoteOutcome:
        """Set a user's vote on a post or comment.

        Creates the vote, changes its value, or leaves it alone when the
        value is unchanged. ``VoteState.NONE`` clears the vote.

        Args:
            votable_type: Type of item
            votable_id: Item ID
            user_id: Voter
            state: Desired vote state

        Returns:
            Vote outcome with the recomputed score

        Raises:
            NotFoundError: Item missing or deleted
            SelfVoteError: Voter is the item's author
        """
        if state is VoteState.NONE:
            return await self.clear_vote(votable_type, votable_id, user_id)

        with logfire.span(
            "vote_service.set_vote",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            user_id=str(user_id),
            state=state.value,
        ):
            author_id = await self._get_author_id(votable_type, votable_id)
            if author_id == user_id:
                logfire.warn(
                    "Self-vote attempt",
                    votable_type=votable_type.value,
                    votable_id=str(votable_id),
                    user_id=str(user_id),
                )
                raise SelfVoteError()

            value = state.value_for_vote
            existing = await self.vote_repository.find_active_by_user_and_votable(
                user_id=user_id,
                votable_type=votable_type,
                votable_id=votable_id,
            )

            if existing is None or existing.value != value:
                now = datetime.now()
                vote = Vote(
                    id=existing.id if existing else VoteId(uuid4()),
                    user_id=user_id,
                    votable_type=votable_type,
                    votable_id=votable_id,
                    value=value,
                    created_at=existing.created_at if existing else now,
                    updated_at=now,
                )
                await self.vote_repository.upsert(vote)
                logfire.info(
                    "Vote stored",
                    votable_type=votable_type.value,
                    votable_id=str(votable_id),
                    value=int(value),
                    changed=existing is not None,
                )
            else:
                logfire.debug("Vote unchanged", votable_id=str(votable_id))

            score = await self.vote_aggregator.compute_score(votable_type, votable_id)
            return VoteOutcome(
                votable_type=votable_type,
                votable_id=votable_id,
                score=score,
                my_vote=state,
            )

    async def clear_vote(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        user_id: UserId,
    ) -> VoteOutcome:
        """Clear a user's vote on a post or comment.

        Clearing when no vote exists is a no-op.

        Args:
            votable_type: Type of item
            votable_id: Item ID
            user_id: Voter

        Returns:
            Vote outcome with the recomputed score

        Raises:
            NotFoundError: Item missing or deleted
        """
        with logfire.span(
            "vote_service.clear_vote",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            user_id=str(user_id),
        ):
            await self._get_author_id(votable_type, votable_id)

            deleted = await self.vote_repository.soft_delete_by_user_and_votable(
                user_id=user_id,
                votable_type=votable_type,
                votable_id=votable_id,
            )
            if deleted:
                logfire.info("Vote cleared", votable_id=str(votable_id))
            else:
                logfire.info("No vote to clear", votable_id=str(votable_id))

            score = await self.vote_aggregator.compute_score(votable_type, votable_id)
            return VoteOutcome(
                votable_type=votable_type,
                votable_id=votable_id,
                score=score,
                my_vote=VoteState.NONE,
            )
