"""In-memory vote repository for testing."""

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from agora.domain.model.vote import Vote
from agora.domain.repository.vote import VoteRepository
from agora.domain.value import UserId, VotableType


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing.

    Tombstoned votes stay in the list, as they do in the database.
    """

    def __init__(self) -> None:
        self._votes: list[Vote] = []

    def _active_index(
        self, user_id: UserId, votable_type: VotableType, votable_id: UUID
    ) -> Optional[int]:
        for i, vote in enumerate(self._votes):
            if (
                vote.is_active
                and vote.user_id == user_id
                and vote.votable_type == votable_type
                and vote.votable_id == votable_id
            ):
                return i
        return None

    async def find_active_by_votables(
        self,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> dict[UUID, list[Vote]]:
        """Find active votes for a batch of items."""
        wanted = set(votable_ids)
        votes: dict[UUID, list[Vote]] = {}
        for vote in self._votes:
            if (
                vote.is_active
                and vote.votable_type == votable_type
                and vote.votable_id in wanted
            ):
                votes.setdefault(vote.votable_id, []).append(vote)
        return votes

    async def find_active_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a user's active vote on an item."""
        index = self._active_index(user_id, votable_type, votable_id)
        return self._votes[index] if index is not None else None

    async def upsert(self, vote: Vote) -> Vote:
        """Insert the vote, or update the value of the existing active one."""
        index = self._active_index(vote.user_id, vote.votable_type, vote.votable_id)
        if index is None:
            self._votes.append(vote)
            return vote

        stored = self._votes[index].model_copy(
            update={"value": vote.value, "updated_at": vote.updated_at}
        )
        self._votes[index] = stored
        return stored

    async def soft_delete_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> bool:
        """Tombstone a user's active vote on an item."""
        index = self._active_index(user_id, votable_type, votable_id)
        if index is None:
            return False

        now = datetime.now()
        self._votes[index] = self._votes[index].model_copy(
            update={"deleted_at": now, "updated_at": now}
        )
        return True
