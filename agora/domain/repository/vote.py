"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from agora.domain.model.vote import Vote
from agora.domain.value import UserId, VotableType


class VoteRepository(ABC):
    """Repository for Vote entity.

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_active_by_votables(
        self,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> Dict[UUID, List[Vote]]:
        """Find active votes for a batch of items.

        Args:
            votable_type: Type of items (post or comment)
            votable_ids: IDs of the items

        Returns:
            Mapping of item ID to its active votes. Items without votes
            may be absent from the mapping.
        """
        pass

    @abstractmethod
    async def find_active_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a user's active vote on a specific item.

        Args:
            user_id: The user's ID
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            The active vote if any, None otherwise
        """
        pass

    @abstractmethod
    async def upsert(self, vote: Vote) -> Vote:
        """Atomically create or update the active vote for (user, item).

        If an active vote exists for the vote's user and item, its value
        and ``updated_at`` are replaced and the stored record keeps its
        original ID. Otherwise the vote is inserted.

        Args:
            vote: The desired vote

        Returns:
            The stored active vote
        """
        pass

    @abstractmethod
    async def soft_delete_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> bool:
        """Tombstone a user's active vote on an item.

        Args:
            user_id: The user's ID
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            True if an active vote was tombstoned, False if none existed
        """
        pass
