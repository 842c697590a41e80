"""Comment repository interface."""

from abc import abstractmethod
from typing import List, Optional

from agora.domain.model.comment import Comment
from agora.domain.repository.candidate import CandidateRepository
from agora.domain.value import CommentId, FilterExpr


class CommentRepository(CandidateRepository):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Deleted comments are returned too: thread walks need tombstoned
        ancestors to keep the chain intact.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_matching(self, criteria: FilterExpr) -> List[Comment]:
        """Find all non-deleted comments matching a filter."""
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass
