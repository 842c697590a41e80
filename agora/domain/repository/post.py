"""Post repository interface."""

from abc import abstractmethod
from typing import List, Optional

from agora.domain.model.post import Post
from agora.domain.repository.candidate import CandidateRepository
from agora.domain.value import FilterExpr, PostId


class PostRepository(CandidateRepository):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found (deleted or not), None otherwise
        """
        pass

    @abstractmethod
    async def find_matching(self, criteria: FilterExpr) -> List[Post]:
        """Find all non-deleted posts matching a filter."""
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update).

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass
