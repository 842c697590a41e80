"""In-memory post repository for testing."""

from typing import Optional

from agora.domain.model.post import Post
from agora.domain.repository.post import PostRepository
from agora.domain.value import FilterExpr, PostId
from agora.persistence.filter import matches


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def find_matching(self, criteria: FilterExpr) -> list[Post]:
        """Find non-deleted posts matching a filter, in insertion order."""
        return [
            post
            for post in self._posts.values()
            if post.deleted_at is None and matches(criteria, post)
        ]

    async def save(self, post: Post) -> Post:
        """Save a post."""
        self._posts[post.id] = post
        return post
