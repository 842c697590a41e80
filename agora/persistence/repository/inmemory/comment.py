"""In-memory comment repository for testing."""

from typing import Optional

from agora.domain.model.comment import Comment
from agora.domain.repository.comment import CommentRepository
from agora.domain.value import CommentId, FilterExpr
from agora.persistence.filter import matches


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_matching(self, criteria: FilterExpr) -> list[Comment]:
        """Find non-deleted comments matching a filter, in insertion order."""
        return [
            comment
            for comment in self._comments.values()
            if comment.deleted_at is None and matches(criteria, comment)
        ]

    async def save(self, comment: Comment) -> Comment:
        """Save a comment."""
        self._comments[comment.id] = comment
        return comment
