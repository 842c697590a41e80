"""Comment domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from agora.domain.model.comment import Comment
from agora.domain.repository import CommentRepository
from agora.domain.value import CommentId, PostId, UserId

from .base import Service
from .thread_depth import ThreadDepthValidator


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        thread_depth_validator: ThreadDepthValidator,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            thread_depth_validator: Enforces the nesting limit on replies
        """
        self.comment_repository = comment_repository
        self.thread_depth_validator = thread_depth_validator

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        text: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a post or reply to another comment.

        The post itself is checked by the caller.

        Args:
            post_id: Post ID
            author_id: Author user ID
            text: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            ParentNotFoundError: Parent missing or deleted
            ThreadIntegrityError: Broken parent chain or depth exceeded
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            depth = await self.thread_depth_validator.validate_new_comment_depth(
                post_id, parent_id
            )

            now = datetime.now()
            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=author_id,
                text=text,
                parent_id=parent_id,
                depth=depth,
                created_at=now,
                updated_at=now,
            )
            saved = await self.comment_repository.save(comment)

            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                depth=depth,
            )
            return saved

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a live comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found and not deleted, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None or comment.deleted_at is not None:
                logfire.warn("Comment not found", comment_id=str(comment_id))
                return None
            return comment
