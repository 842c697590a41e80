"""Comment thread depth validation."""

from typing import Optional

import logfire

from agora.domain.error import (
    DepthExceededError,
    InvalidParentChainError,
    ParentNotFoundError,
)
from agora.domain.model import MAX_COMMENT_DEPTH
from agora.domain.repository import CommentRepository
from agora.domain.value import CommentId, PostId

from .base import Service


class ThreadDepthValidator(Service):
    """Computes the depth a new comment would occupy and enforces the limit.

    Depth 0 is a top-level comment. A reply to a comment at depth
    ``max_depth - 1`` lands at ``max_depth``, the deepest legal position.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        max_depth: int = MAX_COMMENT_DEPTH,
    ) -> None:
        """Initialize thread depth validator.

        Args:
            comment_repository: Comment repository used for ancestor lookups
            max_depth: Deepest allowed comment depth
        """
        self.comment_repository = comment_repository
        self.max_depth = max_depth

    async def validate_new_comment_depth(
        self, post_id: PostId, parent_id: Optional[CommentId]
    ) -> int:
        """Return the depth of a new comment under ``parent_id``.

        Walks parent links upward from the candidate parent. The walk stops
        as soon as the hop count alone proves the limit is exceeded, so at
        most ``max_depth`` comments are read.

        Args:
            post_id: Post the new comment belongs to
            parent_id: Candidate parent, or None for a top-level comment

        Returns:
            Depth of the new comment

        Raises:
            ParentNotFoundError: Parent missing or deleted
            InvalidParentChainError: Chain leaves the post or is broken
            DepthExceededError: New comment would be deeper than max_depth
        """
        if parent_id is None:
            return 0

        with logfire.span(
            "thread_depth.validate_new_comment_depth",
            post_id=str(post_id),
            parent_id=str(parent_id),
            max_depth=self.max_depth,
        ):
            parent = await self.comment_repository.find_by_id(parent_id)
            if parent is None or parent.deleted_at is not None:
                logfire.warn("Parent comment not found", parent_id=str(parent_id))
                raise ParentNotFoundError(str(parent_id))

            if parent.post_id != post_id:
                logfire.warn(
                    "Parent comment does not belong to post",
                    parent_id=str(parent_id),
                    parent_post_id=str(parent.post_id),
                    target_post_id=str(post_id),
                )
                raise InvalidParentChainError(
                    str(parent.id), "comment belongs to a different post"
                )

            parent_depth = 0
            current = parent
            while current.parent_id is not None:
                parent_depth += 1
                # The parent already sits at max_depth or deeper
                if parent_depth >= self.max_depth:
                    logfire.warn(
                        "Maximum comment depth exceeded",
                        parent_id=str(parent_id),
                        max_depth=self.max_depth,
                    )
                    raise DepthExceededError(self.max_depth)

                ancestor = await self.comment_repository.find_by_id(current.parent_id)
                if ancestor is None:
                    raise InvalidParentChainError(
                        str(current.id), "ancestor comment is missing"
                    )
                if ancestor.post_id != post_id:
                    logfire.warn(
                        "Ancestor comment belongs to a different post",
                        ancestor_id=str(ancestor.id),
                        ancestor_post_id=str(ancestor.post_id),
                        target_post_id=str(post_id),
                    )
                    raise InvalidParentChainError(
                        str(ancestor.id), "comment belongs to a different post"
                    )
                current = ancestor

            depth = parent_depth + 1
            logfire.debug("Comment depth computed", depth=depth)
            return depth
