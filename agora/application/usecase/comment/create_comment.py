"""Create comment use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from agora.domain.error import NotFoundError
from agora.domain.service import CommentService, PostService
from agora.domain.value import CommentId, PostId, UserId

from .item import CommentItem


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    text: str = Field(min_length=2, max_length=2000)
    parent_id: str | None = None  # UUID string for replies
    author_id: str  # User ID from authenticated user


class CreateCommentResponse(CommentItem):
    """Create comment response."""

    pass


class CreateCommentUseCase:
    """Use case for creating a comment or a reply."""

    def __init__(
        self, post_service: PostService, comment_service: CommentService
    ) -> None:
        """Initialize create comment use case.

        Args:
            post_service: Post domain service
            comment_service: Comment domain service
        """
        self.post_service = post_service
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            Created comment with its depth

        Raises:
            NotFoundError: Post or parent comment not found
            ThreadIntegrityError: Broken parent chain or depth exceeded
        """
        post_id = PostId(UUID(request.post_id))
        with logfire.span(
            "create_comment.execute",
            post_id=request.post_id,
            parent_id=request.parent_id,
        ):
            post = await self.post_service.get_post_by_id(post_id)
            if post is None:
                raise NotFoundError("Post", request.post_id)

            comment = await self.comment_service.create_comment(
                post_id=post_id,
                author_id=UserId(UUID(request.author_id)),
                text=request.text,
                parent_id=CommentId(UUID(request.parent_id))
                if request.parent_id
                else None,
            )
            return CreateCommentResponse(
                **CommentItem.from_comment(comment, score=0).model_dump()
            )
