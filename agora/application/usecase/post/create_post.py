"""Create post use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from agora.domain.service import PostService
from agora.domain.value import CommunityId, UserId

from .item import PostItem


class CreatePostRequest(BaseModel):
    """Create post request."""

    community_id: str  # UUID string
    title: str = Field(min_length=5, max_length=120)
    body: str = Field(min_length=1, max_length=10000)
    author_id: str  # User ID from authenticated user


class CreatePostResponse(PostItem):
    """Create post response."""

    pass


class CreatePostUseCase:
    """Use case for creating a post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        Args:
            request: Create post request

        Returns:
            Created post; a new post has no votes and scores 0
        """
        post = await self.post_service.create_post(
            community_id=CommunityId(UUID(request.community_id)),
            author_id=UserId(UUID(request.author_id)),
            title=request.title,
            body=request.body,
        )
        return CreatePostResponse(**PostItem.from_post(post, score=0).model_dump())
