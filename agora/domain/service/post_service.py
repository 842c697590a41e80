"""Post domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from agora.domain.model.post import Post
from agora.domain.repository import PostRepository
from agora.domain.value import CommunityId, PostId, UserId

from .base import Service


class PostService(Service):
    """Domain service for post operations."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def create_post(
        self,
        community_id: CommunityId,
        author_id: UserId,
        title: str,
        body: str,
    ) -> Post:
        """Create a post.

        Args:
            community_id: Community the post belongs to
            author_id: Author user ID
            title: Post title
            body: Post body

        Returns:
            Created post
        """
        with logfire.span(
            "post_service.create_post",
            community_id=str(community_id),
            author_id=str(author_id),
        ):
            now = datetime.now()
            post = Post(
                id=PostId(uuid4()),
                community_id=community_id,
                author_id=author_id,
                title=title,
                body=body,
                created_at=now,
                updated_at=now,
            )
            saved = await self.post_repository.save(post)
            logfire.info("Post created", post_id=str(saved.id))
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a live post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found and not deleted, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)

            if post is None or post.deleted_at is not None:
                logfire.warn("Post not found", post_id=str(post_id))
                return None

            logfire.info("Post found", post_id=str(post_id))
            return post
