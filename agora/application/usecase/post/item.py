"""Post representation shared by the post use cases."""

from datetime import datetime

from pydantic import BaseModel

from agora.domain.model import Post


class PostItem(BaseModel):
    """A post as returned to clients."""

    post_id: str
    community_id: str
    author_id: str
    title: str
    body: str
    score: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_post(cls, post: Post, score: int) -> "PostItem":
        return cls(
            post_id=str(post.id),
            community_id=str(post.community_id),
            author_id=str(post.author_id),
            title=post.title,
            body=post.body,
            score=score,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )
