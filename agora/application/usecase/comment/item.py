"""Comment representation shared by the comment use cases."""

from datetime import datetime

from pydantic import BaseModel

from agora.domain.model import Comment


class CommentItem(BaseModel):
    """A comment as returned to clients."""

    comment_id: str
    post_id: str
    author_id: str
    parent_id: str | None
    depth: int
    text: str
    score: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment, score: int) -> "CommentItem":
        return cls(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            depth=comment.depth,
            text=comment.text,
            score=score,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
