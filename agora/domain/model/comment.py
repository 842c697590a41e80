"""Comment entity.

Comments are threaded replies on posts. Nesting is limited: a comment
may sit at most ``MAX_COMMENT_DEPTH`` levels below a top-level comment.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import CommentId, PostId, UserId

MAX_COMMENT_DEPTH = 8


class Comment(DomainModel):
    """Comment entity.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - depth: Nesting level recorded at creation (0 for top-level)

    The parent chain is authoritative; ``depth`` is a convenience copy of
    what the thread walk computed when the comment was accepted.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    text: str = Field(min_length=2, max_length=2000)
    parent_id: Optional[CommentId] = None
    depth: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    deleted_at: Optional[datetime] = None
