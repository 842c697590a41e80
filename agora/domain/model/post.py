"""Post aggregate root.

Posts live inside a community and are the top-level votable subject.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import CommunityId, PostId, UserId


class Post(DomainModel):
    """Post aggregate root.

    The score is never stored here: it is derived from active votes on
    every read.
    """

    id: PostId
    community_id: CommunityId
    author_id: UserId
    title: str = Field(min_length=5, max_length=120)
    body: str = Field(min_length=1, max_length=10000)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    deleted_at: Optional[datetime] = None
