"""Vote entity.

Votes are signed (+1/-1) and feed the derived score of a post or comment.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import UserId, VotableType, VoteId, VoteValue


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - At most one active (non-tombstoned) vote per user per item; the
      storage layer enforces it with a partial unique index
    - Re-voting changes ``value`` on the existing record
    - Clearing a vote sets ``deleted_at`` instead of removing the row
    - Polymorphic reference to votable (post or comment)
    """

    id: VoteId
    user_id: UserId
    votable_type: VotableType
    votable_id: UUID  # PostId or CommentId (both are UUIDs)
    value: VoteValue
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    deleted_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.deleted_at is None
