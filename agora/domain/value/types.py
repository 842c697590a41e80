"""Domain value types for Agora.

Enumerations shared by the ranking engine, the vote workflow and the
HTTP layer.
"""

from enum import Enum, IntEnum


class SortMode(str, Enum):
    """Listing sort mode.

    Values match the public API ("Newest" | "Top").
    """

    NEWEST = "Newest"  # created_at DESC, id DESC
    TOP = "Top"  # score DESC, created_at DESC, id DESC


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    POST = "post"
    COMMENT = "comment"


class VoteValue(IntEnum):
    """Signed unit value carried by a vote."""

    UP = 1
    DOWN = -1


class VoteState(str, Enum):
    """A voter's state on a subject as exposed by the API."""

    UPVOTE = "UPVOTE"
    DOWNVOTE = "DOWNVOTE"
    NONE = "NONE"

    @property
    def value_for_vote(self) -> VoteValue:
        """Vote value for a non-empty state."""
        if self is VoteState.UPVOTE:
            return VoteValue.UP
        if self is VoteState.DOWNVOTE:
            return VoteValue.DOWN
        raise ValueError("NONE has no vote value")

    @classmethod
    def from_value(cls, value: VoteValue | None) -> "VoteState":
        """Map a stored vote value (or no vote) to a state."""
        if value is None:
            return cls.NONE
        return cls.UPVOTE if value == VoteValue.UP else cls.DOWNVOTE
