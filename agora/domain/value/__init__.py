"""Domain value objects for Agora."""

from agora.domain.value.filter import (
    And,
    Contains,
    Eq,
    FilterExpr,
    IsNull,
    Or,
    Range,
    all_of,
    match_all,
)
from agora.domain.value.identifiers import (
    CommentId,
    CommunityId,
    PostId,
    UserId,
    VoteId,
)
from agora.domain.value.types import SortMode, VotableType, VoteState, VoteValue

__all__ = [
    # Identifiers
    "UserId",
    "CommunityId",
    "PostId",
    "CommentId",
    "VoteId",
    # Types
    "SortMode",
    "VotableType",
    "VoteState",
    "VoteValue",
    # Filters
    "FilterExpr",
    "Eq",
    "Range",
    "Contains",
    "IsNull",
    "And",
    "Or",
    "all_of",
    "match_all",
]
