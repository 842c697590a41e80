"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .cursor import CursorCodec
from .identity_service import IdentityService
from .pagination import PaginationOrchestrator
from .post_service import PostService
from .ranking import NewestKey, RankingComparator, SortKey, TopKey
from .thread_depth import ThreadDepthValidator
from .vote_aggregator import VoteAggregator
from .vote_service import VoteOutcome, VoteService

__all__ = [
    "CommentService",
    "CursorCodec",
    "IdentityService",
    "NewestKey",
    "PaginationOrchestrator",
    "PostService",
    "RankingComparator",
    "Service",
    "SortKey",
    "ThreadDepthValidator",
    "TopKey",
    "VoteAggregator",
    "VoteOutcome",
    "VoteService",
]
