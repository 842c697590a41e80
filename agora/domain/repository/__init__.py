"""Repository interfaces for Agora domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from agora.domain.repository.candidate import CandidateRepository
from agora.domain.repository.comment import CommentRepository
from agora.domain.repository.post import PostRepository
from agora.domain.repository.vote import VoteRepository

__all__ = [
    "CandidateRepository",
    "PostRepository",
    "CommentRepository",
    "VoteRepository",
]
