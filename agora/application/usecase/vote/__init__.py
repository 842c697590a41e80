"""Vote use cases."""

from .clear_vote import ClearVoteRequest, ClearVoteUseCase
from .set_vote import SetVoteRequest, SetVoteUseCase, VoteResponse

__all__ = [
    "ClearVoteRequest",
    "ClearVoteUseCase",
    "SetVoteRequest",
    "SetVoteUseCase",
    "VoteResponse",
]
