"""Domain model entities for Agora."""

from typing import Union

from agora.domain.model.comment import MAX_COMMENT_DEPTH, Comment
from agora.domain.model.page import CursorPage, OffsetPage, Pagination, RankedSubject
from agora.domain.model.post import Post
from agora.domain.model.vote import Vote

# Anything that can be voted on and ranked
Subject = Union[Post, Comment]

__all__ = [
    "MAX_COMMENT_DEPTH",
    "Comment",
    "CursorPage",
    "OffsetPage",
    "Pagination",
    "Post",
    "RankedSubject",
    "Subject",
    "Vote",
]
