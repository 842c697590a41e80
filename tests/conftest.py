"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import jwt
import logfire

from agora.config import AuthSettings, Settings
from agora.domain.model import Comment, Post, Vote
from agora.domain.value import (
    CommentId,
    CommunityId,
    PostId,
    UserId,
    VotableType,
    VoteId,
    VoteValue,
)

# Keep telemetry local during tests
logfire.configure(send_to_logfire=False, console=False)

BASE_TIME = datetime(2025, 3, 1, 12, 0, 0)


def make_post(
    post_id: UUID | None = None,
    community_id: UUID | None = None,
    author_id: UUID | None = None,
    title: str = "Test Post",
    body: str = "Test content",
    created_at: datetime = BASE_TIME,
    deleted_at: datetime | None = None,
) -> Post:
    """Helper to build a post with sensible defaults."""
    return Post(
        id=PostId(post_id or uuid4()),
        community_id=CommunityId(community_id or uuid4()),
        author_id=UserId(author_id or uuid4()),
        title=title,
        body=body,
        created_at=created_at,
        updated_at=created_at,
        deleted_at=deleted_at,
    )


def make_comment(
    post_id: UUID,
    parent_id: UUID | None = None,
    comment_id: UUID | None = None,
    author_id: UUID | None = None,
    text: str = "Test comment",
    depth: int = 0,
    created_at: datetime = BASE_TIME,
    deleted_at: datetime | None = None,
) -> Comment:
    """Helper to build a comment with sensible defaults."""
    return Comment(
        id=CommentId(comment_id or uuid4()),
        post_id=PostId(post_id),
        author_id=UserId(author_id or uuid4()),
        text=text,
        parent_id=CommentId(parent_id) if parent_id else None,
        depth=depth,
        created_at=created_at,
        updated_at=created_at,
        deleted_at=deleted_at,
    )


def make_vote(
    votable_id: UUID,
    value: VoteValue = VoteValue.UP,
    votable_type: VotableType = VotableType.POST,
    user_id: UUID | None = None,
    deleted_at: datetime | None = None,
) -> Vote:
    """Helper to build a vote with sensible defaults."""
    return Vote(
        id=VoteId(uuid4()),
        user_id=UserId(user_id or uuid4()),
        votable_type=votable_type,
        votable_id=votable_id,
        value=value,
        created_at=BASE_TIME,
        updated_at=BASE_TIME,
        deleted_at=deleted_at,
    )


def make_token(
    user_id: UUID,
    settings: AuthSettings | None = None,
    expires_in: timedelta = timedelta(hours=1),
) -> str:
    """Issue a token the way the external identity provider would."""
    settings = settings or Settings().auth
    payload = {"user_id": str(user_id), "exp": datetime.now(timezone.utc) + expires_in}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
