"""Vote routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel

from agora.application.usecase.vote import (
    ClearVoteRequest,
    ClearVoteUseCase,
    SetVoteRequest,
    SetVoteUseCase,
    VoteResponse,
)
from agora.domain.error import DomainError
from agora.domain.service import IdentityService
from agora.domain.value import VotableType, VoteState
from agora.interface.api.errors import authentication_required, to_http_exception

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class SetVoteAPIRequest(BaseModel):
    """API request for setting a vote."""

    state: VoteState


async def _set_vote(
    votable_type: VotableType,
    votable_id: UUID,
    request: SetVoteAPIRequest,
    use_case: SetVoteUseCase,
    identity_service: IdentityService,
    auth_token: str | None,
) -> VoteResponse:
    user_id = identity_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise authentication_required("vote")

    try:
        return await use_case.execute(
            SetVoteRequest(
                votable_type=votable_type,
                votable_id=str(votable_id),
                user_id=str(user_id),
                state=request.state,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


async def _clear_vote(
    votable_type: VotableType,
    votable_id: UUID,
    use_case: ClearVoteUseCase,
    identity_service: IdentityService,
    auth_token: str | None,
) -> VoteResponse:
    user_id = identity_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise authentication_required("remove vote")

    try:
        return await use_case.execute(
            ClearVoteRequest(
                votable_type=votable_type,
                votable_id=str(votable_id),
                user_id=str(user_id),
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.put("/posts/{post_id}/vote", response_model=VoteResponse)
async def set_post_vote(
    post_id: UUID,
    request: SetVoteAPIRequest,
    set_vote_use_case: FromDishka[SetVoteUseCase],
    identity_service: FromDishka[IdentityService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Upvote or downvote a post.

    Requires authentication. Authors cannot vote on their own posts.

    Args:
        post_id: Post UUID
        request: Desired vote state
        set_vote_use_case: Set vote use case from DI
        identity_service: Token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Post score after the change and the caller's vote
    """
    return await _set_vote(
        VotableType.POST,
        post_id,
        request,
        set_vote_use_case,
        identity_service,
        auth_token,
    )


@router.delete("/posts/{post_id}/vote", response_model=VoteResponse)
async def clear_post_vote(
    post_id: UUID,
    clear_vote_use_case: FromDishka[ClearVoteUseCase],
    identity_service: FromDishka[IdentityService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Withdraw a vote from a post. Requires authentication."""
    return await _clear_vote(
        VotableType.POST, post_id, clear_vote_use_case, identity_service, auth_token
    )


@router.put("/comments/{comment_id}/vote", response_model=VoteResponse)
async def set_comment_vote(
    comment_id: UUID,
    request: SetVoteAPIRequest,
    set_vote_use_case: FromDishka[SetVoteUseCase],
    identity_service: FromDishka[IdentityService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Upvote or downvote a comment.

    Requires authentication. Authors cannot vote on their own comments.
    """
    return await _set_vote(
        VotableType.COMMENT,
        comment_id,
        request,
        set_vote_use_case,
        identity_service,
        auth_token,
    )


@router.delete("/comments/{comment_id}/vote", response_model=VoteResponse)
async def clear_comment_vote(
    comment_id: UUID,
    clear_vote_use_case: FromDishka[ClearVoteUseCase],
    identity_service: FromDishka[IdentityService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Withdraw a vote from a comment. Requires authentication."""
    return await _clear_vote(
        VotableType.COMMENT,
        comment_id,
        clear_vote_use_case,
        identity_service,
        auth_token,
    )
