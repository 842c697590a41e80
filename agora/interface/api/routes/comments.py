"""Comment routes."""

from datetime import datetime
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Response, status
from pydantic import BaseModel, Field

from agora.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    GetCommentRequest,
    GetCommentResponse,
    GetCommentUseCase,
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
    ListRepliesRequest,
    ListRepliesUseCase,
)
from agora.domain.error import DomainError
from agora.domain.service import IdentityService
from agora.domain.value import SortMode
from agora.interface.api.errors import authentication_required, to_http_exception
from agora.interface.api.routes.posts import PAGINATION_STABLE_HEADER

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    text: str = Field(min_length=2, max_length=2000)
    parent_id: UUID | None = None  # For replies


def _mark_offset(response: Response, result: ListCommentsResponse) -> None:
    if result.pagination is not None:
        response.headers[PAGINATION_STABLE_HEADER] = "false"


@router.get(
    "/posts/{post_id}/comments",
    response_model=ListCommentsResponse,
    response_model_exclude_unset=True,
)
async def list_comments(
    post_id: UUID,
    response: Response,
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    sort: SortMode = SortMode.NEWEST,
    cursor: str | None = None,
    page: int | None = None,
    limit: int | None = None,
    top_level_only: bool = False,
    q: str | None = None,
    since: datetime | None = None,
    until: datetime | None = None,
) -> ListCommentsResponse:
    """List a post's comments ranked by Newest or Top.

    Raises:
        HTTPException: 404 if post not found, 400 on bad paging or cursor
    """
    try:
        result = await list_comments_use_case.execute(
            ListCommentsRequest(
                post_id=str(post_id),
                sort=sort,
                cursor=cursor,
                page=page,
                limit=limit,
                top_level_only=top_level_only,
                q=q,
                since=since,
                until=until,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)

    _mark_offset(response, result)
    return result


@router.post(
    "/posts/{post_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: UUID,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    identity_service: FromDishka[IdentityService],
    auth_token: str | None = Cookie(default=None),
) -> CreateCommentResponse:
    """Create a comment or a reply on a post.

    Requires authentication. Replies are limited in nesting depth.

    Raises:
        HTTPException: 401 without a valid token, 404 if post or parent not
            found, 400 if the reply would nest too deep
    """
    user_id = identity_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise authentication_required("comment")

    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                post_id=str(post_id),
                text=request.text,
                parent_id=str(request.parent_id) if request.parent_id else None,
                author_id=str(user_id),
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/comments/{comment_id}", response_model=GetCommentResponse)
async def get_comment(
    comment_id: UUID,
    get_comment_use_case: FromDishka[GetCommentUseCase],
    identity_service: FromDishka[IdentityService],
    auth_token: str | None = Cookie(default=None),
) -> GetCommentResponse:
    """Get a comment with its score."""
    user_id = identity_service.get_user_id_from_token(auth_token)
    try:
        return await get_comment_use_case.execute(
            GetCommentRequest(
                comment_id=str(comment_id), user_id=str(user_id) if user_id else None
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get(
    "/comments/{comment_id}/replies",
    response_model=ListCommentsResponse,
    response_model_exclude_unset=True,
)
async def list_replies(
    comment_id: UUID,
    response: Response,
    list_replies_use_case: FromDishka[ListRepliesUseCase],
    sort: SortMode = SortMode.NEWEST,
    cursor: str | None = None,
    page: int | None = None,
    limit: int | None = None,
    q: str | None = None,
) -> ListCommentsResponse:
    """List the direct replies to a comment."""
    try:
        result = await list_replies_use_case.execute(
            ListRepliesRequest(
                comment_id=str(comment_id),
                sort=sort,
                cursor=cursor,
                page=page,
                limit=limit,
                q=q,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)

    _mark_offset(response, result)
    return result
