"""Post routes."""

from datetime import datetime
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, Response, status
from pydantic import BaseModel, Field

from agora.application.usecase.post import (
    CreatePostRequest,
    CreatePostResponse,
    CreatePostUseCase,
    GetPostRequest,
    GetPostResponse,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
)
from agora.domain.error import DomainError
from agora.domain.service import IdentityService
from agora.domain.value import SortMode
from agora.interface.api.errors import authentication_required, to_http_exception

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)

# Offset listings can skip or repeat items under concurrent writes
PAGINATION_STABLE_HEADER = "X-Pagination-Stable"


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    community_id: UUID
    title: str = Field(min_length=5, max_length=120)
    body: str = Field(min_length=1, max_length=10000)


@router.get(
    "",
    response_model=ListPostsResponse,
    response_model_exclude_unset=True,
)
async def list_posts(
    response: Response,
    list_posts_use_case: FromDishka[ListPostsUseCase],
    sort: SortMode = SortMode.NEWEST,
    cursor: str | None = None,
    page: int | None = Query(default=None),
    limit: int | None = Query(default=None),
    community_id: UUID | None = None,
    author_id: UUID | None = None,
    q: str | None = None,
    since: datetime | None = None,
    until: datetime | None = None,
) -> ListPostsResponse:
    """List posts ranked by Newest or Top.

    Pass ``cursor`` from a previous response to continue a keyset walk, or
    ``page`` for offset pagination.

    Raises:
        HTTPException: 400 on bad paging arguments or cursor
    """
    try:
        result = await list_posts_use_case.execute(
            ListPostsRequest(
                sort=sort,
                cursor=cursor,
                page=page,
                limit=limit,
                community_id=str(community_id) if community_id else None,
                author_id=str(author_id) if author_id else None,
                q=q,
                since=since,
                until=until,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)

    if result.pagination is not None:
        response.headers[PAGINATION_STABLE_HEADER] = "false"
    return result


@router.post("", response_model=CreatePostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    identity_service: FromDishka[IdentityService],
    auth_token: str | None = Cookie(default=None),
) -> CreatePostResponse:
    """Create a new post.

    Requires authentication.

    Args:
        request: Post creation data
        create_post_use_case: Create post use case from DI
        identity_service: Token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Created post details
    """
    user_id = identity_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise authentication_required("create posts")

    try:
        return await create_post_use_case.execute(
            CreatePostRequest(
                community_id=str(request.community_id),
                title=request.title,
                body=request.body,
                author_id=str(user_id),
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/{post_id}", response_model=GetPostResponse)
async def get_post(
    post_id: UUID,
    get_post_use_case: FromDishka[GetPostUseCase],
    identity_service: FromDishka[IdentityService],
    auth_token: str | None = Cookie(default=None),
) -> GetPostResponse:
    """Get a post with its score.

    Authenticated callers also get their own vote.

    Raises:
        HTTPException: 404 if post not found
    """
    user_id = identity_service.get_user_id_from_token(auth_token)
    try:
        return await get_post_use_case.execute(
            GetPostRequest(
                post_id=str(post_id), user_id=str(user_id) if user_id else None
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
