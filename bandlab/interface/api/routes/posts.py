"""Post routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Response
from pydantic import BaseModel

from bandlab.application.usecase.post import (
    CreatePostRequest,
    CreatePostResponse,
    CreatePostUseCase,
    ListPostsRequest,
    ListPostsUseCase,
    PostWithCommentsItem,
)

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)

NEXT_CURSOR_HEADER = "X-Next-Cursor"


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    caption: str | None = None
    image: str | None = None  # Base64 encoded image


@router.post("", response_model=CreatePostResponse)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    x_user_id: str | None = Header(default=None),
) -> CreatePostResponse:
    """Create a post with an image.

    Args:
        request: Caption and base64 image
        create_post_use_case: Create post use case from DI
        x_user_id: Caller identity set by the authentication layer

    Returns:
        The created post
    """
    return await create_post_use_case.execute(
        CreatePostRequest(
            caption=request.caption,
            image=request.image,
            creator=x_user_id,
        )
    )


@router.get("", response_model=list[PostWithCommentsItem])
async def list_posts(
    response: Response,
    list_posts_use_case: FromDishka[ListPostsUseCase],
    limit: int | None = None,
    cursor: str | None = None,
) -> list[PostWithCommentsItem]:
    """List posts newest first with their two most recent comments.

    The cursor for the next page is returned in the ``X-Next-Cursor``
    header; the header is absent on the last page.

    Args:
        response: Outgoing response, for the cursor header
        list_posts_use_case: List posts use case from DI
        limit: Page size (defaults to the configured page size)
        cursor: Cursor from the previous page

    Returns:
        Posts with comment previews
    """
    result = await list_posts_use_case.execute(
        ListPostsRequest(limit=limit, cursor=cursor)
    )
    if result.next_cursor:
        response.headers[NEXT_CURSOR_HEADER] = result.next_cursor
    return result.posts
