"""Comment routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header
from pydantic import BaseModel

from bandlab.application.usecase.comment import (
    AddCommentRequest,
    AddCommentResponse,
    AddCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)

router = APIRouter(prefix="/posts", tags=["comments"], route_class=DishkaRoute)


class AddCommentAPIRequest(BaseModel):
    """API request for adding a comment."""

    content: str | None = None


@router.post("/{post_id}/comments", response_model=AddCommentResponse)
async def add_comment(
    post_id: UUID,
    request: AddCommentAPIRequest,
    add_comment_use_case: FromDishka[AddCommentUseCase],
    x_user_id: str | None = Header(default=None),
) -> AddCommentResponse:
    """Add a comment to a post.

    Args:
        post_id: Post UUID
        request: Comment text
        add_comment_use_case: Add comment use case from DI
        x_user_id: Caller identity set by the authentication layer

    Returns:
        The created comment
    """
    return await add_comment_use_case.execute(
        AddCommentRequest(post_id=post_id, content=request.content, creator=x_user_id)
    )


@router.delete("/{post_id}/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    post_id: UUID,
    comment_id: UUID,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
) -> DeleteCommentResponse:
    """Delete a comment. Deleting an already deleted comment succeeds."""
    return await delete_comment_use_case.execute(
        DeleteCommentRequest(post_id=post_id, comment_id=comment_id)
    )
