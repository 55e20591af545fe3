"""Add comment use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from bandlab.application.usecase.base import BaseUseCase, resolve_creator, resolve_text
from bandlab.application.usecase.items import CommentItem, ResponseModel
from bandlab.config import ContentSettings
from bandlab.domain.repository import Transaction
from bandlab.domain.service import CommentService, EventDispatcher
from bandlab.domain.value import PostId


class AddCommentRequest(BaseModel):
    """Add comment request."""

    post_id: UUID
    content: str | None = None
    creator: str | None = None  # Identity from the auth layer


class AddCommentResponse(ResponseModel):
    """Add comment response."""

    message: str = "Comment added successfully"
    comment: CommentItem


class AddCommentUseCase(BaseUseCase):
    """Use case for commenting on a post."""

    def __init__(
        self,
        comment_service: CommentService,
        event_dispatcher: EventDispatcher,
        transaction: Transaction,
        content_settings: ContentSettings,
    ) -> None:
        """Initialize add comment use case.

        Args:
            comment_service: Comment domain service
            event_dispatcher: Downstream event delivery
            transaction: Commits the comment and counter before events go out
            content_settings: Missing-field and unknown-post policy
        """
        self.comment_service = comment_service
        self.event_dispatcher = event_dispatcher
        self.transaction = transaction
        self.content_settings = content_settings

    async def execute(self, request: AddCommentRequest) -> AddCommentResponse:
        """Execute add comment flow.

        Steps:
        1. Store the comment and increment the post's counter
        2. Commit
        3. Publish CommentAdded and enqueue the matching task (best effort)

        Args:
            request: Add comment request

        Returns:
            Add comment response with the stored comment

        Raises:
            ValidationError: If the content is invalid
            NotFoundError: If the post does not exist
            StorageError: If the comment or counter could not be stored
        """
        content = resolve_text(
            request.content,
            self.content_settings.default_comment,
            self.content_settings,
            "Content",
        )
        creator = resolve_creator(request.creator, self.content_settings)
        post_id = PostId(request.post_id)

        with logfire.span(
            "add_comment.execute", post_id=str(post_id), creator=str(creator)
        ):
            comment = await self.comment_service.add_comment(
                post_id,
                content,
                creator,
                require_post=not self.content_settings.allow_orphan_comments,
            )
            await self.transaction.commit()

            delivered = await self.event_dispatcher.comment_added(comment)
            logfire.info(
                "Comment added successfully",
                comment_id=str(comment.id),
                post_id=str(post_id),
                delivered=delivered,
            )

            return AddCommentResponse(comment=CommentItem.from_comment(comment))
