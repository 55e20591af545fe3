"""Delete comment use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from bandlab.application.usecase.base import BaseUseCase
from bandlab.application.usecase.items import ResponseModel
from bandlab.domain.repository import Transaction
from bandlab.domain.service import CommentService
from bandlab.domain.value import CommentId, PostId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    post_id: UUID
    comment_id: UUID


class DeleteCommentResponse(ResponseModel):
    """Delete comment response."""

    message: str = "Comment deleted successfully"
    comment_id: str


class DeleteCommentUseCase(BaseUseCase):
    """Use case for deleting a comment.

    Deleting a comment that is already gone succeeds, so clients can retry
    a delete safely.
    """

    def __init__(
        self, comment_service: CommentService, transaction: Transaction
    ) -> None:
        self.comment_service = comment_service
        self.transaction = transaction

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            StorageError: If the delete or counter update failed
        """
        post_id = PostId(request.post_id)
        comment_id = CommentId(request.comment_id)

        with logfire.span(
            "delete_comment.execute",
            post_id=str(post_id),
            comment_id=str(comment_id),
        ):
            deleted = await self.comment_service.delete_comment(post_id, comment_id)
            await self.transaction.commit()

            logfire.info(
                "Comment delete completed",
                comment_id=str(comment_id),
                deleted=deleted,
            )
            return DeleteCommentResponse(comment_id=str(comment_id))
