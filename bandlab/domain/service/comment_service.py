"""Comment domain service."""

from datetime import datetime, timezone
from typing import Awaitable, Callable
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from bandlab.config import TimeoutSettings
from bandlab.domain.error import NotFoundError, StorageError, ValidationError
from bandlab.domain.model.comment import Comment
from bandlab.domain.repository import AtomicCounterStore, CommentRepository, PostRepository
from bandlab.domain.value import CommentId, Creator, PostId

from .base import Service, bounded


class CommentService(Service):
    """Domain service for comment operations.

    Keeps ``Post.comment_count`` in step with the stored comments. Writing a
    comment and updating the counter are two storage calls in one
    transaction; the counter calls are keyed by the comment ID so that
    retrying them is safe.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        counter_store: AtomicCounterStore,
        timeouts: TimeoutSettings,
        counter_attempts: int = 3,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            post_repository: Post repository, used to check the post exists
            counter_store: Store holding the comment counters
            timeouts: Bounds for storage calls
            counter_attempts: Tries for a counter update before giving up
        """
        self.comment_repository = comment_repository
        self.post_repository = post_repository
        self.counter_store = counter_store
        self.timeouts = timeouts
        self.counter_attempts = counter_attempts

    async def add_comment(
        self,
        post_id: PostId,
        content: str,
        creator: Creator,
        require_post: bool = True,
    ) -> Comment:
        """Add a comment to a post and count it.

        Args:
            post_id: Post ID
            content: Comment text
            creator: Identity of the author
            require_post: Reject comments on unknown posts. When False the
                comment is stored without a counter to update.

        Returns:
            Created comment

        Raises:
            NotFoundError: If the post does not exist and require_post is set
            ValidationError: If the content is empty or too long
            StorageError: If the comment or the counter update failed
        """
        comment_id = CommentId(uuid4())
        with logfire.span(
            "comment_service.add_comment",
            post_id=str(post_id),
            comment_id=str(comment_id),
            creator=str(creator),
        ):
            post = await bounded(
                self.post_repository.find_by_id(post_id),
                self.timeouts.storage_seconds,
                "post_repository.find_by_id",
            )
            if post is None:
                if require_post:
                    logfire.warn("Comment on unknown post", post_id=str(post_id))
                    raise NotFoundError("Post", str(post_id))
                logfire.warn("Storing orphan comment", post_id=str(post_id))

            try:
                comment = Comment(
                    id=comment_id,
                    post_id=post_id,
                    content=content,
                    creator=creator,
                    created_at=datetime.now(timezone.utc),
                )
            except PydanticValidationError as e:
                raise ValidationError("Comment must be 1-1000 characters") from e

            saved = await bounded(
                self.comment_repository.save(comment),
                self.timeouts.storage_seconds,
                "comment_repository.save",
            )

            if post is not None:
                # The comment and the counter commit together. A counter
                # failure that outlasts the retries fails the request and
                # the comment is rolled back with it.
                await self._update_counter(
                    self.counter_store.increment_comment_count,
                    post_id,
                    comment_id,
                    "increment",
                )

            logfire.info(
                "Comment added", comment_id=str(saved.id), post_id=str(post_id)
            )
            return saved

    async def delete_comment(self, post_id: PostId, comment_id: CommentId) -> bool:
        """Delete a comment and stop counting it.

        Deleting a comment that does not exist is a no-op. The decrement is
        attempted even when nothing was deleted; the counter store ignores
        comments it never counted or already uncounted.

        Args:
            post_id: Post ID
            comment_id: Comment ID

        Returns:
            True if a comment was removed by this call

        Raises:
            StorageError: If the delete or the counter update failed
        """
        with logfire.span(
            "comment_service.delete_comment",
            post_id=str(post_id),
            comment_id=str(comment_id),
        ):
            deleted = await bounded(
                self.comment_repository.delete(post_id, comment_id),
                self.timeouts.storage_seconds,
                "comment_repository.delete",
            )
            if not deleted:
                logfire.info(
                    "Comment already absent",
                    post_id=str(post_id),
                    comment_id=str(comment_id),
                )

            await self._update_counter(
                self.counter_store.decrement_comment_count,
                post_id,
                comment_id,
                "decrement",
            )
            return deleted

    async def _update_counter(
        self,
        update: Callable[[PostId, CommentId], Awaitable[bool]],
        post_id: PostId,
        comment_id: CommentId,
        action: str,
    ) -> bool:
        """Apply a counter update, retrying retryable storage failures.

        Retrying is safe because the comment ID is the idempotency key.

        Raises:
            StorageError: If every attempt failed
        """
        for attempt in range(1, self.counter_attempts + 1):
            try:
                changed = await bounded(
                    update(post_id, comment_id),
                    self.timeouts.storage_seconds,
                    f"counter_store.{action}",
                )
            except StorageError as e:
                if not e.retryable or attempt == self.counter_attempts:
                    logfire.error(
                        "Comment counter update failed",
                        action=action,
                        post_id=str(post_id),
                        comment_id=str(comment_id),
                        attempts=attempt,
                        error=str(e),
                    )
                    raise
                logfire.warn(
                    "Retrying comment counter update",
                    action=action,
                    post_id=str(post_id),
                    comment_id=str(comment_id),
                    attempt=attempt,
                )
                continue

            logfire.info(
                "Comment counter updated" if changed else "Comment counter unchanged",
                action=action,
                post_id=str(post_id),
                comment_id=str(comment_id),
            )
            return changed

        # counter_attempts < 1
        raise StorageError(f"counter_store.{action} was not attempted", retryable=False)
