"""Atomic counter capability.

Any store that keeps the denormalized ``comment_count`` implements this
interface. Both operations are single atomic conditional updates inside the
store and are idempotent per comment: the comment id is the idempotency key.
"""

from abc import ABC, abstractmethod

from bandlab.domain.value import CommentId, PostId


class AtomicCounterStore(ABC):
    """Idempotent, race-free updates of a post's comment counter."""

    @abstractmethod
    async def increment_comment_count(
        self, post_id: PostId, comment_id: CommentId
    ) -> bool:
        """Count ``comment_id`` towards the post's comment counter.

        Applying the same comment id twice has no further effect.

        Args:
            post_id: The owning post
            comment_id: Idempotency key for this increment

        Returns:
            True if the counter changed, False if the increment was
            already applied or the post does not exist
        """
        pass

    @abstractmethod
    async def decrement_comment_count(
        self, post_id: PostId, comment_id: CommentId
    ) -> bool:
        """Stop counting ``comment_id`` towards the post's comment counter.

        Only comments whose increment was applied are decremented, at most
        once, and the counter never drops below zero.

        Args:
            post_id: The owning post
            comment_id: Idempotency key for this decrement

        Returns:
            True if the counter changed, False otherwise
        """
        pass
