"""Comment repository interfaces."""

from abc import ABC, abstractmethod
from typing import List

from bandlab.domain.model.comment import Comment
from bandlab.domain.value import CommentId, PostId


class RecentCommentLookup(ABC):
    """Read-only lookup of the newest comments on a post.

    Implementations must tolerate concurrent calls; the listing fans out one
    lookup per post.
    """

    @abstractmethod
    async def find_recent(self, post_id: PostId, limit: int) -> List[Comment]:
        """Find the most recent comments for a post.

        Ordered by ``created_at`` descending, ties broken by ``id`` descending.

        Args:
            post_id: The post ID
            limit: Maximum number of comments to return

        Returns:
            Newest comments first
        """
        pass


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment.

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId, comment_id: CommentId) -> bool:
        """Delete a comment (hard delete).

        Args:
            post_id: The owning post ID
            comment_id: The comment ID to delete

        Returns:
            True if a comment was removed, False if none matched
        """
        pass
