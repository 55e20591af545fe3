"""In-memory comment repository for testing."""

from bandlab.domain.model.comment import Comment
from bandlab.domain.repository.comment import CommentRepository, RecentCommentLookup
from bandlab.domain.value import CommentId, PostId


class InMemoryCommentRepository(CommentRepository, RecentCommentLookup):
    """In-memory implementation of CommentRepository for testing.

    Also serves as the recent-comment lookup for the listing.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_recent(self, post_id: PostId, limit: int) -> list[Comment]:
        """Find the newest comments for a post."""
        comments = [c for c in self._comments.values() if c.post_id == post_id]
        comments.sort(key=lambda c: (c.created_at, c.id), reverse=True)
        return comments[:limit]

    async def save(self, comment: Comment) -> Comment:
        """Insert a comment."""
        self._comments[comment.id] = comment
        return comment

    async def delete(self, post_id: PostId, comment_id: CommentId) -> bool:
        """Delete a comment if it belongs to the post."""
        comment = self._comments.get(comment_id)
        if comment is None or comment.post_id != post_id:
            return False
        del self._comments[comment_id]
        return True
