"""Post repository interface."""

from abc import abstractmethod
from typing import Optional

from pydantic import BaseModel

from bandlab.domain.model.post import Post
from bandlab.domain.repository.counter import AtomicCounterStore
from bandlab.domain.value import PostCursor, PostId


class PostPage(BaseModel):
    """One page of the newest-first post listing."""

    posts: list[Post]
    next_cursor: Optional[PostCursor] = None


class PostRepository(AtomicCounterStore):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations. The repository
    also owns the comment counter, so it implements ``AtomicCounterStore``.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_page(
        self, limit: int, cursor: Optional[PostCursor] = None
    ) -> PostPage:
        """Find the next page of posts, newest first.

        Posts are ordered by ``created_at`` descending with ``id`` descending
        as tie-breaker. ``next_cursor`` is None on the last page.

        Args:
            limit: Maximum number of posts to return
            cursor: Position after which to continue (None for first page)

        Returns:
            Page of posts with the cursor for the following page
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Insert a new post.

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass
