"""In-memory post repository for testing."""

import asyncio
from dataclasses import dataclass
from typing import Optional

from bandlab.domain.model.post import Post
from bandlab.domain.repository.post import PostPage, PostRepository
from bandlab.domain.value import CommentId, PostCursor, PostId


@dataclass
class _LedgerEntry:
    post_id: PostId
    decremented: bool = False


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing.

    Counter updates are serialized by a lock and keyed by comment ID in a
    ledger, mirroring the PostgreSQL repository.
    """

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}
        self._ledger: dict[CommentId, _LedgerEntry] = {}
        self._lock = asyncio.Lock()

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def find_page(
        self, limit: int, cursor: Optional[PostCursor] = None
    ) -> PostPage:
        """Find the next page of posts, newest first."""
        posts = sorted(
            self._posts.values(), key=lambda p: (p.created_at, p.id), reverse=True
        )

        if cursor is not None:
            position = (cursor.created_at, cursor.post_id)
            posts = [p for p in posts if (p.created_at, p.id) < position]

        page = posts[:limit]
        next_cursor = None
        if len(posts) > limit:
            last = page[-1]
            next_cursor = PostCursor(created_at=last.created_at, post_id=last.id)

        return PostPage(posts=page, next_cursor=next_cursor)

    async def save(self, post: Post) -> Post:
        """Insert a post."""
        self._posts[post.id] = post
        return post

    async def increment_comment_count(
        self, post_id: PostId, comment_id: CommentId
    ) -> bool:
        """Count a comment once."""
        async with self._lock:
            post = self._posts.get(post_id)
            if post is None or comment_id in self._ledger:
                return False

            # Yield inside the critical section like a store round trip would
            await asyncio.sleep(0)

            self._ledger[comment_id] = _LedgerEntry(post_id=post_id)
            self._posts[post_id] = post.model_copy(
                update={"comment_count": post.comment_count + 1}
            )
            return True

    async def decrement_comment_count(
        self, post_id: PostId, comment_id: CommentId
    ) -> bool:
        """Uncount a counted comment once, never going below zero."""
        async with self._lock:
            entry = self._ledger.get(comment_id)
            if entry is None or entry.post_id != post_id or entry.decremented:
                return False

            await asyncio.sleep(0)

            entry.decremented = True
            post = self._posts.get(post_id)
            if post is not None and post.comment_count > 0:
                self._posts[post_id] = post.model_copy(
                    update={"comment_count": post.comment_count - 1}
                )
            return True
