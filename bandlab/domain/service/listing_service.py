"""Read-side composition of posts with their newest comments."""

import asyncio

import logfire
from pydantic import BaseModel

from bandlab.config import ListingSettings, TimeoutSettings
from bandlab.domain.model import Comment, Post
from bandlab.domain.repository import PostRepository, RecentCommentLookup
from bandlab.domain.value import PostCursor

from .base import Service, bounded, validate_limit


class PostPreview(BaseModel):
    """A post with a preview of its most recent comments."""

    post: Post
    recent_comments: list[Comment]


class PostPreviewPage(BaseModel):
    """One page of post previews."""

    items: list[PostPreview]
    next_cursor: PostCursor | None = None


class ListingService(Service):
    """Builds post listings with a recent-comment preview per post.

    One call lists the page of posts, then one lookup per post fetches its
    newest comments. Lookups run concurrently, capped by
    ``fanout_concurrency``. A failed lookup leaves that post with an empty
    preview instead of failing the listing. Never mutates state.
    """

    def __init__(
        self,
        post_repository: PostRepository,
        comment_lookup: RecentCommentLookup,
        listing_settings: ListingSettings,
        timeouts: TimeoutSettings,
    ) -> None:
        """Initialize listing service.

        Args:
            post_repository: Source of post pages
            comment_lookup: Source of recent comments per post
            listing_settings: Page size limits and fan-out width
            timeouts: Bounds for storage calls
        """
        self.post_repository = post_repository
        self.comment_lookup = comment_lookup
        self.listing_settings = listing_settings
        self.timeouts = timeouts

    async def get_posts_with_recent_comments(
        self, limit: int, cursor: PostCursor | None = None
    ) -> PostPreviewPage:
        """List a page of posts, each with its newest comments.

        Args:
            limit: Page size
            cursor: Cursor returned with the previous page

        Returns:
            Posts newest first, each with up to ``recent_comment_count``
            comments newest first

        Raises:
            ValidationError: If limit is out of range
            StorageError: If the post page itself could not be read
        """
        validate_limit(limit, self.listing_settings.max_limit)
        with logfire.span(
            "listing_service.get_posts_with_recent_comments",
            limit=limit,
            has_cursor=cursor is not None,
        ):
            page = await bounded(
                self.post_repository.find_page(limit=limit, cursor=cursor),
                self.timeouts.storage_seconds,
                "post_repository.find_page",
            )

            semaphore = asyncio.Semaphore(self.listing_settings.fanout_concurrency)
            previews = await asyncio.gather(
                *(self._recent_comments(post, semaphore) for post in page.posts)
            )

            items = [
                PostPreview(post=post, recent_comments=comments)
                for post, comments in zip(page.posts, previews)
            ]
            logfire.info(
                "Post previews listed",
                count=len(items),
                has_more=page.next_cursor is not None,
            )
            return PostPreviewPage(items=items, next_cursor=page.next_cursor)

    async def _recent_comments(
        self, post: Post, semaphore: asyncio.Semaphore
    ) -> list[Comment]:
        """Fetch the preview for one post; failures yield an empty preview."""
        count = self.listing_settings.recent_comment_count
        if count == 0:
            return []

        async with semaphore:
            try:
                comments = await bounded(
                    self.comment_lookup.find_recent(post.id, count),
                    self.timeouts.storage_seconds,
                    "comment_lookup.find_recent",
                )
            except Exception as e:
                logfire.warn(
                    "Recent comment lookup failed",
                    post_id=str(post.id),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return []

        comments = sorted(comments, key=lambda c: (c.created_at, c.id), reverse=True)
        return comments[:count]
