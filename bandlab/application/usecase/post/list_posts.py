"""List posts use case."""

import logfire
from pydantic import BaseModel

from bandlab.application.usecase.base import BaseUseCase
from bandlab.application.usecase.items import CommentItem, PostItem
from bandlab.config import ListingSettings
from bandlab.domain.service import ListingService
from bandlab.domain.value import PostCursor


class PostWithCommentsItem(PostItem):
    """Post list item with its most recent comments."""

    comments: list[CommentItem]


class ListPostsRequest(BaseModel):
    """List posts request."""

    limit: int | None = None  # Defaults to listing.default_limit
    cursor: str | None = None  # Opaque token from the previous page


class ListPostsResponse(BaseModel):
    """List posts response."""

    posts: list[PostWithCommentsItem]
    next_cursor: str | None = None


class ListPostsUseCase(BaseUseCase):
    """Use case for listing posts with a preview of their comments."""

    def __init__(
        self, listing_service: ListingService, listing_settings: ListingSettings
    ) -> None:
        """Initialize list posts use case.

        Args:
            listing_service: Post listing with comment previews
            listing_settings: Default page size
        """
        self.listing_service = listing_service
        self.listing_settings = listing_settings

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Args:
            request: Page size and cursor

        Returns:
            Posts newest first and the cursor for the next page

        Raises:
            ValidationError: If the cursor or limit is invalid
            StorageError: If the posts could not be read
        """
        limit = (
            self.listing_settings.default_limit
            if request.limit is None
            else request.limit
        )
        cursor = PostCursor.decode(request.cursor) if request.cursor else None

        with logfire.span(
            "list_posts.execute", limit=limit, has_cursor=cursor is not None
        ):
            page = await self.listing_service.get_posts_with_recent_comments(
                limit=limit, cursor=cursor
            )

            posts = [
                PostWithCommentsItem(
                    **PostItem.from_post(preview.post).model_dump(),
                    comments=[
                        CommentItem.from_comment(c) for c in preview.recent_comments
                    ],
                )
                for preview in page.items
            ]

            return ListPostsResponse(
                posts=posts,
                next_cursor=page.next_cursor.encode() if page.next_cursor else None,
            )
