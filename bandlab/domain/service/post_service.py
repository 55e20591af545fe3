"""Post domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from bandlab.config import TimeoutSettings
from bandlab.domain.error import ValidationError
from bandlab.domain.model.post import CAPTION_MAX_LENGTH, Post
from bandlab.domain.repository import PostRepository
from bandlab.domain.value import Creator, ImageRef, PostId

from .base import Service, bounded


class PostService(Service):
    """Domain service for post operations."""

    def __init__(
        self,
        post_repository: PostRepository,
        timeouts: TimeoutSettings,
    ) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            timeouts: Bounds for storage calls
        """
        self.post_repository = post_repository
        self.timeouts = timeouts

    def check_caption(self, caption: str) -> str:
        """Reject a caption that cannot be stored, before anything is written.

        Raises:
            ValidationError: If the caption is empty or too long
        """
        if not caption or len(caption) > CAPTION_MAX_LENGTH:
            raise ValidationError(f"Caption must be 1-{CAPTION_MAX_LENGTH} characters")
        return caption

    async def create_post(
        self, caption: str, image_ref: ImageRef, creator: Creator
    ) -> Post:
        """Create a post with a fresh ID and a zero comment count.

        Args:
            caption: Post caption
            image_ref: Object store key of the already uploaded image
            creator: Identity of the author

        Returns:
            The saved post

        Raises:
            ValidationError: If the caption is empty or too long
            StorageError: If the post could not be persisted
        """
        post_id = PostId(uuid4())
        with logfire.span(
            "post_service.create_post",
            post_id=str(post_id),
            image_ref=str(image_ref),
            creator=str(creator),
        ):
            try:
                post = Post(
                    id=post_id,
                    caption=caption,
                    image_ref=image_ref,
                    creator=creator,
                    comment_count=0,
                    created_at=datetime.now(timezone.utc),
                )
            except PydanticValidationError as e:
                logfire.warn("Invalid post", post_id=str(post_id), error=str(e))
                raise ValidationError(
                    f"Caption must be 1-{CAPTION_MAX_LENGTH} characters"
                ) from e

            saved = await bounded(
                self.post_repository.save(post),
                self.timeouts.storage_seconds,
                "post_repository.save",
            )
            logfire.info("Post created", post_id=str(saved.id))
            return saved
