"""Create post use case."""

import logfire
from pydantic import BaseModel

from bandlab.application.usecase.base import BaseUseCase, resolve_creator, resolve_text
from bandlab.application.usecase.items import PostItem, ResponseModel
from bandlab.config import ContentSettings
from bandlab.domain.repository import Transaction
from bandlab.domain.service import EventDispatcher, ImageService, PostService


class CreatePostRequest(BaseModel):
    """Create post request."""

    caption: str | None = None
    image: str | None = None  # Base64 payload or data URL
    creator: str | None = None  # Identity from the auth layer


class CreatePostResponse(ResponseModel):
    """Create post response."""

    message: str = "Post created successfully"
    post: PostItem


class CreatePostUseCase(BaseUseCase):
    """Use case for creating a post with an image."""

    def __init__(
        self,
        image_service: ImageService,
        post_service: PostService,
        event_dispatcher: EventDispatcher,
        transaction: Transaction,
        content_settings: ContentSettings,
    ) -> None:
        """Initialize create post use case.

        Args:
            image_service: Image validation and upload
            post_service: Post domain service
            event_dispatcher: Downstream event delivery
            transaction: Commits the post before events go out
            content_settings: Missing-field policy
        """
        self.image_service = image_service
        self.post_service = post_service
        self.event_dispatcher = event_dispatcher
        self.transaction = transaction
        self.content_settings = content_settings

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        Steps:
        1. Validate the caption, creator and image (nothing written on failure)
        2. Upload the image to the object store
        3. Save the post and commit
        4. Publish PostCreated (best effort)

        Args:
            request: Create post request

        Returns:
            Create post response with the stored post

        Raises:
            ValidationError: If the image or caption is invalid
            StorageError: If the upload or the insert failed
        """
        caption = resolve_text(
            request.caption,
            self.content_settings.default_caption,
            self.content_settings,
            "Caption",
        )
        self.post_service.check_caption(caption)
        creator = resolve_creator(request.creator, self.content_settings)

        with logfire.span("create_post.execute", creator=str(creator)):
            image = self.image_service.decode(request.image)
            image_ref = await self.image_service.store(image)

            post = await self.post_service.create_post(caption, image_ref, creator)
            await self.transaction.commit()

            delivered = await self.event_dispatcher.post_created(post)
            logfire.info(
                "Post created successfully",
                post_id=str(post.id),
                image_ref=str(post.image_ref),
                delivered=delivered,
            )

            return CreatePostResponse(post=PostItem.from_post(post))
