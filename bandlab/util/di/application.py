"""Application layer DI providers."""

from dishka import Scope, provide

from bandlab.application.usecase.comment import AddCommentUseCase, DeleteCommentUseCase
from bandlab.application.usecase.post import CreatePostUseCase, ListPostsUseCase
from bandlab.config import ContentSettings, ListingSettings
from bandlab.domain.repository import Transaction
from bandlab.domain.service import (
    CommentService,
    EventDispatcher,
    ImageService,
    ListingService,
    PostService,
)
from bandlab.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(
        self,
        image_service: ImageService,
        post_service: PostService,
        event_dispatcher: EventDispatcher,
        transaction: Transaction,
        content_settings: ContentSettings,
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(
            image_service=image_service,
            post_service=post_service,
            event_dispatcher=event_dispatcher,
            transaction=transaction,
            content_settings=content_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(
        self, listing_service: ListingService, listing_settings: ListingSettings
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(
            listing_service=listing_service, listing_settings=listing_settings
        )

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_add_comment_use_case(
        self,
        comment_service: CommentService,
        event_dispatcher: EventDispatcher,
        transaction: Transaction,
        content_settings: ContentSettings,
    ) -> AddCommentUseCase:
        """Provide add comment use case."""
        return AddCommentUseCase(
            comment_service=comment_service,
            event_dispatcher=event_dispatcher,
            transaction=transaction,
            content_settings=content_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService, transaction: Transaction
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            comment_service=comment_service, transaction=transaction
        )
