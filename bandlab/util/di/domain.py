"""Domain layer DI providers."""

from dishka import Scope, provide

from bandlab.config import (
    ImageSettings,
    ListingSettings,
    StorageSettings,
    TimeoutSettings,
)
from bandlab.domain.repository import (
    AtomicCounterStore,
    CommentRepository,
    PostRepository,
    RecentCommentLookup,
)
from bandlab.domain.service import (
    CommentService,
    EventDispatcher,
    EventPublisher,
    ImageService,
    ListingService,
    ObjectStore,
    PostService,
    WorkQueue,
)
from bandlab.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_counter_store(self, post_repository: PostRepository) -> AtomicCounterStore:
        """The post repository owns the comment counters."""
        return post_repository

    @provide
    def get_post_service(
        self,
        post_repository: PostRepository,
        timeouts: TimeoutSettings,
    ) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository, timeouts=timeouts)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        counter_store: AtomicCounterStore,
        timeouts: TimeoutSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            post_repository=post_repository,
            counter_store=counter_store,
            timeouts=timeouts,
            counter_attempts=timeouts.counter_attempts,
        )

    @provide
    def get_image_service(
        self,
        object_store: ObjectStore,
        image_settings: ImageSettings,
        storage_settings: StorageSettings,
        timeouts: TimeoutSettings,
    ) -> ImageService:
        """Provide image domain service."""
        return ImageService(
            object_store=object_store,
            image_settings=image_settings,
            storage_settings=storage_settings,
            timeouts=timeouts,
        )

    @provide
    def get_listing_service(
        self,
        post_repository: PostRepository,
        comment_lookup: RecentCommentLookup,
        listing_settings: ListingSettings,
        timeouts: TimeoutSettings,
    ) -> ListingService:
        """Provide listing domain service."""
        return ListingService(
            post_repository=post_repository,
            comment_lookup=comment_lookup,
            listing_settings=listing_settings,
            timeouts=timeouts,
        )

    @provide
    def get_event_dispatcher(
        self,
        publisher: EventPublisher,
        work_queue: WorkQueue,
        timeouts: TimeoutSettings,
    ) -> EventDispatcher:
        """Provide event dispatcher."""
        return EventDispatcher(
            publisher=publisher, work_queue=work_queue, timeouts=timeouts
        )
