"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .dispatch_service import EventDispatcher, EventPublisher, WorkQueue
from .image_service import DecodedImage, ImageService, ObjectStore
from .listing_service import ListingService, PostPreview, PostPreviewPage
from .post_service import PostService

__all__ = [
    "CommentService",
    "DecodedImage",
    "EventDispatcher",
    "EventPublisher",
    "ImageService",
    "ListingService",
    "ObjectStore",
    "PostPreview",
    "PostPreviewPage",
    "PostService",
    "Service",
    "WorkQueue",
]
