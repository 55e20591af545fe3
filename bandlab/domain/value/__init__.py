"""Domain value objects for BandLab."""

from bandlab.domain.value.identifiers import CommentId, PostId
from bandlab.domain.value.types import Creator, EventType, ImageRef, PostCursor

__all__ = [
    # Identifiers
    "PostId",
    "CommentId",
    # Types
    "Creator",
    "EventType",
    "ImageRef",
    "PostCursor",
]
