"""Domain model entities for BandLab."""

from bandlab.domain.model.comment import Comment
from bandlab.domain.model.event import CommentAdded, DomainEvent, PostCreated
from bandlab.domain.model.post import CAPTION_MAX_LENGTH, Post

__all__ = [
    "CAPTION_MAX_LENGTH",
    "Post",
    "Comment",
    "DomainEvent",
    "PostCreated",
    "CommentAdded",
]
