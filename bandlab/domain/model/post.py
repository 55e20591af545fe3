"""Post aggregate root.

A post is an image with a caption. Its only mutable state is the
denormalized comment counter.
"""

from datetime import datetime, timezone

from pydantic import Field

from bandlab.domain.model.common import DomainModel
from bandlab.domain.value import Creator, ImageRef, PostId

CAPTION_MAX_LENGTH = 2200


class Post(DomainModel):
    """Post aggregate root.

    ``comment_count`` mirrors the number of comments stored for the post.
    It is only ever changed through the atomic counter store, never by
    saving a modified copy of the post.
    """

    id: PostId
    caption: str = Field(min_length=1, max_length=CAPTION_MAX_LENGTH)
    image_ref: ImageRef
    creator: Creator
    comment_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
