"""Comment entity.

Comments are flat, immutable and hard-deleted. ``created_at`` orders the
recent-comment preview shown with each post.
"""

from datetime import datetime, timezone

from pydantic import Field

from bandlab.domain.model.common import DomainModel
from bandlab.domain.value import CommentId, Creator, PostId


class Comment(DomainModel):
    """Comment entity."""

    id: CommentId
    post_id: PostId
    content: str = Field(min_length=1, max_length=1000)
    creator: Creator
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
