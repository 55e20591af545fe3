"""Domain events published after successful mutations.

Payloads are serialized with camelCase keys, e.g.
``{"postId": "...", "commentId": "...", "content": "Nice!"}``.
"""

from typing import ClassVar

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from bandlab.domain.model.common import DomainModel
from bandlab.domain.value import CommentId, EventType, PostId


class DomainEvent(DomainModel):
    """Base class for events consumed outside the service."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    event_type: ClassVar[EventType]

    def to_message(self) -> str:
        """Serialize the event body for the topic or queue."""
        return self.model_dump_json(by_alias=True)


class PostCreated(DomainEvent):
    """A post was created."""

    event_type: ClassVar[EventType] = EventType.POST_CREATED

    post_id: PostId
    caption: str


class CommentAdded(DomainEvent):
    """A comment was added to a post."""

    event_type: ClassVar[EventType] = EventType.COMMENT_ADDED

    post_id: PostId
    comment_id: CommentId
    content: str
