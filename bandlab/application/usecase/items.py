"""Response items shared by the post and comment use cases.

Serialized with camelCase keys (``postId``, ``commentCount``).
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from bandlab.domain.model import Comment, Post


class ResponseModel(BaseModel):
    """Base for models rendered to API clients."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PostItem(ResponseModel):
    """Post in responses."""

    post_id: str
    caption: str
    image_ref: str
    creator: str
    comment_count: int
    created_at: datetime

    @classmethod
    def from_post(cls, post: Post) -> "PostItem":
        return cls(
            post_id=str(post.id),
            caption=post.caption,
            image_ref=str(post.image_ref),
            creator=str(post.creator),
            comment_count=post.comment_count,
            created_at=post.created_at,
        )


class CommentItem(ResponseModel):
    """Comment in responses."""

    comment_id: str
    post_id: str
    content: str
    creator: str
    created_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentItem":
        return cls(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            content=comment.content,
            creator=str(comment.creator),
            created_at=comment.created_at,
        )
