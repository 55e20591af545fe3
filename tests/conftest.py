"""Test configuration and fixtures."""

import base64
from datetime import datetime, timezone
from io import BytesIO
from uuid import uuid4

import logfire
from PIL import Image

from bandlab.domain.model import Comment, Post
from bandlab.domain.value import CommentId, Creator, ImageRef, PostId

# Keep spans local; nothing is exported during tests
logfire.configure(send_to_logfire=False, console=False)


def make_image(fmt: str = "PNG", size: tuple[int, int] = (4, 4)) -> str:
    """Build a small valid image and return it base64 encoded.

    Args:
        fmt: Pillow format name, e.g. "PNG" or "JPEG"
        size: Width and height in pixels

    Returns:
        Base64 encoded image bytes
    """
    buffer = BytesIO()
    Image.new("RGB", size, color=(200, 30, 30)).save(buffer, format=fmt)
    return base64.b64encode(buffer.getvalue()).decode("ascii")


def make_post(
    caption: str = "Hello",
    created_at: datetime | None = None,
    comment_count: int = 0,
) -> Post:
    """Helper to build a post without going through the service."""
    return Post(
        id=PostId(uuid4()),
        caption=caption,
        image_ref=ImageRef("posts/test.png"),
        creator=Creator("alice"),
        comment_count=comment_count,
        created_at=created_at or datetime.now(timezone.utc),
    )


def make_comment(
    post_id: PostId, content: str, created_at: datetime | None = None
) -> Comment:
    """Helper to build a comment without going through the service."""
    return Comment(
        id=CommentId(uuid4()),
        post_id=post_id,
        content=content,
        creator=Creator("bob"),
        created_at=created_at or datetime.now(timezone.utc),
    )
