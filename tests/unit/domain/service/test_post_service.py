"""Unit tests for PostService."""

import pytest

from bandlab.domain.error import ValidationError
from bandlab.domain.repository import PostRepository
from bandlab.domain.service import PostService
from bandlab.domain.value import Creator, ImageRef
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class TestCreatePost:
    """Tests for create_post."""

    @pytest.mark.asyncio
    async def test_create_post_starts_with_zero_comments(self, unit_env):
        """New posts get an ID, a timestamp and a zero counter."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)

        # Act
        post = await post_service.create_post(
            "Hello", ImageRef("posts/abc.png"), Creator("alice")
        )

        # Assert
        assert post.comment_count == 0
        assert post.caption == "Hello"
        assert post.created_at.tzinfo is not None
        assert await post_repo.find_by_id(post.id) == post

    @pytest.mark.asyncio
    @pytest.mark.parametrize("caption", ["", "x" * 2201])
    async def test_invalid_caption_raises_validation_error(self, unit_env, caption):
        """Empty or overlong captions are rejected."""
        post_service = await unit_env.get(PostService)

        with pytest.raises(ValidationError):
            await post_service.create_post(
                caption, ImageRef("posts/abc.png"), Creator("alice")
            )

