"""Unit tests for ListPostsUseCase."""

import pytest

from bandlab.application.usecase.comment import (
    AddCommentRequest,
    AddCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
)
from bandlab.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    ListPostsRequest,
    ListPostsUseCase,
)
from bandlab.domain.error import ValidationError
from tests.conftest import make_image
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class TestListPostsUseCase:
    """Tests for the list posts flow."""

    @pytest.mark.asyncio
    async def test_hello_nice_cool_scenario(self, unit_env):
        """Deleting one of two comments leaves the other in the preview."""
        # Arrange
        create_post = await unit_env.get(CreatePostUseCase)
        add_comment = await unit_env.get(AddCommentUseCase)
        delete_comment = await unit_env.get(DeleteCommentUseCase)
        list_posts = await unit_env.get(ListPostsUseCase)

        post = (
            await create_post.execute(
                CreatePostRequest(caption="Hello", image=make_image())
            )
        ).post
        nice = (
            await add_comment.execute(
                AddCommentRequest(post_id=post.post_id, content="Nice!")
            )
        ).comment
        await add_comment.execute(AddCommentRequest(post_id=post.post_id, content="Cool"))

        # Act
        await delete_comment.execute(
            DeleteCommentRequest(post_id=post.post_id, comment_id=nice.comment_id)
        )
        response = await list_posts.execute(ListPostsRequest())

        # Assert
        assert len(response.posts) == 1
        listed = response.posts[0]
        assert listed.caption == "Hello"
        assert listed.comment_count == 1
        assert [c.content for c in listed.comments] == ["Cool"]
        assert response.next_cursor is None

    @pytest.mark.asyncio
    async def test_pages_are_linked_by_cursor(self, unit_env):
        create_post = await unit_env.get(CreatePostUseCase)
        list_posts = await unit_env.get(ListPostsUseCase)
        for i in range(3):
            await create_post.execute(
                CreatePostRequest(caption=f"post {i}", image=make_image())
            )

        first = await list_posts.execute(ListPostsRequest(limit=2))
        second = await list_posts.execute(
            ListPostsRequest(limit=2, cursor=first.next_cursor)
        )

        assert len(first.posts) == 2
        assert first.next_cursor is not None
        assert len(second.posts) == 1
        assert second.next_cursor is None
        ids = {p.post_id for p in first.posts} | {p.post_id for p in second.posts}
        assert len(ids) == 3

    @pytest.mark.asyncio
    async def test_bad_cursor_is_rejected(self, unit_env):
        list_posts = await unit_env.get(ListPostsUseCase)

        with pytest.raises(ValidationError):
            await list_posts.execute(ListPostsRequest(cursor="not-a-cursor"))

    @pytest.mark.asyncio
    async def test_zero_limit_is_rejected(self, unit_env):
        list_posts = await unit_env.get(ListPostsUseCase)

        with pytest.raises(ValidationError):
            await list_posts.execute(ListPostsRequest(limit=0))
