"""Unit tests for CreatePostUseCase."""

import pytest

from bandlab.application.usecase.post import CreatePostRequest, CreatePostUseCase
from bandlab.domain.error import StorageError, ValidationError
from bandlab.domain.model import PostCreated
from bandlab.domain.repository import PostRepository
from bandlab.domain.service import EventPublisher, ObjectStore
from tests.conftest import make_image
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class TestCreatePostUseCase:
    """Tests for the create post flow."""

    @pytest.mark.asyncio
    async def test_create_post_stores_image_post_and_event(self, unit_env):
        """A valid request uploads the image, saves the post and publishes."""
        # Arrange
        use_case = await unit_env.get(CreatePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        store = await unit_env.get(ObjectStore)
        publisher = await unit_env.get(EventPublisher)

        # Act
        response = await use_case.execute(
            CreatePostRequest(caption="Hello", image=make_image(), creator="alice")
        )

        # Assert
        post = response.post
        assert response.message == "Post created successfully"
        assert post.caption == "Hello"
        assert post.creator == "alice"
        assert post.comment_count == 0
        assert post.image_ref in store.objects
        assert len(publisher.events) == 1
        event = publisher.events[0]
        assert isinstance(event, PostCreated)
        assert str(event.post_id) == post.post_id
        page = await post_repo.find_page(limit=10)
        assert [str(p.id) for p in page.posts] == [post.post_id]

    @pytest.mark.asyncio
    async def test_missing_caption_gets_default(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)

        response = await use_case.execute(CreatePostRequest(image=make_image()))

        assert response.post.caption == "Default caption"
        assert response.post.creator == "anonymous"

    @pytest.mark.asyncio
    async def test_invalid_image_writes_nothing(self, unit_env):
        """A non-image payload leaves no object, no post and no event."""
        use_case = await unit_env.get(CreatePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        store = await unit_env.get(ObjectStore)
        publisher = await unit_env.get(EventPublisher)

        with pytest.raises(ValidationError):
            await use_case.execute(CreatePostRequest(caption="Hello", image="aGVsbG8="))

        assert store.objects == {}
        assert (await post_repo.find_page(limit=10)).posts == []
        assert publisher.events == []

    @pytest.mark.asyncio
    async def test_upload_failure_writes_no_post(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        store = await unit_env.get(ObjectStore)
        store.fail = True

        with pytest.raises(StorageError):
            await use_case.execute(CreatePostRequest(caption="Hello", image=make_image()))

        assert (await post_repo.find_page(limit=10)).posts == []

    @pytest.mark.asyncio
    async def test_publish_failure_does_not_fail_request(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        publisher = await unit_env.get(EventPublisher)
        publisher.fail = True

        response = await use_case.execute(
            CreatePostRequest(caption="Hello", image=make_image())
        )

        assert response.post.caption == "Hello"
        assert len((await post_repo.find_page(limit=10)).posts) == 1

    @pytest.mark.asyncio
    async def test_long_caption_rejected_before_upload(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)
        store = await unit_env.get(ObjectStore)

        with pytest.raises(ValidationError):
            await use_case.execute(
                CreatePostRequest(caption="x" * 2201, image=make_image())
            )

        assert store.objects == {}
