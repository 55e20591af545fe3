"""Unit tests for AddCommentUseCase."""

from uuid import uuid4

import pytest

from bandlab.adapter.aws import InMemoryEventPublisher, InMemoryWorkQueue
from bandlab.application.usecase.comment import AddCommentRequest, AddCommentUseCase
from bandlab.application.usecase.post import CreatePostRequest, CreatePostUseCase
from bandlab.config import ContentSettings, TimeoutSettings
from bandlab.domain.error import NotFoundError, StorageError
from bandlab.domain.model import CommentAdded
from bandlab.domain.repository import PostRepository, Transaction
from bandlab.domain.service import (
    CommentService,
    EventDispatcher,
    EventPublisher,
    WorkQueue,
)
from bandlab.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryPostRepository,
    InMemoryTransaction,
)
from tests.conftest import make_image, make_post
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class UnavailableCounterStore(InMemoryPostRepository):
    """Counter updates always fail."""

    async def increment_comment_count(self, post_id, comment_id):
        raise StorageError("counter unavailable", retryable=True)


async def _create_post(unit_env) -> str:
    create_post = await unit_env.get(CreatePostUseCase)
    response = await create_post.execute(
        CreatePostRequest(caption="Hello", image=make_image())
    )
    return response.post.post_id


class TestAddCommentUseCase:
    """Tests for the add comment flow."""

    @pytest.mark.asyncio
    async def test_add_comment_commits_then_dispatches(self, unit_env):
        """The comment is counted, committed and sent to both channels."""
        # Arrange
        post_id = await _create_post(unit_env)
        use_case = await unit_env.get(AddCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        transaction = await unit_env.get(Transaction)
        publisher = await unit_env.get(EventPublisher)
        queue = await unit_env.get(WorkQueue)
        commits_before = transaction.commits

        # Act
        response = await use_case.execute(
            AddCommentRequest(post_id=post_id, content="Nice!", creator="bob")
        )

        # Assert
        comment = response.comment
        assert response.message == "Comment added successfully"
        assert comment.content == "Nice!"
        assert comment.creator == "bob"
        assert transaction.commits == commits_before + 1
        stored = await post_repo.find_page(limit=1)
        assert stored.posts[0].comment_count == 1
        added = [e for e in publisher.events if isinstance(e, CommentAdded)]
        assert len(added) == 1
        assert str(added[0].comment_id) == comment.comment_id
        assert queue.messages == added

    @pytest.mark.asyncio
    async def test_missing_content_gets_default(self, unit_env):
        post_id = await _create_post(unit_env)
        use_case = await unit_env.get(AddCommentUseCase)

        response = await use_case.execute(AddCommentRequest(post_id=post_id))

        assert response.comment.content == "Default comment"

    @pytest.mark.asyncio
    async def test_unknown_post_is_not_found(self, unit_env):
        use_case = await unit_env.get(AddCommentUseCase)
        publisher = await unit_env.get(EventPublisher)

        with pytest.raises(NotFoundError):
            await use_case.execute(AddCommentRequest(post_id=uuid4(), content="Nice!"))

        assert publisher.events == []

    @pytest.mark.asyncio
    async def test_queue_failure_does_not_fail_request(self, unit_env):
        post_id = await _create_post(unit_env)
        use_case = await unit_env.get(AddCommentUseCase)
        queue = await unit_env.get(WorkQueue)
        queue.fail = True

        response = await use_case.execute(
            AddCommentRequest(post_id=post_id, content="Nice!")
        )

        assert response.comment.content == "Nice!"

    @pytest.mark.asyncio
    async def test_counter_failure_commits_nothing(self):
        """If the counter cannot be updated, the comment is not committed."""
        # Arrange
        posts = UnavailableCounterStore()
        post = await posts.save(make_post())
        transaction = InMemoryTransaction()
        publisher = InMemoryEventPublisher()
        queue = InMemoryWorkQueue()
        use_case = AddCommentUseCase(
            comment_service=CommentService(
                comment_repository=InMemoryCommentRepository(),
                post_repository=posts,
                counter_store=posts,
                timeouts=TimeoutSettings(),
                counter_attempts=2,
            ),
            event_dispatcher=EventDispatcher(publisher, queue, TimeoutSettings()),
            transaction=transaction,
            content_settings=ContentSettings(),
        )

        # Act
        with pytest.raises(StorageError):
            await use_case.execute(AddCommentRequest(post_id=post.id, content="Nice!"))

        # Assert
        assert transaction.commits == 0
        assert publisher.events == []
        assert queue.messages == []
