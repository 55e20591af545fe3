"""Unit tests for EventDispatcher."""

import asyncio
import json

import pytest

from bandlab.adapter.aws import InMemoryEventPublisher, InMemoryWorkQueue
from bandlab.config import TimeoutSettings
from bandlab.domain.model import CommentAdded, PostCreated
from bandlab.domain.service import EventDispatcher, EventPublisher, WorkQueue
from tests.conftest import make_comment, make_post
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class HangingPublisher(EventPublisher):
    """Never completes a publish."""

    async def publish(self, event):
        await asyncio.sleep(10)


class BrokenPublisher(EventPublisher):
    """Raises something other than DownstreamError."""

    async def publish(self, event):
        raise RuntimeError("serializer bug")


class TestPostCreated:
    """Tests for post_created."""

    @pytest.mark.asyncio
    async def test_publishes_post_created(self, unit_env):
        dispatcher = await unit_env.get(EventDispatcher)
        publisher = await unit_env.get(EventPublisher)
        queue = await unit_env.get(WorkQueue)
        post = make_post(caption="Hello")

        outcome = await dispatcher.post_created(post)

        assert outcome == {"topic": True}
        assert publisher.events == [PostCreated(post_id=post.id, caption="Hello")]
        assert queue.messages == []

    @pytest.mark.asyncio
    async def test_publisher_failure_is_swallowed(self):
        dispatcher = EventDispatcher(
            InMemoryEventPublisher(fail=True), InMemoryWorkQueue(), TimeoutSettings()
        )

        outcome = await dispatcher.post_created(make_post())

        assert outcome == {"topic": False}

    @pytest.mark.asyncio
    async def test_publisher_timeout_is_swallowed(self):
        dispatcher = EventDispatcher(
            HangingPublisher(),
            InMemoryWorkQueue(),
            TimeoutSettings(downstream_seconds=0.01),
        )

        outcome = await dispatcher.post_created(make_post())

        assert outcome == {"topic": False}


class TestCommentAdded:
    """Tests for comment_added."""

    @pytest.mark.asyncio
    async def test_publishes_and_enqueues(self, unit_env):
        """Both channels receive the same CommentAdded event."""
        dispatcher = await unit_env.get(EventDispatcher)
        publisher = await unit_env.get(EventPublisher)
        queue = await unit_env.get(WorkQueue)
        post = make_post()
        comment = make_comment(post.id, "Nice!")

        outcome = await dispatcher.comment_added(comment)

        expected = CommentAdded(
            post_id=post.id, comment_id=comment.id, content="Nice!"
        )
        assert outcome == {"topic": True, "queue": True}
        assert publisher.events == [expected]
        assert queue.messages == [expected]

    @pytest.mark.asyncio
    async def test_one_channel_failing_does_not_block_the_other(self):
        queue = InMemoryWorkQueue()
        dispatcher = EventDispatcher(
            InMemoryEventPublisher(fail=True), queue, TimeoutSettings()
        )
        comment = make_comment(make_post().id, "Nice!")

        outcome = await dispatcher.comment_added(comment)

        assert outcome == {"topic": False, "queue": True}
        assert len(queue.messages) == 1

    @pytest.mark.asyncio
    async def test_unexpected_publisher_error_is_swallowed(self):
        """Any exception from a channel is logged and reported, never raised."""
        queue = InMemoryWorkQueue()
        dispatcher = EventDispatcher(BrokenPublisher(), queue, TimeoutSettings())
        post = make_post()

        created = await dispatcher.post_created(post)
        added = await dispatcher.comment_added(make_comment(post.id, "Nice!"))

        assert created == {"topic": False}
        assert added == {"topic": False, "queue": True}
        assert len(queue.messages) == 1

    def test_message_uses_camel_case_keys(self):
        post = make_post()
        comment = make_comment(post.id, "Nice!")
        event = CommentAdded(post_id=post.id, comment_id=comment.id, content="Nice!")

        body = json.loads(event.to_message())

        assert body == {
            "postId": str(post.id),
            "commentId": str(comment.id),
            "content": "Nice!",
        }
