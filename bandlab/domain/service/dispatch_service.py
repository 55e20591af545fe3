"""Best-effort delivery of domain events after a committed mutation."""

import asyncio
from abc import ABC, abstractmethod
from typing import Awaitable

import logfire

from bandlab.config import TimeoutSettings
from bandlab.domain.error import DownstreamError
from bandlab.domain.model import Comment, CommentAdded, DomainEvent, Post, PostCreated

from .base import Service


class EventPublisher(ABC):
    """Fan-out channel for domain events (at-least-once)."""

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """Publish an event to every subscriber.

        Raises:
            DownstreamError: If the event could not be handed over
        """
        pass


class WorkQueue(ABC):
    """Durable queue of tasks for asynchronous processing."""

    @abstractmethod
    async def enqueue(self, event: DomainEvent) -> None:
        """Enqueue a task describing the event.

        Raises:
            DownstreamError: If the task could not be handed over
        """
        pass


class EventDispatcher(Service):
    """Notifies downstream consumers without putting requests at risk.

    The storage mutation is the source of truth. Delivery failures are
    logged and dropped: they never roll back the mutation and never fail
    the caller.
    """

    TOPIC = "topic"
    QUEUE = "queue"

    def __init__(
        self,
        publisher: EventPublisher,
        work_queue: WorkQueue,
        timeouts: TimeoutSettings,
    ) -> None:
        """Initialize dispatcher.

        Args:
            publisher: Event topic
            work_queue: Task queue
            timeouts: Bounds for downstream calls
        """
        self.publisher = publisher
        self.work_queue = work_queue
        self.timeouts = timeouts

    async def post_created(self, post: Post) -> dict[str, bool]:
        """Publish PostCreated for a stored post.

        Returns:
            Delivery outcome per channel
        """
        event = PostCreated(post_id=post.id, caption=post.caption)
        with logfire.span("event_dispatcher.post_created", post_id=str(post.id)):
            return {self.TOPIC: await self._deliver(self.TOPIC, event)}

    async def comment_added(self, comment: Comment) -> dict[str, bool]:
        """Publish CommentAdded and enqueue the matching task.

        Both channels are attempted independently; consumers may see the
        event on both.

        Returns:
            Delivery outcome per channel
        """
        event = CommentAdded(
            post_id=comment.post_id,
            comment_id=comment.id,
            content=comment.content,
        )
        with logfire.span(
            "event_dispatcher.comment_added",
            post_id=str(comment.post_id),
            comment_id=str(comment.id),
        ):
            published, enqueued = await asyncio.gather(
                self._deliver(self.TOPIC, event),
                self._deliver(self.QUEUE, event),
            )
            return {self.TOPIC: published, self.QUEUE: enqueued}

    async def _deliver(self, channel: str, event: DomainEvent) -> bool:
        """Hand an event to one channel within the downstream timeout."""
        send: Awaitable[None]
        if channel == self.TOPIC:
            send = self.publisher.publish(event)
        else:
            send = self.work_queue.enqueue(event)

        try:
            await asyncio.wait_for(send, timeout=self.timeouts.downstream_seconds)
        except asyncio.TimeoutError:
            logfire.error(
                "Event delivery timed out",
                channel=channel,
                event_type=event.event_type.value,
                timeout=self.timeouts.downstream_seconds,
            )
            return False
        except DownstreamError as e:
            logfire.error(
                "Event delivery failed",
                channel=channel,
                event_type=event.event_type.value,
                error=str(e),
            )
            return False
        except Exception:
            # The mutation is already committed; nothing may fail the caller
            logfire.exception(
                "Event delivery raised unexpectedly",
                channel=channel,
                event_type=event.event_type.value,
            )
            return False

        logfire.info(
            "Event delivered", channel=channel, event_type=event.event_type.value
        )
        return True
