"""SNS topic publisher for domain events."""

import logfire
from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError

from bandlab.adapter.error import describe
from bandlab.domain.error import DownstreamError
from bandlab.domain.model import DomainEvent
from bandlab.domain.service.dispatch_service import EventPublisher

from .client import call


class SnsEventPublisher(EventPublisher):
    """Publishes events to an SNS topic.

    The event type is sent as the ``event_type`` message attribute so that
    subscriptions can filter on it.
    """

    def __init__(self, client: BaseClient, topic_arn: str) -> None:
        """Initialize SNS publisher.

        Args:
            client: boto3 SNS client
            topic_arn: Target topic
        """
        self.client = client
        self.topic_arn = topic_arn

    async def publish(self, event: DomainEvent) -> None:
        """Publish an event to the topic."""
        with logfire.span("sns.publish", event_type=event.event_type.value):
            try:
                response = await call(
                    self.client.publish,
                    TopicArn=self.topic_arn,
                    Message=event.to_message(),
                    MessageAttributes={
                        "event_type": {
                            "DataType": "String",
                            "StringValue": event.event_type.value,
                        }
                    },
                )
            except (BotoCoreError, ClientError) as e:
                raise DownstreamError("topic", describe(e)) from e

            logfire.info(
                "Event published",
                event_type=event.event_type.value,
                message_id=response.get("MessageId"),
            )


class InMemoryEventPublisher(EventPublisher):
    """In-memory publisher for testing.

    Set ``fail`` to make every publish raise a DownstreamError.
    """

    def __init__(self, fail: bool = False) -> None:
        self.events: list[DomainEvent] = []
        self.fail = fail

    async def publish(self, event: DomainEvent) -> None:
        if self.fail:
            raise DownstreamError("topic", "publisher unavailable")
        self.events.append(event)
