"""SQS work queue for comment tasks."""

import logfire
from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError

from bandlab.adapter.error import describe
from bandlab.domain.error import DownstreamError
from bandlab.domain.model import DomainEvent
from bandlab.domain.service.dispatch_service import WorkQueue

from .client import call


class SqsWorkQueue(WorkQueue):
    """Enqueues event payloads as SQS messages."""

    def __init__(self, client: BaseClient, queue_url: str) -> None:
        """Initialize SQS work queue.

        Args:
            client: boto3 SQS client
            queue_url: Target queue
        """
        self.client = client
        self.queue_url = queue_url

    async def enqueue(self, event: DomainEvent) -> None:
        """Send one message to the queue."""
        with logfire.span("sqs.send_message", event_type=event.event_type.value):
            try:
                response = await call(
                    self.client.send_message,
                    QueueUrl=self.queue_url,
                    MessageBody=event.to_message(),
                    MessageAttributes={
                        "event_type": {
                            "DataType": "String",
                            "StringValue": event.event_type.value,
                        }
                    },
                )
            except (BotoCoreError, ClientError) as e:
                raise DownstreamError("queue", describe(e)) from e

            logfire.info(
                "Task enqueued",
                event_type=event.event_type.value,
                message_id=response.get("MessageId"),
            )


class InMemoryWorkQueue(WorkQueue):
    """In-memory queue for testing.

    Set ``fail`` to make every enqueue raise a DownstreamError.
    """

    def __init__(self, fail: bool = False) -> None:
        self.messages: list[DomainEvent] = []
        self.fail = fail

    async def enqueue(self, event: DomainEvent) -> None:
        if self.fail:
            raise DownstreamError("queue", "queue unavailable")
        self.messages.append(event)
