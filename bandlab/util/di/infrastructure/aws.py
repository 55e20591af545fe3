"""AWS infrastructure providers."""

from dishka import Scope, provide

from bandlab.adapter.aws import S3ObjectStore, SnsEventPublisher, SqsWorkQueue
from bandlab.adapter.aws.client import create_client
from bandlab.config import AWSSettings, MessagingSettings, StorageSettings
from bandlab.domain.service import EventPublisher, ObjectStore, WorkQueue
from bandlab.util.di.base import ProviderBase
from bandlab.util.error import ConfigurationError


class AwsProvider(ProviderBase):
    """AWS component base (object store, event topic, work queue)."""

    __mock_component__ = "aws"


class ProdAwsProvider(AwsProvider):
    """Production AWS provider using boto3 clients."""

    __is_mock__ = False

    scope = Scope.APP

    @provide
    def get_object_store(
        self, aws_settings: AWSSettings, storage_settings: StorageSettings
    ) -> ObjectStore:
        """Provide S3 object store.

        Raises:
            ConfigurationError: If no bucket is configured
        """
        if not storage_settings.bucket:
            raise ConfigurationError("STORAGE__BUCKET must be configured")
        return S3ObjectStore(
            client=create_client("s3", aws_settings), bucket=storage_settings.bucket
        )

    @provide
    def get_event_publisher(
        self, aws_settings: AWSSettings, messaging_settings: MessagingSettings
    ) -> EventPublisher:
        """Provide SNS event publisher.

        Raises:
            ConfigurationError: If no topic is configured
        """
        if not messaging_settings.topic_arn:
            raise ConfigurationError("MESSAGING__TOPIC_ARN must be configured")
        return SnsEventPublisher(
            client=create_client("sns", aws_settings),
            topic_arn=messaging_settings.topic_arn,
        )

    @provide
    def get_work_queue(
        self, aws_settings: AWSSettings, messaging_settings: MessagingSettings
    ) -> WorkQueue:
        """Provide SQS work queue.

        Raises:
            ConfigurationError: If no queue is configured
        """
        if not messaging_settings.queue_url:
            raise ConfigurationError("MESSAGING__QUEUE_URL must be configured")
        return SqsWorkQueue(
            client=create_client("sqs", aws_settings),
            queue_url=messaging_settings.queue_url,
        )
