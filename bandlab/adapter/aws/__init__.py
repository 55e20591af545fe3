"""AWS adapters for image storage and event delivery."""

from .s3 import InMemoryObjectStore, S3ObjectStore
from .sns import InMemoryEventPublisher, SnsEventPublisher
from .sqs import InMemoryWorkQueue, SqsWorkQueue

__all__ = [
    "InMemoryEventPublisher",
    "InMemoryObjectStore",
    "InMemoryWorkQueue",
    "S3ObjectStore",
    "SnsEventPublisher",
    "SqsWorkQueue",
]
