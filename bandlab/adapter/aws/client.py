"""boto3 client construction and async invocation."""

import asyncio
import functools
from typing import Any, Callable

import boto3
from botocore.client import BaseClient
from botocore.config import Config

from bandlab.config import AWSSettings


def create_client(service_name: str, settings: AWSSettings) -> BaseClient:
    """Create a boto3 client with the configured retry and timeout policy.

    Args:
        service_name: AWS service, e.g. "s3"
        settings: Region, endpoint and retry budget

    Returns:
        Configured low-level client
    """
    config = Config(
        region_name=settings.region,
        retries={"max_attempts": settings.max_attempts, "mode": "standard"},
        connect_timeout=settings.connect_timeout,
        read_timeout=settings.read_timeout,
    )
    return boto3.client(
        service_name, endpoint_url=settings.endpoint_url, config=config
    )


async def call(method: Callable[..., Any], **kwargs: Any) -> Any:
    """Run a blocking boto3 call in the default executor.

    Args:
        method: Bound client method, e.g. ``client.put_object``
        **kwargs: Keyword arguments for the call

    Returns:
        The SDK response
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(method, **kwargs))
