"""Base service class for domain services."""

import asyncio
from typing import Awaitable, TypeVar

import logfire

from bandlab.domain.error import StorageError, ValidationError

T = TypeVar("T")


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    pass


async def bounded(awaitable: Awaitable[T], timeout: float, operation: str) -> T:
    """Await a storage call, failing with a retryable StorageError on timeout.

    Args:
        awaitable: The storage call
        timeout: Seconds to wait before giving up
        operation: Name used in logs and the error message

    Returns:
        Result of the call

    Raises:
        StorageError: If the call did not finish in time
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError as e:
        logfire.error("Storage call timed out", operation=operation, timeout=timeout)
        raise StorageError(
            f"{operation} timed out after {timeout:g}s", retryable=True
        ) from e


def validate_limit(limit: int, max_limit: int) -> int:
    """Check a page size.

    Raises:
        ValidationError: If limit is outside 1..max_limit
    """
    if limit < 1 or limit > max_limit:
        raise ValidationError(f"Limit must be between 1 and {max_limit}")
    return limit
