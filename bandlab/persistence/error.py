"""Translation of SQLAlchemy failures into domain storage errors."""

from contextlib import contextmanager
from typing import Iterator

import logfire
from sqlalchemy import exc

from bandlab.domain.error import StorageError

# Failures where repeating the statement may succeed
_RETRYABLE = (exc.OperationalError, exc.InterfaceError, exc.TimeoutError)


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise SQLAlchemy errors from the block as ``StorageError``.

    Args:
        operation: Name used in logs and the error message

    Raises:
        StorageError: If the block raised a SQLAlchemyError
    """
    try:
        yield
    except exc.SQLAlchemyError as e:
        retryable = isinstance(e, _RETRYABLE) or bool(
            getattr(e, "connection_invalidated", False)
        )
        logfire.error(
            "Storage operation failed",
            operation=operation,
            error_type=type(e).__name__,
            retryable=retryable,
        )
        raise StorageError(f"{operation} failed", retryable=retryable) from e
