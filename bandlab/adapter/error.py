"""Translation of AWS SDK failures."""

from botocore.exceptions import BotoCoreError, ClientError

# Throttling and transient server-side error codes
_RETRYABLE_CODES = {
    "InternalError",
    "RequestTimeout",
    "ServiceUnavailable",
    "SlowDown",
    "Throttling",
    "ThrottlingException",
}


def describe(e: BotoCoreError | ClientError) -> str:
    """Short, client-safe description of an SDK failure."""
    if isinstance(e, ClientError):
        error = e.response.get("Error", {})
        return f"{error.get('Code', 'Unknown')}: {error.get('Message', 'unknown')}"
    return type(e).__name__


def is_retryable(e: BotoCoreError | ClientError) -> bool:
    """Whether repeating the call may succeed.

    Connection-level failures (BotoCoreError) are retryable; client errors
    are retryable only for throttling and 5xx responses.
    """
    if not isinstance(e, ClientError):
        return True
    code = e.response.get("Error", {}).get("Code", "")
    status = e.response.get("ResponseMetadata", {}).get("HTTPStatusCode", 0)
    return code in _RETRYABLE_CODES or status >= 500
