"""Domain layer errors.

Every user-visible failure carries a stable machine-readable ``kind``.
"""


class DomainError(Exception):
    """Base domain error."""

    kind = "domain_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Malformed or missing input."""

    kind = "validation_error"


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class StorageError(DomainError):
    """The durable store or object store failed or timed out.

    ``retryable`` is True when the operation may succeed if repeated
    (timeouts, dropped connections).
    """

    kind = "storage_error"

    def __init__(self, message: str, retryable: bool = True):
        self.retryable = retryable
        super().__init__(message)


class DownstreamError(DomainError):
    """Publishing to the event topic or work queue failed.

    Never surfaces to API callers; recorded and dropped by the dispatcher.
    """

    kind = "downstream_error"

    def __init__(self, channel: str, message: str):
        self.channel = channel
        super().__init__(f"{channel}: {message}")
