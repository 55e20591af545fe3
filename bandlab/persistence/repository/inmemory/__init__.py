"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .post import InMemoryPostRepository
from .transaction import InMemoryTransaction

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryPostRepository",
    "InMemoryTransaction",
]
