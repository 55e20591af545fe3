"""PostgreSQL repository implementations."""

from bandlab.persistence.repository.comment import (
    PostgresCommentRepository,
    PostgresRecentCommentLookup,
)
from bandlab.persistence.repository.post import PostgresPostRepository
from bandlab.persistence.repository.transaction import PostgresTransaction

__all__ = [
    "PostgresPostRepository",
    "PostgresCommentRepository",
    "PostgresRecentCommentLookup",
    "PostgresTransaction",
]
