"""Repository interfaces for BandLab domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from bandlab.domain.repository.comment import CommentRepository, RecentCommentLookup
from bandlab.domain.repository.counter import AtomicCounterStore
from bandlab.domain.repository.post import PostPage, PostRepository
from bandlab.domain.repository.transaction import Transaction

__all__ = [
    "AtomicCounterStore",
    "PostRepository",
    "PostPage",
    "CommentRepository",
    "RecentCommentLookup",
    "Transaction",
]
