"""PostgreSQL implementation of Comment repository."""

from typing import List

import logfire
from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bandlab.domain.model import Comment
from bandlab.domain.repository import CommentRepository, RecentCommentLookup
from bandlab.domain.value import CommentId, PostId
from bandlab.persistence.error import storage_errors
from bandlab.persistence.mappers import comment_to_dict, row_to_comment
from bandlab.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        with logfire.span(
            "comment_repository.save",
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
        ):
            with storage_errors("comment_repository.save"):
                stmt = comments_table.insert().values(**comment_to_dict(comment))
                await self.session.execute(stmt)
                await self.session.flush()
            return comment

    async def delete(self, post_id: PostId, comment_id: CommentId) -> bool:
        """Delete a comment (hard delete)."""
        with logfire.span(
            "comment_repository.delete",
            comment_id=str(comment_id),
            post_id=str(post_id),
        ):
            with storage_errors("comment_repository.delete"):
                stmt = (
                    comments_table.delete()
                    .where(
                        comments_table.c.id == comment_id,
                        comments_table.c.post_id == post_id,
                    )
                    .returning(comments_table.c.id)
                )
                result = await self.session.execute(stmt)
                deleted = result.fetchone() is not None
                await self.session.flush()
            return deleted


class PostgresRecentCommentLookup(RecentCommentLookup):
    """Recent-comment lookup that runs each query in its own session.

    An ``AsyncSession`` cannot run statements concurrently, so the listing
    fan-out uses short-lived sessions from the factory instead of the
    request session. Only committed comments are visible.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def find_recent(self, post_id: PostId, limit: int) -> List[Comment]:
        """Find the newest comments for a post."""
        with logfire.span(
            "recent_comment_lookup.find_recent", post_id=str(post_id), limit=limit
        ):
            stmt = (
                select(comments_table)
                .where(comments_table.c.post_id == post_id)
                .order_by(desc(comments_table.c.created_at), desc(comments_table.c.id))
                .limit(limit)
            )
            with storage_errors("recent_comment_lookup.find_recent"):
                async with self.session_factory() as session:
                    result = await session.execute(stmt)
                    rows = result.fetchall()
            return [row_to_comment(row._asdict()) for row in rows]
