"""PostgreSQL implementation of Post repository."""

from typing import Optional

import logfire
from sqlalchemy import and_, desc, func, literal, or_, select, update
from sqlalchemy.dialects.postgresql import UUID, insert
from sqlalchemy.ext.asyncio import AsyncSession

from bandlab.domain.model import Post
from bandlab.domain.repository.post import PostPage, PostRepository
from bandlab.domain.value import CommentId, PostCursor, PostId
from bandlab.persistence.error import storage_errors
from bandlab.persistence.mappers import post_to_dict, row_to_post
from bandlab.persistence.tables import comment_counter_ledger_table, posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository.

    Counter updates go through ``comment_counter_ledger``: the ledger row
    for a comment is written by the same transaction that changes the
    counter, so a replayed increment or decrement finds the ledger already
    updated and leaves the counter alone.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            with storage_errors("post_repository.find_by_id"):
                stmt = select(posts_table).where(posts_table.c.id == post_id)
                result = await self.session.execute(stmt)
                row = result.fetchone()

            if not row:
                logfire.warn("Post not found", post_id=str(post_id))
                return None

            return row_to_post(row._asdict())

    async def find_page(
        self, limit: int, cursor: Optional[PostCursor] = None
    ) -> PostPage:
        """Find the next page of posts using keyset pagination."""
        with logfire.span(
            "post_repository.find_page",
            limit=limit,
            has_cursor=cursor is not None,
        ):
            stmt = select(posts_table)

            if cursor:
                stmt = stmt.where(
                    or_(
                        posts_table.c.created_at < cursor.created_at,
                        and_(
                            posts_table.c.created_at == cursor.created_at,
                            posts_table.c.id < cursor.post_id,
                        ),
                    )
                )

            # One extra row tells whether another page exists
            stmt = stmt.order_by(
                desc(posts_table.c.created_at), desc(posts_table.c.id)
            ).limit(limit + 1)

            with storage_errors("post_repository.find_page"):
                result = await self.session.execute(stmt)
                rows = result.fetchall()

            posts = [row_to_post(row._asdict()) for row in rows[:limit]]
            next_cursor = None
            if len(rows) > limit:
                last = posts[-1]
                next_cursor = PostCursor(created_at=last.created_at, post_id=last.id)

            logfire.info("Found posts", count=len(posts))
            return PostPage(posts=posts, next_cursor=next_cursor)

    async def save(self, post: Post) -> Post:
        """Insert a new post."""
        with logfire.span(
            "post_repository.save",
            post_id=str(post.id),
            creator=post.creator.root,
        ):
            with storage_errors("post_repository.save"):
                stmt = posts_table.insert().values(**post_to_dict(post))
                await self.session.execute(stmt)
                await self.session.flush()

            logfire.info("Post saved successfully", post_id=str(post.id))
            return post

    async def increment_comment_count(
        self, post_id: PostId, comment_id: CommentId
    ) -> bool:
        """Atomically count a comment, once per comment ID.

        Runs in a savepoint: a failed attempt rolls back the ledger row and
        the counter together, leaving the rest of the transaction intact.
        """
        with logfire.span(
            "post_repository.increment_comment_count",
            post_id=str(post_id),
            comment_id=str(comment_id),
        ):
            with storage_errors("post_repository.increment_comment_count"):
                async with self.session.begin_nested():
                    # INSERT ... SELECT so an unknown post records nothing
                    ledger_stmt = (
                        insert(comment_counter_ledger_table)
                        .from_select(
                            ["comment_id", "post_id"],
                            select(
                                literal(comment_id, UUID), posts_table.c.id
                            ).where(posts_table.c.id == post_id),
                        )
                        .on_conflict_do_nothing(index_elements=["comment_id"])
                        .returning(comment_counter_ledger_table.c.comment_id)
                    )
                    result = await self.session.execute(ledger_stmt)
                    if result.fetchone() is None:
                        logfire.info(
                            "Increment already applied or post missing",
                            post_id=str(post_id),
                            comment_id=str(comment_id),
                        )
                        return False

                    stmt = (
                        update(posts_table)
                        .where(posts_table.c.id == post_id)
                        .values(comment_count=posts_table.c.comment_count + 1)
                    )
                    await self.session.execute(stmt)

            return True

    async def decrement_comment_count(
        self, post_id: PostId, comment_id: CommentId
    ) -> bool:
        """Atomically uncount a comment that was counted, at most once.

        Runs in a savepoint, like ``increment_comment_count``.
        """
        with logfire.span(
            "post_repository.decrement_comment_count",
            post_id=str(post_id),
            comment_id=str(comment_id),
        ):
            with storage_errors("post_repository.decrement_comment_count"):
                async with self.session.begin_nested():
                    ledger_stmt = (
                        update(comment_counter_ledger_table)
                        .where(
                            comment_counter_ledger_table.c.comment_id == comment_id,
                            comment_counter_ledger_table.c.post_id == post_id,
                            comment_counter_ledger_table.c.decremented_at.is_(None),
                        )
                        .values(decremented_at=func.now())
                        .returning(comment_counter_ledger_table.c.comment_id)
                    )
                    result = await self.session.execute(ledger_stmt)
                    if result.fetchone() is None:
                        logfire.info(
                            "Decrement already applied or never counted",
                            post_id=str(post_id),
                            comment_id=str(comment_id),
                        )
                        return False

                    stmt = (
                        update(posts_table)
                        .where(posts_table.c.id == post_id)
                        .where(posts_table.c.comment_count > 0)  # Never below zero
                        .values(comment_count=posts_table.c.comment_count - 1)
                    )
                    await self.session.execute(stmt)

            return True
