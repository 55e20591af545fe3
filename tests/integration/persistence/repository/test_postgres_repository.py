"""Integration tests for the PostgreSQL post and comment repositories.

Assumes PostgreSQL is running with migrations applied and DATABASE__URL
pointing at it.
"""

import os
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import Update
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from bandlab.config import TimeoutSettings
from bandlab.domain.repository import (
    CommentRepository,
    PostRepository,
    RecentCommentLookup,
    Transaction,
)
from bandlab.domain.service import CommentService
from bandlab.domain.value import Creator
from bandlab.persistence.repository import (
    PostgresCommentRepository,
    PostgresPostRepository,
)
from tests.conftest import make_comment, make_post
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    "DATABASE__URL" not in os.environ, reason="PostgreSQL not configured"
)

# Integration test fixture - real persistence
integration_env = create_env_fixture(unmock={"persistence"})


class FlakySession:
    """Fails the first UPDATE of the posts table, then behaves normally.

    Raised before the statement reaches the server, like a dropped connection
    after the ledger row was written in the same savepoint.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self.failures = 0

    def __getattr__(self, name):
        return getattr(self._session, name)

    async def execute(self, statement, *args, **kwargs):
        if (
            self.failures == 0
            and isinstance(statement, Update)
            and statement.table.name == "posts"
        ):
            self.failures += 1
            raise OperationalError("UPDATE posts", {}, Exception("connection reset"))
        return await self._session.execute(statement, *args, **kwargs)


class TestPostgresCounterLedger:
    """Counter updates are idempotent per comment id."""

    @pytest.mark.asyncio
    async def test_increment_and_decrement_apply_once(self, integration_env):
        # Arrange
        post_repo = await integration_env.get(PostRepository)
        comment_repo = await integration_env.get(CommentRepository)
        post = await post_repo.save(make_post())
        comment = await comment_repo.save(make_comment(post.id, "Nice!"))

        # Act
        first = await post_repo.increment_comment_count(post.id, comment.id)
        repeated = await post_repo.increment_comment_count(post.id, comment.id)
        after_increment = await post_repo.find_by_id(post.id)
        removed = await post_repo.decrement_comment_count(post.id, comment.id)
        removed_again = await post_repo.decrement_comment_count(post.id, comment.id)
        after_decrement = await post_repo.find_by_id(post.id)

        # Assert
        assert (first, repeated) == (True, False)
        assert after_increment.comment_count == 1
        assert (removed, removed_again) == (True, False)
        assert after_decrement.comment_count == 0

    @pytest.mark.asyncio
    async def test_decrement_without_increment_is_noop(self, integration_env):
        post_repo = await integration_env.get(PostRepository)
        comment_repo = await integration_env.get(CommentRepository)
        post = await post_repo.save(make_post())
        comment = await comment_repo.save(make_comment(post.id, "Nice!"))

        changed = await post_repo.decrement_comment_count(post.id, comment.id)

        assert changed is False
        assert (await post_repo.find_by_id(post.id)).comment_count == 0

    @pytest.mark.asyncio
    async def test_failed_attempt_rolls_back_its_ledger_row(self, integration_env):
        """A retry after a mid-update failure still counts the comment."""
        # Arrange
        session = await integration_env.get(AsyncSession)
        transaction = await integration_env.get(Transaction)
        flaky = FlakySession(session)
        posts = PostgresPostRepository(flaky)
        service = CommentService(
            comment_repository=PostgresCommentRepository(session),
            post_repository=posts,
            counter_store=posts,
            timeouts=TimeoutSettings(),
            counter_attempts=2,
        )
        post = await posts.save(make_post())

        # Act
        await service.add_comment(post.id, "Nice!", Creator("bob"))
        await transaction.commit()

        # Assert
        assert flaky.failures == 1
        assert (await posts.find_by_id(post.id)).comment_count == 1


class TestPostgresCommentRepository:
    """Comment storage and recent-comment lookups."""

    @pytest.mark.asyncio
    async def test_recent_comments_newest_first(self, integration_env):
        # Arrange
        post_repo = await integration_env.get(PostRepository)
        comment_repo = await integration_env.get(CommentRepository)
        lookup = await integration_env.get(RecentCommentLookup)
        post = await post_repo.save(make_post())
        tied = await post_repo.save(make_post(caption="Tied"))
        base = datetime.now(timezone.utc)
        for i, content in enumerate(["first", "second", "third"]):
            await comment_repo.save(
                make_comment(post.id, content, created_at=base + timedelta(seconds=i))
            )
        tied_ids = [
            (await comment_repo.save(make_comment(tied.id, text, created_at=base))).id
            for text in ["a", "b", "c"]
        ]

        # The standalone lookup has its own session and sees committed rows only
        transaction = await integration_env.get(Transaction)
        await transaction.commit()

        # Act
        recent = await lookup.find_recent(post.id, 2)
        recent_tied = await lookup.find_recent(tied.id, 2)

        # Assert
        assert [c.content for c in recent] == ["third", "second"]
        # Same timestamp: highest id first
        assert [c.id for c in recent_tied] == sorted(tied_ids, reverse=True)[:2]

    @pytest.mark.asyncio
    async def test_delete_checks_owning_post(self, integration_env):
        post_repo = await integration_env.get(PostRepository)
        comment_repo = await integration_env.get(CommentRepository)
        lookup = await integration_env.get(RecentCommentLookup)
        transaction = await integration_env.get(Transaction)
        post = await post_repo.save(make_post())
        other = await post_repo.save(make_post(caption="Other"))
        comment = await comment_repo.save(make_comment(post.id, "Nice!"))

        wrong_post = await comment_repo.delete(other.id, comment.id)
        deleted = await comment_repo.delete(post.id, comment.id)
        repeated = await comment_repo.delete(post.id, comment.id)

        await transaction.commit()

        assert (wrong_post, deleted, repeated) == (False, True, False)
        assert await lookup.find_recent(post.id, 1) == []
