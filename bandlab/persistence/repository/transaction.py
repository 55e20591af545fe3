"""PostgreSQL transaction boundary."""

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from bandlab.domain.repository import Transaction
from bandlab.persistence.error import storage_errors


class PostgresTransaction(Transaction):
    """Commits the request-scoped session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def commit(self) -> None:
        with logfire.span("transaction.commit"):
            with storage_errors("transaction.commit"):
                await self.session.commit()
