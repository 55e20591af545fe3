"""In-memory transaction for testing."""

from bandlab.domain.repository import Transaction


class InMemoryTransaction(Transaction):
    """Writes are applied immediately; commit only records that it ran."""

    def __init__(self) -> None:
        self.commits = 0

    async def commit(self) -> None:
        self.commits += 1
