"""Transaction boundary interface."""

from abc import ABC, abstractmethod


class Transaction(ABC):
    """Makes the mutations of the current unit of work durable.

    Use cases commit before emitting side effects so that events are only
    published for changes that were actually stored.
    """

    @abstractmethod
    async def commit(self) -> None:
        """Commit pending changes.

        Raises:
            StorageError: If the store rejected the commit
        """
        pass
