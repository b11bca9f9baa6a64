"""Unit of work interface.

Groups the writes of one logical operation so they land or vanish together,
independently of when the request's transaction is finally committed.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class UnitOfWork(ABC):
    """Transaction boundary for the current request."""

    @abstractmethod
    def atomic(self) -> AbstractAsyncContextManager[None]:
        """Open a block whose writes are undone if it exits with an exception.

        Usage:
            async with unit_of_work.atomic():
                await vote_repository.save(vote)
                await votable.apply_vote_count_delta(votable_id, 1)
        """
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Discard every write made in the current request."""
        pass
