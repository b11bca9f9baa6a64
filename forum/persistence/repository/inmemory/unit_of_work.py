"""In-memory unit of work for testing."""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Sequence

from forum.domain.repository import UnitOfWork, VotableRepository, VoteRepository


class InMemoryUnitOfWork(UnitOfWork):
    """Undoes writes to the ledger and content stores by restoring snapshots.

    The request snapshot is taken when the unit of work is created, which
    stands in for the start of the request transaction.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        content_repositories: Sequence[VotableRepository[Any, Any]],
    ) -> None:
        """Initialize unit of work.

        Args:
            vote_repository: In-memory vote repository
            content_repositories: In-memory repositories of every votable kind
        """
        self._stores: list[Any] = [vote_repository, *content_repositories]
        self._request_snapshot = self._take()

    def _take(self) -> list[Any]:
        return [store.snapshot() for store in self._stores]

    def _restore(self, snapshots: list[Any]) -> None:
        for store, snapshot in zip(self._stores, snapshots):
            store.restore(snapshot)

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        snapshots = self._take()
        try:
            yield
        except BaseException:
            self._restore(snapshots)
            raise

    async def rollback(self) -> None:
        self._restore(self._request_snapshot)
