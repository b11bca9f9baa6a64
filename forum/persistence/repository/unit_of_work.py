"""PostgreSQL implementation of UnitOfWork."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.repository import UnitOfWork


class PostgresUnitOfWork(UnitOfWork):
    """Unit of work over the request's session.

    ``atomic`` blocks are savepoints, so a failed block is undone even if
    the surrounding request transaction is later committed.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize unit of work with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        async with self.session.begin_nested():
            yield

    async def rollback(self) -> None:
        if self.session.in_transaction():
            logfire.warn("Rolling back request transaction")
            await self.session.rollback()
