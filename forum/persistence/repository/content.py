"""Shared PostgreSQL implementation for content tables that receive votes."""

from typing import Any, Callable, ClassVar, Dict, Optional

import logfire
from sqlalchemy import Table, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.repository.votable import IdT, ModelT, VotableRepository
from forum.persistence.mappers import content_to_dict

# Columns an upsert must never overwrite: the counter only moves through deltas
_PROTECTED_COLUMNS = frozenset({"id", "created_at", "vote_count"})


class PostgresContentRepository(VotableRepository[ModelT, IdT]):
    """PostgreSQL implementation of VotableRepository.

    Subclasses bind the table and the row mapper (as a staticmethod) for one
    content kind.
    """

    table: ClassVar[Table]
    row_to_model: ClassVar[Callable[[Dict[str, Any]], Any]]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _to_model(self, row: Dict[str, Any]) -> ModelT:
        return self.row_to_model(row)

    async def find_by_id(self, entity_id: IdT) -> Optional[ModelT]:
        stmt = select(self.table).where(self.table.c.id == entity_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return self._to_model(dict(row)) if row else None

    async def save(self, entity: ModelT) -> ModelT:
        """Save an entity (create or update), leaving ``vote_count`` untouched
        on update."""
        entity_dict = content_to_dict(entity)
        stmt = (
            pg_insert(self.table)
            .values(**entity_dict)
            .on_conflict_do_update(
                index_elements=[self.table.c.id],
                set_={
                    k: v
                    for k, v in entity_dict.items()
                    if k not in _PROTECTED_COLUMNS
                },
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return entity

    async def exists(self, entity_id: IdT) -> bool:
        stmt = select(self.table.c.id).where(
            self.table.c.id == entity_id,
            self.table.c.deleted_at.is_(None),
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def find_vote_count(self, entity_id: IdT) -> Optional[int]:
        stmt = select(self.table.c.vote_count).where(
            self.table.c.id == entity_id,
            self.table.c.deleted_at.is_(None),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def apply_vote_count_delta(self, entity_id: IdT, delta: int) -> bool:
        """Add ``delta`` to the counter in a single UPDATE statement."""
        with logfire.span(
            f"{self.table.name}_repository.apply_vote_count_delta",
            entity_id=str(entity_id),
            delta=delta,
        ):
            stmt = (
                update(self.table)
                .where(self.table.c.id == entity_id)
                .values(vote_count=self.table.c.vote_count + delta)
            )
            result = await self.session.execute(stmt)
            await self.session.flush()
            return result.rowcount > 0  # type: ignore[attr-defined]
