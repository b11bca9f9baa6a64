"""PostgreSQL implementation of Vote repository."""

from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID

import logfire
from sqlalchemy import and_, case, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import User, Vote
from forum.domain.repository import VoteRepository
from forum.domain.value import UserId, VotableType, VoteType
from forum.persistence.mappers import row_to_user, row_to_vote, vote_to_dict
from forum.persistence.tables import users_table, votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository.

    The ``unique_vote`` constraint on (user_id, votable_type, votable_id)
    is what actually serializes concurrent first votes.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @staticmethod
    def _match(user_id: UserId, votable_type: VotableType, votable_id: UUID):
        return and_(
            votes_table.c.user_id == user_id,
            votes_table.c.votable_type == votable_type.value,
            votes_table.c.votable_id == votable_id,
        )

    @staticmethod
    def _voters_filter(
        votable_type: VotableType,
        votable_id: UUID,
        vote_type: Optional[VoteType],
    ):
        conditions = [
            votes_table.c.votable_type == votable_type.value,
            votes_table.c.votable_id == votable_id,
            users_table.c.disabled_at.is_(None),
        ]
        if vote_type is not None:
            conditions.append(votes_table.c.type == vote_type.value)
        return and_(*conditions)

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item."""
        stmt = select(votes_table).where(self._match(user_id, votable_type, votable_id))
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        if not votable_ids:
            return []

        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id.in_(list(votable_ids)),
            )
        )
        result = await self.session.execute(stmt)
        rows = result.fetchall()
        return [row_to_vote(row._asdict()) for row in rows]

    async def find_by_votable(
        self,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> List[Vote]:
        """Find all votes on a specific item."""
        stmt = (
            select(votes_table)
            .where(
                and_(
                    votes_table.c.votable_type == votable_type.value,
                    votes_table.c.votable_id == votable_id,
                )
            )
            .order_by(votes_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def save(self, vote: Vote) -> Vote:
        """Insert a vote inside a savepoint.

        A duplicate raises IntegrityError and only the savepoint is rolled
        back, so the request's transaction stays usable for a retry.
        """
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        async with self.session.begin_nested():
            await self.session.execute(stmt)
        return vote

    async def update_type(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
        expected: VoteType,
        new_type: VoteType,
        created_at: datetime,
    ) -> bool:
        """Flip a vote's type if it is still ``expected``."""
        stmt = (
            update(votes_table)
            .where(self._match(user_id, votable_type, votable_id))
            .where(votes_table.c.type == expected.value)
            .values(type=new_type.value, created_at=created_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[VoteType]:
        """Delete a vote by user and votable, returning its type."""
        stmt = (
            delete(votes_table)
            .where(self._match(user_id, votable_type, votable_id))
            .returning(votes_table.c.type)
        )
        result = await self.session.execute(stmt)
        deleted = result.scalar_one_or_none()
        await self.session.flush()
        return VoteType(deleted) if deleted is not None else None

    async def net_count_by_votable(
        self,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> int:
        """Sum the ledger: +1 per up vote, -1 per down vote."""
        weight = case((votes_table.c.type == VoteType.UP.value, 1), else_=-1)
        stmt = select(func.coalesce(func.sum(weight), 0)).where(
            and_(
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id == votable_id,
            )
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def find_voters(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        vote_type: Optional[VoteType] = None,
        limit: int = 15,
        offset: int = 0,
    ) -> List[User]:
        """Find non-disabled voters on an item, newest vote first."""
        with logfire.span(
            "vote_repository.find_voters",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            limit=limit,
            offset=offset,
        ):
            stmt = (
                select(users_table)
                .select_from(
                    votes_table.join(
                        users_table, votes_table.c.user_id == users_table.c.id
                    )
                )
                .where(self._voters_filter(votable_type, votable_id, vote_type))
                .order_by(votes_table.c.created_at.desc(), votes_table.c.id.desc())
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def count_voters(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        vote_type: Optional[VoteType] = None,
    ) -> int:
        """Count non-disabled voters on an item."""
        stmt = (
            select(func.count())
            .select_from(
                votes_table.join(users_table, votes_table.c.user_id == users_table.c.id)
            )
            .where(self._voters_filter(votable_type, votable_id, vote_type))
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())
