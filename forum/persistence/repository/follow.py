"""PostgreSQL implementation of Follow repository."""

from typing import List, Sequence
from uuid import UUID

from sqlalchemy import and_, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Follow
from forum.domain.repository import FollowRepository
from forum.domain.value import FollowableType, UserId
from forum.persistence.mappers import follow_to_dict, row_to_follow
from forum.persistence.tables import follows_table


class PostgresFollowRepository(FollowRepository):
    """PostgreSQL implementation of FollowRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def save(self, follow: Follow) -> Follow:
        """Insert a follow."""
        stmt = insert(follows_table).values(**follow_to_dict(follow))
        await self.session.execute(stmt)
        await self.session.flush()
        return follow

    async def find_by_user_and_followables(
        self,
        user_id: UserId,
        followable_type: FollowableType,
        followable_ids: Sequence[UUID],
    ) -> List[Follow]:
        """Find which of the given items a user follows."""
        if not followable_ids:
            return []

        stmt = select(follows_table).where(
            and_(
                follows_table.c.user_id == user_id,
                follows_table.c.followable_type == followable_type.value,
                follows_table.c.followable_id.in_(list(followable_ids)),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_follow(row._asdict()) for row in result.fetchall()]

    async def find_by_users_and_followable(
        self,
        user_ids: Sequence[UserId],
        followable_type: FollowableType,
        followable_id: UUID,
    ) -> List[Follow]:
        """Find which of the given users follow one item."""
        if not user_ids:
            return []

        stmt = select(follows_table).where(
            and_(
                follows_table.c.user_id.in_(list(user_ids)),
                follows_table.c.followable_type == followable_type.value,
                follows_table.c.followable_id == followable_id,
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_follow(row._asdict()) for row in result.fetchall()]
