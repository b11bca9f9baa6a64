"""In-memory follow repository for testing."""

from typing import Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from forum.domain.model.follow import Follow
from forum.domain.repository.follow import FollowRepository
from forum.domain.value import FollowableType, UserId


class InMemoryFollowRepository(FollowRepository):
    """In-memory implementation of FollowRepository for testing."""

    def __init__(self) -> None:
        self._follows: dict[tuple[UserId, FollowableType, UUID], Follow] = {}

    async def save(self, follow: Follow) -> Follow:
        """Save a follow.

        Raises:
            IntegrityError: If the follow already exists
        """
        key = (follow.user_id, follow.followable_type, follow.followable_id)
        if key in self._follows:
            raise IntegrityError("Duplicate follow", None, Exception())
        self._follows[key] = follow
        return follow

    async def find_by_user_and_followables(
        self,
        user_id: UserId,
        followable_type: FollowableType,
        followable_ids: Sequence[UUID],
    ) -> list[Follow]:
        """Find which of the given items a user follows."""
        return [
            self._follows[(user_id, followable_type, fid)]
            for fid in set(followable_ids)
            if (user_id, followable_type, fid) in self._follows
        ]

    async def find_by_users_and_followable(
        self,
        user_ids: Sequence[UserId],
        followable_type: FollowableType,
        followable_id: UUID,
    ) -> list[Follow]:
        """Find which of the given users follow one item."""
        return [
            self._follows[(uid, followable_type, followable_id)]
            for uid in set(user_ids)
            if (uid, followable_type, followable_id) in self._follows
        ]
