"""Follow repository interface."""

from abc import ABC, abstractmethod
from typing import Sequence
from uuid import UUID

from forum.domain.model.follow import Follow
from forum.domain.value import FollowableType, UserId


class FollowRepository(ABC):
    """Repository for Follow entity (read side used by relationship blocks)."""

    @abstractmethod
    async def save(self, follow: Follow) -> Follow:
        """Insert a follow.

        Raises:
            IntegrityError: If the user already follows the item
        """
        pass

    @abstractmethod
    async def find_by_user_and_followables(
        self,
        user_id: UserId,
        followable_type: FollowableType,
        followable_ids: Sequence[UUID],
    ) -> list[Follow]:
        """Find which of the given items a user follows (batch query).

        Args:
            user_id: The follower's ID
            followable_type: Type of items
            followable_ids: Item IDs to check

        Returns:
            Follows by the user on the specified items
        """
        pass

    @abstractmethod
    async def find_by_users_and_followable(
        self,
        user_ids: Sequence[UserId],
        followable_type: FollowableType,
        followable_id: UUID,
    ) -> list[Follow]:
        """Find which of the given users follow one item (batch query).

        Args:
            user_ids: Candidate follower IDs
            followable_type: Type of the followed item
            followable_id: ID of the followed item

        Returns:
            Follows by any of the users on the item
        """
        pass
