"""Follow domain service (read side)."""

from typing import Iterable, Optional
from uuid import UUID

import logfire

from forum.domain.repository import FollowRepository
from forum.domain.value import FollowableType, UserId

from .base import Service


class FollowService(Service):
    """Answers "does the viewer follow these items" for list views."""

    def __init__(self, follow_repository: FollowRepository) -> None:
        """Initialize follow service.

        Args:
            follow_repository: Follow repository
        """
        self.follow_repository = follow_repository

    async def get_is_following_in_relationship(
        self,
        followable_ids: Iterable[UUID],
        followable_type: FollowableType,
        viewer_id: Optional[UserId],
    ) -> dict[UUID, bool]:
        """Check which items the viewer follows with one batched query.

        Args:
            followable_ids: Items shown in a listing
            followable_type: Type of the items
            viewer_id: The viewing user (None when anonymous)

        Returns:
            Map of every requested ID to whether the viewer follows it
        """
        is_following = {fid: False for fid in followable_ids}
        if viewer_id is None or not is_following:
            return is_following

        follows = await self.follow_repository.find_by_user_and_followables(
            user_id=viewer_id,
            followable_type=followable_type,
            followable_ids=list(is_following),
        )
        for follow in follows:
            is_following[follow.followable_id] = True

        logfire.debug(
            "Following relationship loaded",
            followable_type=followable_type.value,
            requested=len(is_following),
            following=len(follows),
        )
        return is_following
