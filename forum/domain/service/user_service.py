"""User domain service."""

from typing import Any, Optional, Sequence
from uuid import UUID

import logfire

from forum.domain.error import ErrorCode, NotFoundError
from forum.domain.model import User
from forum.domain.repository import FollowRepository, UserRepository
from forum.domain.value import FollowableType, UserId, UserRelationship

from .base import Service

# Fields never exposed when a user appears in another user's listing
PRIVACY_FIELDS = frozenset({"email", "password_hash", "disabled_at", "updated_at"})


class UserService(Service):
    """Domain service for user operations."""

    def __init__(
        self,
        user_repository: UserRepository,
        follow_repository: FollowRepository,
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            follow_repository: Follow repository
        """
        self.user_repository = user_repository
        self.follow_repository = follow_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get an active user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found or disabled
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user or user.is_disabled:
                logfire.warn(
                    "User not found",
                    user_id=str(user_id),
                    disabled=bool(user and user.is_disabled),
                )
                raise NotFoundError(
                    "User", str(user_id), code=ErrorCode.USER_NOT_FOUND
                )
            return user

    async def exists_or_fail(self, user_id: UserId) -> None:
        """Ensure the user exists and has not been disabled.

        Raises:
            NotFoundError: If user not found or disabled
        """
        await self.get_by_id(user_id)

    def get_privacy_fields(self) -> frozenset[str]:
        """Fields to strip from user records shown to other users."""
        return PRIVACY_FIELDS

    def to_public(self, user: User) -> dict[str, Any]:
        """Serialize a user without its privacy fields."""
        return user.model_dump(mode="json", exclude=set(self.get_privacy_fields()))

    async def get_relationships(
        self, user_ids: Sequence[UserId], viewer_id: Optional[UserId]
    ) -> dict[UserId, UserRelationship]:
        """Build the viewer's relationship block for each listed user.

        Uses two batched follow queries regardless of how many users
        are listed.

        Args:
            user_ids: Users shown in a listing
            viewer_id: The viewing user (None when anonymous)

        Returns:
            Relationship per user ID, defaulting to no relationship
        """
        relationships = {uid: UserRelationship() for uid in user_ids}
        if viewer_id is None or not user_ids:
            return relationships

        with logfire.span(
            "user_service.get_relationships",
            viewer_id=str(viewer_id),
            count=len(relationships),
        ):
            ids = list(relationships)
            following = await self.follow_repository.find_by_user_and_followables(
                user_id=viewer_id,
                followable_type=FollowableType.USER,
                followable_ids=ids,
            )
            followed_by = await self.follow_repository.find_by_users_and_followable(
                user_ids=ids,
                followable_type=FollowableType.USER,
                followable_id=viewer_id,
            )
            following_ids = {f.followable_id for f in following}
            follower_ids = {f.user_id for f in followed_by}

            return {
                uid: UserRelationship(
                    is_me=uid == viewer_id,
                    is_following=uid in following_ids,
                    is_followed=uid in follower_ids,
                )
                for uid in ids
            }

    async def add_relationship(
        self,
        records: list[dict[str, Any]],
        viewer_id: Optional[UserId],
    ) -> list[dict[str, Any]]:
        """Attach a ``relationship`` block to each serialized user record.

        Args:
            records: Public user records (as returned by ``to_public``)
            viewer_id: The viewing user (None when anonymous)

        Returns:
            The same records, each with a ``relationship`` key
        """
        user_ids = [UserId(UUID(str(record["id"]))) for record in records]
        relationships = await self.get_relationships(user_ids, viewer_id)
        for record, user_id in zip(records, user_ids):
            record["relationship"] = relationships[user_id].model_dump()
        return records
