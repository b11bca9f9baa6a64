"""Relationship block domain service."""

from typing import Iterable, Optional
from uuid import UUID

import logfire

from forum.domain.value import (
    FollowableType,
    Relationship,
    UserId,
    VotableType,
)

from .base import Service
from .follow_service import FollowService
from .vote_service import VoteService

# Votable kinds that can also be followed
_FOLLOWABLE = {
    VotableType.QUESTION: FollowableType.QUESTION,
    VotableType.ARTICLE: FollowableType.ARTICLE,
}


class RelationshipService(Service):
    """Builds per-viewer relationship blocks for lists of votable items."""

    def __init__(self, vote_service: VoteService, follow_service: FollowService) -> None:
        """Initialize relationship service.

        Args:
            vote_service: Vote domain service
            follow_service: Follow domain service
        """
        self.vote_service = vote_service
        self.follow_service = follow_service

    async def get_relationships(
        self,
        votable_ids: Iterable[UUID],
        votable_type: VotableType,
        viewer_id: Optional[UserId],
    ) -> dict[UUID, Relationship]:
        """Build ``{voting, is_following}`` for every item in a listing.

        Issues at most one vote query and one follow query no matter how
        many items are listed.
        """
        ids = list(dict.fromkeys(votable_ids))
        with logfire.span(
            "relationship_service.get_relationships",
            votable_type=votable_type.value,
            count=len(ids),
        ):
            votings = await self.vote_service.get_voting_in_relationship(
                ids, votable_type, viewer_id
            )

            followable_type = _FOLLOWABLE.get(votable_type)
            if followable_type is None:
                is_following = {vid: False for vid in ids}
            else:
                is_following = await self.follow_service.get_is_following_in_relationship(
                    ids, followable_type, viewer_id
                )

            return {
                vid: Relationship(voting=votings[vid], is_following=is_following[vid])
                for vid in ids
            }
