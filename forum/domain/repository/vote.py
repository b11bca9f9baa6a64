"""Vote repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from forum.domain.model.user import User
from forum.domain.model.vote import Vote
from forum.domain.value import UserId, VotableType, VoteType


class VoteRepository(ABC):
    """Repository for the vote ledger.

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer and must enforce
    one vote per (user, votable_type, votable_id) with a storage
    constraint.
    """

    @abstractmethod
    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item.

        Args:
            user_id: The user's ID
            votable_type: Type of item
            votable_id: ID of the item

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> list[Vote]:
        """Find a user's votes on multiple items (batch query).

        Implementations must issue a single query regardless of how many
        IDs are passed.

        Args:
            user_id: The user's ID
            votable_type: Type of items
            votable_ids: Item IDs to check

        Returns:
            Votes by the user on the specified items
        """
        pass

    @abstractmethod
    async def find_by_votable(
        self,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> list[Vote]:
        """Find all votes on a specific item.

        Args:
            votable_type: Type of item
            votable_id: ID of the item

        Returns:
            Votes on the item
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Insert a new vote.

        Args:
            vote: The vote to insert

        Returns:
            The saved vote

        Raises:
            IntegrityError: If the user already voted on this item. The
                enclosing transaction must remain usable afterwards.
        """
        pass

    @abstractmethod
    async def update_type(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
        expected: VoteType,
        new_type: VoteType,
        created_at: datetime,
    ) -> bool:
        """Flip a vote's direction if it still has the expected type.

        Compare-and-set: the row is only updated when its current type is
        ``expected``, so concurrent flips cannot both succeed.

        Args:
            user_id: The user's ID
            votable_type: Type of item
            votable_id: ID of the item
            expected: Type the caller read before deciding to flip
            new_type: Type to store
            created_at: New timestamp for the vote

        Returns:
            True if the row was updated, False if it changed or vanished
        """
        pass

    @abstractmethod
    async def delete_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[VoteType]:
        """Delete a user's vote on an item.

        Args:
            user_id: The user's ID
            votable_type: Type of item
            votable_id: ID of the item

        Returns:
            Type of the deleted vote, or None if no vote existed
        """
        pass

    @abstractmethod
    async def net_count_by_votable(
        self,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> int:
        """Recompute an item's vote total from the ledger.

        Args:
            votable_type: Type of item
            votable_id: ID of the item

        Returns:
            Number of up votes minus number of down votes
        """
        pass

    @abstractmethod
    async def find_voters(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        vote_type: Optional[VoteType] = None,
        limit: int = 15,
        offset: int = 0,
    ) -> list[User]:
        """Find users who voted on an item, most recent vote first.

        Disabled users are excluded.

        Args:
            votable_type: Type of item
            votable_id: ID of the item
            vote_type: Only include votes of this type (all types if None)
            limit: Maximum number of users to return
            offset: Number of users to skip

        Returns:
            Voters ordered by vote time, newest first
        """
        pass

    @abstractmethod
    async def count_voters(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        vote_type: Optional[VoteType] = None,
    ) -> int:
        """Count users matching ``find_voters`` without pagination.

        Args:
            votable_type: Type of item
            votable_id: ID of the item
            vote_type: Only include votes of this type (all types if None)

        Returns:
            Number of non-disabled voters
        """
        pass
