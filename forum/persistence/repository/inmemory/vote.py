"""In-memory vote repository for testing."""

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from forum.domain.model.user import User
from forum.domain.model.vote import Vote
from forum.domain.repository.user import UserRepository
from forum.domain.repository.vote import VoteRepository
from forum.domain.value import UserId, VotableType, VoteType

VoteKey = tuple[UserId, VotableType, UUID]


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing.

    Voter listings join against the given user repository, like the SQL
    implementation joins the users table.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        self._votes: dict[VoteKey, Vote] = {}
        self._user_repository = user_repository

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a vote by user and votable item."""
        return self._votes.get((user_id, votable_type, votable_id))

    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> list[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        if not votable_ids:
            return []

        wanted = set(votable_ids)
        return [
            v
            for v in self._votes.values()
            if v.user_id == user_id
            and v.votable_type == votable_type
            and v.votable_id in wanted
        ]

    async def find_by_votable(
        self,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> list[Vote]:
        """Find all votes for a votable item, newest first."""
        votes = [
            v
            for v in self._votes.values()
            if v.votable_type == votable_type and v.votable_id == votable_id
        ]
        return sorted(votes, key=lambda v: v.created_at, reverse=True)

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Raises:
            IntegrityError: If vote already exists (duplicate)
        """
        key = (vote.user_id, vote.votable_type, vote.votable_id)
        if key in self._votes:
            raise IntegrityError("Duplicate vote", None, Exception())

        self._votes[key] = vote
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
        key = (user_id, votable_type, votable_id)
        vote = self._votes.get(key)
        if vote is None or vote.type != expected:
            return False
        self._votes[key] = vote.model_copy(
            update={"type": new_type, "created_at": created_at}
        )
        return True

    async def delete_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[VoteType]:
        """Delete a vote by user and votable item, returning its type."""
        vote = self._votes.pop((user_id, votable_type, votable_id), None)
        return vote.type if vote else None

    async def net_count_by_votable(
        self,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> int:
        """Sum the ledger for a votable item."""
        return sum(
            v.type.weight for v in await self.find_by_votable(votable_type, votable_id)
        )

    async def _voters(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        vote_type: Optional[VoteType],
    ) -> list[User]:
        voters = []
        for vote in await self.find_by_votable(votable_type, votable_id):
            if vote_type is not None and vote.type != vote_type:
                continue
            user = await self._user_repository.find_by_id(vote.user_id)
            if user is not None and not user.is_disabled:
                voters.append(user)
        return voters

    async def find_voters(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        vote_type: Optional[VoteType] = None,
        limit: int = 15,
        offset: int = 0,
    ) -> list[User]:
        """Find non-disabled voters on an item, newest vote first."""
        voters = await self._voters(votable_type, votable_id, vote_type)
        return voters[offset : offset + limit]

    async def count_voters(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        vote_type: Optional[VoteType] = None,
    ) -> int:
        """Count non-disabled voters on an item."""
        return len(await self._voters(votable_type, votable_id, vote_type))

    def snapshot(self) -> dict[VoteKey, Vote]:
        """Copy of the current ledger, for unit-of-work rollback."""
        return dict(self._votes)

    def restore(self, snapshot: dict[VoteKey, Vote]) -> None:
        self._votes = dict(snapshot)
