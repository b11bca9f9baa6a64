"""Vote domain service.

The voting engine keeps each item's ``vote_count`` in step with the vote
ledger. One logical vote action produces at most one ledger write and at
most one counter delta:

    existing  requested  ledger               delta
    none      up         insert               +1
    none      down       insert               -1
    up        up         -                     0
    down      down       -                     0
    up        down       flip type + time     -2
    down      up         flip type + time     +2

Both writes run inside one ``UnitOfWork.atomic`` block, so a failure on
either side leaves neither behind.
"""

from datetime import datetime
from typing import Any, Iterable, Optional
from uuid import UUID, uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from forum.config import PaginationSettings, VotingSettings
from forum.domain.error import InvalidVoteTypeError, VoteConflictError
from forum.domain.model.vote import Vote
from forum.domain.repository import UnitOfWork, VoteRepository
from forum.domain.value import (
    Page,
    PageRequest,
    UserId,
    VotableType,
    VoteId,
    VoteType,
    Voting,
)

from .base import Service
from .user_service import UserService
from .votable import Votable


def parse_vote_type(value: VoteType | str) -> VoteType:
    """Parse a vote type, rejecting anything but ``up`` and ``down``.

    Raises:
        InvalidVoteTypeError: If the value is not a vote type
    """
    try:
        return VoteType(value)
    except ValueError:
        raise InvalidVoteTypeError(value) from None


class VoteService(Service):
    """Domain service for vote operations on any votable kind."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        votables: dict[VotableType, Votable],
        user_service: UserService,
        voting_settings: VotingSettings,
        pagination_settings: PaginationSettings,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote ledger repository
            votables: Votable capability for each content kind
            user_service: User domain service
            voting_settings: Voting engine configuration
            pagination_settings: Page size limits for voter listings
            unit_of_work: Groups the ledger write with its counter delta
        """
        self.vote_repository = vote_repository
        self.votables = votables
        self.user_service = user_service
        self.voting_settings = voting_settings
        self.pagination_settings = pagination_settings
        self.unit_of_work = unit_of_work

    def _votable(self, votable_type: VotableType) -> Votable:
        return self.votables[votable_type]

    async def add_vote(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
        vote_type: VoteType | str,
    ) -> None:
        """Cast or change a user's vote on an item.

        Args:
            user_id: Voting user
            votable_type: Kind of item
            votable_id: Item ID
            vote_type: ``up`` or ``down``

        Raises:
            InvalidVoteTypeError: If vote_type is not up or down (before any I/O)
            NotFoundError: If the user or the item does not exist
        """
        vote_type = parse_vote_type(vote_type)
        with logfire.span(
            "vote_service.add_vote",
            user_id=str(user_id),
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            type=vote_type.value,
        ):
            votable = self._votable(votable_type)
            await self.user_service.exists_or_fail(user_id)
            await votable.exists_or_fail(votable_id)

            async with self.unit_of_work.atomic():
                delta = await self._record_vote(
                    user_id, votable_type, votable_id, vote_type
                )
                if delta:
                    await votable.apply_vote_count_delta(votable_id, delta)

            logfire.info(
                "Vote recorded",
                user_id=str(user_id),
                votable_type=votable_type.value,
                votable_id=str(votable_id),
                type=vote_type.value,
                delta=delta,
            )

    async def _record_vote(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
        vote_type: VoteType,
    ) -> int:
        """Write the ledger transition and return the counter delta it implies.

        The ledger read only picks a path; the storage constraint and the
        compare-and-set flip decide whether that path actually happened.
        A lost race re-reads the ledger and tries again.
        """
        max_attempts = self.voting_settings.max_conflict_retries
        for attempt in range(1, max_attempts + 1):
            existing = await self.vote_repository.find_by_user_and_votable(
                user_id, votable_type, votable_id
            )

            if existing is None:
                vote = Vote(
                    id=VoteId(uuid4()),
                    user_id=user_id,
                    votable_type=votable_type,
                    votable_id=votable_id,
                    type=vote_type,
                    created_at=datetime.now(),
                )
                try:
                    await self.vote_repository.save(vote)
                except IntegrityError:
                    logfire.warn(
                        "Concurrent first vote, re-reading ledger",
                        user_id=str(user_id),
                        votable_type=votable_type.value,
                        votable_id=str(votable_id),
                        attempt=attempt,
                    )
                    continue
                return vote_type.weight

            if existing.type == vote_type:
                return 0

            flipped = await self.vote_repository.update_type(
                user_id=user_id,
                votable_type=votable_type,
                votable_id=votable_id,
                expected=existing.type,
                new_type=vote_type,
                created_at=datetime.now(),
            )
            if flipped:
                # Undo the old direction and apply the new one in one delta
                return 2 * vote_type.weight

            logfire.warn(
                "Vote changed concurrently, re-reading ledger",
                user_id=str(user_id),
                votable_type=votable_type.value,
                votable_id=str(votable_id),
                attempt=attempt,
            )

        logfire.error(
            "Vote conflict retries exhausted",
            user_id=str(user_id),
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            attempts=max_attempts,
        )
        raise VoteConflictError(str(user_id), votable_type.value, str(votable_id))

    async def delete_vote(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> None:
        """Retract a user's vote on an item.

        Retracting a vote that does not exist is a silent no-op.

        Args:
            user_id: Voting user
            votable_type: Kind of item
            votable_id: Item ID

        Raises:
            NotFoundError: If the user or the item does not exist
        """
        with logfire.span(
            "vote_service.delete_vote",
            user_id=str(user_id),
            votable_type=votable_type.value,
            votable_id=str(votable_id),
        ):
            votable = self._votable(votable_type)
            await self.user_service.exists_or_fail(user_id)
            await votable.exists_or_fail(votable_id)

            async with self.unit_of_work.atomic():
                deleted = await self.vote_repository.delete_by_user_and_votable(
                    user_id=user_id,
                    votable_type=votable_type,
                    votable_id=votable_id,
                )
                if deleted is not None:
                    # Retracting up removes one point, retracting down gives one back
                    await votable.apply_vote_count_delta(votable_id, -deleted.weight)

            if deleted is None:
                logfire.info(
                    "No vote to remove",
                    user_id=str(user_id),
                    votable_type=votable_type.value,
                    votable_id=str(votable_id),
                )
                return

            logfire.info(
                "Vote removed",
                user_id=str(user_id),
                votable_type=votable_type.value,
                votable_id=str(votable_id),
                type=deleted.value,
            )

    async def get_vote_count(self, votable_type: VotableType, votable_id: UUID) -> int:
        """Read an item's vote count from its counter column.

        Raises:
            NotFoundError: If the item does not exist
        """
        return await self._votable(votable_type).get_vote_count(votable_id)

    async def get_ledger_vote_count(
        self, votable_type: VotableType, votable_id: UUID
    ) -> int:
        """Recompute an item's vote count from the ledger.

        For reconciliation and audits only; normal reads use
        ``get_vote_count``.
        """
        with logfire.span(
            "vote_service.get_ledger_vote_count",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
        ):
            return await self.vote_repository.net_count_by_votable(
                votable_type, votable_id
            )

    async def get_voting_in_relationship(
        self,
        votable_ids: Iterable[UUID],
        votable_type: VotableType,
        viewer_id: Optional[UserId],
    ) -> dict[UUID, Voting]:
        """Look up the viewer's vote on each item with one batched query.

        Args:
            votable_ids: Items shown in a listing
            votable_type: Kind of the items
            viewer_id: The viewing user (None when anonymous)

        Returns:
            Map of every requested ID to up, down or none
        """
        votings = {vid: Voting.NONE for vid in votable_ids}
        if viewer_id is None or not votings:
            return votings

        votes = await self.vote_repository.find_by_user_and_votables(
            user_id=viewer_id,
            votable_type=votable_type,
            votable_ids=list(votings),
        )
        for vote in votes:
            votings[vote.votable_id] = Voting.from_vote_type(vote.type)

        logfire.debug(
            "Voting relationship loaded",
            votable_type=votable_type.value,
            requested=len(votings),
            voted=len(votes),
        )
        return votings

    async def get_voters(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        vote_type: VoteType | str | None = None,
        page: PageRequest | None = None,
        with_relationship: bool = False,
        viewer_id: Optional[UserId] = None,
    ) -> Page[dict[str, Any]]:
        """List the users who voted on an item, newest vote first.

        Disabled users are left out and privacy fields are stripped.

        Args:
            votable_type: Kind of item
            votable_id: Item ID
            vote_type: Only list voters of this type (all if None)
            page: Page to return (default page size if None)
            with_relationship: Attach the viewer's relationship to each user
            viewer_id: The viewing user, used for relationships

        Returns:
            Page of public user records

        Raises:
            InvalidVoteTypeError: If vote_type is given but not up or down
            NotFoundError: If the item does not exist
        """
        type_filter = parse_vote_type(vote_type) if vote_type is not None else None
        page = page or PageRequest(per_page=self.pagination_settings.default_per_page)
        page = page.capped(self.pagination_settings.max_per_page)

        with logfire.span(
            "vote_service.get_voters",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            type=type_filter.value if type_filter else None,
            page=page.page,
            per_page=page.per_page,
        ):
            await self._votable(votable_type).exists_or_fail(votable_id)

            total = await self.vote_repository.count_voters(
                votable_type, votable_id, type_filter
            )
            users = await self.vote_repository.find_voters(
                votable_type,
                votable_id,
                type_filter,
                limit=page.limit,
                offset=page.offset,
            )

            data = [self.user_service.to_public(user) for user in users]
            if with_relationship:
                await self.user_service.add_relationship(data, viewer_id)

            logfire.info("Voters listed", count=len(data), total=total)
            return Page.build(data, total, page)
