"""Add vote use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import VoteService
from forum.domain.value import UserId, VotableType


class AddVoteRequest(BaseModel):
    """Add vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    type: str  # "up" or "down", validated by the vote service


class AddVoteResponse(BaseModel):
    """Add vote response."""

    vote_count: int


class AddVoteUseCase:
    """Use case for casting or changing a vote on any votable item."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize add vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: AddVoteRequest) -> AddVoteResponse:
        """Execute add vote flow.

        Args:
            request: Add vote request

        Returns:
            The item's vote count after the vote

        Raises:
            InvalidVoteTypeError: If the type is not up or down
            NotFoundError: If the user or item does not exist
        """
        user_id = UserId(UUID(request.user_id))
        votable_id = UUID(request.votable_id)

        await self.vote_service.add_vote(
            user_id=user_id,
            votable_type=request.votable_type,
            votable_id=votable_id,
            vote_type=request.type,
        )
        vote_count = await self.vote_service.get_vote_count(
            request.votable_type, votable_id
        )
        return AddVoteResponse(vote_count=vote_count)
