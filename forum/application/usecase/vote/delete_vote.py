"""Delete vote use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import VoteService
from forum.domain.value import UserId, VotableType


class DeleteVoteRequest(BaseModel):
    """Delete vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class DeleteVoteResponse(BaseModel):
    """Delete vote response."""

    vote_count: int


class DeleteVoteUseCase:
    """Use case for retracting a vote from any votable item."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize delete vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: DeleteVoteRequest) -> DeleteVoteResponse:
        """Execute delete vote flow.

        Retracting a vote that was never cast succeeds without changes.

        Args:
            request: Delete vote request

        Returns:
            The item's vote count after the retraction

        Raises:
            NotFoundError: If the user or item does not exist
        """
        user_id = UserId(UUID(request.user_id))
        votable_id = UUID(request.votable_id)

        await self.vote_service.delete_vote(
            user_id=user_id,
            votable_type=request.votable_type,
            votable_id=votable_id,
        )
        vote_count = await self.vote_service.get_vote_count(
            request.votable_type, votable_id
        )
        return DeleteVoteResponse(vote_count=vote_count)
