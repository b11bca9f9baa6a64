"""Get vote count use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import VoteService
from forum.domain.value import VotableType


class GetVoteCountRequest(BaseModel):
    """Get vote count request."""

    votable_type: VotableType
    votable_id: str  # UUID string


class GetVoteCountResponse(BaseModel):
    """Get vote count response."""

    vote_count: int


class GetVoteCountUseCase:
    """Use case for reading an item's vote count."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: GetVoteCountRequest) -> GetVoteCountResponse:
        vote_count = await self.vote_service.get_vote_count(
            request.votable_type, UUID(request.votable_id)
        )
        return GetVoteCountResponse(vote_count=vote_count)
