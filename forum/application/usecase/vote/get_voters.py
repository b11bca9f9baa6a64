"""Get voters use case."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from forum.config import PaginationSettings
from forum.domain.service import JWTService, VoteService
from forum.domain.value import PageInfo, PageRequest, VotableType


class GetVotersRequest(BaseModel):
    """Get voters request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    type: str | None = None  # Only list "up" or "down" voters
    page: int = Field(default=1, ge=1)
    per_page: int | None = Field(default=None, ge=1)
    include_relationship: bool = False
    auth_token: str | None = None  # JWT token for relationships (optional)


class GetVotersResponse(BaseModel):
    """Get voters response."""

    data: list[dict[str, Any]]
    pagination: PageInfo


class GetVotersUseCase:
    """Use case for listing the users who voted on an item."""

    def __init__(
        self,
        vote_service: VoteService,
        jwt_service: JWTService,
        pagination_settings: PaginationSettings,
    ) -> None:
        """Initialize get voters use case.

        Args:
            vote_service: Vote domain service
            jwt_service: JWT service for resolving the viewer
            pagination_settings: Default page size
        """
        self.vote_service = vote_service
        self.jwt_service = jwt_service
        self.pagination_settings = pagination_settings

    async def execute(self, request: GetVotersRequest) -> GetVotersResponse:
        """Execute get voters flow.

        Anonymous viewers still get relationship blocks when asked for, all
        set to false.

        Args:
            request: Get voters request

        Returns:
            One page of public voter records

        Raises:
            InvalidVoteTypeError: If the type filter is not up or down
            NotFoundError: If the item does not exist
        """
        viewer_id = self.jwt_service.get_user_id_from_token(request.auth_token)
        page = PageRequest(
            page=request.page,
            per_page=request.per_page or self.pagination_settings.default_per_page,
        )

        result = await self.vote_service.get_voters(
            votable_type=request.votable_type,
            votable_id=UUID(request.votable_id),
            vote_type=request.type,
            page=page,
            with_relationship=request.include_relationship,
            viewer_id=viewer_id,
        )
        return GetVotersResponse(data=result.data, pagination=result.pagination)
