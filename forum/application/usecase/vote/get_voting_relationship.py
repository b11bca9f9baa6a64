"""Get voting relationship use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import JWTService, RelationshipService
from forum.domain.value import Relationship, VotableType


class GetVotingRelationshipRequest(BaseModel):
    """Get voting relationship request."""

    votable_type: VotableType
    votable_ids: list[str]  # UUID strings
    auth_token: str | None = None  # JWT token for authentication (optional)


class GetVotingRelationshipResponse(BaseModel):
    """Relationship block per requested item ID."""

    relationships: dict[str, Relationship]


class GetVotingRelationshipUseCase:
    """Use case for building relationship blocks for a listing of items."""

    def __init__(
        self,
        relationship_service: RelationshipService,
        jwt_service: JWTService,
    ) -> None:
        """Initialize get voting relationship use case.

        Args:
            relationship_service: Relationship domain service
            jwt_service: JWT service for resolving the viewer
        """
        self.relationship_service = relationship_service
        self.jwt_service = jwt_service

    async def execute(
        self, request: GetVotingRelationshipRequest
    ) -> GetVotingRelationshipResponse:
        """Execute get voting relationship flow.

        Every requested ID appears in the response; anonymous viewers get
        default blocks.
        """
        viewer_id = self.jwt_service.get_user_id_from_token(request.auth_token)
        votable_ids = [UUID(vid) for vid in request.votable_ids]

        relationships = await self.relationship_service.get_relationships(
            votable_ids, request.votable_type, viewer_id
        )
        return GetVotingRelationshipResponse(
            relationships={str(vid): rel for vid, rel in relationships.items()}
        )
