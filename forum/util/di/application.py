"""Application layer DI providers."""

from dishka import Scope, provide

from forum.application.usecase.vote import (
    AddVoteUseCase,
    DeleteVoteUseCase,
    GetVoteCountUseCase,
    GetVotersUseCase,
    GetVotingRelationshipUseCase,
)
from forum.config import PaginationSettings
from forum.domain.service import JWTService, RelationshipService, VoteService
from forum.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_add_vote_use_case(self, vote_service: VoteService) -> AddVoteUseCase:
        """Provide add vote use case."""
        return AddVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_vote_use_case(self, vote_service: VoteService) -> DeleteVoteUseCase:
        """Provide delete vote use case."""
        return DeleteVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_get_vote_count_use_case(
        self, vote_service: VoteService
    ) -> GetVoteCountUseCase:
        """Provide get vote count use case."""
        return GetVoteCountUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_get_voters_use_case(
        self,
        vote_service: VoteService,
        jwt_service: JWTService,
        pagination_settings: PaginationSettings,
    ) -> GetVotersUseCase:
        """Provide get voters use case."""
        return GetVotersUseCase(
            vote_service=vote_service,
            jwt_service=jwt_service,
            pagination_settings=pagination_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_voting_relationship_use_case(
        self,
        relationship_service: RelationshipService,
        jwt_service: JWTService,
    ) -> GetVotingRelationshipUseCase:
        """Provide get voting relationship use case."""
        return GetVotingRelationshipUseCase(
            relationship_service=relationship_service, jwt_service=jwt_service
        )
