"""Domain layer DI providers."""

from dishka import Scope, provide

from forum.config import AuthSettings, PaginationSettings, VotingSettings
from forum.domain.repository import (
    AnswerRepository,
    ArticleRepository,
    CommentRepository,
    FollowRepository,
    QuestionRepository,
    UnitOfWork,
    UserRepository,
    VoteRepository,
)
from forum.domain.service import (
    AnswerService,
    ArticleService,
    CommentService,
    FollowService,
    JWTService,
    QuestionService,
    RelationshipService,
    UserService,
    Votable,
    VoteService,
)
from forum.domain.value import VotableType
from forum.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_question_service(
        self, question_repository: QuestionRepository
    ) -> QuestionService:
        """Provide question domain service."""
        return QuestionService(question_repository=question_repository)

    @provide
    def get_answer_service(self, answer_repository: AnswerRepository) -> AnswerService:
        """Provide answer domain service."""
        return AnswerService(answer_repository=answer_repository)

    @provide
    def get_article_service(
        self, article_repository: ArticleRepository
    ) -> ArticleService:
        """Provide article domain service."""
        return ArticleService(article_repository=article_repository)

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository)

    @provide
    def get_votables(
        self,
        question_service: QuestionService,
        answer_service: AnswerService,
        article_service: ArticleService,
        comment_service: CommentService,
    ) -> dict[VotableType, Votable]:
        """Provide the votable capability of every content kind.

        The vote service dispatches on the item's tag through this map, so
        adding a votable kind only means registering its service here.

        Returns:
            Dictionary mapping VotableType to its Votable implementation
        """
        votables: list[Votable] = [
            question_service,
            answer_service,
            article_service,
            comment_service,
        ]
        return {votable.votable_type: votable for votable in votables}

    @provide
    def get_user_service(
        self, user_repository: UserRepository, follow_repository: FollowRepository
    ) -> UserService:
        """Provide user domain service."""
        return UserService(
            user_repository=user_repository, follow_repository=follow_repository
        )

    @provide
    def get_follow_service(self, follow_repository: FollowRepository) -> FollowService:
        """Provide follow domain service."""
        return FollowService(follow_repository=follow_repository)

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        votables: dict[VotableType, Votable],
        user_service: UserService,
        voting_settings: VotingSettings,
        pagination_settings: PaginationSettings,
        unit_of_work: UnitOfWork,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            votables=votables,
            user_service=user_service,
            voting_settings=voting_settings,
            pagination_settings=pagination_settings,
            unit_of_work=unit_of_work,
        )

    @provide
    def get_relationship_service(
        self, vote_service: VoteService, follow_service: FollowService
    ) -> RelationshipService:
        """Provide relationship block domain service."""
        return RelationshipService(
            vote_service=vote_service, follow_service=follow_service
        )
