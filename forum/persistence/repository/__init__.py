"""PostgreSQL repository implementations."""

from forum.persistence.repository.answer import PostgresAnswerRepository
from forum.persistence.repository.article import PostgresArticleRepository
from forum.persistence.repository.comment import PostgresCommentRepository
from forum.persistence.repository.content import PostgresContentRepository
from forum.persistence.repository.follow import PostgresFollowRepository
from forum.persistence.repository.question import PostgresQuestionRepository
from forum.persistence.repository.unit_of_work import PostgresUnitOfWork
from forum.persistence.repository.user import PostgresUserRepository
from forum.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresContentRepository",
    "PostgresQuestionRepository",
    "PostgresAnswerRepository",
    "PostgresArticleRepository",
    "PostgresCommentRepository",
    "PostgresVoteRepository",
    "PostgresFollowRepository",
    "PostgresUnitOfWork",
]
