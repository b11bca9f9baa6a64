"""Repository interfaces for the forum domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from forum.domain.repository.answer import AnswerRepository
from forum.domain.repository.article import ArticleRepository
from forum.domain.repository.comment import CommentRepository
from forum.domain.repository.follow import FollowRepository
from forum.domain.repository.question import QuestionRepository
from forum.domain.repository.unit_of_work import UnitOfWork
from forum.domain.repository.user import UserRepository
from forum.domain.repository.votable import VotableRepository
from forum.domain.repository.vote import VoteRepository

__all__ = [
    "UserRepository",
    "QuestionRepository",
    "AnswerRepository",
    "ArticleRepository",
    "CommentRepository",
    "VotableRepository",
    "VoteRepository",
    "FollowRepository",
    "UnitOfWork",
]
