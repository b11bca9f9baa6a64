"""In-memory repository implementations for testing."""

from .answer import InMemoryAnswerRepository
from .article import InMemoryArticleRepository
from .comment import InMemoryCommentRepository
from .content import InMemoryContentRepository
from .follow import InMemoryFollowRepository
from .question import InMemoryQuestionRepository
from .unit_of_work import InMemoryUnitOfWork
from .user import InMemoryUserRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryAnswerRepository",
    "InMemoryArticleRepository",
    "InMemoryCommentRepository",
    "InMemoryContentRepository",
    "InMemoryFollowRepository",
    "InMemoryQuestionRepository",
    "InMemoryUnitOfWork",
    "InMemoryUserRepository",
    "InMemoryVoteRepository",
]
