"""In-memory question repository for testing."""

from forum.domain.model.question import Question
from forum.domain.repository.question import QuestionRepository
from forum.domain.value import QuestionId

from .content import InMemoryContentRepository


class InMemoryQuestionRepository(
    InMemoryContentRepository[Question, QuestionId], QuestionRepository
):
    """In-memory implementation of QuestionRepository for testing."""
