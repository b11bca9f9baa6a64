"""In-memory answer repository for testing."""

from forum.domain.model.answer import Answer
from forum.domain.repository.answer import AnswerRepository
from forum.domain.value import AnswerId

from .content import InMemoryContentRepository


class InMemoryAnswerRepository(
    InMemoryContentRepository[Answer, AnswerId], AnswerRepository
):
    """In-memory implementation of AnswerRepository for testing."""
