"""Question repository interface."""

from forum.domain.model.question import Question
from forum.domain.repository.votable import VotableRepository
from forum.domain.value import QuestionId


class QuestionRepository(VotableRepository[Question, QuestionId]):
    """Repository for Question entity."""
