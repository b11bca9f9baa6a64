"""Answer repository interface."""

from forum.domain.model.answer import Answer
from forum.domain.repository.votable import VotableRepository
from forum.domain.value import AnswerId


class AnswerRepository(VotableRepository[Answer, AnswerId]):
    """Repository for Answer entity."""
